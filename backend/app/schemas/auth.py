"""Authentication schemas."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.common import CamelModel
from app.schemas.staff import StaffResponse


class LoginRequest(CamelModel):
    """Login request body. ``id`` is the staff id used as username."""

    id: str = Field(..., min_length=1, max_length=50)
    passcode: str = Field(..., min_length=1, max_length=12)


class Token(BaseModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"
    staff: StaffResponse


class ActivitySignal(str, Enum):
    """User-activity signals that reset the idle window."""

    MOUSEDOWN = "mousedown"
    MOUSEMOVE = "mousemove"
    KEYPRESS = "keypress"
    SCROLL = "scroll"
    TOUCHSTART = "touchstart"


class ActivityRequest(CamelModel):
    signal: ActivitySignal = ActivitySignal.MOUSEMOVE


class SessionInfo(CamelModel):
    """Current session and idle-timer state."""

    authenticated: bool
    staff: Optional[StaffResponse] = None
    idle_timer_armed: bool = False
    standby_minutes: int = 0
    seconds_remaining: Optional[float] = None
