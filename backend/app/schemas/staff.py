"""Staff schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from app.models.enums import StaffRole, StaffStatus
from app.schemas.common import CamelModel


class Staff(CamelModel):
    """Staff record. ``id`` doubles as the login username."""
    id: str
    name: str
    role: StaffRole
    status: StaffStatus = StaffStatus.ACTIVE
    passcode: str
    email: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v):
        return StaffRole.normalize(v)

    @field_validator("passcode", mode="before")
    @classmethod
    def passcode_as_string(cls, v):
        return v if v is None else str(v)

    @property
    def is_active(self) -> bool:
        return self.status == StaffStatus.ACTIVE


class StaffCreate(CamelModel):
    id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    role: StaffRole = StaffRole.WAITER
    status: StaffStatus = StaffStatus.ACTIVE
    passcode: str = Field(..., min_length=4, max_length=12)
    email: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v):
        return StaffRole.normalize(v)


class StaffUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    role: Optional[StaffRole] = None
    status: Optional[StaffStatus] = None
    passcode: Optional[str] = Field(None, min_length=4, max_length=12)
    email: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v):
        return v if v is None else StaffRole.normalize(v)


class StaffResponse(CamelModel):
    """Directory entry; passcodes never leave the server."""
    id: str
    name: str
    role: StaffRole
    status: StaffStatus
    email: Optional[str] = None
    phone: Optional[str] = None
