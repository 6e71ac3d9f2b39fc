"""Authentication routes: login, logout, session and idle activity."""

import logging

from fastapi import APIRouter, HTTPException, Request, status

from app.core.config import settings
from app.core.rate_limit import limiter
from app.core.rbac import CurrentStaff
from app.core.security import create_access_token
from app.schemas.auth import ActivityRequest, LoginRequest, SessionInfo, Token
from app.schemas.staff import StaffResponse
from app.services.app_state import AppStateDep
from app.services.errors import DatabaseUnavailableError

logger = logging.getLogger("auth")

router = APIRouter()


@router.post("/login", response_model=Token)
@limiter.limit(settings.login_rate_limit)
def login(request: Request, login_request: LoginRequest, state: AppStateDep):
    """Authenticate a staff member by id and passcode and return a JWT token."""
    client_ip = request.client.host if request.client else "unknown"
    try:
        user = state.session.login(state.staff, login_request.id, login_request.passcode)
    except DatabaseUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    if user is None:
        logger.warning(f"Failed login attempt for staff id: {login_request.id} from IP: {client_ip}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    logger.info(f"Successful login: {user.id} (role: {user.role.value}) from IP: {client_ip}")
    token = create_access_token(data={"sub": user.id, "role": user.role.value})
    return Token(access_token=token, staff=StaffResponse.model_validate(user.model_dump()))


@router.post("/logout")
def logout(current_staff: CurrentStaff, state: AppStateDep):
    """End the terminal session; outstanding tokens stop working."""
    state.session.logout()
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=StaffResponse)
def get_current_staff_info(current_staff: CurrentStaff):
    return StaffResponse.model_validate(current_staff.model_dump())


@router.post("/activity", response_model=SessionInfo)
def record_activity(activity: ActivityRequest, current_staff: CurrentStaff, state: AppStateDep):
    """Report user activity; restarts the idle auto-logout window."""
    state.session.record_activity(activity.signal.value)
    return _session_info(state)


@router.get("/session", response_model=SessionInfo)
def get_session(state: AppStateDep):
    """Current session and idle-timer state (no token required)."""
    return _session_info(state)


def _session_info(state) -> SessionInfo:
    session = state.session
    user = session.current_user
    return SessionInfo(
        authenticated=user is not None,
        staff=StaffResponse.model_validate(user.model_dump()) if user else None,
        idle_timer_armed=session.idle_timer.armed,
        standby_minutes=session.standby_minutes,
        seconds_remaining=session.idle_timer.seconds_remaining,
    )
