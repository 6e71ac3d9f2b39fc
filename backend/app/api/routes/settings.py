"""Business settings routes."""

from fastapi import APIRouter

from app.core.rbac import CurrentStaff, RequireManager
from app.schemas.settings import SystemSettings
from app.services.app_state import AppStateDep

router = APIRouter()


@router.get("", response_model=SystemSettings)
def get_settings(current_staff: CurrentStaff, state: AppStateDep):
    return state.settings


@router.put("", response_model=SystemSettings)
def save_settings(new_settings: SystemSettings, current_staff: RequireManager, state: AppStateDep):
    """Save and apply; a new standby period takes effect immediately."""
    return state.update_settings(new_settings)
