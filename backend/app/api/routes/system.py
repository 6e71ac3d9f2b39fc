"""System maintenance routes: data resets and the remote-write failure ledger."""

import logging
from typing import List

from fastapi import APIRouter

from app.core.rbac import RequireManager
from app.schemas.common import CamelModel
from app.services.app_state import AppStateDep

logger = logging.getLogger(__name__)

router = APIRouter()


class SyncFailure(CamelModel):
    id: str
    description: str
    error: str
    attempts: int
    failed_at: str


@router.post("/reset-data")
def reset_data(current_staff: RequireManager, state: AppStateDep):
    """Delete all orders, reservations and customers; free every table."""
    logger.warning(f"System data reset requested by {current_staff.id}")
    state.reset_system()
    return {"message": "System data reset"}


@router.post("/reset-menu")
def reset_menu(current_staff: RequireManager, state: AppStateDep):
    logger.warning(f"Menu reset requested by {current_staff.id}")
    state.reset_menu()
    return {"message": "Menu reset to defaults", "items": len(state.menu)}


@router.get("/sync-failures", response_model=List[SyncFailure])
def list_sync_failures(current_staff: RequireManager, state: AppStateDep):
    """Remote writes that failed after all retries (local state kept them)."""
    return [
        SyncFailure(
            id=f.id,
            description=f.description,
            error=f.error,
            attempts=f.attempts,
            failed_at=f.failed_at.isoformat(),
        )
        for f in state.writer.failures
    ]


@router.delete("/sync-failures")
def clear_sync_failures(current_staff: RequireManager, state: AppStateDep):
    return {"cleared": state.writer.clear_failures()}
