"""Table routes: floor plan, status changes and table CRUD."""

from typing import List

from fastapi import APIRouter, Response

from app.core.rbac import CurrentStaff, RequireManager
from app.schemas.tables import FloorPlanEntry, Table, TableCreate, TableStatusUpdate
from app.services.app_state import AppStateDep
from app.services.table_service import TableService

router = APIRouter()


@router.get("", response_model=List[Table])
def list_tables(current_staff: CurrentStaff, state: AppStateDep):
    return state.tables


@router.get("/floor-plan", response_model=List[FloorPlanEntry])
def floor_plan(current_staff: CurrentStaff, state: AppStateDep):
    """Tables with any CONFIRMED reservation starting within two hours."""
    return TableService(state).floor_plan()


@router.post("", response_model=Table, status_code=201)
def create_table(data: TableCreate, current_staff: RequireManager, state: AppStateDep):
    return TableService(state).add_table(data.label, data.seats)


@router.delete("/{table_id}", status_code=204)
def delete_table(table_id: str, current_staff: RequireManager, state: AppStateDep):
    TableService(state).delete_table(table_id)
    return Response(status_code=204)


@router.post("/{table_id}/cycle", response_model=Table)
def cycle_table(table_id: str, current_staff: CurrentStaff, state: AppStateDep):
    """AVAILABLE -> OCCUPIED -> DIRTY -> AVAILABLE."""
    return TableService(state).cycle_status(table_id)


@router.put("/{table_id}/status", response_model=Table)
def set_table_status(table_id: str, update: TableStatusUpdate, current_staff: CurrentStaff, state: AppStateDep):
    return TableService(state).set_status(table_id, update.status)
