"""Staff directory routes."""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Response, status

from app.core.rbac import RequireAdmin, RequireManager
from app.schemas.staff import Staff, StaffCreate, StaffResponse, StaffUpdate
from app.services.app_state import AppStateDep

logger = logging.getLogger(__name__)

router = APIRouter()


def _public(member: Staff) -> StaffResponse:
    return StaffResponse.model_validate(member.model_dump())


@router.get("", response_model=List[StaffResponse])
def list_staff(current_staff: RequireManager, state: AppStateDep):
    return [_public(member) for member in state.staff]


@router.get("/{staff_id}", response_model=StaffResponse)
def get_staff(staff_id: str, current_staff: RequireManager, state: AppStateDep):
    return _public(state.get_staff(staff_id))


@router.post("", response_model=StaffResponse, status_code=201)
def create_staff(data: StaffCreate, current_staff: RequireAdmin, state: AppStateDep):
    if state.find_staff(data.id) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"Staff id '{data.id}' already exists")
    member = Staff(**data.model_dump())
    state.add_staff(member)
    logger.info(f"Staff {member.id} ({member.role.value}) created by {current_staff.id}")
    return _public(member)


@router.put("/{staff_id}", response_model=StaffResponse)
def update_staff(staff_id: str, data: StaffUpdate, current_staff: RequireAdmin, state: AppStateDep):
    return _public(state.update_staff(staff_id, data.model_dump(exclude_unset=True)))


@router.delete("/{staff_id}", status_code=204)
def delete_staff(staff_id: str, current_staff: RequireAdmin, state: AppStateDep):
    if staff_id == current_staff.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot delete the signed-in account")
    state.delete_staff(staff_id)
    return Response(status_code=204)
