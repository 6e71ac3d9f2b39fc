"""Reservation routes."""

from typing import List

from fastapi import APIRouter, Response

from app.core.rbac import CurrentStaff
from app.schemas.reservations import Reservation, ReservationCreate, ReservationUpdate, ReservationView
from app.services.app_state import AppStateDep
from app.services.table_service import TableService

router = APIRouter()


@router.get("", response_model=List[ReservationView])
def list_reservations(current_staff: CurrentStaff, state: AppStateDep):
    """Upcoming (non-cancelled) reservations in time order."""
    return TableService(state).upcoming_reservations()


@router.post("", response_model=Reservation, status_code=201)
def create_reservation(data: ReservationCreate, current_staff: CurrentStaff, state: AppStateDep):
    return TableService(state).create_reservation(data)


@router.put("/{reservation_id}", response_model=Reservation)
def update_reservation(
    reservation_id: str, data: ReservationUpdate, current_staff: CurrentStaff, state: AppStateDep
):
    return TableService(state).update_reservation(reservation_id, data.model_dump(exclude_unset=True))


@router.delete("/{reservation_id}", status_code=204)
def delete_reservation(reservation_id: str, current_staff: CurrentStaff, state: AppStateDep):
    TableService(state).delete_reservation(reservation_id)
    return Response(status_code=204)
