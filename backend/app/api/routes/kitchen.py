"""Kitchen display routes."""

from typing import List

from fastapi import APIRouter

from app.core.rbac import CurrentStaff, RequireKitchen
from app.schemas.kitchen import KitchenTicket
from app.schemas.order import Order
from app.services.app_state import AppStateDep
from app.services.kitchen_display_service import KitchenDisplayService

router = APIRouter()


@router.get("/tickets", response_model=List[KitchenTicket])
def list_tickets(current_staff: CurrentStaff, state: AppStateDep):
    """Open orders with kitchen work, oldest first (drinks hidden)."""
    return KitchenDisplayService(state).active_tickets()


@router.post("/tickets/{order_id}/bump", response_model=Order)
def bump_ticket(order_id: str, current_staff: RequireKitchen, state: AppStateDep):
    return KitchenDisplayService(state).bump(order_id)
