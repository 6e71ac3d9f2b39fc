"""Order routes: checkout, order list, status changes and receipts."""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Query, Response

from app.core.rbac import CurrentStaff, RequireAdmin, RequireKitchen, RequirePos
from app.models.enums import OrderStatus
from app.schemas.order import (
    CheckoutBreakdown,
    CheckoutRequest,
    CheckoutResponse,
    Order,
    OrderListResponse,
    OrderStatusUpdate,
    QuoteRequest,
    Receipt,
)
from app.services.app_state import AppStateDep
from app.services.order_service import OrderService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/quote", response_model=CheckoutBreakdown)
def quote_cart(request: QuoteRequest, current_staff: CurrentStaff, state: AppStateDep):
    """Cart totals at the current tax rate, without placing an order."""
    return OrderService(state).quote(request.items)


@router.post("", response_model=CheckoutResponse, status_code=201)
def place_order(request: CheckoutRequest, current_staff: RequirePos, state: AppStateDep):
    order, checkout = OrderService(state).place_order(
        request.items,
        table_id=request.table_id,
        customer_name=request.customer_name,
        staff=current_staff,
        notes=request.notes,
    )
    return CheckoutResponse(order=order, checkout=checkout)


@router.get("", response_model=OrderListResponse)
def list_orders(
    current_staff: CurrentStaff,
    state: AppStateDep,
    search: Optional[str] = Query(None, max_length=100),
    status: Optional[OrderStatus] = None,
    on_date: Optional[date] = Query(None, alias="date"),
):
    """Orders page. Managers and admins see every order, others only their own."""
    return OrderService(state).search_orders(current_staff, search=search, status=status, on_date=on_date)


@router.get("/{order_id}", response_model=Order)
def get_order(order_id: str, current_staff: CurrentStaff, state: AppStateDep):
    return state.get_order(order_id)


@router.get("/{order_id}/receipt", response_model=Receipt)
def get_receipt(order_id: str, current_staff: CurrentStaff, state: AppStateDep):
    return OrderService(state).receipt(order_id)


@router.get("/{order_id}/receipt.pdf")
def get_receipt_pdf(order_id: str, current_staff: CurrentStaff, state: AppStateDep):
    content = OrderService(state).render_receipt_pdf(order_id)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="receipt_{order_id[:8]}.pdf"'},
    )


@router.post("/{order_id}/advance", response_model=Order)
def advance_order(order_id: str, current_staff: RequireKitchen, state: AppStateDep):
    """PENDING -> PREPARING -> READY -> SERVED."""
    return OrderService(state).advance_status(order_id)


@router.put("/{order_id}/status", response_model=Order)
def set_order_status(order_id: str, update: OrderStatusUpdate, current_staff: RequireAdmin, state: AppStateDep):
    logger.info(f"Admin {current_staff.id} set order {order_id} to {update.status.value}")
    return OrderService(state).set_status(order_id, update.status)


@router.delete("/{order_id}", status_code=204)
def delete_order(order_id: str, current_staff: RequireAdmin, state: AppStateDep):
    OrderService(state).delete_order(order_id)
    return Response(status_code=204)
