"""Customer directory routes."""

from typing import List, Optional

from fastapi import APIRouter, Query, Response

from app.core.rbac import RequireManager
from app.schemas.customer import (
    CustomerCreate,
    CustomerResponse,
    CustomerSegment,
    CustomerStats,
    CustomerUpdate,
    PointsAdjustment,
)
from app.services.app_state import AppStateDep
from app.services.customer_service import CustomerService, to_response

router = APIRouter()


@router.get("", response_model=List[CustomerResponse])
def list_customers(
    current_staff: RequireManager,
    state: AppStateDep,
    search: Optional[str] = Query(None, max_length=100),
    segment: CustomerSegment = CustomerSegment.ALL,
):
    return [to_response(c) for c in CustomerService(state).search(search, segment)]


@router.get("/stats", response_model=CustomerStats)
def customer_stats(current_staff: RequireManager, state: AppStateDep):
    return CustomerService(state).stats()


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(customer_id: str, current_staff: RequireManager, state: AppStateDep):
    return to_response(state.get_customer(customer_id))


@router.post("", response_model=CustomerResponse, status_code=201)
def create_customer(data: CustomerCreate, current_staff: RequireManager, state: AppStateDep):
    return to_response(CustomerService(state).create(data))


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(customer_id: str, data: CustomerUpdate, current_staff: RequireManager, state: AppStateDep):
    return to_response(CustomerService(state).update(customer_id, data))


@router.post("/{customer_id}/points", response_model=CustomerResponse)
def adjust_points(customer_id: str, data: PointsAdjustment, current_staff: RequireManager, state: AppStateDep):
    return to_response(CustomerService(state).adjust_points(customer_id, data.delta))


@router.delete("/{customer_id}", status_code=204)
def delete_customer(customer_id: str, current_staff: RequireManager, state: AppStateDep):
    CustomerService(state).delete(customer_id)
    return Response(status_code=204)
