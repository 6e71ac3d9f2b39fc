"""Customer directory and loyalty points."""

import logging
import uuid
from datetime import date
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from app.schemas.customer import (
    Customer,
    CustomerCreate,
    CustomerResponse,
    CustomerSegment,
    CustomerStats,
    CustomerUpdate,
)
from app.services.app_state import AppState

logger = logging.getLogger(__name__)

VIP_THRESHOLD = 100


def is_vip(customer: Customer) -> bool:
    return customer.loyalty_points >= VIP_THRESHOLD


def to_response(customer: Customer) -> CustomerResponse:
    return CustomerResponse(**customer.model_dump(), is_vip=is_vip(customer))


class CustomerService:
    def __init__(self, state: AppState):
        self.state = state

    def search(
        self,
        term: Optional[str] = None,
        segment: CustomerSegment = CustomerSegment.ALL,
        today: Optional[date] = None,
    ) -> List[Customer]:
        """Name/phone search within a segment, most loyal first.

        NEW means visited within the last month.
        """
        term = (term or "").strip()
        month_ago = (today or date.today()) - relativedelta(months=1)
        results = []
        for customer in self.state.customers:
            if term and term.lower() not in customer.name.lower() and term not in customer.phone:
                continue
            if segment == CustomerSegment.VIP and not is_vip(customer):
                continue
            if segment == CustomerSegment.NEW and not customer.last_visit > month_ago:
                continue
            results.append(customer)
        results.sort(key=lambda c: c.loyalty_points, reverse=True)
        return results

    def stats(self) -> CustomerStats:
        customers = self.state.customers
        return CustomerStats(
            total_customers=len(customers),
            vip_count=sum(1 for c in customers if is_vip(c)),
            total_points=sum(c.loyalty_points for c in customers),
        )

    def create(self, data: CustomerCreate, today: Optional[date] = None) -> Customer:
        fields = data.model_dump()
        fields["last_visit"] = fields.get("last_visit") or today or date.today()
        customer = Customer(id=str(uuid.uuid4()), **fields)
        self.state.add_customer(customer)
        logger.info(f"Customer {customer.id} created")
        return customer

    def update(self, customer_id: str, data: CustomerUpdate) -> Customer:
        return self.state.update_customer(customer_id, data.model_dump(exclude_unset=True))

    def delete(self, customer_id: str) -> Customer:
        return self.state.delete_customer(customer_id)

    def adjust_points(self, customer_id: str, delta: int) -> Customer:
        """Add (or remove) loyalty points; the balance never goes below zero."""
        customer = self.state.get_customer(customer_id)
        points = max(0, customer.loyalty_points + delta)
        return self.state.update_customer(customer_id, {"loyalty_points": points})
