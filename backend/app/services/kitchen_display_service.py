"""
Kitchen display: the active ticket board and the bump action.

Drinks are served from the bar, so they never appear on a ticket, and an
order made only of drinks never reaches the kitchen.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from app.models.enums import OrderStatus, is_drink_category
from app.schemas.kitchen import KitchenTicket, TicketItem
from app.schemas.order import Order
from app.services.app_state import AppState
from app.services.order_service import OrderService

logger = logging.getLogger(__name__)

CLOSED_STATUSES = frozenset({OrderStatus.SERVED, OrderStatus.PAID, OrderStatus.CANCELLED})


def kitchen_items(order: Order) -> List[TicketItem]:
    return [
        TicketItem(name=item.name, quantity=item.quantity, notes=item.notes)
        for item in order.items
        if not is_drink_category(item.category)
    ]


class KitchenDisplayService:
    def __init__(self, state: AppState):
        self.state = state
        self.orders = OrderService(state)

    def active_tickets(self, now: Optional[datetime] = None) -> List[KitchenTicket]:
        """Open orders with kitchen work, oldest first."""
        now = now or datetime.now(timezone.utc)
        tickets = []
        for order in sorted(self.state.orders, key=lambda o: o.timestamp):
            if order.status in CLOSED_STATUSES:
                continue
            items = kitchen_items(order)
            if not items:
                continue
            age = max(0, int((now - order.timestamp).total_seconds() // 60))
            tickets.append(KitchenTicket(
                order_id=order.id,
                short_id=order.id[:8],
                table_label=self.orders.table_label(order),
                customer_name=order.customer_name,
                status=order.status,
                timestamp=order.timestamp,
                age_minutes=age,
                items=items,
                notes=order.notes,
            ))
        return tickets

    def bump(self, order_id: str) -> Order:
        """Move a ticket one step along PENDING -> PREPARING -> READY -> SERVED."""
        order = self.orders.advance_status(order_id)
        logger.info(f"Ticket {order_id[:8]} bumped to {order.status.value}")
        return order
