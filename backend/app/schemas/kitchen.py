"""Kitchen display schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from app.models.enums import OrderStatus
from app.schemas.common import CamelModel


class TicketItem(CamelModel):
    name: str
    quantity: int
    notes: Optional[str] = None


class KitchenTicket(CamelModel):
    order_id: str
    short_id: str
    table_label: str
    customer_name: Optional[str] = None
    status: OrderStatus
    timestamp: datetime
    age_minutes: int
    items: List[TicketItem]
    notes: Optional[str] = None
