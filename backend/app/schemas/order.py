"""Order, checkout and receipt schemas."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from app.models.enums import TAKEAWAY, ItemCategory, OrderStatus
from app.schemas.common import CamelModel, Money


class OrderItem(CamelModel):
    """Line item snapshot: name/price/category as they were at order time."""
    item_id: str
    name: str
    price: Money = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    category: ItemCategory
    notes: Optional[str] = None

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class Order(CamelModel):
    """Order record. ``total`` and ``timestamp`` are fixed once created."""
    id: str = Field(..., frozen=True)
    table_id: str = TAKEAWAY
    items: List[OrderItem]
    status: OrderStatus = OrderStatus.PENDING
    timestamp: datetime = Field(..., frozen=True)
    total: Money = Field(..., frozen=True)
    notes: Optional[str] = None
    customer_name: Optional[str] = None
    staff_id: Optional[str] = None
    staff_name: Optional[str] = None

    @property
    def is_takeaway(self) -> bool:
        return self.table_id == TAKEAWAY


# ============== Checkout ==============

class CartLine(CamelModel):
    item_id: str
    quantity: int = Field(1, ge=1)
    notes: Optional[str] = Field(None, max_length=500)


class CheckoutRequest(CamelModel):
    items: List[CartLine] = Field(..., min_length=1)
    table_id: str = TAKEAWAY
    customer_name: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


class QuoteRequest(CamelModel):
    items: List[CartLine] = Field(..., min_length=1)


class CheckoutBreakdown(CamelModel):
    subtotal: Money
    tax_rate: Money
    tax_amount: Money
    total: Money


class CheckoutResponse(CamelModel):
    order: Order
    checkout: CheckoutBreakdown


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


# ============== Order list ==============

class OrderSearchParams(CamelModel):
    search: Optional[str] = None
    status: Optional[OrderStatus] = None
    on_date: Optional[date] = None


class OrderListSummary(CamelModel):
    shown: int
    total_revenue: Money
    completed: int
    cancelled: int


class OrderListResponse(CamelModel):
    orders: List[Order]
    summary: OrderListSummary


# ============== Receipt ==============

class ReceiptLine(CamelModel):
    name: str
    quantity: int
    price: Money
    line_total: Money
    notes: Optional[str] = None


class Receipt(CamelModel):
    order_id: str
    short_id: str
    timestamp: datetime
    status: OrderStatus
    customer_name: str
    server_name: str
    table_label: str
    lines: List[ReceiptLine]
    subtotal: Money
    tax_rate: Money
    tax_amount: Money
    total: Money
    currency: str
    restaurant_name: str
    address: str
    phone: str
    footer: str
