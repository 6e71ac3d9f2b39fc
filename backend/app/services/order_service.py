"""Order lifecycle: checkout, status progression, receipts and the order list."""

import io
import logging
import uuid
from datetime import date, datetime, timezone, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional, Tuple
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from app.core.config import settings as app_settings
from app.models.enums import TAKEAWAY, OrderStatus, StaffRole, TableStatus, is_drink_category
from app.schemas.common import TWO_PLACES
from app.schemas.order import (
    CartLine,
    CheckoutBreakdown,
    Order,
    OrderItem,
    OrderListResponse,
    OrderListSummary,
    Receipt,
    ReceiptLine,
)
from app.schemas.staff import Staff
from app.services.app_state import AppState
from app.services.errors import EmptyCartError, InvalidTransitionError

logger = logging.getLogger(__name__)

# Kitchen progression; PAID and CANCELLED are only reachable administratively
NEXT_STATUS = {
    OrderStatus.PENDING: OrderStatus.PREPARING,
    OrderStatus.PREPARING: OrderStatus.READY,
    OrderStatus.READY: OrderStatus.SERVED,
}

MANUAL_STATUSES = frozenset({
    OrderStatus.PAID,
    OrderStatus.SERVED,
    OrderStatus.PENDING,
    OrderStatus.CANCELLED,
})

ALL_ORDERS_ROLES = frozenset({StaffRole.MANAGER, StaffRole.ADMIN})


def _money(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def compute_checkout(lines: Iterable[OrderItem], tax_rate: Decimal) -> CheckoutBreakdown:
    """subtotal = sum(price * qty); tax = subtotal * rate%; total = subtotal + tax."""
    subtotal = sum((line.price * line.quantity for line in lines), Decimal("0"))
    tax_amount = _money(subtotal * Decimal(tax_rate) / Decimal(100))
    subtotal = _money(subtotal)
    return CheckoutBreakdown(
        subtotal=subtotal,
        tax_rate=Decimal(tax_rate),
        tax_amount=tax_amount,
        total=subtotal + tax_amount,
    )


def initial_status(items: Iterable[OrderItem]) -> OrderStatus:
    """Drinks-only orders skip the kitchen and start SERVED."""
    items = list(items)
    if items and all(is_drink_category(item.category) for item in items):
        return OrderStatus.SERVED
    return OrderStatus.PENDING


class OrderService:
    def __init__(self, state: AppState):
        self.state = state

    # ============== Checkout ==============

    def build_lines(self, cart: List[CartLine]) -> List[OrderItem]:
        """Snapshot name/price/category of each cart line from the current menu."""
        if not cart:
            raise EmptyCartError()
        lines = []
        for entry in cart:
            item = self.state.get_menu_item(entry.item_id)
            lines.append(OrderItem(
                item_id=item.id,
                name=item.name,
                price=item.price,
                quantity=entry.quantity,
                category=item.category,
                notes=entry.notes or None,
            ))
        return lines

    def quote(self, cart: List[CartLine]) -> CheckoutBreakdown:
        return compute_checkout(self.build_lines(cart), self.state.settings.tax_rate)

    def place_order(
        self,
        cart: List[CartLine],
        table_id: str = TAKEAWAY,
        customer_name: Optional[str] = None,
        staff: Optional[Staff] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Tuple[Order, CheckoutBreakdown]:
        lines = self.build_lines(cart)
        table_id = table_id or TAKEAWAY
        if table_id != TAKEAWAY:
            self.state.get_table(table_id)

        # Total uses the tax rate in force now and is never recomputed
        checkout = compute_checkout(lines, self.state.settings.tax_rate)
        order = Order(
            id=str(uuid.uuid4()),
            table_id=table_id,
            items=lines,
            status=initial_status(lines),
            timestamp=now or datetime.now(timezone.utc),
            total=checkout.total,
            notes=notes,
            customer_name=(customer_name or "").strip() or "Guest",
            staff_id=staff.id if staff else None,
            staff_name=staff.name if staff else None,
        )
        self.state.insert_order(order)

        if table_id != TAKEAWAY:
            self.state.set_table_status(table_id, TableStatus.OCCUPIED)

        for line in lines:
            if is_drink_category(line.category):
                item = self.state.get_menu_item(line.item_id)
                self.state.set_menu_stock(item.id, max(0, item.stock - line.quantity))

        logger.info(
            f"Order {order.id} placed: {len(lines)} lines, total {order.total}, "
            f"table {table_id}, status {order.status.value}"
        )
        return order, checkout

    # ============== Status ==============

    def advance_status(self, order_id: str) -> Order:
        """PENDING -> PREPARING -> READY -> SERVED, one step at a time."""
        order = self.state.get_order(order_id)
        next_status = NEXT_STATUS.get(order.status)
        if next_status is None:
            raise InvalidTransitionError(order_id, order.status.value)
        return self.state.set_order_status(order_id, next_status)

    def set_status(self, order_id: str, status: OrderStatus) -> Order:
        """Administrative status correction; PAID marks the table DIRTY."""
        order = self.state.get_order(order_id)
        status = OrderStatus(status)
        if status not in MANUAL_STATUSES:
            raise InvalidTransitionError(order_id, order.status.value, status.value)
        updated = self.state.set_order_status(order_id, status)
        if status == OrderStatus.PAID and not order.is_takeaway:
            if self.state.find_table(order.table_id) is not None:
                self.state.set_table_status(order.table_id, TableStatus.DIRTY)
            else:
                logger.warning(f"Order {order_id} paid for unknown table {order.table_id}")
        return updated

    def delete_order(self, order_id: str) -> Order:
        """Remove the record only: stock and table status are left alone."""
        removed = self.state.delete_order(order_id)
        logger.info(f"Order {order_id} deleted")
        return removed

    # ============== Receipt ==============

    def server_name(self, order: Order) -> str:
        if order.staff_name:
            return order.staff_name
        if order.staff_id:
            member = self.state.find_staff(order.staff_id)
            if member is not None:
                return member.name
        return "Unknown"

    def table_label(self, order: Order) -> str:
        if order.is_takeaway:
            return "Takeaway"
        table = self.state.find_table(order.table_id)
        return table.label if table else "Unknown"

    def receipt(self, order_id: str) -> Receipt:
        """Receipt view.

        Subtotal and tax are derived backwards from the stored total using
        the tax rate configured *now*, so a receipt reprinted after a tax
        change shows a split that differs from the one charged.
        """
        order = self.state.get_order(order_id)
        config = self.state.settings
        rate = Decimal(config.tax_rate) / Decimal(100)
        subtotal = _money(order.total / (Decimal(1) + rate))
        tax_amount = _money(order.total) - subtotal
        return Receipt(
            order_id=order.id,
            short_id=order.id[:8],
            timestamp=order.timestamp,
            status=order.status,
            customer_name=order.customer_name or "Guest",
            server_name=self.server_name(order),
            table_label=self.table_label(order),
            lines=[
                ReceiptLine(
                    name=item.name,
                    quantity=item.quantity,
                    price=item.price,
                    line_total=_money(item.line_total),
                    notes=item.notes,
                )
                for item in order.items
            ],
            subtotal=subtotal,
            tax_rate=config.tax_rate,
            tax_amount=tax_amount,
            total=_money(order.total),
            currency=config.currency,
            restaurant_name=config.restaurant_name,
            address=config.address,
            phone=config.phone,
            footer=config.receipt_footer,
        )

    def render_receipt_pdf(self, order_id: str, tz: Optional[tzinfo] = None) -> bytes:
        """Printable receipt."""
        receipt = self.receipt(order_id)
        tz = tz or app_settings.tzinfo
        currency = receipt.currency

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(buffer, pagesize=A4, topMargin=2 * cm, bottomMargin=2 * cm)

        styles = getSampleStyleSheet()
        title_style = ParagraphStyle(
            "Title",
            parent=styles["Heading1"],
            fontSize=18,
            alignment=1,
            spaceAfter=6,
        )
        center_style = ParagraphStyle("Center", parent=styles["Normal"], alignment=1)

        elements = []

        # Business identity
        elements.append(Paragraph(escape(receipt.restaurant_name), title_style))
        elements.append(Paragraph(escape(receipt.address), center_style))
        elements.append(Paragraph(escape(receipt.phone), center_style))
        elements.append(Spacer(1, 0.5 * cm))

        local_time = receipt.timestamp.astimezone(tz)
        elements.append(Paragraph(f"<b>Order:</b> #{escape(receipt.short_id)}", styles["Normal"]))
        elements.append(Paragraph(f"<b>Date:</b> {local_time.strftime('%Y-%m-%d %H:%M')}", styles["Normal"]))
        elements.append(Paragraph(f"<b>Table:</b> {escape(receipt.table_label)}", styles["Normal"]))
        elements.append(Paragraph(f"<b>Customer:</b> {escape(receipt.customer_name)}", styles["Normal"]))
        elements.append(Paragraph(f"<b>Server:</b> {escape(receipt.server_name)}", styles["Normal"]))
        elements.append(Spacer(1, 0.5 * cm))

        # Items table
        table_data = [["Item", "Qty", "Price", "Total"]]
        for line in receipt.lines:
            name = line.name[:30]  # Truncate long names
            if line.notes:
                name = f"{name}\n  {line.notes[:40]}"
            table_data.append([
                name,
                str(line.quantity),
                f"{currency}{line.price:.2f}",
                f"{currency}{line.line_total:.2f}",
            ])

        table_data.append(["", "", "Subtotal:", f"{currency}{receipt.subtotal:.2f}"])
        table_data.append(["", "", f"Tax ({receipt.tax_rate.normalize():f}%):", f"{currency}{receipt.tax_amount:.2f}"])
        table_data.append(["", "", "Total:", f"{currency}{receipt.total:.2f}"])

        table = Table(table_data, colWidths=[8 * cm, 2 * cm, 3.5 * cm, 3.5 * cm])
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.grey),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
            ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("BOTTOMPADDING", (0, 0), (-1, 0), 12),
            ("LINEBELOW", (0, -4), (-1, -4), 1, colors.black),
            ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
        ]))
        elements.append(table)

        elements.append(Spacer(1, 1 * cm))
        elements.append(Paragraph(escape(receipt.footer), center_style))

        doc.build(elements)
        return buffer.getvalue()

    # ============== Order list ==============

    def search_orders(
        self,
        viewer: Staff,
        search: Optional[str] = None,
        status: Optional[OrderStatus] = None,
        on_date: Optional[date] = None,
        tz: Optional[tzinfo] = None,
    ) -> OrderListResponse:
        """Orders page: visibility by role, filters, newest first, summary."""
        tz = tz or app_settings.tzinfo
        term = (search or "").strip().lower()

        def visible(order: Order) -> bool:
            if viewer.role not in ALL_ORDERS_ROLES and order.staff_id != viewer.id:
                return False
            if term and not (
                term in order.id.lower()
                or term in (order.customer_name or "").lower()
                or term in order.table_id.lower()
            ):
                return False
            if status is not None and order.status != status:
                return False
            if on_date is not None and order.timestamp.astimezone(tz).date() != on_date:
                return False
            return True

        shown = sorted(
            (o for o in self.state.orders if visible(o)),
            key=lambda o: o.timestamp,
            reverse=True,
        )
        summary = OrderListSummary(
            shown=len(shown),
            total_revenue=sum((o.total for o in shown), Decimal("0")),
            completed=sum(1 for o in shown if o.status == OrderStatus.PAID),
            cancelled=sum(1 for o in shown if o.status == OrderStatus.CANCELLED),
        )
        return OrderListResponse(orders=shown, summary=summary)
