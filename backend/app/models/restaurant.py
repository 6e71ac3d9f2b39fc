"""Restaurant operations records - menu, orders, tables, reservations."""

from sqlalchemy import Column, Integer, String, DateTime, Numeric, Boolean, Text, JSON
from sqlalchemy.orm import validates

from app.db.base import Base, TimestampMixin
from app.models.validators import non_negative, positive, validate_list_of_dicts


class MenuItemRecord(TimestampMixin, Base):
    """Sellable dish/drink or inventory-only stock item."""
    __tablename__ = "menu"

    id = Column(String(64), primary_key=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, default="")
    price = Column(Numeric(10, 2), nullable=False, default=0)
    category = Column(String(30), nullable=False, index=True)
    image = Column(String(500), nullable=True)
    stock = Column(Integer, nullable=False, default=0)
    is_available = Column(Boolean, nullable=False, default=True)
    unit = Column(String(50), nullable=True)
    cost_price = Column(Numeric(10, 2), nullable=True)
    supplier = Column(String(200), nullable=True)

    @validates('price', 'cost_price', 'stock')
    def _validate_amounts(self, key, value):
        return non_negative(key, value)


class OrderRecord(TimestampMixin, Base):
    """Order with its line items embedded as a JSON list."""
    __tablename__ = "orders"

    id = Column(String(64), primary_key=True)
    table_id = Column(String(64), nullable=False, default="TAKEAWAY", index=True)
    items = Column(JSON, nullable=False, default=list)  # [{item_id, name, price, quantity, category, notes}]
    status = Column(String(20), nullable=False, default="PENDING", index=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, index=True)
    total = Column(Numeric(12, 2), nullable=False)
    notes = Column(Text, nullable=True)
    customer_name = Column(String(100), nullable=True)
    staff_id = Column(String(64), nullable=True, index=True)
    staff_name = Column(String(100), nullable=True)

    @validates('total')
    def _validate_total(self, key, value):
        return non_negative(key, value)

    @validates('items')
    def _validate_items(self, key, value):
        return validate_list_of_dicts(key, value)


class TableRecord(TimestampMixin, Base):
    """Restaurant table for seating."""
    __tablename__ = "tables"

    id = Column(String(64), primary_key=True)
    label = Column(String(50), nullable=False)
    seats = Column(Integer, nullable=False, default=4)
    status = Column(String(20), nullable=False, default="AVAILABLE")  # AVAILABLE, OCCUPIED, RESERVED, DIRTY

    @validates('seats')
    def _validate_seats(self, key, value):
        return positive(key, value)


class ReservationRecord(TimestampMixin, Base):
    """Table booking. ``time`` is an ISO-8601 string."""
    __tablename__ = "reservations"

    id = Column(String(64), primary_key=True)
    # No FK: a reservation may outlive its table and shows as "Unknown Table"
    table_id = Column(String(64), nullable=False, index=True)
    customer_name = Column(String(100), nullable=False)
    contact = Column(String(100), nullable=True)
    time = Column(String(40), nullable=False, index=True)
    guests = Column(Integer, nullable=False, default=2)
    status = Column(String(20), nullable=False, default="CONFIRMED")
    notes = Column(Text, nullable=True)

    @validates('guests')
    def _validate_guests(self, key, value):
        return positive(key, value)
