"""Record models for the six persisted collections."""

from app.models.customer import CustomerRecord
from app.models.restaurant import MenuItemRecord, OrderRecord, ReservationRecord, TableRecord
from app.models.staff import StaffRecord

__all__ = [
    "CustomerRecord",
    "MenuItemRecord",
    "OrderRecord",
    "ReservationRecord",
    "StaffRecord",
    "TableRecord",
]
