"""Domain enumerations shared by the record models, schemas and services."""

import enum

# Sentinel table id for orders with no physical table
TAKEAWAY = "TAKEAWAY"


class OrderStatus(str, enum.Enum):
    PENDING = "PENDING"
    PREPARING = "PREPARING"
    READY = "READY"
    SERVED = "SERVED"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


class TableStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    RESERVED = "RESERVED"
    DIRTY = "DIRTY"


class ItemCategory(str, enum.Enum):
    FOOD = "FOOD"
    DESSERT = "DESSERT"
    ALCOHOLIC = "ALCOHOLIC"
    SOFT_DRINK = "SOFT_DRINK"
    WATER = "WATER"
    SPIRIT = "SPIRIT"
    WHISKY = "WHISKY"
    SMOOTHIE = "SMOOTHIE"
    COOKING_ESSENTIAL = "COOKING_ESSENTIAL"

    @property
    def label(self) -> str:
        """Human label used in reports ('SOFT_DRINK' -> 'SOFT DRINK')."""
        return self.value.replace("_", " ")


class ReservationStatus(str, enum.Enum):
    CONFIRMED = "CONFIRMED"
    CHECKED_IN = "CHECKED_IN"
    CANCELLED = "CANCELLED"


class StaffStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    OFF_DUTY = "OFF_DUTY"


class StaffRole(str, enum.Enum):
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"
    WAITER = "WAITER"
    CHEF = "CHEF"
    BARTENDER = "BARTENDER"

    @classmethod
    def normalize(cls, value) -> "StaffRole":
        """Single normalization point for role tags coming from outside.

        Records and requests may carry ' manager ' or 'Manager'; everything
        past this point compares enum members only.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Invalid staff role: {value!r}")
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ValueError(f"Invalid staff role: {value!r}") from None


DRINK_CATEGORIES = frozenset({
    ItemCategory.ALCOHOLIC,
    ItemCategory.SOFT_DRINK,
    ItemCategory.WATER,
    ItemCategory.SPIRIT,
    ItemCategory.WHISKY,
    ItemCategory.SMOOTHIE,
})


def is_drink_category(category) -> bool:
    """True for bar categories: stock-tracked, hidden from the kitchen."""
    try:
        return ItemCategory(category) in DRINK_CATEGORIES
    except ValueError:
        return False
