"""Menu and inventory item schemas."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from app.models.enums import ItemCategory
from app.schemas.common import CamelModel, Money


class MenuItem(CamelModel):
    """A sellable dish/drink or an inventory-only stock item."""
    id: str
    name: str
    description: str = ""
    price: Money = Field(default=Decimal("0"), ge=0)
    category: ItemCategory
    image: Optional[str] = None
    stock: int = 0
    is_available: bool = True
    unit: Optional[str] = None
    cost_price: Optional[Money] = Field(default=None, ge=0)
    supplier: Optional[str] = None

    @field_validator("stock", mode="before")
    @classmethod
    def clamp_stock(cls, v):
        if v is None:
            return 0
        return max(0, int(v))


class MenuItemCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    price: Money = Field(default=Decimal("0"), ge=0)
    category: ItemCategory = ItemCategory.FOOD
    image: Optional[str] = None
    stock: int = 50
    is_available: bool = True
    unit: Optional[str] = None
    cost_price: Optional[Money] = Field(default=None, ge=0)
    supplier: Optional[str] = None


class MenuItemUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[Money] = Field(None, ge=0)
    category: Optional[ItemCategory] = None
    image: Optional[str] = None
    stock: Optional[int] = None
    is_available: Optional[bool] = None
    unit: Optional[str] = None
    cost_price: Optional[Money] = Field(None, ge=0)
    supplier: Optional[str] = None
