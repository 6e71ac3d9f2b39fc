"""Customer (CRM) schemas."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import Field

from app.schemas.common import CamelModel


class Customer(CamelModel):
    id: str
    name: str
    phone: str
    email: Optional[str] = None
    notes: Optional[str] = None
    loyalty_points: int = Field(0, ge=0)
    last_visit: date


class CustomerCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=3, max_length=30)
    email: Optional[str] = None
    notes: Optional[str] = None
    loyalty_points: int = Field(0, ge=0)
    last_visit: Optional[date] = None


class CustomerUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, min_length=3, max_length=30)
    email: Optional[str] = None
    notes: Optional[str] = None
    loyalty_points: Optional[int] = Field(None, ge=0)
    last_visit: Optional[date] = None


class PointsAdjustment(CamelModel):
    delta: int


class CustomerSegment(str, Enum):
    ALL = "ALL"
    VIP = "VIP"
    NEW = "NEW"


class CustomerResponse(Customer):
    is_vip: bool


class CustomerStats(CamelModel):
    total_customers: int
    vip_count: int
    total_points: int
