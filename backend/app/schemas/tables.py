"""Table schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from app.models.enums import TableStatus
from app.schemas.common import CamelModel


class Table(CamelModel):
    id: str
    label: str
    seats: int = Field(4, ge=1)
    status: TableStatus = TableStatus.AVAILABLE


class TableCreate(CamelModel):
    label: str = Field(..., min_length=1, max_length=50)
    seats: int = Field(4, ge=1, le=50)


class TableStatusUpdate(CamelModel):
    status: TableStatus


class FloorPlanEntry(CamelModel):
    """A table as shown on the floor plan."""
    table: Table
    upcoming_reservation_id: Optional[str] = None
    upcoming_customer_name: Optional[str] = None
    upcoming_time: Optional[str] = None
