"""Reservation schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.models.enums import ReservationStatus
from app.schemas.common import CamelModel


def normalize_reservation_time(v):
    # Stored as an ISO string so that lexical order is chronological order
    if isinstance(v, datetime):
        return v.isoformat()
    if isinstance(v, str):
        return datetime.fromisoformat(v.replace("Z", "+00:00")).isoformat()
    return v


class Reservation(CamelModel):
    id: str
    table_id: str
    customer_name: str
    contact: Optional[str] = None
    time: str
    guests: int = Field(2, ge=1)
    status: ReservationStatus = ReservationStatus.CONFIRMED
    notes: Optional[str] = None

    @property
    def starts_at(self) -> datetime:
        return datetime.fromisoformat(self.time)


class ReservationCreate(CamelModel):
    table_id: str
    customer_name: str = Field(..., min_length=1, max_length=100)
    contact: Optional[str] = None
    time: str
    guests: int = Field(2, ge=1, le=100)
    status: ReservationStatus = ReservationStatus.CONFIRMED
    notes: Optional[str] = None

    @field_validator("time", mode="before")
    @classmethod
    def normalize_time(cls, v):
        return normalize_reservation_time(v)


class ReservationUpdate(CamelModel):
    table_id: Optional[str] = None
    customer_name: Optional[str] = Field(None, min_length=1, max_length=100)
    contact: Optional[str] = None
    time: Optional[str] = None
    guests: Optional[int] = Field(None, ge=1, le=100)
    status: Optional[ReservationStatus] = None
    notes: Optional[str] = None

    @field_validator("time", mode="before")
    @classmethod
    def normalize_time(cls, v):
        return normalize_reservation_time(v)


class ReservationView(CamelModel):
    reservation: Reservation
    table_label: str
