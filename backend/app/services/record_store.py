"""Record store adapter.

Generic select/insert/update/delete over the six persisted collections. Domain
models are pydantic schemas; rows are SQLAlchemy records with the same
snake_case field names, so mapping is a straight field copy plus a few
normalizations (enum values, JSON line items, UTC timestamps).
"""

import enum
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Tuple, Type, Union

from pydantic import BaseModel
from sqlalchemy.orm import sessionmaker

from app.db.base import Base
from app.models import (
    CustomerRecord,
    MenuItemRecord,
    OrderRecord,
    ReservationRecord,
    StaffRecord,
    TableRecord,
)
from app.schemas.customer import Customer
from app.schemas.menu import MenuItem
from app.schemas.order import Order
from app.schemas.reservations import Reservation
from app.schemas.staff import Staff
from app.schemas.tables import Table
from app.services.errors import RecordNotFoundError

MENU = "menu"
ORDERS = "orders"
TABLES = "tables"
STAFF = "staff"
CUSTOMERS = "customers"
RESERVATIONS = "reservations"

COLLECTIONS: Dict[str, Tuple[Type[Base], Type[BaseModel]]] = {
    MENU: (MenuItemRecord, MenuItem),
    ORDERS: (OrderRecord, Order),
    TABLES: (TableRecord, Table),
    STAFF: (StaffRecord, Staff),
    CUSTOMERS: (CustomerRecord, Customer),
    RESERVATIONS: (ReservationRecord, Reservation),
}


def _to_column_value(value: Any) -> Any:
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, list):
        return [
            item.model_dump(mode="json") if isinstance(item, BaseModel) else item
            for item in value
        ]
    return value


def to_row_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize snake_case field values for storage."""
    return {key: _to_column_value(value) for key, value in fields.items()}


def model_to_row(model: BaseModel) -> Dict[str, Any]:
    fields = {name: getattr(model, name) for name in type(model).model_fields}
    return to_row_fields(fields)


def row_to_dict(row: Base) -> Dict[str, Any]:
    data = {}
    for column in row.__table__.columns:
        value = getattr(row, column.key)
        # SQLite hands back naive datetimes; everything is stored in UTC
        if isinstance(value, datetime) and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        data[column.key] = value
    return data


class RecordStore:
    """Synchronous adapter over a SQLAlchemy session factory."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @staticmethod
    def _collection(name: str) -> Tuple[Type[Base], Type[BaseModel]]:
        try:
            return COLLECTIONS[name]
        except KeyError:
            raise ValueError(f"Unknown collection: {name}") from None

    def create_schema(self) -> None:
        Base.metadata.create_all(bind=self.session_factory.kw["bind"])

    def select_all(self, collection: str) -> List[BaseModel]:
        record_cls, schema_cls = self._collection(collection)
        with self.session_factory() as db:
            rows = db.query(record_cls).all()
            return [schema_cls.model_validate(row_to_dict(row)) for row in rows]

    def insert(self, collection: str, models: Union[BaseModel, Iterable[BaseModel]]) -> int:
        """Insert one or many records. Re-inserting an existing id overwrites it."""
        record_cls, _ = self._collection(collection)
        if isinstance(models, BaseModel):
            models = [models]
        count = 0
        with self.session_factory() as db:
            for model in models:
                db.merge(record_cls(**model_to_row(model)))
                count += 1
            db.commit()
        return count

    def update(self, collection: str, record_id: str, fields: Dict[str, Any]) -> bool:
        """Update fields of an existing row.

        A missing row raises so the remote writer retries it (the insert may
        still be in flight) and records it as a failure if it never appears.
        """
        record_cls, _ = self._collection(collection)
        with self.session_factory() as db:
            row = db.get(record_cls, record_id)
            if row is None:
                raise RecordNotFoundError(collection, record_id)
            for key, value in to_row_fields(fields).items():
                setattr(row, key, value)
            db.commit()
        return True

    def delete(self, collection: str, record_id: str) -> bool:
        record_cls, _ = self._collection(collection)
        with self.session_factory() as db:
            row = db.get(record_cls, record_id)
            if row is None:
                return False
            db.delete(row)
            db.commit()
        return True

    def delete_all(self, collection: str) -> int:
        record_cls, _ = self._collection(collection)
        with self.session_factory() as db:
            count = db.query(record_cls).delete()
            db.commit()
        return count
