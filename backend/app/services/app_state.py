"""Process-wide application state.

``AppState`` owns the in-memory copy of all six collections, the business
settings and the terminal session. Every mutation is a named operation that
applies the optimistic local change first and then submits an independent
remote write; a failed write is logged by the writer and never reverts the
local state.
"""

import logging
import threading
from typing import Annotated, Any, Callable, Dict, List, Optional

from fastapi import Depends, Request
from pydantic import ValidationError

from app.core.local_storage import SETTINGS_KEY, LocalStorage
from app.models.enums import OrderStatus, TableStatus
from app.schemas.customer import Customer
from app.schemas.menu import MenuItem
from app.schemas.order import Order
from app.schemas.reservations import Reservation
from app.schemas.settings import SystemSettings
from app.schemas.staff import Staff
from app.schemas.tables import Table
from app.services import seed_data
from app.services.errors import InvalidUpdateError, RecordNotFoundError
from app.services.record_store import (
    CUSTOMERS,
    MENU,
    ORDERS,
    RESERVATIONS,
    STAFF,
    TABLES,
    RecordStore,
)
from app.services.remote_writer import RemoteWriter
from app.services.session_service import SessionManager

logger = logging.getLogger(__name__)


def _find(items: List[Any], record_id: str) -> Optional[Any]:
    return next((item for item in items if item.id == record_id), None)


def _index(items: List[Any], record_id: str) -> int:
    for i, item in enumerate(items):
        if item.id == record_id:
            return i
    return -1


def merge_changes(current: Any, collection: str, changes: Dict[str, Any]) -> Any:
    """Re-validate a record with edits applied."""
    try:
        return type(current).model_validate({**current.model_dump(), **changes})
    except ValidationError as e:
        raise InvalidUpdateError(collection, current.id, e.errors(include_url=False)) from e


class AppState:
    """Single container for the terminal's state."""

    def __init__(
        self,
        store: RecordStore,
        writer: RemoteWriter,
        storage: LocalStorage,
        timer_factory: Callable = threading.Timer,
    ):
        self.store = store
        self.writer = writer
        self.storage = storage
        self.session = SessionManager(storage, timer_factory=timer_factory)

        self.menu: List[MenuItem] = []
        self.orders: List[Order] = []
        self.tables: List[Table] = []
        self.staff: List[Staff] = []
        self.customers: List[Customer] = []
        self.reservations: List[Reservation] = []
        self.settings = SystemSettings()

        self.load_errors: Dict[str, str] = {}
        self.loaded = False
        self._lock = threading.RLock()

    # ============== Startup ==============

    def load(self) -> None:
        """Startup sequence: settings, staff, session, then the rest."""
        with self._lock:
            self.settings = self._load_settings()
            self.session.standby_minutes = self.settings.standby_minutes

            # Staff first: the session can only be restored against it
            self.staff = self._load_collection(STAFF, seed_data.default_staff)
            self.session.restore(self.staff)

            self.menu = self._load_collection(MENU, seed_data.default_menu)
            self.tables = self._load_collection(TABLES, seed_data.default_tables)
            self.customers = self._load_collection(CUSTOMERS)
            self.orders = self._load_collection(ORDERS)
            self.reservations = self._load_collection(RESERVATIONS)
            self.loaded = True

        logger.info(
            f"State loaded: {len(self.menu)} menu items, {len(self.tables)} tables, "
            f"{len(self.orders)} orders, {len(self.staff)} staff"
        )

    def _load_settings(self) -> SystemSettings:
        stored = self.storage.get(SETTINGS_KEY)
        if not isinstance(stored, dict):
            return SystemSettings()
        # Stored values win; keys added since they were saved fall back to defaults
        merged = {**SystemSettings().model_dump(mode="json", by_alias=True), **stored}
        try:
            return SystemSettings.model_validate(merged)
        except ValidationError as e:
            logger.warning(f"Stored settings invalid, using defaults: {e}")
            return SystemSettings()

    def _load_collection(self, collection: str, seed: Optional[Callable[[], List[Any]]] = None) -> List[Any]:
        try:
            records = self.store.select_all(collection)
        except Exception as e:
            logger.error(f"Failed to load {collection}: {e}")
            self.load_errors[collection] = str(e)
            records = []

        if not records and seed is not None:
            records = seed()
            logger.info(f"Seeding {collection} with {len(records)} default records")
            self._remote(f"seed {collection}", self.store.insert, collection, list(records))
        return records

    def _remote(self, description: str, fn: Callable, *args) -> None:
        self.writer.submit(description, lambda: fn(*args))

    # ============== Lookups ==============

    def _get(self, items: List[Any], collection: str, record_id: str) -> Any:
        item = _find(items, record_id)
        if item is None:
            raise RecordNotFoundError(collection, record_id)
        return item

    def get_menu_item(self, item_id: str) -> MenuItem:
        return self._get(self.menu, MENU, item_id)

    def get_order(self, order_id: str) -> Order:
        return self._get(self.orders, ORDERS, order_id)

    def get_table(self, table_id: str) -> Table:
        return self._get(self.tables, TABLES, table_id)

    def get_staff(self, staff_id: str) -> Staff:
        return self._get(self.staff, STAFF, staff_id)

    def get_customer(self, customer_id: str) -> Customer:
        return self._get(self.customers, CUSTOMERS, customer_id)

    def get_reservation(self, reservation_id: str) -> Reservation:
        return self._get(self.reservations, RESERVATIONS, reservation_id)

    def find_table(self, table_id: str) -> Optional[Table]:
        return _find(self.tables, table_id)

    def find_staff(self, staff_id: str) -> Optional[Staff]:
        return _find(self.staff, staff_id)

    # ============== Generic mutations ==============

    def _add(self, items: List[Any], collection: str, record: Any) -> Any:
        with self._lock:
            items.append(record)
        self._remote(f"insert {collection} {record.id}", self.store.insert, collection, record)
        return record

    def _update(self, items: List[Any], collection: str, record_id: str, changes: Dict[str, Any]) -> Any:
        with self._lock:
            i = _index(items, record_id)
            if i < 0:
                raise RecordNotFoundError(collection, record_id)
            current = items[i]
            updated = merge_changes(current, collection, changes)
            items[i] = updated
        fields = {key: getattr(updated, key) for key in changes}
        self._remote(f"update {collection} {record_id}", self.store.update, collection, record_id, fields)
        return updated

    def _delete(self, items: List[Any], collection: str, record_id: str) -> Any:
        with self._lock:
            i = _index(items, record_id)
            if i < 0:
                raise RecordNotFoundError(collection, record_id)
            removed = items.pop(i)
        self._remote(f"delete {collection} {record_id}", self.store.delete, collection, record_id)
        return removed

    # ============== Menu ==============

    def add_menu_item(self, item: MenuItem) -> MenuItem:
        return self._add(self.menu, MENU, item)

    def update_menu_item(self, item_id: str, changes: Dict[str, Any]) -> MenuItem:
        return self._update(self.menu, MENU, item_id, changes)

    def delete_menu_item(self, item_id: str) -> MenuItem:
        return self._delete(self.menu, MENU, item_id)

    def set_menu_stock(self, item_id: str, stock: int) -> MenuItem:
        return self._update(self.menu, MENU, item_id, {"stock": max(0, stock)})

    # ============== Orders ==============

    def insert_order(self, order: Order) -> Order:
        with self._lock:
            self.orders.insert(0, order)
        self._remote(f"insert orders {order.id}", self.store.insert, ORDERS, order)
        return order

    def set_order_status(self, order_id: str, status: OrderStatus) -> Order:
        return self._update(self.orders, ORDERS, order_id, {"status": status})

    def delete_order(self, order_id: str) -> Order:
        return self._delete(self.orders, ORDERS, order_id)

    # ============== Tables ==============

    def add_table(self, table: Table) -> Table:
        return self._add(self.tables, TABLES, table)

    def delete_table(self, table_id: str) -> Table:
        return self._delete(self.tables, TABLES, table_id)

    def set_table_status(self, table_id: str, status: TableStatus) -> Table:
        return self._update(self.tables, TABLES, table_id, {"status": status})

    # ============== Reservations ==============

    def add_reservation(self, reservation: Reservation) -> Reservation:
        return self._add(self.reservations, RESERVATIONS, reservation)

    def replace_reservation(self, reservation: Reservation) -> Reservation:
        changes = reservation.model_dump(exclude={"id"})
        return self._update(self.reservations, RESERVATIONS, reservation.id, changes)

    def remove_reservation(self, reservation_id: str) -> Reservation:
        return self._delete(self.reservations, RESERVATIONS, reservation_id)

    # ============== Staff ==============

    def add_staff(self, member: Staff) -> Staff:
        return self._add(self.staff, STAFF, member)

    def update_staff(self, staff_id: str, changes: Dict[str, Any]) -> Staff:
        updated = self._update(self.staff, STAFF, staff_id, changes)
        self.session.refresh_user(updated)
        return updated

    def delete_staff(self, staff_id: str) -> Staff:
        return self._delete(self.staff, STAFF, staff_id)

    # ============== Customers ==============

    def add_customer(self, customer: Customer) -> Customer:
        return self._add(self.customers, CUSTOMERS, customer)

    def update_customer(self, customer_id: str, changes: Dict[str, Any]) -> Customer:
        return self._update(self.customers, CUSTOMERS, customer_id, changes)

    def delete_customer(self, customer_id: str) -> Customer:
        return self._delete(self.customers, CUSTOMERS, customer_id)

    # ============== Settings & system ==============

    def update_settings(self, new_settings: SystemSettings) -> SystemSettings:
        """Save business settings locally and re-arm the idle timer."""
        with self._lock:
            self.settings = new_settings
            self.storage.set(SETTINGS_KEY, new_settings.model_dump(mode="json", by_alias=True))
        self.session.configure_idle(new_settings.standby_minutes)
        logger.info("System settings updated")
        return new_settings

    def reset_system(self) -> None:
        """Clear orders, reservations and customers; free every table."""
        with self._lock:
            self.orders = []
            self.reservations = []
            self.customers = []
            self.tables = [t.model_copy(update={"status": TableStatus.AVAILABLE}) for t in self.tables]
            table_ids = [t.id for t in self.tables]

        for collection in (ORDERS, RESERVATIONS, CUSTOMERS):
            self._remote(f"clear {collection}", self.store.delete_all, collection)
        for table_id in table_ids:
            self._remote(
                f"update tables {table_id}", self.store.update,
                TABLES, table_id, {"status": TableStatus.AVAILABLE},
            )
        logger.warning("System data reset: orders, reservations and customers cleared")

    def reset_menu(self) -> None:
        """Replace the menu with the default dataset."""
        menu = seed_data.default_menu()
        with self._lock:
            self.menu = menu

        def write():
            self.store.delete_all(MENU)
            self.store.insert(MENU, menu)

        self.writer.submit("reset menu", write)
        logger.warning("Menu reset to defaults")

    def shutdown(self) -> None:
        self.session.shutdown()
        self.writer.drain()
        self.writer.shutdown()


def get_app_state(request: Request) -> AppState:
    """Dependency: the state built by the application lifespan."""
    return request.app.state.store


AppStateDep = Annotated[AppState, Depends(get_app_state)]
