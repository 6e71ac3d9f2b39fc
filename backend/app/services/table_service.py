"""Floor plan: table status cycling and reservations."""

import logging
import uuid
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any, Dict, List, Optional

from app.core.config import settings as app_settings
from app.models.enums import ReservationStatus, TableStatus
from app.schemas.reservations import Reservation, ReservationCreate, ReservationView
from app.schemas.tables import FloorPlanEntry, Table
from app.services.app_state import AppState, merge_changes
from app.services.record_store import RESERVATIONS

logger = logging.getLogger(__name__)

UPCOMING_WINDOW = timedelta(hours=2)

# Tap-to-cycle ring; RESERVED is only set explicitly and cycles back to AVAILABLE
CYCLE = {
    TableStatus.AVAILABLE: TableStatus.OCCUPIED,
    TableStatus.OCCUPIED: TableStatus.DIRTY,
    TableStatus.DIRTY: TableStatus.AVAILABLE,
    TableStatus.RESERVED: TableStatus.AVAILABLE,
}


def reservation_start(reservation: Reservation, tz: tzinfo) -> datetime:
    """Reservation time as an aware instant; naive times are local wall-clock."""
    start = reservation.starts_at
    if start.tzinfo is None:
        start = start.replace(tzinfo=tz)
    return start


class TableService:
    def __init__(self, state: AppState, tz: Optional[tzinfo] = None):
        self.state = state
        self.tz = tz or app_settings.tzinfo

    # ============== Tables ==============

    def cycle_status(self, table_id: str) -> Table:
        table = self.state.get_table(table_id)
        return self.state.set_table_status(table_id, CYCLE[table.status])

    def set_status(self, table_id: str, status: TableStatus) -> Table:
        return self.state.set_table_status(table_id, TableStatus(status))

    def add_table(self, label: str, seats: int = 4) -> Table:
        table = Table(id=f"t-{uuid.uuid4().hex[:8]}", label=label, seats=seats, status=TableStatus.AVAILABLE)
        self.state.add_table(table)
        logger.info(f"Table {table.id} ({label}) added")
        return table

    def delete_table(self, table_id: str) -> Table:
        table = self.state.delete_table(table_id)
        logger.info(f"Table {table_id} deleted")
        return table

    def floor_plan(self, now: Optional[datetime] = None) -> List[FloorPlanEntry]:
        """Tables with the next CONFIRMED reservation starting within two hours."""
        now = now or datetime.now(timezone.utc)
        entries = []
        for table in self.state.tables:
            upcoming = None
            for reservation in self.state.reservations:
                if reservation.table_id != table.id or reservation.status != ReservationStatus.CONFIRMED:
                    continue
                start = reservation_start(reservation, self.tz)
                if now < start and start - now < UPCOMING_WINDOW:
                    if upcoming is None or start < reservation_start(upcoming, self.tz):
                        upcoming = reservation
            entries.append(FloorPlanEntry(
                table=table,
                upcoming_reservation_id=upcoming.id if upcoming else None,
                upcoming_customer_name=upcoming.customer_name if upcoming else None,
                upcoming_time=upcoming.time if upcoming else None,
            ))
        return entries

    # ============== Reservations ==============

    def create_reservation(self, data: ReservationCreate) -> Reservation:
        self.state.get_table(data.table_id)
        reservation = Reservation(id=str(uuid.uuid4()), **data.model_dump())
        self.state.add_reservation(reservation)
        logger.info(f"Reservation {reservation.id} created for table {reservation.table_id}")
        return reservation

    def update_reservation(self, reservation_id: str, changes: Dict[str, Any]) -> Reservation:
        """Apply edits; table side effects fire only when the status changes.

        CHECKED_IN seats the party (table OCCUPIED). CANCELLED frees the table
        only if it is still held as RESERVED.
        """
        current = self.state.get_reservation(reservation_id)
        updated = merge_changes(current, RESERVATIONS, changes)
        self.state.replace_reservation(updated)

        if updated.status != current.status:
            table = self.state.find_table(updated.table_id)
            if table is None:
                logger.warning(f"Reservation {reservation_id} refers to unknown table {updated.table_id}")
            elif updated.status == ReservationStatus.CHECKED_IN:
                self.state.set_table_status(table.id, TableStatus.OCCUPIED)
            elif updated.status == ReservationStatus.CANCELLED and table.status == TableStatus.RESERVED:
                self.state.set_table_status(table.id, TableStatus.AVAILABLE)
        return updated

    def delete_reservation(self, reservation_id: str) -> Reservation:
        return self.state.remove_reservation(reservation_id)

    def upcoming_reservations(self) -> List[ReservationView]:
        """Non-cancelled reservations by time, with their table label."""
        active = [r for r in self.state.reservations if r.status != ReservationStatus.CANCELLED]
        active.sort(key=lambda r: reservation_start(r, self.tz))
        views = []
        for reservation in active:
            table = self.state.find_table(reservation.table_id)
            views.append(ReservationView(
                reservation=reservation,
                table_label=table.label if table else "Unknown Table",
            ))
        return views
