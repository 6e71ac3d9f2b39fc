"""Tests for the floor plan, table status and reservations."""

import pytest
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from app.models.enums import ReservationStatus, TableStatus
from app.schemas.reservations import ReservationCreate
from app.services.errors import RecordNotFoundError
from app.services.table_service import TableService

ACCRA = ZoneInfo("Africa/Accra")
NOW = datetime(2026, 6, 12, 17, 0, tzinfo=timezone.utc)


@pytest.fixture
def tables(state):
    return TableService(state, tz=ACCRA)


def _reserve(tables, table_id="t-1", at=None, name="Abena", **extra):
    at = at or NOW + timedelta(hours=1)
    return tables.create_reservation(
        ReservationCreate(table_id=table_id, customer_name=name, time=at.isoformat(), **extra)
    )


class TestTables:
    def test_seeded_tables(self, state):
        assert [t.id for t in state.tables][:3] == ["t-1", "t-2", "t-3"]
        assert len(state.tables) == 12
        assert state.get_table("t-1").seats == 4
        assert state.get_table("t-2").seats == 2

    def test_cycle(self, tables):
        seen = [tables.cycle_status("t-1").status for _ in range(3)]
        assert seen == [TableStatus.OCCUPIED, TableStatus.DIRTY, TableStatus.AVAILABLE]

    def test_reserved_cycles_to_available(self, tables):
        tables.set_status("t-2", TableStatus.RESERVED)
        assert tables.cycle_status("t-2").status == TableStatus.AVAILABLE

    def test_add_and_delete(self, state, tables):
        table = tables.add_table("Patio 1", seats=6)
        assert table.id.startswith("t-")
        assert table.status == TableStatus.AVAILABLE
        assert state.get_table(table.id).label == "Patio 1"

        tables.delete_table(table.id)
        with pytest.raises(RecordNotFoundError):
            state.get_table(table.id)

    def test_unknown_table(self, tables):
        with pytest.raises(RecordNotFoundError):
            tables.cycle_status("t-404")


class TestFloorPlan:
    def test_upcoming_within_two_hours(self, tables):
        reservation = _reserve(tables, at=NOW + timedelta(minutes=90))
        entry = next(e for e in tables.floor_plan(now=NOW) if e.table.id == "t-1")
        assert entry.upcoming_reservation_id == reservation.id
        assert entry.upcoming_customer_name == "Abena"

    def test_outside_window_or_past(self, tables):
        _reserve(tables, at=NOW + timedelta(hours=3))
        _reserve(tables, at=NOW - timedelta(minutes=10))
        entry = next(e for e in tables.floor_plan(now=NOW) if e.table.id == "t-1")
        assert entry.upcoming_reservation_id is None

    def test_earliest_wins(self, tables):
        _reserve(tables, at=NOW + timedelta(minutes=100), name="Late")
        _reserve(tables, at=NOW + timedelta(minutes=20), name="Early")
        entry = next(e for e in tables.floor_plan(now=NOW) if e.table.id == "t-1")
        assert entry.upcoming_customer_name == "Early"

    def test_cancelled_ignored(self, tables):
        reservation = _reserve(tables, at=NOW + timedelta(minutes=30))
        tables.update_reservation(reservation.id, {"status": ReservationStatus.CANCELLED})
        entry = next(e for e in tables.floor_plan(now=NOW) if e.table.id == "t-1")
        assert entry.upcoming_reservation_id is None

    def test_naive_time_is_local(self, tables):
        # Accra is UTC+0, so 18:00 local is one hour after NOW
        tables.create_reservation(ReservationCreate(table_id="t-3", customer_name="Local", time="2026-06-12T18:00"))
        entry = next(e for e in tables.floor_plan(now=NOW) if e.table.id == "t-3")
        assert entry.upcoming_customer_name == "Local"


class TestReservations:
    def test_create_requires_table(self, tables):
        with pytest.raises(RecordNotFoundError):
            _reserve(tables, table_id="t-404")

    def test_check_in_occupies_table(self, state, tables):
        reservation = _reserve(tables)
        tables.update_reservation(reservation.id, {"status": ReservationStatus.CHECKED_IN})
        assert state.get_table("t-1").status == TableStatus.OCCUPIED

    def test_cancel_frees_reserved_table(self, state, tables):
        tables.set_status("t-1", TableStatus.RESERVED)
        reservation = _reserve(tables)
        tables.update_reservation(reservation.id, {"status": ReservationStatus.CANCELLED})
        assert state.get_table("t-1").status == TableStatus.AVAILABLE

    def test_cancel_leaves_occupied_table(self, state, tables):
        tables.set_status("t-1", TableStatus.OCCUPIED)
        reservation = _reserve(tables)
        tables.update_reservation(reservation.id, {"status": ReservationStatus.CANCELLED})
        assert state.get_table("t-1").status == TableStatus.OCCUPIED

    def test_edit_without_status_change_has_no_side_effects(self, state, tables):
        reservation = _reserve(tables, status=ReservationStatus.CHECKED_IN)
        tables.update_reservation(reservation.id, {"guests": 6})
        assert state.get_table("t-1").status == TableStatus.AVAILABLE
        assert state.get_reservation(reservation.id).guests == 6

    def test_upcoming_sorted_without_cancelled(self, tables):
        late = _reserve(tables, at=NOW + timedelta(hours=5), name="Late")
        early = _reserve(tables, table_id="t-2", at=NOW + timedelta(hours=1), name="Early")
        gone = _reserve(tables, at=NOW + timedelta(hours=2), name="Gone")
        tables.update_reservation(gone.id, {"status": ReservationStatus.CANCELLED})

        views = tables.upcoming_reservations()
        assert [v.reservation.id for v in views] == [early.id, late.id]
        assert views[0].table_label == "Table 2"

    def test_deleted_table_label(self, state, tables):
        _reserve(tables, table_id="t-5")
        state.delete_table("t-5")
        assert tables.upcoming_reservations()[0].table_label == "Unknown Table"

    def test_delete(self, state, tables):
        reservation = _reserve(tables)
        tables.delete_reservation(reservation.id)
        assert state.reservations == []


class TestTableRoutes:
    def test_floor_plan(self, client, waiter_headers):
        response = client.get("/api/v1/tables/floor-plan", headers=waiter_headers)
        assert response.status_code == 200
        assert len(response.json()) == 12
        assert response.json()[0]["table"]["label"] == "Table 1"

    def test_cycle(self, client, waiter_headers):
        response = client.post("/api/v1/tables/t-1/cycle", headers=waiter_headers)
        assert response.status_code == 200
        assert response.json()["status"] == "OCCUPIED"

    def test_create_needs_manager(self, client, waiter_headers):
        response = client.post("/api/v1/tables", json={"label": "Bar 1"}, headers=waiter_headers)
        assert response.status_code == 403

    def test_create_and_delete(self, client, manager_headers):
        response = client.post("/api/v1/tables", json={"label": "Bar 1", "seats": 2}, headers=manager_headers)
        assert response.status_code == 201
        table_id = response.json()["id"]
        assert client.delete(f"/api/v1/tables/{table_id}", headers=manager_headers).status_code == 204
        assert client.delete(f"/api/v1/tables/{table_id}", headers=manager_headers).status_code == 404

    def test_reservation_flow(self, client, waiter_headers, state):
        response = client.post(
            "/api/v1/reservations",
            json={"tableId": "t-8", "customerName": "Kwame", "time": "2026-06-12T19:30:00+00:00", "guests": 4},
            headers=waiter_headers,
        )
        assert response.status_code == 201
        reservation_id = response.json()["id"]

        response = client.put(
            f"/api/v1/reservations/{reservation_id}", json={"status": "CHECKED_IN"}, headers=waiter_headers
        )
        assert response.status_code == 200
        assert state.get_table("t-8").status == TableStatus.OCCUPIED

        listing = client.get("/api/v1/reservations", headers=waiter_headers).json()
        assert listing[0]["tableLabel"] == "Table 8"

    def test_null_status_is_422(self, client, waiter_headers, state):
        response = client.post(
            "/api/v1/reservations",
            json={"tableId": "t-2", "customerName": "Esi", "time": "2026-06-12T20:00:00+00:00"},
            headers=waiter_headers,
        )
        reservation_id = response.json()["id"]
        response = client.put(f"/api/v1/reservations/{reservation_id}", json={"status": None}, headers=waiter_headers)
        assert response.status_code == 422
        assert state.get_reservation(reservation_id).status == ReservationStatus.CONFIRMED

        response = client.put(f"/api/v1/reservations/{reservation_id}", json={"notes": None}, headers=waiter_headers)
        assert response.status_code == 200
