"""Tests for the staff directory, business settings and system maintenance."""

from decimal import Decimal

from app.core.local_storage import SETTINGS_KEY, LocalStorage
from app.models.enums import OrderStatus, TableStatus
from app.schemas.customer import CustomerCreate
from app.schemas.order import CartLine
from app.schemas.reservations import ReservationCreate
from app.services.app_state import AppState
from app.services.customer_service import CustomerService
from app.services.order_service import OrderService
from app.services.record_store import CUSTOMERS, ORDERS, RESERVATIONS, TABLES
from app.services.table_service import TableService

JOLLOF = "b1eebc99-9c0b-4ef8-bb6d-6bb9bd380a22"


# ============== Staff ==============

class TestStaffRoutes:
    def test_manager_lists_without_passcodes(self, client, manager_headers):
        response = client.get("/api/v1/staff", headers=manager_headers)
        assert response.status_code == 200
        assert {s["id"] for s in response.json()} == {"s1", "admin", "s2", "s3"}
        assert all("passcode" not in s for s in response.json())

    def test_waiter_cannot_list(self, client, waiter_headers):
        assert client.get("/api/v1/staff", headers=waiter_headers).status_code == 403

    def test_admin_creates_and_new_staff_can_login(self, client, admin_headers, login_as):
        response = client.post(
            "/api/v1/staff",
            json={"id": "s7", "name": "Efua Bar", "role": "bartender", "passcode": "7777"},
            headers=admin_headers,
        )
        assert response.status_code == 201
        assert response.json()["role"] == "BARTENDER"

        headers = login_as("s7", "7777")
        assert client.get("/api/v1/auth/me", headers=headers).json()["name"] == "Efua Bar"

    def test_duplicate_id(self, client, admin_headers):
        response = client.post(
            "/api/v1/staff",
            json={"id": "s1", "name": "Dup", "role": "WAITER", "passcode": "5555"},
            headers=admin_headers,
        )
        assert response.status_code == 409

    def test_manager_cannot_create(self, client, manager_headers):
        response = client.post(
            "/api/v1/staff",
            json={"id": "s8", "name": "X", "role": "WAITER", "passcode": "5555"},
            headers=manager_headers,
        )
        assert response.status_code == 403

    def test_off_duty_cannot_login(self, client, admin_headers):
        response = client.put("/api/v1/staff/s3", json={"status": "OFF_DUTY"}, headers=admin_headers)
        assert response.status_code == 200
        response = client.post("/api/v1/auth/login", json={"id": "s3", "passcode": "2222"})
        assert response.status_code == 401

    def test_cannot_delete_self(self, client, admin_headers):
        assert client.delete("/api/v1/staff/admin", headers=admin_headers).status_code == 400

    def test_null_name_is_422(self, client, admin_headers, state):
        response = client.put("/api/v1/staff/s3", json={"name": None}, headers=admin_headers)
        assert response.status_code == 422
        assert state.find_staff("s3").name == "Mike Johnson"

    def test_delete(self, client, admin_headers, state):
        assert client.delete("/api/v1/staff/s2", headers=admin_headers).status_code == 204
        assert state.find_staff("s2") is None


# ============== Settings ==============

class TestSettings:
    def test_defaults(self, state):
        assert state.settings.tax_rate == Decimal("10")
        assert state.settings.standby_minutes == 15
        assert state.settings.currency == "₵"

    def test_saved_settings_survive_reload(self, store, writer, timers):
        storage = LocalStorage(None)
        first = AppState(store, writer, storage, timer_factory=timers)
        first.load()
        first.update_settings(first.settings.model_copy(update={"tax_rate": Decimal("12.5"), "restaurant_name": "Chez Nous"}))
        assert storage.get(SETTINGS_KEY)["taxRate"] == 12.5

        second = AppState(store, writer, storage, timer_factory=timers)
        second.load()
        assert second.settings.tax_rate == Decimal("12.5")
        assert second.settings.restaurant_name == "Chez Nous"

    def test_missing_keys_fall_back_to_defaults(self, store, writer, timers):
        storage = LocalStorage(None)
        storage.set(SETTINGS_KEY, {"restaurantName": "Old Save"})
        state = AppState(store, writer, storage, timer_factory=timers)
        state.load()
        assert state.settings.restaurant_name == "Old Save"
        assert state.settings.receipt_footer == "Thank you for dining with us! See you soon."

    def test_invalid_saved_settings_ignored(self, store, writer, timers):
        storage = LocalStorage(None)
        storage.set(SETTINGS_KEY, {"taxRate": 400})
        state = AppState(store, writer, storage, timer_factory=timers)
        state.load()
        assert state.settings.tax_rate == Decimal("10")

    def test_routes(self, client, manager_headers, state):
        current = client.get("/api/v1/settings", headers=manager_headers).json()
        current["taxRate"] = 15
        response = client.put("/api/v1/settings", json=current, headers=manager_headers)
        assert response.status_code == 200
        assert state.settings.tax_rate == Decimal("15")

    def test_waiter_cannot_save(self, client, waiter_headers):
        current = client.get("/api/v1/settings", headers=waiter_headers).json()
        assert client.put("/api/v1/settings", json=current, headers=waiter_headers).status_code == 403


# ============== System maintenance ==============

class TestSystemReset:
    def test_reset_data(self, state, store):
        OrderService(state).place_order([CartLine(item_id=JOLLOF)], table_id="t-1")
        TableService(state).create_reservation(
            ReservationCreate(table_id="t-2", customer_name="Ama", time="2026-10-19T19:00:00+00:00")
        )
        CustomerService(state).create(CustomerCreate(name="Ama", phone="0241111111"))

        state.reset_system()

        assert state.orders == [] and state.reservations == [] and state.customers == []
        assert all(t.status == TableStatus.AVAILABLE for t in state.tables)
        assert len(state.tables) == 12
        assert store.select_all(ORDERS) == []
        assert store.select_all(RESERVATIONS) == []
        assert store.select_all(CUSTOMERS) == []
        assert all(t.status == TableStatus.AVAILABLE for t in store.select_all(TABLES))

    def test_reset_route(self, client, manager_headers, state):
        OrderService(state).place_order([CartLine(item_id=JOLLOF)])
        assert client.post("/api/v1/system/reset-data", headers=manager_headers).status_code == 200
        assert state.orders == []

    def test_reset_menu_route(self, client, manager_headers):
        response = client.post("/api/v1/system/reset-menu", headers=manager_headers)
        assert response.json()["items"] == 20

    def test_sync_failures(self, client, manager_headers, state):
        def broken():
            raise ConnectionError("record store offline")

        state.writer.submit("update orders x", broken)
        failures = client.get("/api/v1/system/sync-failures", headers=manager_headers).json()
        assert len(failures) == 1
        assert failures[0]["attempts"] == 3
        assert "offline" in failures[0]["error"]
        assert client.delete("/api/v1/system/sync-failures", headers=manager_headers).json() == {"cleared": 1}


# ============== Health ==============

def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"


def test_readiness(client):
    body = client.get("/health/ready").json()
    assert body["status"] == "ready"
    assert body["checks"]["state"] == "healthy"


def test_paid_status_round_trip(state, store):
    order, _ = OrderService(state).place_order([CartLine(item_id=JOLLOF)], table_id="t-3")
    OrderService(state).set_status(order.id, OrderStatus.PAID)
    persisted = store.select_all(ORDERS)[0]
    assert persisted.status == OrderStatus.PAID
    assert persisted.total == Decimal("165.00")
