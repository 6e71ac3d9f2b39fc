"""Tests for the kitchen ticket board."""

import pytest
from datetime import datetime, timedelta, timezone

from app.models.enums import OrderStatus
from app.schemas.order import CartLine
from app.services.kitchen_display_service import KitchenDisplayService
from app.services.order_service import OrderService

JOLLOF = "b1eebc99-9c0b-4ef8-bb6d-6bb9bd380a22"
TEA = "l1eebc99-9c0b-4ef8-bb6d-6bb9bd380b22"
NOW = datetime(2026, 5, 1, 19, 0, tzinfo=timezone.utc)


@pytest.fixture
def kitchen(state):
    return KitchenDisplayService(state)


def test_drinks_hidden_from_tickets(state, kitchen):
    OrderService(state).place_order(
        [CartLine(item_id=JOLLOF, notes="extra spicy"), CartLine(item_id=TEA, quantity=2)],
        table_id="t-1",
        now=NOW - timedelta(minutes=12),
    )
    tickets = kitchen.active_tickets(now=NOW)
    assert len(tickets) == 1
    ticket = tickets[0]
    assert [i.name for i in ticket.items] == ["Jollof Rice & Chicken"]
    assert ticket.items[0].notes == "extra spicy"
    assert ticket.table_label == "Table 1"
    assert ticket.age_minutes == 12


def test_drinks_only_orders_never_shown(state, kitchen):
    OrderService(state).place_order([CartLine(item_id=TEA)], now=NOW)
    assert kitchen.active_tickets(now=NOW) == []


def test_oldest_first_and_closed_hidden(state, kitchen):
    service = OrderService(state)
    newer, _ = service.place_order([CartLine(item_id=JOLLOF)], now=NOW - timedelta(minutes=1))
    older, _ = service.place_order([CartLine(item_id=JOLLOF)], now=NOW - timedelta(minutes=5))
    paid, _ = service.place_order([CartLine(item_id=JOLLOF)], now=NOW - timedelta(minutes=9))
    service.set_status(paid.id, OrderStatus.PAID)

    assert [t.order_id for t in kitchen.active_tickets(now=NOW)] == [older.id, newer.id]


def test_bump_until_served(state, kitchen):
    order, _ = OrderService(state).place_order([CartLine(item_id=JOLLOF)], now=NOW)
    assert kitchen.bump(order.id).status == OrderStatus.PREPARING
    assert kitchen.bump(order.id).status == OrderStatus.READY
    assert kitchen.active_tickets(now=NOW)[0].status == OrderStatus.READY
    assert kitchen.bump(order.id).status == OrderStatus.SERVED
    assert kitchen.active_tickets(now=NOW) == []


def test_tickets_route(client, chef_headers, state):
    order, _ = OrderService(state).place_order([CartLine(item_id=JOLLOF)], customer_name="Akua")
    response = client.get("/api/v1/kitchen/tickets", headers=chef_headers)
    assert response.status_code == 200
    body = response.json()
    assert body[0]["orderId"] == order.id
    assert body[0]["shortId"] == order.id[:8]
    assert body[0]["customerName"] == "Akua"

    response = client.post(f"/api/v1/kitchen/tickets/{order.id}/bump", headers=chef_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "PREPARING"


def test_waiter_cannot_bump(client, waiter_headers, state):
    order, _ = OrderService(state).place_order([CartLine(item_id=JOLLOF)])
    response = client.post(f"/api/v1/kitchen/tickets/{order.id}/bump", headers=waiter_headers)
    assert response.status_code == 403
