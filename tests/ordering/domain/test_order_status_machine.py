"""Order status machine: allowed moves, rejected moves, history rows."""

import pytest
from protean.exceptions import ValidationError

from storefront.ordering.order.events import OrderStatusChanged
from storefront.ordering.order.order import (
    Order,
    OrderStatus,
    VALID_TRANSITIONS,
    allowed_transitions,
)


def _make_order():
    return Order.place(
        order_number="FC-260101-AB12",
        customer_id="cust-001",
        customer_email="ada@example.com",
        payment_method="cod",
        items=[{"product_id": "prod-001", "title": "Feather Wand", "quantity": 1, "unit_price": 1500}],
        shipping_address={"address_line1": "1 Cat Street", "city": "London", "country": "GB"},
    )


def _order_at(status):
    order = _make_order()
    path = {
        "pending": [],
        "confirmed": ["confirmed"],
        "shipped": ["confirmed", "shipped"],
        "delivered": ["confirmed", "shipped", "delivered"],
        "cancelled": ["cancelled"],
    }[status]
    for target in path:
        order.transition_to(target)
    order._events.clear()
    return order


class TestTransitionTable:
    def test_table_covers_every_status(self):
        assert set(VALID_TRANSITIONS) == set(OrderStatus)

    def test_pending_moves(self):
        assert allowed_transitions("pending") == ["confirmed", "cancelled"]

    def test_confirmed_moves(self):
        assert allowed_transitions("confirmed") == ["shipped", "cancelled"]

    def test_shipped_moves(self):
        assert allowed_transitions("shipped") == ["delivered"]

    def test_terminal_states_have_no_moves(self):
        assert allowed_transitions("delivered") == []
        assert allowed_transitions("cancelled") == []


class TestValidTransitions:
    @pytest.mark.parametrize(
        "start,target",
        [
            ("pending", "confirmed"),
            ("pending", "cancelled"),
            ("confirmed", "shipped"),
            ("confirmed", "cancelled"),
            ("shipped", "delivered"),
        ],
    )
    def test_allowed_move_updates_status(self, start, target):
        order = _order_at(start)
        order.transition_to(target, actor="admin")
        assert order.status == target

    def test_move_appends_history_entry(self):
        order = _order_at("pending")
        order.transition_to("confirmed", actor="admin", note="Paid by phone")

        latest = order.timeline()[-1]
        assert latest.from_status == "pending"
        assert latest.to_status == "confirmed"
        assert latest.changed_by == "admin"
        assert latest.note == "Paid by phone"

    def test_move_raises_status_changed_event(self):
        order = _order_at("confirmed")
        order.transition_to("shipped", actor="admin")

        events = [e for e in order._events if isinstance(e, OrderStatusChanged)]
        assert len(events) == 1
        assert events[0].from_status == "confirmed"
        assert events[0].to_status == "shipped"
        assert events[0].customer_email == "ada@example.com"


class TestInvalidTransitions:
    def test_shipped_back_to_pending_is_rejected(self):
        order = _order_at("shipped")

        with pytest.raises(ValidationError) as exc:
            order.transition_to("pending")

        message = exc.value.messages["status"][0]
        assert '"shipped"' in message
        assert '"pending"' in message
        assert "Allowed: delivered" in message

    def test_terminal_state_lists_none(self):
        order = _order_at("delivered")

        with pytest.raises(ValidationError) as exc:
            order.transition_to("cancelled")

        assert exc.value.messages["status"][0].endswith("Allowed: none")

    def test_rejected_move_leaves_order_untouched(self):
        order = _order_at("cancelled")
        history_before = len(order.history)

        with pytest.raises(ValidationError):
            order.transition_to("confirmed")

        assert order.status == "cancelled"
        assert len(order.history) == history_before
        assert order._events == []

    def test_skipping_a_step_is_rejected(self):
        order = _order_at("pending")
        with pytest.raises(ValidationError):
            order.transition_to("delivered")

    def test_unknown_status_is_rejected(self):
        order = _order_at("pending")
        with pytest.raises(ValidationError):
            order.transition_to("teleported")
