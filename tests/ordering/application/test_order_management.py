"""Admin order commands and read models."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.ordering.order.management import (
    UpdateOrderNote,
    UpdateOrderPaymentStatus,
    UpdateOrderStatus,
    get_order,
)
from storefront.ordering.order.queries import (
    find_by_number,
    list_orders,
    order_detail,
    track_order,
    unfulfilled_count,
)


@pytest.fixture
def order(make_product, place_order):
    wand = make_product(title="Feather Wand", price=1500)
    return find_by_number(place_order([(wand, 2)]).order_number)


def _set_status(order_id, status, note=None):
    current_domain.process(
        UpdateOrderStatus(order_id=str(order_id), status=status, actor="admin", note=note),
        asynchronous=False,
    )


class TestUpdateOrderStatus:
    def test_confirm_persists(self, order):
        _set_status(order.id, "confirmed")
        assert get_order(order.id).status == "confirmed"

    def test_history_grows_in_order(self, order):
        _set_status(order.id, "confirmed")
        _set_status(order.id, "shipped", note="Royal Mail")

        timeline = get_order(order.id).timeline()
        assert [entry.to_status for entry in timeline] == ["pending", "confirmed", "shipped"]
        assert timeline[-1].changed_by == "admin"

    def test_invalid_move_is_rejected_and_not_persisted(self, order):
        _set_status(order.id, "confirmed")
        _set_status(order.id, "shipped")

        with pytest.raises(ValidationError) as exc:
            _set_status(order.id, "pending")

        assert exc.value.messages["status"] == [
            'Invalid status transition from "shipped" to "pending". Allowed: delivered'
        ]
        assert get_order(order.id).status == "shipped"

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError) as exc:
            _set_status("no-such-order", "confirmed")
        assert str(exc.value) == "Order not found"


class TestPaymentAndNotes:
    def test_mark_paid(self, order):
        current_domain.process(
            UpdateOrderPaymentStatus(order_id=str(order.id), payment_status="paid", actor="admin"),
            asynchronous=False,
        )
        refreshed = get_order(order.id)
        assert refreshed.payment_status == "paid"
        assert refreshed.timeline()[-1].to_status == "payment:paid"

    def test_update_note(self, order):
        current_domain.process(UpdateOrderNote(order_id=str(order.id), note="Gift wrap"), asynchronous=False)
        assert get_order(order.id).note == "Gift wrap"


class TestQueries:
    def test_unfulfilled_count_tracks_pending_and_confirmed(self, make_product, place_order):
        wand = make_product()
        first = find_by_number(place_order([(wand, 1)]).order_number)
        place_order([(wand, 1)])
        assert unfulfilled_count() == 2

        _set_status(first.id, "confirmed")
        assert unfulfilled_count() == 2

        _set_status(first.id, "shipped")
        assert unfulfilled_count() == 1

    def test_list_orders_filters_by_status(self, make_product, place_order):
        wand = make_product()
        first = find_by_number(place_order([(wand, 1)]).order_number)
        place_order([(wand, 1)])
        _set_status(first.id, "cancelled")

        cancelled = list_orders(status="cancelled")
        assert [o["orderNumber"] for o in cancelled] == [first.order_number]
        assert len(list_orders()) == 2

    def test_order_detail_shape(self, order):
        detail = order_detail(order)
        assert detail["orderNumber"] == order.order_number
        assert detail["total"] == 3000
        assert detail["allowedTransitions"] == ["confirmed", "cancelled"]
        assert len(detail["lineItems"]) == 1


class TestTracking:
    def test_track_with_matching_email(self, order):
        tracked = track_order(order.order_number, "ADA@example.com ")
        assert tracked["orderNumber"] == order.order_number
        assert tracked["status"] == "pending"
        assert tracked["statusHistory"][0]["toStatus"] == "pending"

    def test_wrong_email_is_not_found(self, order):
        with pytest.raises(ObjectNotFoundError) as exc:
            track_order(order.order_number, "someone@example.com")
        assert str(exc.value) == "Order not found. Please check your order number and email."

    def test_unknown_number_is_not_found(self):
        with pytest.raises(ObjectNotFoundError):
            track_order("FC-000000-XXXX", "ada@example.com")
