"""Order.place: totals, line items and the opening history row."""

import json

import pytest
from protean.exceptions import ValidationError

from storefront.ordering.order.events import OrderPlaced
from storefront.ordering.order.order import Order

ADDRESS = {"address_line1": "1 Cat Street", "city": "London", "postal_code": "N1 1AA", "country": "GB"}


def _place(items, **kwargs):
    return Order.place(
        order_number="FC-260101-ZZ99",
        customer_id="cust-001",
        customer_email="ada@example.com",
        payment_method=kwargs.pop("payment_method", "cod"),
        items=items,
        shipping_address=ADDRESS,
        **kwargs,
    )


WAND = {"product_id": "prod-001", "title": "Feather Wand", "quantity": 2, "unit_price": 1500}
BED = {"product_id": "prod-002", "title": "Cloud Nine Bed", "quantity": 1, "unit_price": 3897}


class TestTotals:
    def test_subtotal_and_total(self):
        order = _place([WAND, BED])
        assert order.subtotal == 6897
        assert order.shipping_cost == 0
        assert order.discount_amount == 0
        assert order.total == 6897

    def test_line_totals(self):
        order = _place([WAND])
        line = order.line_items[0]
        assert line.total == 3000
        assert line.unit_price == 1500

    def test_variant_recorded_on_line(self):
        order = _place([dict(WAND, variant_id="var-red", variant_label="Red")])
        line = order.line_items[0]
        assert line.variant_id == "var-red"
        assert line.display_title == "Feather Wand (Red)"
        assert line.variant_label == "Red"

    def test_discount_reduces_total(self):
        order = _place([WAND], discount_code="SAVE10", discount_amount=300)
        assert order.total == 2700

    def test_discount_capped_at_subtotal(self):
        order = _place([WAND], discount_amount=99999)
        assert order.discount_amount == 3000
        assert order.total == 0

    def test_shipping_is_added(self):
        order = _place([WAND], shipping_cost=499)
        assert order.total == 3499


class TestInitialState:
    def test_new_order_is_pending_and_unpaid(self):
        order = _place([WAND])
        assert order.status == "pending"
        assert order.payment_status == "unpaid"

    def test_single_opening_history_row(self):
        order = _place([WAND])
        assert len(order.history) == 1
        opening = order.history[0]
        assert opening.from_status is None
        assert opening.to_status == "pending"
        assert opening.note == "Order placed"

    def test_shipping_address_snapshot(self):
        order = _place([WAND])
        assert order.shipping_address.to_json_dict()["addressLine1"] == "1 Cat Street"
        assert order.shipping_address.to_json_dict()["postalCode"] == "N1 1AA"

    def test_blank_note_becomes_none(self):
        order = _place([WAND], note="")
        assert order.note is None

    def test_unknown_payment_method_rejected(self):
        with pytest.raises(ValidationError):
            _place([WAND], payment_method="cheque")


class TestOrderPlacedEvent:
    def test_event_carries_totals_and_items(self):
        order = _place([WAND, BED], customer_name="Ada Lovelace")

        events = [e for e in order._events if isinstance(e, OrderPlaced)]
        assert len(events) == 1
        event = events[0]
        assert event.order_number == "FC-260101-ZZ99"
        assert event.total == 6897
        assert event.customer_name == "Ada Lovelace"
        assert [i["title"] for i in json.loads(event.items)] == ["Feather Wand", "Cloud Nine Bed"]
