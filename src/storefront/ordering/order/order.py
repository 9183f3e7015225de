"""Order aggregate: line items, status machine and an append-only history.

Fulfilment status:
    pending -> confirmed -> shipped -> delivered
    pending | confirmed -> cancelled
delivered and cancelled are terminal.

Payment status (unpaid, paid, refunded) moves independently and is logged
in the same history as a ``payment:<status>`` pseudo-transition.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.ordering.order.events import OrderPlaced, OrderStatusChanged, PaymentStatusChanged


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    UNPAID = "unpaid"
    PAID = "paid"
    REFUNDED = "refunded"


class PaymentMethod(Enum):
    STRIPE = "stripe"
    COD = "cod"


# State machine transition map
VALID_TRANSITIONS = {
    OrderStatus.PENDING: (OrderStatus.CONFIRMED, OrderStatus.CANCELLED),
    OrderStatus.CONFIRMED: (OrderStatus.SHIPPED, OrderStatus.CANCELLED),
    OrderStatus.SHIPPED: (OrderStatus.DELIVERED,),
    OrderStatus.DELIVERED: (),  # Terminal
    OrderStatus.CANCELLED: (),  # Terminal
}

UNFULFILLED_STATUSES = (OrderStatus.PENDING.value, OrderStatus.CONFIRMED.value)

PAYMENT_HISTORY_PREFIX = "payment:"


def allowed_transitions(status: str) -> list[str]:
    return [target.value for target in VALID_TRANSITIONS[OrderStatus(status)]]


@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, frozen at checkout time."""

    address_line1 = String(required=True, max_length=255)
    address_line2 = String(max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(max_length=20)
    country = String(required=True, max_length=100)

    def to_json_dict(self) -> dict:
        return {
            "addressLine1": self.address_line1,
            "addressLine2": self.address_line2,
            "city": self.city,
            "state": self.state,
            "postalCode": self.postal_code,
            "country": self.country,
        }


@storefront.entity(part_of="Order")
class LineItem:
    product_id = Identifier()
    variant_id = Identifier()
    variant_label = String(max_length=255)
    title = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Integer(required=True, min_value=0)
    total = Integer(required=True, min_value=0)

    @property
    def display_title(self) -> str:
        return f"{self.title} ({self.variant_label})" if self.variant_label else self.title


@storefront.entity(part_of="Order")
class StatusChange:
    """One row of the order's history. Never updated once written."""

    from_status = String(max_length=30)
    to_status = String(required=True, max_length=30)
    changed_by = String(max_length=100)
    note = Text()
    created_at = DateTime(required=True)
    sequence = Integer(required=True, min_value=0)


@storefront.aggregate
class Order:
    order_number = String(required=True, max_length=30)
    customer_id = Identifier(required=True)
    customer_email = String(max_length=254)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.UNPAID.value)
    payment_method = String(choices=PaymentMethod, required=True)
    subtotal = Integer(required=True, min_value=0)
    shipping_cost = Integer(default=0, min_value=0)
    discount_code = String(max_length=50)
    discount_amount = Integer(default=0, min_value=0)
    total = Integer(required=True, min_value=0)
    note = Text()
    shipping_address = ValueObject(ShippingAddress)
    recommendation_code = String(max_length=20)
    line_items = HasMany(LineItem)
    history = HasMany(StatusChange)
    created_at = DateTime(default=lambda: datetime.now(UTC))
    updated_at = DateTime(default=lambda: datetime.now(UTC))

    @classmethod
    def place(
        cls,
        order_number,
        customer_id,
        customer_email,
        payment_method,
        items,
        shipping_address,
        shipping_cost=0,
        discount_code=None,
        discount_amount=0,
        note=None,
        customer_name=None,
        issued_recommendation_code=None,
    ):
        """Create a pending order from priced cart lines.

        ``items`` is a list of dicts with product_id, title, quantity and
        unit_price, plus variant_id and variant_label for a chosen variant. Totals are computed here, never trusted from the caller.
        """
        now = datetime.now(UTC)
        lines = [
            LineItem(
                product_id=item["product_id"],
                variant_id=item.get("variant_id"),
                variant_label=item.get("variant_label"),
                title=item["title"],
                quantity=item["quantity"],
                unit_price=item["unit_price"],
                total=item["unit_price"] * item["quantity"],
            )
            for item in items
        ]
        subtotal = sum(line.total for line in lines)
        discount_amount = min(discount_amount or 0, subtotal)
        total = max(subtotal + shipping_cost - discount_amount, 0)

        order = cls(
            order_number=order_number,
            customer_id=customer_id,
            customer_email=customer_email,
            payment_method=payment_method,
            subtotal=subtotal,
            shipping_cost=shipping_cost,
            discount_code=discount_code,
            discount_amount=discount_amount,
            total=total,
            note=note or None,
            shipping_address=ShippingAddress(**shipping_address),
            created_at=now,
            updated_at=now,
        )
        order.add_line_items(lines)
        order._record(None, OrderStatus.PENDING.value, actor=None, note="Order placed", at=now)

        order.raise_(
            OrderPlaced(
                order_id=order.id,
                order_number=order_number,
                customer_id=customer_id,
                customer_email=customer_email,
                customer_name=customer_name,
                items=json.dumps(
                    [
                        {"title": li.display_title, "quantity": li.quantity, "unit_price": li.unit_price, "total": li.total}
                        for li in lines
                    ]
                ),
                subtotal=subtotal,
                shipping_cost=shipping_cost,
                discount_amount=discount_amount,
                total=total,
                issued_recommendation_code=issued_recommendation_code,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------
    def _record(self, from_status, to_status, actor, note, at):
        self.add_history(
            StatusChange(
                from_status=from_status,
                to_status=to_status,
                changed_by=actor,
                note=note,
                created_at=at,
                sequence=len(self.history),
            )
        )

    def timeline(self) -> list[StatusChange]:
        """History entries, oldest first."""
        return sorted(self.history, key=lambda change: (change.created_at, change.sequence))

    # -------------------------------------------------------------------
    # Status machine
    # -------------------------------------------------------------------
    def can_transition_to(self, target: str) -> bool:
        return target in allowed_transitions(self.status)

    def transition_to(self, target: str, actor: str | None = None, note: str | None = None) -> None:
        current = self.status
        allowed = allowed_transitions(current)
        if target not in allowed:
            raise ValidationError(
                {
                    "status": [
                        f'Invalid status transition from "{current}" to "{target}". '
                        f"Allowed: {', '.join(allowed) if allowed else 'none'}"
                    ]
                }
            )

        now = datetime.now(UTC)
        self.status = target
        self.updated_at = now
        self._record(current, target, actor=actor, note=note, at=now)

        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                order_number=self.order_number,
                customer_email=self.customer_email,
                from_status=current,
                to_status=target,
                changed_by=actor,
                note=note,
                changed_at=now,
            )
        )

    def mark_payment(self, target: str, actor: str | None = None, note: str | None = None) -> None:
        valid = [status.value for status in PaymentStatus]
        if target not in valid:
            raise ValidationError({"payment_status": [f'Unknown payment status "{target}". Allowed: {", ".join(valid)}']})
        if target == self.payment_status:
            raise ValidationError({"payment_status": [f'Payment status is already "{target}"']})

        previous = self.payment_status
        now = datetime.now(UTC)
        self.payment_status = target
        self.updated_at = now
        self._record(
            PAYMENT_HISTORY_PREFIX + previous,
            PAYMENT_HISTORY_PREFIX + target,
            actor=actor,
            note=note,
            at=now,
        )

        self.raise_(
            PaymentStatusChanged(
                order_id=self.id,
                order_number=self.order_number,
                from_status=previous,
                to_status=target,
                changed_by=actor,
                changed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Admin edits
    # -------------------------------------------------------------------
    def update_note(self, note: str | None) -> None:
        note = (note or "").strip()
        if len(note) > 1000:
            raise ValidationError({"note": ["Note must be 1000 characters or fewer"]})
        self.note = note or None
        self.updated_at = datetime.now(UTC)

    def reassign_customer(self, customer_id) -> None:
        self.customer_id = customer_id
        self.updated_at = datetime.now(UTC)

    def attach_recommendation_code(self, code: str) -> None:
        self.recommendation_code = code
