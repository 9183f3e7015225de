"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A shopper completed checkout."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    customer_id = Identifier(required=True)
    customer_email = String(required=True)
    customer_name = String()
    items = Text(required=True)  # JSON: list of {title, quantity, unit_price, total}
    subtotal = Integer(required=True)
    shipping_cost = Integer(required=True)
    discount_amount = Integer(required=True)
    total = Integer(required=True)
    issued_recommendation_code = String()
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """The fulfilment status moved along the transition table."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    customer_email = String()
    from_status = String(required=True)
    to_status = String(required=True)
    changed_by = String()
    note = Text()
    changed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class PaymentStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    from_status = String(required=True)
    to_status = String(required=True)
    changed_by = String()
    changed_at = DateTime(required=True)
