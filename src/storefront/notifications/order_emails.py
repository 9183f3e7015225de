"""Transactional emails reacting to Order events.

Delivery problems are logged and never propagate: an order is placed or
shipped whether or not the email goes out.
"""

import json

import structlog
from protean.utils.mixins import handle

from storefront import config
from storefront.domain import storefront
from storefront.notifications.email import get_mailer
from storefront.notifications.templates import (
    ORDER_CONFIRMATION,
    ORDER_SHIPPED,
    OWNER_NEW_ORDER,
    get_template,
)
from storefront.ordering.order.events import OrderPlaced, OrderStatusChanged
from storefront.ordering.order.order import Order, OrderStatus

logger = structlog.get_logger(__name__)


def _deliver(kind: str, to: str, context: dict) -> dict:
    content = get_template(kind).render(context)
    result = get_mailer().send(to=to, subject=content["subject"], body=content["body"])
    if result.get("status") != "sent":
        logger.warning("Email not delivered", kind=kind, to=to, error=result.get("error"))
    else:
        logger.info("Email sent", kind=kind, to=to, message_id=result.get("message_id"))
    return result


@storefront.event_handler(part_of=Order)
class OrderEmailHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        items = json.loads(event.items)
        customer_name = event.customer_name or ""
        context = {
            "order_number": event.order_number,
            "first_name": customer_name.split(" ")[0] if customer_name else None,
            "customer_name": customer_name,
            "email": event.customer_email,
            "items": items,
            "subtotal": event.subtotal,
            "shipping_cost": event.shipping_cost,
            "discount_amount": event.discount_amount,
            "total": event.total,
            "recommendation_code": event.issued_recommendation_code,
        }
        _deliver(ORDER_CONFIRMATION, event.customer_email, context)

        owner = config.owner_email()
        if owner:
            _deliver(OWNER_NEW_ORDER, owner, context)

    @handle(OrderStatusChanged)
    def on_status_changed(self, event: OrderStatusChanged) -> None:
        if event.to_status != OrderStatus.SHIPPED.value or not event.customer_email:
            return
        _deliver(
            ORDER_SHIPPED,
            event.customer_email,
            {"order_number": event.order_number, "note": event.note},
        )
