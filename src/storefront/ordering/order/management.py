"""Admin order updates: fulfilment status, payment status and notes."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=30)
    actor = String(max_length=100)
    note = Text()


@storefront.command(part_of="Order")
class UpdateOrderPaymentStatus:
    order_id = Identifier(required=True)
    payment_status = String(required=True, max_length=30)
    actor = String(max_length=100)
    note = Text()


@storefront.command(part_of="Order")
class UpdateOrderNote:
    order_id = Identifier(required=True)
    note = Text()


def get_order(order_id) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError("Order not found")


@storefront.command_handler(part_of=Order)
class ManageOrderHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        order = get_order(command.order_id)
        previous = order.status
        order.transition_to(command.status, actor=command.actor, note=command.note)
        current_domain.repository_for(Order).add(order)
        logger.info(
            "Order status changed",
            order_number=order.order_number,
            from_status=previous,
            to_status=order.status,
            actor=command.actor,
        )

    @handle(UpdateOrderPaymentStatus)
    def update_payment_status(self, command):
        order = get_order(command.order_id)
        previous = order.payment_status
        order.mark_payment(command.payment_status, actor=command.actor, note=command.note)
        current_domain.repository_for(Order).add(order)
        logger.info(
            "Order payment status changed",
            order_number=order.order_number,
            from_status=previous,
            to_status=order.payment_status,
            actor=command.actor,
        )

    @handle(UpdateOrderNote)
    def update_note(self, command):
        order = get_order(command.order_id)
        order.update_note(command.note)
        current_domain.repository_for(Order).add(order)
