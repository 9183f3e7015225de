"""Template registry: maps email kinds to template classes."""

from storefront.notifications.templates.order_confirmation import OrderConfirmationTemplate
from storefront.notifications.templates.order_shipped import OrderShippedTemplate
from storefront.notifications.templates.owner_new_order import OwnerNewOrderTemplate

ORDER_CONFIRMATION = "order_confirmation"
OWNER_NEW_ORDER = "owner_new_order"
ORDER_SHIPPED = "order_shipped"

TEMPLATE_REGISTRY: dict[str, type] = {
    ORDER_CONFIRMATION: OrderConfirmationTemplate,
    OWNER_NEW_ORDER: OwnerNewOrderTemplate,
    ORDER_SHIPPED: OrderShippedTemplate,
}


def get_template(kind: str):
    template_cls = TEMPLATE_REGISTRY.get(kind)
    if template_cls is None:
        raise ValueError(f"No template registered for email kind: {kind}")
    return template_cls
