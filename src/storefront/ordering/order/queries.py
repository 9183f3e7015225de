"""Read-side helpers for orders: admin listings, detail and tracking."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.ordering.order.order import UNFULFILLED_STATUSES, Order, allowed_transitions


def _history_entry(change) -> dict:
    return {
        "fromStatus": change.from_status,
        "toStatus": change.to_status,
        "changedBy": change.changed_by,
        "note": change.note,
        "createdAt": change.created_at.isoformat(),
    }


def _line_item(line) -> dict:
    return {
        "productId": line.product_id,
        "variantId": line.variant_id,
        "variantLabel": line.variant_label,
        "title": line.title,
        "quantity": line.quantity,
        "unitPrice": line.unit_price,
        "total": line.total,
    }


def order_summary(order: Order) -> dict:
    return {
        "id": str(order.id),
        "orderNumber": order.order_number,
        "customerId": str(order.customer_id),
        "customerEmail": order.customer_email,
        "status": order.status,
        "paymentStatus": order.payment_status,
        "paymentMethod": order.payment_method,
        "total": order.total,
        "createdAt": order.created_at.isoformat(),
    }


def order_detail(order: Order) -> dict:
    detail = order_summary(order)
    detail.update(
        {
            "subtotal": order.subtotal,
            "shippingCost": order.shipping_cost,
            "discountCode": order.discount_code,
            "discountAmount": order.discount_amount,
            "note": order.note,
            "recommendationCode": order.recommendation_code,
            "shippingAddress": order.shipping_address.to_json_dict() if order.shipping_address else None,
            "lineItems": [_line_item(line) for line in order.line_items],
            "statusHistory": [_history_entry(change) for change in order.timeline()],
            "allowedTransitions": allowed_transitions(order.status),
        }
    )
    return detail


def list_orders(status: str | None = None) -> list[dict]:
    query = current_domain.repository_for(Order)._dao.query
    if status:
        query = query.filter(status=status)
    orders = sorted(query.all().items, key=lambda o: o.created_at, reverse=True)
    return [order_summary(o) for o in orders]


def unfulfilled_count() -> int:
    repo = current_domain.repository_for(Order)
    return sum(len(repo._dao.query.filter(status=status).all().items) for status in UNFULFILLED_STATUSES)


def find_by_number(order_number: str) -> Order | None:
    matches = current_domain.repository_for(Order)._dao.query.filter(order_number=order_number).all().items
    return matches[0] if matches else None


def track_order(order_number: str, email: str) -> dict:
    """Public tracking view; the email must match the order's customer."""
    order = find_by_number((order_number or "").strip().upper())
    if order is None or (order.customer_email or "").lower() != (email or "").strip().lower():
        raise ObjectNotFoundError("Order not found. Please check your order number and email.")

    return {
        "orderNumber": order.order_number,
        "status": order.status,
        "paymentStatus": order.payment_status,
        "subtotal": order.subtotal,
        "shippingCost": order.shipping_cost,
        "discountAmount": order.discount_amount,
        "total": order.total,
        "createdAt": order.created_at.isoformat(),
        "lineItems": [
            {
                "title": line.title,
                "variantLabel": line.variant_label,
                "quantity": line.quantity,
                "unitPrice": line.unit_price,
                "total": line.total,
            }
            for line in order.line_items
        ],
        "statusHistory": [
            {"fromStatus": c.from_status, "toStatus": c.to_status, "createdAt": c.created_at.isoformat()}
            for c in order.timeline()
        ],
        "shippingAddress": order.shipping_address.to_json_dict() if order.shipping_address else None,
    }
