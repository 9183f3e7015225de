"""Customer lookups for checkout prefill and the admin back-office."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.customers.customer import Customer


def find_by_email(email: str) -> Customer | None:
    """Oldest customer holding this email, or None."""
    if not email:
        return None
    matches = current_domain.repository_for(Customer)._dao.query.filter(email=email.strip().lower()).all().items
    if not matches:
        return None
    return min(matches, key=lambda c: c.created_at)


def lookup_customer(email: str) -> dict:
    """Public prefill: name, phone and default address for a known email."""
    customer = find_by_email(email)
    if customer is None:
        return {"found": False}

    address = customer.default_address()
    return {
        "found": True,
        "customer": {
            "firstName": customer.first_name,
            "lastName": customer.last_name,
            "phone": customer.phone,
            "address": address.to_dict() if address else None,
        },
    }


def get_customer(customer_id) -> Customer:
    try:
        return current_domain.repository_for(Customer).get(customer_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError("Customer not found")


def customer_summary(customer: Customer) -> dict:
    return {
        "id": str(customer.id),
        "firstName": customer.first_name,
        "lastName": customer.last_name,
        "email": customer.email,
        "phone": customer.phone,
        "createdAt": customer.created_at.isoformat(),
    }


def list_customers() -> list[dict]:
    customers = current_domain.repository_for(Customer)._dao.query.all().items
    return [customer_summary(c) for c in sorted(customers, key=lambda c: c.created_at, reverse=True)]


def customer_detail(customer_id) -> dict:
    """Customer with addresses and orders, newest order first."""
    from storefront.ordering.order.order import Order

    customer = get_customer(customer_id)
    orders = current_domain.repository_for(Order)._dao.query.filter(customer_id=str(customer.id)).all().items

    detail = customer_summary(customer)
    detail["note"] = customer.note
    detail["addresses"] = [dict(address.to_dict(), isDefault=address.is_default) for address in customer.addresses]
    detail["orders"] = [
        {
            "id": str(order.id),
            "orderNumber": order.order_number,
            "status": order.status,
            "paymentStatus": order.payment_status,
            "total": order.total,
            "createdAt": order.created_at.isoformat(),
        }
        for order in sorted(orders, key=lambda o: o.created_at, reverse=True)
    ]
    return detail
