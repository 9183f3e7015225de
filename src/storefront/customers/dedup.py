"""Offline clean-up that merges customers sharing an email address.

Checkout reuses customers by email, so duplicates only come from data
created before that rule (imports, older records). The oldest record in
each group survives; addresses and orders of the rest move onto it.
"""

from collections import defaultdict

import structlog
from protean.utils.globals import current_domain

from storefront.customers.customer import Customer

logger = structlog.get_logger(__name__)

_ADDRESS_FIELDS = ("address_line1", "address_line2", "city", "state", "postal_code", "country")


def _duplicate_groups() -> list[list[Customer]]:
    groups = defaultdict(list)
    for customer in current_domain.repository_for(Customer)._dao.query.all().items:
        if customer.email:
            groups[customer.email.strip().lower()].append(customer)
    return [sorted(group, key=lambda c: c.created_at) for group in groups.values() if len(group) > 1]


def _merge_into(survivor: Customer, duplicate: Customer) -> int:
    from storefront.ordering.order.order import Order

    customer_repo = current_domain.repository_for(Customer)
    order_repo = current_domain.repository_for(Order)

    for address in list(duplicate.addresses):
        survivor.add_address(is_default=False, **{name: getattr(address, name) for name in _ADDRESS_FIELDS})
    if duplicate.addresses:
        duplicate.remove_addresses(list(duplicate.addresses))
        customer_repo.add(duplicate)

    orders = order_repo._dao.query.filter(customer_id=str(duplicate.id)).all().items
    for order in orders:
        order.reassign_customer(survivor.id)
        order_repo.add(order)

    customer_repo._dao.delete(duplicate)
    return len(orders)


def dedup_customers() -> int:
    """Merge duplicate customers; returns how many records were removed."""
    removed = 0
    repo = current_domain.repository_for(Customer)

    for group in _duplicate_groups():
        survivor, duplicates = group[0], group[1:]
        for duplicate in duplicates:
            moved_orders = _merge_into(survivor, duplicate)
            removed += 1
            logger.info(
                "Merged duplicate customer",
                survivor_id=str(survivor.id),
                duplicate_id=str(duplicate.id),
                moved_orders=moved_orders,
            )
        if not survivor.email.islower():
            survivor.email = survivor.email.lower()
        survivor.touch()
        repo.add(survivor)

    return removed
