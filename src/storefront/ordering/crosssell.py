"""Cross-sell ranking: products most often bought together with a given set."""

from collections import Counter

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.catalogue.product.queries import product_card
from storefront.ordering.order.order import Order

DEFAULT_LIMIT = 4


def co_occurrence_counts(product_ids) -> Counter:
    """How many orders containing any of ``product_ids`` also contain each other product.

    A product counts once per order, however many lines or units it has there.
    """
    wanted = {str(pid) for pid in product_ids}
    counts = Counter()
    for order in current_domain.repository_for(Order)._dao.query.all().items:
        in_order = {str(line.product_id) for line in order.line_items if line.product_id}
        if not in_order & wanted:
            continue
        counts.update(in_order - wanted)
    return counts


def cross_sell(product_ids, limit: int = DEFAULT_LIMIT) -> list[Product]:
    """Top ``limit`` active products bought alongside ``product_ids``, most frequent first."""
    ids = [pid for pid in product_ids if pid]
    if not ids:
        return []

    repo = current_domain.repository_for(Product)
    results = []
    # most_common keeps first-seen order for equal counts
    for product_id, _count in co_occurrence_counts(ids).most_common():
        try:
            product = repo.get(product_id)
        except ObjectNotFoundError:
            continue
        if not product.is_active:
            continue
        results.append(product)
        if len(results) == limit:
            break
    return results


def cross_sell_cards(product_ids, limit: int = DEFAULT_LIMIT) -> list[dict]:
    return [product_card(p) for p in cross_sell(product_ids, limit)]
