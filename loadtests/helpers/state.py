"""Per-user state for Locust scenarios.

Each simulated user keeps its own state; nothing is shared across users.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """One shopper's browse-to-track journey."""

    email: str | None = None
    product_ids: list[str] = field(default_factory=list)
    product_slugs: list[str] = field(default_factory=list)
    cart: list[dict] = field(default_factory=list)
    subtotal: int = 0
    order_number: str | None = None


@dataclass
class BackOfficeState:
    """Catalogue and order handling by a logged-in admin."""

    category_id: str | None = None
    product_id: str | None = None
    discount_id: str | None = None
    order_ids: list[str] = field(default_factory=list)
