"""Checkout: turn a cart submission into a customer, an address and an order.

Every check runs before the first write, and the whole sequence executes in
the command handler's unit of work, so a failure anywhere leaves no partial
order behind.
"""

import json
import secrets
import string
from collections import Counter
from dataclasses import dataclass
from datetime import UTC, datetime

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.customers.customer import Customer
from storefront.customers.lookup import find_by_email
from storefront.domain import storefront
from storefront.ordering.order.order import Order, PaymentMethod
from storefront.ordering.order.queries import find_by_number
from storefront.promotions.discount.discount import DiscountCode, DiscountRedemption
from storefront.promotions.discount.validation import CHECKOUT_MESSAGES, validate_discount_code
from storefront.promotions.recommendation.recommendation import RecommendationCode, RecommendationRedemption
from storefront.promotions.recommendation.validation import (
    unique_recommendation_code,
    validate_recommendation_code,
)
from storefront.settings.site_setting import recommendation_codes_enabled
from storefront.shared.email import normalize_email

logger = structlog.get_logger(__name__)

SHIPPING_COST = 0
_ORDER_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits


@storefront.command(part_of="Order")
class PlaceOrder:
    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    phone = String(required=True, max_length=30)
    address_line1 = String(required=True, max_length=255)
    address_line2 = String(max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(max_length=20)
    country = String(required=True, max_length=100)
    payment_method = String(required=True, max_length=20)
    note = Text()
    discount_code = String(max_length=50)
    recommendation_code = String(max_length=20)
    items = Text(required=True)  # JSON: list of {product_id, variant_id, quantity}


@dataclass(frozen=True)
class CheckoutResult:
    order_number: str
    recommendation_code: str | None = None


def generate_order_number(now: datetime | None = None) -> str:
    """``FC-YYMMDD-XXXX`` with a random base-36 suffix."""
    now = now or datetime.now(UTC)
    suffix = "".join(secrets.choice(_ORDER_SUFFIX_ALPHABET) for _ in range(4))
    return f"FC-{now:%y%m%d}-{suffix}"


def _unique_order_number() -> str:
    for _ in range(10):
        candidate = generate_order_number()
        if find_by_number(candidate) is None:
            return candidate
    raise ValidationError({"order_number": ["Could not allocate an order number, please retry"]})


def _parse_items(raw) -> list[dict]:
    items = json.loads(raw) if isinstance(raw, str) else raw
    if not items:
        raise ValidationError({"items": ["Cart is empty"]})

    parsed = []
    for item in items:
        quantity = int(item.get("quantity") or 0)
        if quantity < 1:
            raise ValidationError({"items": ["Quantity must be at least 1"]})
        variant_id = item.get("variant_id")
        parsed.append(
            {
                "product_id": str(item["product_id"]),
                "variant_id": str(variant_id) if variant_id else None,
                "quantity": quantity,
            }
        )
    return parsed


def _variant_for(product: Product, item: dict):
    if not item["variant_id"]:
        return None
    variant = product.find_variant(item["variant_id"])
    if variant is None:
        raise ValidationError({"items": [f"Variant not found: {item['variant_id']}"]})
    return variant


def _load_products(items) -> dict[str, Product]:
    """Every referenced product must exist, be active and have stock for the whole cart.

    A referenced variant must belong to its product. Variants with their own
    stock are counted separately; the rest draw on the product stock.
    """
    repo = current_domain.repository_for(Product)
    products = {}
    for item in items:
        product_id = item["product_id"]
        if product_id in products:
            continue
        try:
            product = repo.get(product_id)
        except ObjectNotFoundError:
            product = None
        if product is None or not product.is_active:
            raise ValidationError({"items": [f"Product not found or unavailable: {product_id}"]})
        products[product_id] = product

    wanted = Counter()
    for item in items:
        product = products[item["product_id"]]
        variant = _variant_for(product, item)
        tracked = variant.id if variant is not None and variant.stock is not None else None
        wanted[(item["product_id"], tracked)] += item["quantity"]
    for (product_id, variant_id), quantity in wanted.items():
        product = products[product_id]
        variant = product.find_variant(variant_id) if variant_id else None
        if not product.has_stock_for(quantity, variant):
            raise ValidationError({"items": [f'Not enough stock for "{product.title}"']})

    return products


def _priced(product: Product, item: dict) -> dict:
    variant = _variant_for(product, item)
    return {
        "product_id": item["product_id"],
        "variant_id": item["variant_id"],
        "variant_label": variant.label if variant is not None else None,
        "title": product.title,
        "quantity": item["quantity"],
        "unit_price": product.unit_price_for(variant),
    }


@storefront.command_handler(part_of=Order)
class CheckoutHandler:
    @handle(PlaceOrder)
    def place_order(self, command) -> CheckoutResult:
        # ---- validation, no writes ----
        email = normalize_email(command.email)
        if command.payment_method not in [m.value for m in PaymentMethod]:
            raise ValidationError({"payment_method": ["Payment method must be stripe or cod"]})

        items = _parse_items(command.items)
        products = _load_products(items)
        priced_items = [_priced(products[item["product_id"]], item) for item in items]
        subtotal = sum(item["unit_price"] * item["quantity"] for item in priced_items)

        quote = None
        if command.discount_code and command.discount_code.strip():
            quote = validate_discount_code(command.discount_code, subtotal, email=email, messages=CHECKOUT_MESSAGES)

        redeemed_code = None
        if command.recommendation_code and command.recommendation_code.strip():
            redeemed_code = validate_recommendation_code(command.recommendation_code, email)

        issued_code = unique_recommendation_code() if recommendation_codes_enabled() else None

        # ---- writes ----
        customer_repo = current_domain.repository_for(Customer)
        customer = find_by_email(email)
        if customer is None:
            customer = Customer.register(
                first_name=command.first_name.strip(),
                last_name=command.last_name.strip(),
                email=email,
                phone=command.phone,
            )
        else:
            customer.touch()

        address = {
            "address_line1": command.address_line1,
            "address_line2": command.address_line2 or None,
            "city": command.city,
            "state": command.state or None,
            "postal_code": command.postal_code or None,
            "country": command.country,
        }
        customer.add_address(is_default=True, **address)
        customer_repo.add(customer)

        order = Order.place(
            order_number=_unique_order_number(),
            customer_id=customer.id,
            customer_email=email,
            payment_method=command.payment_method,
            items=priced_items,
            shipping_address=address,
            shipping_cost=SHIPPING_COST,
            discount_code=quote.code if quote else None,
            discount_amount=quote.discount_amount if quote else 0,
            note=command.note,
            customer_name=f"{command.first_name} {command.last_name}".strip(),
            issued_recommendation_code=issued_code,
        )
        if redeemed_code is not None:
            order.attach_recommendation_code(redeemed_code.code)
        current_domain.repository_for(Order).add(order)

        if quote is not None:
            redemption = quote.discount_code.redeem(email, order.id)
            current_domain.repository_for(DiscountCode).add(quote.discount_code)
            current_domain.repository_for(DiscountRedemption).add(redemption)

        product_repo = current_domain.repository_for(Product)
        for item in items:
            product = products[item["product_id"]]
            product.decrement_stock(item["quantity"], _variant_for(product, item))
        for product in products.values():
            product_repo.add(product)

        if redeemed_code is not None:
            redemption = redeemed_code.redeem(email, order.id)
            current_domain.repository_for(RecommendationRedemption).add(redemption)

        if issued_code is not None:
            current_domain.repository_for(RecommendationCode).add(
                RecommendationCode.issue(issued_code, customer_email=email, order_id=order.id)
            )

        logger.info(
            "Order placed",
            order_number=order.order_number,
            customer_id=str(customer.id),
            item_count=len(items),
            total=order.total,
            discount_code=order.discount_code,
        )
        return CheckoutResult(order_number=order.order_number, recommendation_code=issued_code)
