"""Discount code eligibility checks.

Checks run in a fixed order and the first failure wins: exists, active,
not expired, under the global usage cap, and (when an email is known)
under the per-customer limit.
"""

from dataclasses import dataclass

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.promotions.discount.discount import DiscountCode, DiscountRedemption

# Storefront preview wording vs. wording used when placing the order
PREVIEW_MESSAGES = {
    "not_found": "Code not found",
    "inactive": "This code is no longer active",
    "expired": "This code has expired",
    "exhausted": "This code has reached its usage limit",
    "customer_limit": "You have already used this code",
}

CHECKOUT_MESSAGES = {
    "not_found": "Invalid discount code",
    "inactive": "This discount code is no longer active",
    "expired": "This discount code has expired",
    "exhausted": "This discount code has reached its usage limit",
    "customer_limit": "You have already used this discount code",
}


@dataclass(frozen=True)
class DiscountQuote:
    code: str
    discount_type: str
    value: int
    discount_amount: int
    discount_code: DiscountCode


def find_discount_code(code: str) -> DiscountCode | None:
    normalized = (code or "").strip().upper()
    if not normalized:
        return None
    matches = current_domain.repository_for(DiscountCode)._dao.query.filter(code=normalized).all().items
    return matches[0] if matches else None


def customer_uses(discount: DiscountCode, email: str) -> int:
    return len(
        current_domain.repository_for(DiscountRedemption)
        ._dao.query.filter(code_id=str(discount.id), customer_email=email.strip().lower())
        .all()
        .items
    )


def validate_discount_code(
    code: str,
    subtotal: int,
    email: str | None = None,
    messages: dict = PREVIEW_MESSAGES,
) -> DiscountQuote:
    """Return the priced discount or raise ValidationError naming the first failed check."""

    def reject(reason):
        raise ValidationError({"discount_code": [messages[reason]]})

    discount = find_discount_code(code)
    if discount is None:
        reject("not_found")
    if not discount.active:
        reject("inactive")
    if discount.is_expired():
        reject("expired")
    if discount.is_exhausted():
        reject("exhausted")
    if email and customer_uses(discount, email) >= discount.per_customer_limit:
        reject("customer_limit")

    return DiscountQuote(
        code=discount.code,
        discount_type=discount.discount_type,
        value=discount.value,
        discount_amount=discount.discount_for(subtotal),
        discount_code=discount,
    )
