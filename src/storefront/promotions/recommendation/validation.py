"""Recommendation code eligibility.

A code is only for first-time buyers: it must exist, must not belong to
the redeeming email, and that email must have neither an earlier order nor
an earlier redemption of any recommendation code.
"""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.promotions.recommendation.recommendation import (
    RecommendationCode,
    RecommendationRedemption,
    generate_recommendation_code,
)

MAX_GENERATION_ATTEMPTS = 10


def find_recommendation_code(code: str) -> RecommendationCode | None:
    matches = current_domain.repository_for(RecommendationCode)._dao.query.filter(code=code).all().items
    return matches[0] if matches else None


def has_prior_order(email: str) -> bool:
    from storefront.ordering.order.order import Order

    return bool(current_domain.repository_for(Order)._dao.query.filter(customer_email=email).all().items)


def has_prior_redemption(email: str) -> bool:
    return bool(
        current_domain.repository_for(RecommendationRedemption)._dao.query.filter(used_by_email=email).all().items
    )


def validate_recommendation_code(code: str, email: str | None) -> RecommendationCode:
    """Return the code record or raise ValidationError with the first failing reason."""
    code = (code or "").strip().upper()
    email = (email or "").strip().lower()

    def reject(message):
        raise ValidationError({"recommendation_code": [message]})

    if not code:
        reject("Code is required")

    record = find_recommendation_code(code)
    if record is None:
        reject("Invalid recommendation code")

    if email:
        if record.customer_email == email:
            reject("You cannot use your own recommendation code")
        if has_prior_order(email):
            reject("Recommendation codes are for first-time buyers only")
        if has_prior_redemption(email):
            reject("You have already used a recommendation code")

    return record


def unique_recommendation_code() -> str:
    """A fresh code not yet in use; gives up after a bounded number of tries."""
    for _ in range(MAX_GENERATION_ATTEMPTS):
        candidate = generate_recommendation_code()
        if find_recommendation_code(candidate) is None:
            return candidate
    raise ValidationError({"recommendation_code": ["Could not allocate a unique recommendation code"]})
