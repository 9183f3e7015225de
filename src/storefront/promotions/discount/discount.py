"""Discount codes and their redemptions."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String

from storefront.domain import storefront

BASIS_POINTS = 10_000


class DiscountType(Enum):
    PERCENTAGE = "percentage"  # value in basis points, 1000 == 10%
    FIXED = "fixed"  # value in pence


def compute_discount_amount(discount_type: str, value: int, subtotal: int) -> int:
    """Amount taken off ``subtotal``; never more than the subtotal itself."""
    if discount_type == DiscountType.PERCENTAGE.value:
        return min(subtotal * value // BASIS_POINTS, subtotal)
    return min(value, subtotal)


def _as_utc(moment: datetime) -> datetime:
    return moment if moment.tzinfo else moment.replace(tzinfo=UTC)


@storefront.aggregate
class DiscountCode:
    code: String(required=True, max_length=50)
    discount_type: String(choices=DiscountType, required=True)
    value: Integer(required=True, min_value=1)
    max_uses: Integer(min_value=1)
    used_count: Integer(default=0, min_value=0)
    per_customer_limit: Integer(default=1, min_value=1)
    expires_at: DateTime()
    active: Boolean(default=True)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @invariant.post
    def usage_never_exceeds_maximum(self):
        if self.max_uses is not None and (self.used_count or 0) > self.max_uses:
            raise ValidationError({"used_count": ["Usage count cannot exceed the maximum number of uses"]})

    @invariant.post
    def percentage_within_bounds(self):
        if self.discount_type == DiscountType.PERCENTAGE.value and self.value is not None and self.value > BASIS_POINTS:
            raise ValidationError({"value": ["Percentage discounts cannot exceed 100%"]})

    @classmethod
    def create(cls, code, discount_type, value, max_uses=None, per_customer_limit=1, expires_at=None, active=True):
        now = datetime.now(UTC)
        return cls(
            code=code.strip().upper(),
            discount_type=discount_type,
            value=value,
            max_uses=max_uses,
            per_customer_limit=per_customer_limit or 1,
            expires_at=expires_at,
            active=active,
            created_at=now,
            updated_at=now,
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        return _as_utc(self.expires_at) < (now or datetime.now(UTC))

    def is_exhausted(self) -> bool:
        return self.max_uses is not None and (self.used_count or 0) >= self.max_uses

    def discount_for(self, subtotal: int) -> int:
        return compute_discount_amount(self.discount_type, self.value, subtotal)

    def set_active(self, active: bool) -> None:
        self.active = active
        self.updated_at = datetime.now(UTC)

    def redeem(self, customer_email: str, order_id) -> "DiscountRedemption":
        """Count one use and return the redemption row to persist alongside."""
        self.used_count = (self.used_count or 0) + 1
        now = datetime.now(UTC)
        self.updated_at = now
        return DiscountRedemption(
            code_id=self.id,
            customer_email=customer_email.lower(),
            order_id=order_id,
            used_at=now,
        )


@storefront.aggregate
class DiscountRedemption:
    code_id: Identifier(required=True)
    customer_email: String(required=True, max_length=254)
    order_id: Identifier(required=True)
    used_at: DateTime(default=lambda: datetime.now(UTC))
