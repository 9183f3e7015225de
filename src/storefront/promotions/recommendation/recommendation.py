"""Referral ("recommendation") codes handed to buyers after checkout."""

import secrets
import string
from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront

CODE_PREFIX = "FC-"
CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 4


def generate_recommendation_code() -> str:
    return CODE_PREFIX + "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


@storefront.aggregate
class RecommendationCode:
    code: String(required=True, max_length=20)
    order_id: Identifier()
    customer_email: String(required=True, max_length=254)
    created_at: DateTime(default=lambda: datetime.now(UTC))

    @classmethod
    def issue(cls, code, customer_email, order_id=None):
        return cls(
            code=code,
            customer_email=customer_email.lower(),
            order_id=order_id,
            created_at=datetime.now(UTC),
        )

    def redeem(self, email: str, order_id) -> "RecommendationRedemption":
        return RecommendationRedemption(
            code_id=self.id,
            used_by_email=email.lower(),
            order_id=order_id,
            used_at=datetime.now(UTC),
        )


@storefront.aggregate
class RecommendationRedemption:
    code_id: Identifier(required=True)
    used_by_email: String(required=True, max_length=254)
    order_id: Identifier(required=True)
    used_at: DateTime(default=lambda: datetime.now(UTC))
