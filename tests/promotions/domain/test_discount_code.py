"""DiscountCode aggregate and discount arithmetic."""

from datetime import UTC, datetime, timedelta

import pytest
from protean.exceptions import ValidationError

from storefront.promotions.discount.discount import DiscountCode, compute_discount_amount


class TestComputeDiscountAmount:
    def test_ten_percent(self):
        assert compute_discount_amount("percentage", 1000, 5000) == 500

    def test_percentage_rounds_down(self):
        assert compute_discount_amount("percentage", 1000, 999) == 99

    def test_full_percentage_equals_subtotal(self):
        assert compute_discount_amount("percentage", 10000, 4321) == 4321

    def test_fixed_amount(self):
        assert compute_discount_amount("fixed", 500, 5000) == 500

    def test_fixed_capped_at_subtotal(self):
        assert compute_discount_amount("fixed", 500, 300) == 300

    def test_zero_subtotal(self):
        assert compute_discount_amount("percentage", 2500, 0) == 0
        assert compute_discount_amount("fixed", 500, 0) == 0


class TestDiscountCode:
    def test_code_is_uppercased(self):
        code = DiscountCode.create(code=" summer ", discount_type="fixed", value=500)
        assert code.code == "SUMMER"

    def test_defaults(self):
        code = DiscountCode.create(code="X", discount_type="fixed", value=500)
        assert code.active is True
        assert code.used_count == 0
        assert code.per_customer_limit == 1
        assert code.is_expired() is False
        assert code.is_exhausted() is False

    def test_expiry(self):
        past = datetime.now(UTC) - timedelta(days=1)
        code = DiscountCode.create(code="OLD", discount_type="fixed", value=500, expires_at=past)
        assert code.is_expired() is True

    def test_exhaustion(self):
        code = DiscountCode.create(code="ONE", discount_type="fixed", value=500, max_uses=1)
        code.redeem("ada@example.com", "order-1")
        assert code.is_exhausted() is True

    def test_redeem_counts_and_returns_redemption(self):
        code = DiscountCode.create(code="X", discount_type="fixed", value=500)
        redemption = code.redeem("Ada@Example.com", "order-1")
        assert code.used_count == 1
        assert redemption.customer_email == "ada@example.com"
        assert str(redemption.order_id) == "order-1"

    def test_usage_cannot_pass_maximum(self):
        code = DiscountCode.create(code="ONE", discount_type="fixed", value=500, max_uses=1)
        code.redeem("ada@example.com", "order-1")
        with pytest.raises(ValidationError):
            code.redeem("bob@example.com", "order-2")

    def test_percentage_above_hundred_rejected(self):
        with pytest.raises(ValidationError):
            DiscountCode.create(code="X", discount_type="percentage", value=10001)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            DiscountCode.create(code="X", discount_type="bogof", value=1)
