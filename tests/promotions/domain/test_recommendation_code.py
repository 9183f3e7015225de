"""Recommendation code format and redemption rows."""

import re

from storefront.promotions.recommendation.recommendation import RecommendationCode, generate_recommendation_code

CODE_FORMAT = re.compile(r"^FC-[A-Z0-9]{4}$")


class TestGenerate:
    def test_format(self):
        for _ in range(20):
            assert CODE_FORMAT.match(generate_recommendation_code())


class TestRecommendationCode:
    def test_issue_normalizes_email(self):
        code = RecommendationCode.issue("FC-AB12", customer_email="Ada@Example.com", order_id="order-1")
        assert code.customer_email == "ada@example.com"

    def test_redeem_returns_redemption(self):
        code = RecommendationCode.issue("FC-AB12", customer_email="ada@example.com", order_id="order-1")
        redemption = code.redeem("newbie@example.com", "order-2")
        assert str(redemption.code_id) == str(code.id)
        assert redemption.used_by_email == "newbie@example.com"
