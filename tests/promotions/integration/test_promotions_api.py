"""Discount and recommendation endpoints."""

from protean import current_domain

from storefront.promotions.recommendation.recommendation import RecommendationCode


class TestValidateDiscountAPI:
    def test_valid_code(self, client, make_discount):
        make_discount(code="SAVE10", discount_type="percentage", value=10)

        response = client.get("/validate-discount", params={"code": "save10", "subtotal": "5000"})

        assert response.status_code == 200
        assert response.json() == {
            "valid": True,
            "discountAmount": 500,
            "type": "percentage",
            "value": 1000,
            "code": "SAVE10",
        }

    def test_missing_parameters(self, client):
        response = client.get("/validate-discount", params={"code": "SAVE10"})
        assert response.status_code == 400
        assert response.json() == {"valid": False, "error": "Missing code or subtotal"}

    def test_non_numeric_subtotal(self, client):
        response = client.get("/validate-discount", params={"code": "SAVE10", "subtotal": "lots"})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid subtotal"

    def test_negative_subtotal(self, client):
        response = client.get("/validate-discount", params={"code": "SAVE10", "subtotal": "-5"})
        assert response.json()["error"] == "Invalid subtotal"

    def test_unknown_code(self, client):
        response = client.get("/validate-discount", params={"code": "NOPE", "subtotal": "5000"})
        assert response.status_code == 400
        assert response.json() == {"valid": False, "error": "Code not found"}


class TestValidateRecommendationAPI:
    def test_valid(self, client):
        current_domain.repository_for(RecommendationCode).add(
            RecommendationCode.issue("FC-AB12", customer_email="referrer@example.com")
        )
        response = client.get("/validate-recommendation", params={"code": "fc-ab12", "email": "new@example.com"})
        assert response.status_code == 200
        assert response.json() == {"valid": True, "code": "FC-AB12"}

    def test_missing_code(self, client):
        response = client.get("/validate-recommendation")
        assert response.status_code == 400
        assert response.json()["error"] == "Code is required"


class TestAdminDiscountsAPI:
    def test_create_list_toggle_delete(self, admin_client):
        created = admin_client.post("/admin/discounts", json={"code": "spring", "type": "percentage", "value": 15})
        assert created.status_code == 201
        discount_id = created.json()["id"]

        listed = admin_client.get("/admin/discounts").json()
        assert listed[0]["code"] == "SPRING"
        assert listed[0]["value"] == 1500

        toggled = admin_client.patch(f"/admin/discounts/{discount_id}", json={"active": False})
        assert toggled.status_code == 200
        assert admin_client.get("/admin/discounts").json()[0]["active"] is False

        deleted = admin_client.delete(f"/admin/discounts/{discount_id}")
        assert deleted.status_code == 200
        assert admin_client.get("/admin/discounts").json() == []

    def test_duplicate_is_409(self, admin_client):
        admin_client.post("/admin/discounts", json={"code": "SPRING", "type": "fixed", "value": 500})
        response = admin_client.post("/admin/discounts", json={"code": "spring", "type": "fixed", "value": 500})
        assert response.status_code == 409
        assert response.json()["error"] == "A discount code with that code already exists"

    def test_delete_unknown_is_404(self, admin_client):
        response = admin_client.delete("/admin/discounts/missing")
        assert response.status_code == 404
        assert response.json()["error"] == "Discount code not found"
