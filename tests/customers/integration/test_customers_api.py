class TestCustomerLookupAPI:
    def test_blank_email(self, client):
        assert client.get("/customers/lookup").json() == {"found": False}

    def test_known_email(self, client, make_product, place_order):
        place_order([(make_product(), 1)])

        body = client.get("/customers/lookup", params={"email": "ADA@example.com"}).json()

        assert body["found"] is True
        assert body["customer"]["lastName"] == "Lovelace"
        assert body["customer"]["address"]["postalCode"] == "N1 1AA"


class TestAdminCustomersAPI:
    def test_requires_session(self, client):
        response = client.get("/admin/customers")
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_list_and_detail(self, admin_client, make_product, place_order):
        result = place_order([(make_product(), 1)])

        customers = admin_client.get("/admin/customers").json()
        assert [c["email"] for c in customers] == ["ada@example.com"]

        detail = admin_client.get(f"/admin/customers/{customers[0]['id']}").json()
        assert detail["orders"][0]["orderNumber"] == result.order_number

    def test_unknown_customer_is_404(self, admin_client):
        response = admin_client.get("/admin/customers/missing")
        assert response.status_code == 404
        assert response.json() == {"error": "Customer not found"}
