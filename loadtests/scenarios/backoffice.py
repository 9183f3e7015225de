"""Admin back-office load scenarios; every user logs in once on start."""

import os

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import category_data, discount_data, product_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import BackOfficeState


class CatalogueBuilder(SequentialTaskSet):
    """Create category -> Create product -> Create discount code."""

    def on_start(self):
        self.state = BackOfficeState()

    @task
    def create_category(self):
        with self.client.post(
            "/admin/categories", json=category_data(), catch_response=True, name="POST /admin/categories"
        ) as resp:
            if resp.status_code == 201:
                self.state.category_id = resp.json()["id"]
            else:
                resp.failure(f"Create category failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def create_product(self):
        with self.client.post(
            "/admin/products",
            json=product_data(self.state.category_id),
            catch_response=True,
            name="POST /admin/products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_id = resp.json()["id"]
            else:
                resp.failure(f"Create product failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def create_discount(self):
        with self.client.post(
            "/admin/discounts", json=discount_data(), catch_response=True, name="POST /admin/discounts"
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Create discount failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class OrderDesk(SequentialTaskSet):
    """Poll unfulfilled orders and confirm the pending ones."""

    def on_start(self):
        self.state = BackOfficeState()

    @task
    def unfulfilled_count(self):
        self.client.get("/admin/orders/unfulfilled-count", name="GET /admin/orders/unfulfilled-count")

    @task
    def pending_orders(self):
        with self.client.get(
            "/admin/orders", params={"status": "pending"}, catch_response=True, name="GET /admin/orders"
        ) as resp:
            if resp.status_code == 200:
                self.state.order_ids = [o["id"] for o in resp.json()[:5]]
            else:
                resp.failure(f"List orders failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def confirm_orders(self):
        for order_id in self.state.order_ids:
            with self.client.put(
                f"/admin/orders/{order_id}/status",
                json={"status": "confirmed"},
                catch_response=True,
                name="PUT /admin/orders/{id}/status",
            ) as resp:
                # Another admin user may have confirmed it first
                if resp.status_code == 400:
                    resp.success()

    @task
    def analytics(self):
        self.client.get("/admin/analytics", params={"days": 30}, name="GET /admin/analytics")

    @task
    def done(self):
        self.interrupt()


class BackOfficeUser(HttpUser):
    wait_time = between(2, 5)
    tasks = {CatalogueBuilder: 1, OrderDesk: 2}

    def on_start(self):
        credentials = {
            "username": os.getenv("ADMIN_USERNAME", "admin"),
            "password": os.getenv("ADMIN_PASSWORD", "fatcat2024"),
        }
        with self.client.post("/auth/login", json=credentials, catch_response=True, name="POST /auth/login") as resp:
            if resp.status_code != 200:
                resp.failure(f"Login failed: {resp.status_code} {extract_error_detail(resp)}")
