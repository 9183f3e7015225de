"""Shopper load scenarios against the public storefront endpoints.

The checkout journey needs active products; run BackOfficeUser first or
seed the catalogue with ``python src/manage.py seed``.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import checkout_details, shopper_email
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class CheckoutJourney(SequentialTaskSet):
    """Browse -> View product -> Cross-sell -> Checkout -> Track."""

    def on_start(self):
        self.state = ShopperState(email=shopper_email())

    @task
    def browse_products(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            products = resp.json() if resp.status_code == 200 else []
            if not products:
                resp.failure(f"No products to browse: {resp.status_code}")
                self.interrupt()
                return
            picks = random.sample(products, k=min(2, len(products)))
            self.state.product_ids = [p["id"] for p in picks]
            self.state.product_slugs = [p["slug"] for p in picks]

    @task
    def view_product(self):
        slug = random.choice(self.state.product_slugs)
        with self.client.get(f"/products/{slug}", catch_response=True, name="GET /products/{slug}") as resp:
            if resp.status_code == 200:
                quantity = random.randint(1, 3)
                self.state.cart = [{"productId": resp.json()["id"], "quantity": quantity}]
                self.state.subtotal = resp.json()["price"] * quantity
            else:
                resp.failure(f"View product failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def cross_sell(self):
        self.client.get(
            "/cross-sell",
            params={"ids": ",".join(self.state.product_ids)},
            name="GET /cross-sell",
        )

    @task
    def track_page_view(self):
        self.client.post("/track", json={"event": "page_view", "path": "/cart"}, name="POST /track")

    @task
    def checkout(self):
        payload = {**checkout_details(self.state.email), "items": self.state.cart}
        with self.client.post("/checkout", json=payload, catch_response=True, name="POST /checkout") as resp:
            if resp.status_code == 201:
                self.state.order_number = resp.json()["orderNumber"]
            else:
                resp.failure(f"Checkout failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def track_order(self):
        with self.client.get(
            "/orders/track",
            params={"orderNumber": self.state.order_number, "email": self.state.email},
            catch_response=True,
            name="GET /orders/track",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Tracking failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class WindowShopperJourney(SequentialTaskSet):
    """Read-only browsing: theme, settings, categories and a search."""

    @task
    def theme(self):
        self.client.get("/theme", name="GET /theme")

    @task
    def settings(self):
        self.client.get("/settings", name="GET /settings")

    @task
    def categories(self):
        self.client.get("/categories", name="GET /categories")

    @task
    def search(self):
        self.client.get("/products", params={"search": random.choice(["cat", "toy", "bed"])}, name="GET /products?search")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    wait_time = between(1, 3)
    tasks = {WindowShopperJourney: 3, CheckoutJourney: 1}
