"""Mixed storefront and back-office workload.

Shoppers dominate real traffic; admins are a small, steady trickle.
"""

from locust import HttpUser, between

from loadtests.scenarios.storefront import CheckoutJourney, WindowShopperJourney


class MixedWorkloadUser(HttpUser):
    """Anonymous shoppers only; pair with BackOfficeUser for admin load."""

    wait_time = between(0.5, 3.0)
    tasks = {
        WindowShopperJourney: 6,
        CheckoutJourney: 2,
    }

