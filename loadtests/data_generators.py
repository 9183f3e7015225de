"""Faker-based payloads matching the Fat Cat API request schemas."""

import random
import uuid

from faker import Faker

fake = Faker("en_GB")

CAT_THINGS = ["Feather Wand", "Scratching Post", "Catnip Mouse", "Tunnel", "Laser Pointer", "Cosy Bed"]


def unique_suffix() -> str:
    return uuid.uuid4().hex[:6]


def shopper_email() -> str:
    return f"{fake.user_name()[:20]}.{unique_suffix()}@{fake.free_email_domain()}"


def checkout_details(email: str) -> dict:
    return {
        "firstName": fake.first_name()[:100],
        "lastName": fake.last_name()[:100],
        "email": email,
        "phone": fake.phone_number()[:30],
        "addressLine1": fake.street_address()[:255],
        "city": fake.city()[:100],
        "postalCode": fake.postcode()[:20],
        "country": "GB",
        "paymentMethod": random.choice(["cod", "stripe"]),
    }


def category_data() -> dict:
    return {
        "name": f"{fake.word().title()} {unique_suffix()}",
        "description": fake.sentence(),
        "sortOrder": random.randint(0, 20),
    }


def product_data(category_id: str | None = None) -> dict:
    title = f"{random.choice(CAT_THINGS)} {unique_suffix()}"
    return {
        "title": title,
        "slug": title.lower().replace(" ", "-"),
        "description": fake.paragraph(),
        "price": random.randint(299, 4999),
        "categoryId": category_id,
        "status": "active",
        "tags": ",".join(fake.words(3)),
        "stock": random.choice([None, random.randint(50, 500)]),
    }


def discount_data() -> dict:
    return {
        "code": f"LOAD{unique_suffix().upper()}",
        "type": random.choice(["percentage", "fixed"]),
        "value": random.randint(5, 25),
        "maxUses": random.choice([None, 100]),
    }
