import json
import os
from pathlib import Path

import pytest

_ISOLATED_ENV = (
    "OWNER_EMAIL",
    "RESEND_API_KEY",
    "ANTHROPIC_API_KEY",
    "ADMIN_USERNAME",
    "ADMIN_PASSWORD",
    "ENV",
    "ENVIRONMENT",
)


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Initialize the storefront domain once, before collection.

    PROTEAN_ENV picks the domain.toml overlay; test modules import domain
    elements at collection time, so the domain must be ready first.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from storefront.domain import storefront

    storefront.init()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _storefront_domain():
    from storefront.domain import storefront

    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain, monkeypatch, tmp_path):
    """Push domain context before each test, cleanup after."""
    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))

    from storefront.notifications.email import reset_mailer
    from storefront.theming.palette import reset_palette_generator

    reset_mailer()
    reset_palette_generator()

    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


# ---------------------------------------------------------------------------
# Builders shared across areas
# ---------------------------------------------------------------------------
@pytest.fixture
def mailer():
    from storefront.notifications.email import set_mailer
    from storefront.notifications.email.fake_adapter import FakeEmailAdapter

    fake = FakeEmailAdapter()
    set_mailer(fake)
    return fake


@pytest.fixture
def make_product():
    from protean import current_domain

    from storefront.catalogue.product.management import CreateProduct

    def _make(title="Feather Wand", slug=None, price=1500, status="active", stock=None, **extra):
        command = CreateProduct(
            title=title,
            slug=slug or title.lower().replace(" ", "-"),
            price=price,
            status=status,
            stock=stock,
            images=json.dumps(extra.pop("images", [])),
            option_types=json.dumps(extra.pop("option_types", [])),
            variants=json.dumps(extra.pop("variants", [])),
            **extra,
        )
        return current_domain.process(command, asynchronous=False)

    return _make


def _cart_line(product_id, quantity, variant_id=None):
    return {"product_id": product_id, "variant_id": variant_id, "quantity": quantity}


@pytest.fixture
def place_order():
    from protean import current_domain

    from storefront.ordering.checkout.checkout import PlaceOrder

    def _place(items, email="ada@example.com", **overrides):
        fields = {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": email,
            "phone": "07700 900123",
            "address_line1": "1 Cat Street",
            "city": "London",
            "postal_code": "N1 1AA",
            "country": "GB",
            "payment_method": "cod",
        }
        fields.update(overrides)
        command = PlaceOrder(
            items=json.dumps([_cart_line(*item) for item in items]),
            **fields,
        )
        return current_domain.process(command, asynchronous=False)

    return _place


@pytest.fixture
def make_discount():
    from protean import current_domain

    from storefront.promotions.discount.management import CreateDiscountCode

    def _make(code="SAVE10", discount_type="percentage", value=10, **extra):
        command = CreateDiscountCode(code=code, discount_type=discount_type, value=value, **extra)
        return current_domain.process(command, asynchronous=False)

    return _make


# ---------------------------------------------------------------------------
# HTTP clients
# ---------------------------------------------------------------------------
@pytest.fixture
def api_app(_storefront_domain):
    from fastapi import FastAPI

    from storefront.api import admin_router, auth_router, public_router, register_error_handlers

    app = FastAPI()

    @app.middleware("http")
    async def domain_context(request, call_next):
        with _storefront_domain.domain_context():
            return await call_next(request)

    app.include_router(public_router)
    app.include_router(auth_router)
    app.include_router(admin_router)
    register_error_handlers(app)
    return app


@pytest.fixture
def client(api_app):
    from fastapi.testclient import TestClient

    return TestClient(api_app)


@pytest.fixture
def admin_client(client):
    """A client holding a session for the bootstrapped environment admin."""
    response = client.post("/auth/login", json={"username": "admin", "password": "fatcat2024"})
    assert response.status_code == 200
    return client
