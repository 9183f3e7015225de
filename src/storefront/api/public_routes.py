"""Public storefront endpoints: catalogue, checkout, tracking, promotions."""

import json

import structlog
from fastapi import APIRouter, HTTPException, Query, Request, Response
from fastapi.responses import FileResponse, JSONResponse
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront import config
from storefront.analytics.event import TrackEvent
from storefront.api.errors import first_message
from storefront.api.schemas import (
    AnalyticsTrackRequest,
    CheckoutRequest,
    CheckoutResponse,
)
from storefront.catalogue.category.management import list_categories
from storefront.catalogue.product.queries import get_active_product, list_active_products, product_detail
from storefront.customers.lookup import lookup_customer
from storefront.ordering.checkout.checkout import PlaceOrder
from storefront.ordering.crosssell import cross_sell_cards
from storefront.ordering.order.queries import track_order
from storefront.promotions.discount.validation import validate_discount_code
from storefront.promotions.recommendation.validation import validate_recommendation_code
from storefront.settings.site_setting import public_settings
from storefront.theming.theme_config import active_theme
from storefront.uploads.storage import UnsafePath, content_type_for, resolve_upload

logger = structlog.get_logger(__name__)

UPLOAD_CACHE_CONTROL = "public, max-age=31536000, immutable"

public_router = APIRouter(tags=["storefront"])


def _invalid(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"valid": False, "error": message})


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
@public_router.get("/products")
async def products(category: str | None = None, search: str | None = None) -> list[dict]:
    return list_active_products(category_slug=category, search=search)


@public_router.get("/products/{slug}")
async def product(slug: str) -> dict:
    return product_detail(get_active_product(slug))


@public_router.get("/categories")
async def categories() -> list[dict]:
    return list_categories()


@public_router.get("/cross-sell")
async def cross_sell(ids: str = "") -> list[dict]:
    product_ids = [pid.strip() for pid in ids.split(",") if pid.strip()]
    if not product_ids:
        return []
    return cross_sell_cards(product_ids)


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
@public_router.post("/checkout", status_code=201, response_model=CheckoutResponse)
async def checkout(body: CheckoutRequest) -> CheckoutResponse:
    command = PlaceOrder(
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        phone=body.phone,
        address_line1=body.address_line1,
        address_line2=body.address_line2,
        city=body.city,
        state=body.state,
        postal_code=body.postal_code,
        country=body.country,
        payment_method=body.payment_method,
        note=body.note,
        discount_code=body.discount_code,
        recommendation_code=body.recommendation_code,
        items=json.dumps([item.model_dump() for item in body.items]),
    )
    result = current_domain.process(command, asynchronous=False)

    message = None
    if body.payment_method == "stripe":
        message = "Order recorded. Card payment is settled separately; the order stays unpaid until then."
    return CheckoutResponse(
        order_number=result.order_number,
        recommendation_code=result.recommendation_code,
        message=message,
    )


@public_router.get("/orders/track")
async def orders_track(
    order_number: str = Query(alias="orderNumber", min_length=1, max_length=30),
    email: str = Query(min_length=1, max_length=254),
) -> dict:
    return track_order(order_number, email)


@public_router.get("/customers/lookup")
async def customers_lookup(email: str = "") -> dict:
    if not email.strip():
        return {"found": False}
    return lookup_customer(email)


# ---------------------------------------------------------------------------
# Promotions
# ---------------------------------------------------------------------------
@public_router.get("/validate-discount")
async def validate_discount(code: str | None = None, subtotal: str | None = None, email: str | None = None):
    if not code or subtotal is None or subtotal == "":
        return _invalid("Missing code or subtotal")
    try:
        amount = int(subtotal)
    except ValueError:
        return _invalid("Invalid subtotal")
    if amount < 0:
        return _invalid("Invalid subtotal")

    try:
        quote = validate_discount_code(code, amount, email=email)
    except ValidationError as exc:
        return _invalid(first_message(exc.messages))

    return {
        "valid": True,
        "discountAmount": quote.discount_amount,
        "type": quote.discount_type,
        "value": quote.value,
        "code": quote.code,
    }


@public_router.get("/validate-recommendation")
async def validate_recommendation(code: str | None = None, email: str | None = None):
    try:
        record = validate_recommendation_code(code, email)
    except ValidationError as exc:
        return _invalid(first_message(exc.messages))
    return {"valid": True, "code": record.code}


# ---------------------------------------------------------------------------
# Presentation
# ---------------------------------------------------------------------------
@public_router.get("/theme")
async def theme() -> dict:
    return active_theme()


@public_router.get("/settings")
async def settings() -> dict:
    return public_settings()


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------
@public_router.post("/track")
async def track(body: AnalyticsTrackRequest, request: Request, response: Response) -> dict:
    visitor_id = request.cookies.get(config.VISITOR_COOKIE_NAME)
    command = TrackEvent(
        visitor_id=visitor_id,
        event=body.event,
        path=body.path,
        referrer=request.headers.get("referer"),
        user_agent=request.headers.get("user-agent"),
    )
    recorded_visitor = current_domain.process(command, asynchronous=False)

    if not visitor_id:
        response.set_cookie(
            key=config.VISITOR_COOKIE_NAME,
            value=recorded_visitor,
            max_age=config.VISITOR_MAX_AGE_SECONDS,
            path="/",
            httponly=True,
            samesite="lax",
            secure=config.is_production(),
        )
    return {"ok": True}


# ---------------------------------------------------------------------------
# Uploaded files
# ---------------------------------------------------------------------------
@public_router.get("/uploads/{filename}")
async def uploaded_file(filename: str) -> FileResponse:
    try:
        path = resolve_upload(filename)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid filename")
    except UnsafePath:
        logger.warning("Upload path escaped upload directory", filename=filename)
        raise HTTPException(status_code=403, detail="Forbidden")
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="Not found")

    return FileResponse(
        path,
        media_type=content_type_for(path),
        headers={"Cache-Control": UPLOAD_CACHE_CONTROL},
    )
