"""Back-office endpoints. Every route requires an admin session."""

import json

import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from protean.utils.globals import current_domain

from storefront.admin.management import CreateAdminUser, DeleteAdminUser, list_admin_users
from storefront.admin.session import SessionData
from storefront.analytics.summary import recent_summaries
from storefront.api.schemas import (
    AdminUserRequest,
    CategoryRequest,
    DiscountCodeRequest,
    DiscountToggleRequest,
    IdResponse,
    OrderNoteRequest,
    OrderStatusRequest,
    PaletteRequest,
    PaymentStatusRequest,
    ProductRequest,
    SettingRequest,
    StatusResponse,
    ThemeRequest,
    UnfulfilledCountResponse,
)
from storefront.api.security import require_admin
from storefront.catalogue.category.management import (
    CreateCategory,
    DeleteCategory,
    UpdateCategory,
    list_categories,
)
from storefront.catalogue.product.management import CreateProduct, DeleteProduct, UpdateProduct, get_product
from storefront.catalogue.product.queries import list_all_products, product_detail
from storefront.customers.lookup import customer_detail, list_customers
from storefront.ordering.order.management import (
    UpdateOrderNote,
    UpdateOrderPaymentStatus,
    UpdateOrderStatus,
    get_order,
)
from storefront.ordering.order.queries import list_orders, order_detail, unfulfilled_count
from storefront.promotions.discount.management import (
    CreateDiscountCode,
    DeleteDiscountCode,
    SetDiscountCodeActive,
    list_discount_codes,
)
from storefront.settings.site_setting import get_site_settings, update_editable_setting
from storefront.theming.palette import get_palette_generator
from storefront.theming.palette.parsing import parse_palette
from storefront.theming.palette.port import PaletteGenerationError
from storefront.theming.theme_config import admin_theme_view, save_theme_config
from storefront.uploads.storage import UploadRejected, save_upload

logger = structlog.get_logger(__name__)

admin_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _product_images(body: ProductRequest) -> str:
    return json.dumps(
        [
            {
                "url": image.url,
                "alt_text": image.alt_text,
                "sort_order": position if image.sort_order is None else image.sort_order,
            }
            for position, image in enumerate(body.images)
        ]
    )


def _product_fields(body: ProductRequest) -> dict:
    return {
        "title": body.title,
        "slug": body.slug,
        "description": body.description,
        "price": body.price,
        "compare_at_price": body.compare_at_price,
        "category_id": body.category_id or None,
        "status": body.status,
        "tags": body.tags,
        "stock": body.stock,
        "images": _product_images(body),
        "option_types": json.dumps([option.model_dump() for option in body.option_types]),
        "variants": json.dumps([variant.model_dump() for variant in body.variants]),
    }


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@admin_router.get("/products")
async def products(status: str | None = None) -> list[dict]:
    return list_all_products(status=status)


@admin_router.post("/products", status_code=201, response_model=IdResponse)
async def create_product(body: ProductRequest) -> IdResponse:
    product_id = current_domain.process(CreateProduct(**_product_fields(body)), asynchronous=False)
    return IdResponse(id=product_id)


@admin_router.get("/products/{product_id}")
async def product(product_id: str) -> dict:
    return product_detail(get_product(product_id))


@admin_router.put("/products/{product_id}", response_model=StatusResponse)
async def update_product(product_id: str, body: ProductRequest) -> StatusResponse:
    current_domain.process(UpdateProduct(product_id=product_id, **_product_fields(body)), asynchronous=False)
    return StatusResponse()


@admin_router.delete("/products/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
@admin_router.get("/categories")
async def categories() -> list[dict]:
    return list_categories()


@admin_router.post("/categories", status_code=201, response_model=IdResponse)
async def create_category(body: CategoryRequest) -> IdResponse:
    command = CreateCategory(name=body.name, description=body.description, sort_order=body.sort_order)
    category_id = current_domain.process(command, asynchronous=False)
    return IdResponse(id=category_id)


@admin_router.put("/categories/{category_id}", response_model=StatusResponse)
async def update_category(category_id: str, body: CategoryRequest) -> StatusResponse:
    command = UpdateCategory(
        category_id=category_id,
        name=body.name,
        description=body.description,
        sort_order=body.sort_order,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_router.delete("/categories/{category_id}", response_model=StatusResponse)
async def delete_category(category_id: str) -> StatusResponse:
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@admin_router.get("/orders")
async def orders(status: str | None = None) -> list[dict]:
    return list_orders(status=status)


@admin_router.get("/orders/unfulfilled-count", response_model=UnfulfilledCountResponse)
async def orders_unfulfilled_count() -> UnfulfilledCountResponse:
    return UnfulfilledCountResponse(count=unfulfilled_count())


@admin_router.get("/orders/{order_id}")
async def order(order_id: str) -> dict:
    return order_detail(get_order(order_id))


@admin_router.put("/orders/{order_id}/status")
async def update_order_status(
    order_id: str, body: OrderStatusRequest, session: SessionData = Depends(require_admin)
) -> dict:
    command = UpdateOrderStatus(order_id=order_id, status=body.status, actor=session.username, note=body.note)
    current_domain.process(command, asynchronous=False)
    return order_detail(get_order(order_id))


@admin_router.put("/orders/{order_id}/payment-status")
async def update_order_payment_status(
    order_id: str, body: PaymentStatusRequest, session: SessionData = Depends(require_admin)
) -> dict:
    command = UpdateOrderPaymentStatus(
        order_id=order_id,
        payment_status=body.payment_status,
        actor=session.username,
        note=body.note,
    )
    current_domain.process(command, asynchronous=False)
    return order_detail(get_order(order_id))


@admin_router.patch("/orders/{order_id}/note", response_model=StatusResponse)
async def update_order_note(order_id: str, body: OrderNoteRequest) -> StatusResponse:
    current_domain.process(UpdateOrderNote(order_id=order_id, note=body.note), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Customers
# ---------------------------------------------------------------------------
@admin_router.get("/customers")
async def customers() -> list[dict]:
    return list_customers()


@admin_router.get("/customers/{customer_id}")
async def customer(customer_id: str) -> dict:
    return customer_detail(customer_id)


# ---------------------------------------------------------------------------
# Discount codes
# ---------------------------------------------------------------------------
@admin_router.get("/discounts")
async def discounts() -> list[dict]:
    return list_discount_codes()


@admin_router.post("/discounts", status_code=201, response_model=IdResponse)
async def create_discount(body: DiscountCodeRequest) -> IdResponse:
    command = CreateDiscountCode(
        code=body.code,
        discount_type=body.type,
        value=body.value,
        max_uses=body.max_uses,
        per_customer_limit=body.per_customer_limit,
        expires_at=body.expires_at,
        active=body.active,
    )
    discount_id = current_domain.process(command, asynchronous=False)
    return IdResponse(id=discount_id)


@admin_router.patch("/discounts/{discount_id}", response_model=StatusResponse)
async def toggle_discount(discount_id: str, body: DiscountToggleRequest) -> StatusResponse:
    current_domain.process(SetDiscountCodeActive(discount_code_id=discount_id, active=body.active), asynchronous=False)
    return StatusResponse()


@admin_router.delete("/discounts/{discount_id}", response_model=StatusResponse)
async def delete_discount(discount_id: str) -> StatusResponse:
    current_domain.process(DeleteDiscountCode(discount_code_id=discount_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------
@admin_router.get("/theme")
async def theme() -> dict:
    return admin_theme_view()


@admin_router.put("/theme")
async def update_theme(body: ThemeRequest) -> dict:
    save_theme_config(body.preset, body.custom_overrides)
    return admin_theme_view()


@admin_router.post("/theme/ai-generate")
async def generate_palette(body: PaletteRequest) -> dict:
    generator = get_palette_generator()
    if generator is None:
        raise HTTPException(status_code=503, detail="AI palette generation is not configured")

    if body.mode == "text" and not (body.prompt or "").strip():
        raise HTTPException(status_code=400, detail="Prompt is required for text mode")
    if body.mode == "image" and not body.image:
        raise HTTPException(status_code=400, detail="Image is required for image mode")

    try:
        reply = generator.generate(body.mode, prompt=body.prompt, image=body.image, media_type=body.media_type)
        colors = parse_palette(reply)
    except PaletteGenerationError as exc:
        logger.warning("Palette generation failed", mode=body.mode, error=str(exc))
        raise HTTPException(status_code=502, detail=str(exc))

    return {"colors": colors}


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------
@admin_router.get("/settings")
async def settings() -> dict:
    return get_site_settings()


@admin_router.put("/settings")
async def update_setting(body: SettingRequest) -> dict:
    update_editable_setting(body.key, body.value)
    return get_site_settings()


# ---------------------------------------------------------------------------
# Admin users
# ---------------------------------------------------------------------------
@admin_router.get("/users")
async def users() -> list[dict]:
    return list_admin_users()


@admin_router.post("/users", status_code=201, response_model=IdResponse)
async def create_user(body: AdminUserRequest) -> IdResponse:
    command = CreateAdminUser(
        username=body.username,
        email=body.email,
        display_name=body.display_name,
        password=body.password,
    )
    admin_user_id = current_domain.process(command, asynchronous=False)
    return IdResponse(id=admin_user_id)


@admin_router.delete("/users/{admin_user_id}", response_model=StatusResponse)
async def delete_user(admin_user_id: str) -> StatusResponse:
    current_domain.process(DeleteAdminUser(admin_user_id=admin_user_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Analytics & uploads
# ---------------------------------------------------------------------------
@admin_router.get("/analytics")
async def analytics(days: int = 7) -> list[dict]:
    return recent_summaries(days=max(1, min(days, 90)))


@admin_router.post("/upload")
async def upload(file: UploadFile = File(...)) -> dict:
    content = await file.read()
    try:
        stored = save_upload(content, file.content_type or "")
    except UploadRejected as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"url": stored.url, "filename": stored.filename}
