"""Read-side helpers for the public catalogue."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.product.product import Product, ProductStatus


def product_card(product: Product) -> dict:
    return {
        "id": str(product.id),
        "title": product.title,
        "slug": product.slug,
        "price": product.price,
        "compareAtPrice": product.compare_at_price,
        "images": [{"url": image.url, "altText": image.alt_text} for image in product.sorted_images()],
    }


def product_detail(product: Product) -> dict:
    detail = product_card(product)
    detail.update(
        {
            "description": product.description,
            "categoryId": product.category_id,
            "status": product.status,
            "tags": product.tag_list,
            "stock": product.stock,
            "optionTypes": [
                {
                    "id": str(option.id),
                    "name": option.name,
                    "values": [
                        {"label": value["label"], "colorHex": value.get("color_hex")} for value in option.value_list
                    ],
                }
                for option in product.sorted_option_types()
            ],
            "variants": [
                {
                    "id": str(variant.id),
                    "sku": variant.sku,
                    "label": variant.label,
                    "options": variant.option_map,
                    "price": product.unit_price_for(variant),
                    "priceOverride": variant.price_override,
                    "stock": variant.stock,
                    "imageUrl": variant.image_url,
                }
                for variant in product.sorted_variants()
            ],
        }
    )
    return detail


def list_active_products(category_slug: str | None = None, search: str | None = None) -> list[dict]:
    """Active products, newest first, optionally narrowed by category slug and title search."""
    query = current_domain.repository_for(Product)._dao.query.filter(status=ProductStatus.ACTIVE.value)

    if category_slug:
        categories = current_domain.repository_for(Category)._dao.query.filter(slug=category_slug).all().items
        if not categories:
            return []
        query = query.filter(category_id=str(categories[0].id))

    products = query.all().items
    if search:
        needle = search.strip().lower()
        products = [p for p in products if needle in p.title.lower() or needle in (p.tags or "").lower()]

    products = sorted(products, key=lambda p: p.created_at, reverse=True)
    return [product_card(p) for p in products]


def get_active_product(slug: str) -> Product:
    products = (
        current_domain.repository_for(Product)
        ._dao.query.filter(slug=slug, status=ProductStatus.ACTIVE.value)
        .all()
        .items
    )
    if not products:
        raise ObjectNotFoundError("Product not found")
    return products[0]


def list_all_products(status: str | None = None) -> list[dict]:
    """Admin listing across every status."""
    query = current_domain.repository_for(Product)._dao.query
    if status:
        query = query.filter(status=status)
    products = sorted(query.all().items, key=lambda p: p.created_at, reverse=True)
    return [product_detail(p) for p in products]
