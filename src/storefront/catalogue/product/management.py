"""Product management: admin create, replace and delete."""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.shared.errors import ConflictError

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    title = String(required=True, max_length=255)
    slug = String(required=True, max_length=255)
    description = Text()
    price = Integer(required=True, min_value=1)
    compare_at_price = Integer(min_value=0)
    category_id = Identifier()
    status = String(max_length=20, default="draft")
    tags = Text()
    stock = Integer(min_value=0)
    images = Text()  # JSON: list of {url, alt_text, sort_order}
    option_types = Text()  # JSON: list of {name, sort_order, values}
    variants = Text()  # JSON: list of {sku, price_override, stock, image_url, options}


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    slug = String(required=True, max_length=255)
    description = Text()
    price = Integer(required=True, min_value=1)
    compare_at_price = Integer(min_value=0)
    category_id = Identifier()
    status = String(max_length=20, default="draft")
    tags = Text()
    stock = Integer(min_value=0)
    images = Text()  # JSON: list of {url, alt_text, sort_order}
    option_types = Text()  # JSON: list of {name, sort_order, values}
    variants = Text()  # JSON: list of {sku, price_override, stock, image_url, options}


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


def get_product(product_id) -> Product:
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError("Product not found")


def _assert_slug_available(slug, exclude_id=None):
    clashes = current_domain.repository_for(Product)._dao.query.filter(slug=slug).all().items
    if any(str(p.id) != str(exclude_id) for p in clashes):
        raise ConflictError({"slug": ["A product with this slug already exists"]})


def _assert_category_exists(category_id):
    if not category_id:
        return
    try:
        current_domain.repository_for(Category).get(category_id)
    except ObjectNotFoundError:
        raise ValidationError({"category_id": ["Category not found"]})


def _details(command) -> dict:
    return {
        "title": command.title,
        "slug": command.slug,
        "description": command.description,
        "price": command.price,
        "compare_at_price": command.compare_at_price,
        "category_id": command.category_id,
        "status": command.status,
        "tags": command.tags,
        "stock": command.stock,
    }


def _images(command) -> list[dict]:
    return json.loads(command.images) if command.images else []


def _variants(command) -> dict:
    return {
        "option_types": json.loads(command.option_types) if command.option_types else [],
        "variants": json.loads(command.variants) if command.variants else [],
    }


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        _assert_slug_available(command.slug)
        _assert_category_exists(command.category_id)

        product = Product.create(images=_images(command), **_variants(command), **_details(command))
        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), slug=product.slug, status=product.status)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        product = get_product(command.product_id)
        _assert_slug_available(command.slug, exclude_id=product.id)
        _assert_category_exists(command.category_id)

        product.update_details(images=_images(command), **_variants(command), **_details(command))
        current_domain.repository_for(Product).add(product)
        logger.info("Product updated", product_id=str(product.id))

    @handle(DeleteProduct)
    def delete_product(self, command):
        product = get_product(command.product_id)
        repo = current_domain.repository_for(Product)
        if product.images or product.variants or product.option_types:
            product.remove_images(list(product.images))
            product.replace_variants([], [])
            repo.add(product)
        repo._dao.delete(product)
        logger.info("Product deleted", product_id=str(product.id))
