"""Category management: commands, handlers and admin listing."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.domain import storefront
from storefront.shared.errors import ConflictError
from storefront.shared.slug import slugify

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    description: Text()
    sort_order: Integer(min_value=0)


@storefront.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(required=True, max_length=100)
    description: Text()
    sort_order: Integer(min_value=0)


@storefront.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


def get_category(category_id) -> Category:
    try:
        return current_domain.repository_for(Category).get(category_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError("Category not found")


def _assert_slug_available(slug, exclude_id=None):
    if not slug:
        raise ValidationError({"name": ["Name must contain at least one letter or digit"]})
    clashes = current_domain.repository_for(Category)._dao.query.filter(slug=slug).all().items
    if any(str(c.id) != str(exclude_id) for c in clashes):
        raise ConflictError({"slug": ["A category with this slug already exists"]})


def count_products_in(category_id) -> int:
    from storefront.catalogue.product.product import Product

    return len(current_domain.repository_for(Product)._dao.query.filter(category_id=str(category_id)).all().items)


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        _assert_slug_available(slugify(command.name))

        category = Category.create(
            name=command.name,
            description=command.description,
            sort_order=command.sort_order,
        )
        current_domain.repository_for(Category).add(category)
        logger.info("Category created", category_id=str(category.id), slug=category.slug)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        category = get_category(command.category_id)
        _assert_slug_available(slugify(command.name), exclude_id=category.id)

        category.update_details(
            name=command.name,
            description=command.description,
            sort_order=command.sort_order,
        )
        current_domain.repository_for(Category).add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        category = get_category(command.category_id)

        assigned = count_products_in(category.id)
        if assigned:
            raise ConflictError(
                {
                    "category": [
                        f"Cannot delete category with {assigned} assigned product(s). "
                        "Reassign or remove them first."
                    ]
                }
            )

        current_domain.repository_for(Category)._dao.delete(category)
        logger.info("Category deleted", category_id=str(category.id))


def list_categories() -> list[dict]:
    """All categories in display order, each with its product count."""
    categories = current_domain.repository_for(Category)._dao.query.all().items
    categories = sorted(categories, key=lambda c: (c.sort_order or 0, c.name.lower()))
    return [
        {
            "id": str(c.id),
            "name": c.name,
            "slug": c.slug,
            "description": c.description,
            "sortOrder": c.sort_order,
            "productCount": count_products_in(c.id),
        }
        for c in categories
    ]
