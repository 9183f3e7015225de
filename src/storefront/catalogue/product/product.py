"""Product aggregate with its gallery of images and purchasable variants."""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront


class ProductStatus(Enum):
    """Only active products are visible and purchasable."""

    ACTIVE = "active"
    DRAFT = "draft"
    ARCHIVED = "archived"


def _position(item: dict, default: int) -> int:
    return default if item.get("sort_order") is None else item["sort_order"]


@storefront.entity(part_of="Product")
class ProductImage:
    url: String(required=True, max_length=1000)
    alt_text: String(max_length=255)
    sort_order: Integer(default=0, min_value=0)


@storefront.entity(part_of="Product")
class ProductOptionType:
    """An axis a product varies along, e.g. "Size" with values S, M and L."""

    name: String(required=True, max_length=50)
    sort_order: Integer(default=0, min_value=0)
    option_values: Text()  # JSON: list of {label, color_hex, sort_order}

    @property
    def value_list(self) -> list[dict]:
        values = json.loads(self.option_values) if self.option_values else []
        return sorted(values, key=lambda value: value.get("sort_order") or 0)

    @property
    def labels(self) -> list[str]:
        return [value["label"] for value in self.value_list]


@storefront.entity(part_of="Product")
class ProductVariant:
    """One purchasable combination of option values.

    ``price_override`` replaces the product price when set. ``stock`` of
    ``None`` falls back to the product's own stock.
    """

    sku: String(max_length=100)
    price_override: Integer(min_value=1)
    stock: Integer(min_value=0)
    image_url: String(max_length=1000)
    selected_options: Text()  # JSON: {option name: value label}
    sort_order: Integer(default=0, min_value=0)

    @property
    def option_map(self) -> dict:
        return json.loads(self.selected_options) if self.selected_options else {}

    @property
    def label(self) -> str:
        return " / ".join(self.option_map.values())


@storefront.aggregate
class Product:
    """A sellable item. Prices are integers in pence.

    ``stock`` of ``None`` means the product is not stock-tracked and can always
    be sold; any other value is decremented at checkout. A variant with its own
    stock is tracked separately from the product.
    """

    title: String(required=True, max_length=255)
    slug: String(required=True, max_length=255)
    description: Text()
    price: Integer(required=True, min_value=1)
    compare_at_price: Integer(min_value=0)
    category_id: Identifier()
    status: String(choices=ProductStatus, default=ProductStatus.DRAFT.value)
    tags: Text()
    stock: Integer(min_value=0)
    images: HasMany(ProductImage)
    option_types: HasMany(ProductOptionType)
    variants: HasMany(ProductVariant)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, images=None, option_types=None, variants=None, **details):
        now = datetime.now(UTC)
        product = cls(created_at=now, updated_at=now, **details)
        product.replace_images(images or [])
        product.replace_variants(option_types or [], variants or [])
        return product

    @property
    def is_active(self) -> bool:
        return self.status == ProductStatus.ACTIVE.value

    @property
    def tag_list(self) -> list[str]:
        return [t.strip() for t in (self.tags or "").split(",") if t.strip()]

    def sorted_images(self):
        return sorted(self.images, key=lambda image: image.sort_order or 0)

    def sorted_option_types(self):
        return sorted(self.option_types, key=lambda option: option.sort_order or 0)

    def sorted_variants(self):
        return sorted(self.variants, key=lambda variant: variant.sort_order or 0)

    def update_details(self, images=None, option_types=None, variants=None, **details):
        for name, value in details.items():
            setattr(self, name, value)
        if images is not None:
            self.replace_images(images)
        if option_types is not None or variants is not None:
            self.replace_variants(option_types or [], variants or [])
        self.updated_at = datetime.now(UTC)

    def replace_images(self, images):
        """Swap the whole gallery; positions default to list order."""
        if self.images:
            self.remove_images(list(self.images))
        for position, image in enumerate(images):
            self.add_images(
                ProductImage(
                    url=image["url"],
                    alt_text=image.get("alt_text"),
                    sort_order=image.get("sort_order", position),
                )
            )

    def replace_variants(self, option_types, variants):
        """Swap option types and variants together.

        Each variant names one value per option type; previously issued
        variant ids do not survive a replace.
        """
        known = {}
        for option in option_types:
            labels = [value["label"] for value in option.get("values", [])]
            if option["name"] in known:
                raise ValidationError({"option_types": [f'Duplicate option type "{option["name"]}"']})
            known[option["name"]] = labels

        for variant in variants:
            options = variant.get("options") or {}
            for name, label in options.items():
                if name not in known:
                    raise ValidationError({"variants": [f'Unknown option type "{name}"']})
                if label not in known[name]:
                    raise ValidationError({"variants": [f'Unknown value "{label}" for option "{name}"']})

        if self.option_types:
            self.remove_option_types(list(self.option_types))
        if self.variants:
            self.remove_variants(list(self.variants))

        for position, option in enumerate(option_types):
            values = [
                {
                    "label": value["label"],
                    "color_hex": value.get("color_hex"),
                    "sort_order": _position(value, index),
                }
                for index, value in enumerate(option.get("values", []))
            ]
            self.add_option_types(
                ProductOptionType(
                    name=option["name"],
                    sort_order=_position(option, position),
                    option_values=json.dumps(values),
                )
            )
        for position, variant in enumerate(variants):
            self.add_variants(
                ProductVariant(
                    sku=variant.get("sku"),
                    price_override=variant.get("price_override"),
                    stock=variant.get("stock"),
                    image_url=variant.get("image_url"),
                    selected_options=json.dumps(variant.get("options") or {}),
                    sort_order=_position(variant, position),
                )
            )

    def find_variant(self, variant_id) -> ProductVariant | None:
        for variant in self.variants:
            if str(variant.id) == str(variant_id):
                return variant
        return None

    def unit_price_for(self, variant: ProductVariant | None = None) -> int:
        if variant is not None and variant.price_override is not None:
            return variant.price_override
        return self.price

    def has_stock_for(self, quantity: int, variant: ProductVariant | None = None) -> bool:
        if variant is not None and variant.stock is not None:
            return variant.stock >= quantity
        return self.stock is None or self.stock >= quantity

    def decrement_stock(self, quantity: int, variant: ProductVariant | None = None) -> None:
        if not self.has_stock_for(quantity, variant):
            raise ValidationError({"stock": [f'Not enough stock for "{self.title}"']})
        if variant is not None and variant.stock is not None:
            variant.stock -= quantity
            self.add_variants(variant)
        elif self.stock is not None:
            self.stock -= quantity
        else:
            return
        self.updated_at = datetime.now(UTC)
