"""Category aggregate for grouping products in the storefront."""

from datetime import UTC, datetime

from protean.fields import DateTime, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.slug import slugify


@storefront.aggregate
class Category:
    """A flat grouping of products, shown in ``sort_order`` on the storefront."""

    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=120)
    description: Text()
    sort_order: Integer(default=0, min_value=0)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, name, description=None, sort_order=0):
        now = datetime.now(UTC)
        return cls(
            name=name.strip(),
            slug=slugify(name),
            description=description,
            sort_order=sort_order or 0,
            created_at=now,
            updated_at=now,
        )

    def update_details(self, name, description=None, sort_order=None):
        self.name = name.strip()
        self.slug = slugify(name)
        self.description = description
        if sort_order is not None:
            self.sort_order = sort_order
        self.updated_at = datetime.now(UTC)
