"""Customer aggregate with its saved addresses."""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, HasMany, String, Text

from storefront.domain import storefront


@storefront.entity(part_of="Customer")
class CustomerAddress:
    address_line1: String(required=True, max_length=255)
    address_line2: String(max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    postal_code: String(max_length=20)
    country: String(required=True, max_length=100)
    is_default: Boolean(default=False)

    def to_dict(self) -> dict:
        return {
            "addressLine1": self.address_line1,
            "addressLine2": self.address_line2,
            "city": self.city,
            "state": self.state,
            "postalCode": self.postal_code,
            "country": self.country,
        }


@storefront.aggregate
class Customer:
    """A buyer. Emails are stored lowercased and act as the natural key at checkout."""

    first_name: String(required=True, max_length=100)
    last_name: String(required=True, max_length=100)
    email: String(max_length=254)
    phone: String(max_length=30)
    note: Text()
    addresses: HasMany(CustomerAddress)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @classmethod
    def register(cls, first_name, last_name, email=None, phone=None):
        now = datetime.now(UTC)
        return cls(
            first_name=first_name,
            last_name=last_name,
            email=email.lower() if email else None,
            phone=phone,
            created_at=now,
            updated_at=now,
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def add_address(self, is_default=False, **fields) -> CustomerAddress:
        """Attach an address; a new default demotes the previous one."""
        if is_default:
            for existing in [a for a in self.addresses if a.is_default]:
                existing.is_default = False
                self.add_addresses(existing)
        address = CustomerAddress(is_default=is_default, **fields)
        self.add_addresses(address)
        self.updated_at = datetime.now(UTC)
        return address

    def default_address(self) -> CustomerAddress | None:
        for address in self.addresses:
            if address.is_default:
                return address
        return self.addresses[0] if self.addresses else None

    def touch(self):
        self.updated_at = datetime.now(UTC)
