"""Back-office accounts."""

from datetime import UTC, datetime

from protean.fields import DateTime, String

from storefront.admin.passwords import hash_password, verify_password
from storefront.domain import storefront


@storefront.aggregate
class AdminUser:
    username: String(required=True, min_length=3, max_length=50)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=300)
    display_name: String(required=True, max_length=100)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    last_login_at: DateTime()

    @classmethod
    def register(cls, username, email, password, display_name):
        return cls(
            username=username.strip(),
            email=email.strip().lower(),
            password_hash=hash_password(password),
            display_name=display_name.strip(),
            created_at=datetime.now(UTC),
        )

    def check_password(self, password: str) -> bool:
        return verify_password(password, self.password_hash)

    def record_login(self) -> None:
        self.last_login_at = datetime.now(UTC)

    def to_public_dict(self) -> dict:
        return {
            "id": str(self.id),
            "username": self.username,
            "email": self.email,
            "displayName": self.display_name,
            "createdAt": self.created_at.isoformat(),
            "lastLoginAt": self.last_login_at.isoformat() if self.last_login_at else None,
        }
