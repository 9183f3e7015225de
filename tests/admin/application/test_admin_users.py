"""Admin accounts and credential checks."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.admin.admin_user import AdminUser
from storefront.admin.management import (
    CreateAdminUser,
    DeleteAdminUser,
    InvalidCredentials,
    authenticate,
    list_admin_users,
)
from storefront.shared.errors import ConflictError


def _create(username="mittens", email="mittens@example.com", password="whiskers123", display_name="Mittens"):
    command = CreateAdminUser(username=username, email=email, password=password, display_name=display_name)
    return current_domain.process(command, asynchronous=False)


class TestCreateAdminUser:
    def test_create(self):
        _create()
        users = list_admin_users()
        assert len(users) == 1
        assert users[0]["username"] == "mittens"
        assert "passwordHash" not in users[0]

    def test_password_is_hashed(self):
        admin_id = _create()
        admin = current_domain.repository_for(AdminUser).get(admin_id)
        assert admin.password_hash != "whiskers123"
        assert admin.check_password("whiskers123")

    def test_short_password(self):
        with pytest.raises(ValidationError) as exc:
            _create(password="short")
        assert exc.value.messages["password"] == ["Password must be at least 8 characters"]

    def test_short_username(self):
        with pytest.raises(ValidationError):
            _create(username="ab")

    def test_duplicate_username(self):
        _create()
        with pytest.raises(ConflictError) as exc:
            _create(email="other@example.com")
        assert exc.value.messages["username"] == ["Username already exists"]

    def test_duplicate_email(self):
        _create()
        with pytest.raises(ConflictError) as exc:
            _create(username="tiddles", email="MITTENS@example.com")
        assert exc.value.messages["email"] == ["Email already exists"]


class TestDeleteAdminUser:
    def test_delete(self):
        _create()
        second = _create(username="tiddles", email="tiddles@example.com")
        current_domain.process(DeleteAdminUser(admin_user_id=second), asynchronous=False)
        assert [u["username"] for u in list_admin_users()] == ["mittens"]

    def test_cannot_delete_last(self):
        only = _create()
        with pytest.raises(ValidationError) as exc:
            current_domain.process(DeleteAdminUser(admin_user_id=only), asynchronous=False)
        assert exc.value.messages["admin_user"] == ["Cannot delete the last admin user"]

    def test_unknown(self):
        with pytest.raises(ObjectNotFoundError) as exc:
            current_domain.process(DeleteAdminUser(admin_user_id="missing"), asynchronous=False)
        assert str(exc.value) == "Admin user not found"


class TestAuthenticate:
    def test_stored_admin(self):
        _create()
        admin = authenticate("mittens", "whiskers123")
        assert admin.username == "mittens"
        assert current_domain.repository_for(AdminUser).get(admin.id).last_login_at is not None

    def test_wrong_password(self):
        _create()
        with pytest.raises(InvalidCredentials):
            authenticate("mittens", "wrong-password")

    def test_environment_credentials_rejected_once_admins_exist(self):
        _create()
        with pytest.raises(InvalidCredentials):
            authenticate("admin", "fatcat2024")

    def test_bootstrap_from_environment(self, monkeypatch):
        monkeypatch.setenv("ADMIN_USERNAME", "boss")
        monkeypatch.setenv("ADMIN_PASSWORD", "top-secret-1")

        admin = authenticate("boss", "top-secret-1")

        assert admin.email == "boss@localhost"
        assert admin.display_name == "Admin"
        assert [u["username"] for u in list_admin_users()] == ["boss"]

    def test_bootstrap_rejects_wrong_credentials(self):
        with pytest.raises(InvalidCredentials):
            authenticate("admin", "guess")
        assert list_admin_users() == []
