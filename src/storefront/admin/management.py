"""Admin user management and credential checks."""

import hmac

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront import config
from storefront.admin.admin_user import AdminUser
from storefront.domain import storefront
from storefront.shared.email import normalize_email
from storefront.shared.errors import ConflictError

logger = structlog.get_logger(__name__)

MIN_PASSWORD_LENGTH = 8


class InvalidCredentials(Exception):
    """Username/password did not match an admin."""


@storefront.command(part_of="AdminUser")
class CreateAdminUser:
    username = String(required=True, max_length=50)
    email = String(required=True, max_length=254)
    display_name = String(required=True, max_length=100)
    password = String(required=True, max_length=200)


@storefront.command(part_of="AdminUser")
class DeleteAdminUser:
    admin_user_id = Identifier(required=True)


def _all_admins() -> list[AdminUser]:
    return current_domain.repository_for(AdminUser)._dao.query.all().items


def find_by_username(username: str) -> AdminUser | None:
    matches = current_domain.repository_for(AdminUser)._dao.query.filter(username=username).all().items
    return matches[0] if matches else None


def get_admin_user(admin_user_id) -> AdminUser:
    try:
        return current_domain.repository_for(AdminUser).get(admin_user_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError("Admin user not found")


@storefront.command_handler(part_of=AdminUser)
class ManageAdminUserHandler:
    @handle(CreateAdminUser)
    def create_admin_user(self, command):
        username = command.username.strip()
        if len(username) < 3:
            raise ValidationError({"username": ["Username must be at least 3 characters"]})
        if len(command.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError({"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]})
        email = normalize_email(command.email)

        repo = current_domain.repository_for(AdminUser)
        if find_by_username(username) is not None:
            raise ConflictError({"username": ["Username already exists"]})
        if repo._dao.query.filter(email=email).all().items:
            raise ConflictError({"email": ["Email already exists"]})

        admin = AdminUser.register(
            username=username,
            email=email,
            password=command.password,
            display_name=command.display_name,
        )
        repo.add(admin)
        logger.info("Admin user created", admin_user_id=str(admin.id), username=admin.username)
        return str(admin.id)

    @handle(DeleteAdminUser)
    def delete_admin_user(self, command):
        admin = get_admin_user(command.admin_user_id)
        if len(_all_admins()) <= 1:
            raise ValidationError({"admin_user": ["Cannot delete the last admin user"]})

        current_domain.repository_for(AdminUser)._dao.delete(admin)
        logger.info("Admin user deleted", admin_user_id=str(admin.id), username=admin.username)


def list_admin_users() -> list[dict]:
    return [a.to_public_dict() for a in sorted(_all_admins(), key=lambda a: a.created_at)]


def authenticate(username: str, password: str) -> AdminUser:
    """Resolve credentials to an admin, bootstrapping the first one from the environment.

    With no admins stored, the configured ADMIN_USERNAME/ADMIN_PASSWORD pair is
    accepted once and persisted as a real account.
    """
    repo = current_domain.repository_for(AdminUser)

    admin = find_by_username(username)
    if admin is not None:
        if not admin.check_password(password):
            logger.warning("Admin login rejected", username=username)
            raise InvalidCredentials()
        admin.record_login()
        repo.add(admin)
        return admin

    if _all_admins():
        logger.warning("Admin login rejected", username=username)
        raise InvalidCredentials()

    username_ok = hmac.compare_digest(username.encode("utf-8"), config.admin_username().encode("utf-8"))
    password_ok = hmac.compare_digest(password.encode("utf-8"), config.admin_password().encode("utf-8"))
    if not (username_ok and password_ok):
        logger.warning("Admin bootstrap login rejected", username=username)
        raise InvalidCredentials()

    admin = AdminUser.register(
        username=username,
        email=f"{username}@localhost",
        password=password,
        display_name="Admin",
    )
    admin.record_login()
    repo.add(admin)
    logger.info("Bootstrapped first admin user from environment", username=username)
    return admin
