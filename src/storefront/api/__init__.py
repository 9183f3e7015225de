"""HTTP API package."""

from storefront.api.admin_routes import admin_router
from storefront.api.auth_routes import auth_router
from storefront.api.errors import register_error_handlers
from storefront.api.public_routes import public_router

__all__ = ["admin_router", "auth_router", "public_router", "register_error_handlers"]
