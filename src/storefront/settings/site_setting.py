"""Key/value site settings with defaults for every known key."""

from datetime import UTC, datetime

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront

logger = structlog.get_logger(__name__)

DEFAULTS = {
    "site_title": "Fat Cat Shop",
    "site_description": (
        "Your one-stop shop for happy cats. Premium toys, treats, and accessories for your feline friends."
    ),
    "hero_heading": "Everything Your Cat Needs",
    "hero_subheading": (
        "Premium toys, treats, and accessories curated for your feline friends. "
        "Because happy cats make happy homes."
    ),
    "footer_text": "Your one-stop shop for happy cats.",
    "footer_copyright": "Fat Cat Shop",
    "favicon_url": "",
    "banner_image_url": "",
    "shop_name": "Fat Cat",
    "enable_recommendation_codes": "false",
    "theme_config": "",
}

# Keys admins may edit through the settings form; theme_config has its own endpoint
EDITABLE_KEYS = tuple(key for key in DEFAULTS if key != "theme_config")


@storefront.aggregate
class SiteSetting:
    key = String(identifier=True, required=True, max_length=100)
    value = Text()
    updated_at = DateTime(default=lambda: datetime.now(UTC))


def get_site_settings() -> dict[str, str]:
    """Stored values layered over the defaults."""
    stored = {s.key: s.value or "" for s in current_domain.repository_for(SiteSetting)._dao.query.all().items}
    return {**DEFAULTS, **stored}


def get_setting(key: str) -> str:
    try:
        return current_domain.repository_for(SiteSetting).get(key).value or ""
    except ObjectNotFoundError:
        return DEFAULTS.get(key, "")


def set_setting(key: str, value: str) -> None:
    repo = current_domain.repository_for(SiteSetting)
    try:
        setting = repo.get(key)
        setting.value = value
        setting.updated_at = datetime.now(UTC)
    except ObjectNotFoundError:
        setting = SiteSetting(key=key, value=value)
    repo.add(setting)
    logger.info("Site setting updated", key=key)


def update_editable_setting(key: str, value: str) -> None:
    if key not in EDITABLE_KEYS:
        raise ValidationError({"key": [f"Invalid setting key: {key}"]})
    set_setting(key, value)


def recommendation_codes_enabled() -> bool:
    return get_setting("enable_recommendation_codes") == "true"


def public_settings() -> dict:
    settings = get_site_settings()
    return {
        "shopName": settings["shop_name"],
        "siteTitle": settings["site_title"],
        "enableRecommendationCodes": settings["enable_recommendation_codes"] == "true",
    }
