"""The active theme, persisted as JSON in the ``theme_config`` site setting."""

import json

import structlog
from protean.exceptions import ValidationError

from storefront.settings.site_setting import get_setting, set_setting
from storefront.theming.compositor import build_css_vars, compose_theme, google_fonts_url
from storefront.theming.presets import DEFAULT_PRESET_ID, PRESETS, ThemePreset

logger = structlog.get_logger(__name__)

THEME_SETTING_KEY = "theme_config"


def load_theme_config() -> tuple[ThemePreset, dict[str, str]]:
    """Stored preset and overrides; anything unreadable falls back to the default preset."""
    raw = get_setting(THEME_SETTING_KEY)
    if not raw:
        return PRESETS[DEFAULT_PRESET_ID], {}

    try:
        stored = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Stored theme config is not valid JSON, using default preset")
        return PRESETS[DEFAULT_PRESET_ID], {}

    if not isinstance(stored, dict):
        return PRESETS[DEFAULT_PRESET_ID], {}

    preset = PRESETS.get(stored.get("preset"), PRESETS[DEFAULT_PRESET_ID])
    overrides = stored.get("customOverrides") or {}
    return preset, overrides if isinstance(overrides, dict) else {}


def save_theme_config(preset_id: str, overrides: dict[str, str] | None = None) -> None:
    if preset_id not in PRESETS:
        raise ValidationError({"preset": [f"Unknown preset: {preset_id}"]})

    config = {"preset": preset_id}
    if overrides:
        config["customOverrides"] = dict(overrides)
    set_setting(THEME_SETTING_KEY, json.dumps(config))
    logger.info("Theme updated", preset=preset_id, override_count=len(overrides or {}))


def active_theme() -> dict:
    """Public view of the active theme."""
    preset, overrides = load_theme_config()
    return {
        "presetId": preset.id,
        "cssVars": build_css_vars(compose_theme(preset, overrides)),
        "googleFontsUrl": google_fonts_url(preset),
    }


def admin_theme_view() -> dict:
    preset, overrides = load_theme_config()
    return {
        "presetId": preset.id,
        "customOverrides": overrides,
        "presets": [
            {"id": p.id, "name": p.name, "description": p.description, "colors": p.colors}
            for p in PRESETS.values()
        ],
    }
