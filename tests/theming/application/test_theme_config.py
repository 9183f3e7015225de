"""Persisted theme configuration."""

import json

import pytest
from protean.exceptions import ValidationError

from storefront.settings.site_setting import get_setting, set_setting
from storefront.theming.presets import PRESETS
from storefront.theming.theme_config import active_theme, admin_theme_view, load_theme_config, save_theme_config


class TestThemeConfig:
    def test_default_when_nothing_stored(self):
        preset, overrides = load_theme_config()
        assert preset.id == "manga"
        assert overrides == {}

    def test_save_and_load(self):
        save_theme_config("neon", {"comic-red": "#010203"})

        assert json.loads(get_setting("theme_config")) == {
            "preset": "neon",
            "customOverrides": {"comic-red": "#010203"},
        }
        preset, overrides = load_theme_config()
        assert preset.id == "neon"
        assert overrides == {"comic-red": "#010203"}

    def test_unknown_preset_rejected(self):
        with pytest.raises(ValidationError) as exc:
            save_theme_config("vaporwave")
        assert exc.value.messages["preset"] == ["Unknown preset: vaporwave"]

    def test_corrupt_config_falls_back(self):
        set_setting("theme_config", "{not json")
        assert load_theme_config()[0].id == "manga"

    def test_stale_preset_falls_back(self):
        set_setting("theme_config", json.dumps({"preset": "retired"}))
        assert load_theme_config()[0].id == "manga"

    def test_active_theme_applies_overrides(self):
        save_theme_config("comic", {"comic-paper": "#FAFAFA"})

        theme = active_theme()
        assert theme["presetId"] == "comic"
        assert theme["cssVars"]["--color-comic-paper"] == "#FAFAFA"
        assert theme["googleFontsUrl"].startswith("https://fonts.googleapis.com/css2")

    def test_admin_view_lists_presets(self):
        view = admin_theme_view()
        assert [p["id"] for p in view["presets"]] == list(PRESETS)
        assert view["presetId"] == "manga"
