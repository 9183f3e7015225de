"""Merge a preset with colour overrides into renderable CSS variables."""

from dataclasses import dataclass
from urllib.parse import quote

from storefront.theming.presets import COLOR_KEYS, ThemePreset

GOOGLE_FONTS_BASE_URL = "https://fonts.googleapis.com/css2"


@dataclass(frozen=True)
class ComposedTheme:
    preset_id: str
    colors: dict[str, str]
    shadows: dict[str, str]
    font_sans: str
    font_display: str


def merge_colors(base: dict[str, str], overrides: dict[str, str] | None) -> dict[str, str]:
    """Preset colours with overrides applied key by key; unknown keys are ignored.

    Values are taken verbatim. Applying the same overrides again yields the same map.
    """
    merged = dict(base)
    for key, value in (overrides or {}).items():
        if key in COLOR_KEYS:
            merged[key] = value
    return merged


def compose_theme(preset: ThemePreset, overrides: dict[str, str] | None = None) -> ComposedTheme:
    return ComposedTheme(
        preset_id=preset.id,
        colors=merge_colors(preset.colors, overrides),
        shadows=dict(preset.shadows),
        font_sans=preset.font_sans,
        font_display=preset.font_display,
    )


def build_css_vars(theme: ComposedTheme) -> dict[str, str]:
    css_vars = {f"--color-{key}": value for key, value in theme.colors.items()}
    css_vars.update({f"--shadow-{key}": value for key, value in theme.shadows.items()})
    css_vars["--font-sans"] = theme.font_sans
    css_vars["--font-display"] = theme.font_display
    return css_vars


def google_fonts_url(preset: ThemePreset) -> str | None:
    if not preset.google_fonts:
        return None
    families = "&".join(
        f"family={quote(font.family)}:wght@{';'.join(str(w) for w in font.weights)}" for font in preset.google_fonts
    )
    return f"{GOOGLE_FONTS_BASE_URL}?{families}&display=swap"
