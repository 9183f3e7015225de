"""Palette generator factory.

get_palette_generator() returns None when no generator is configured, which
the API reports as the feature being unavailable.
"""

from storefront import config
from storefront.theming.palette.port import PaletteGenerator

_current_generator: PaletteGenerator | None = None


def get_palette_generator() -> PaletteGenerator | None:
    if _current_generator is not None:
        return _current_generator

    api_key = config.anthropic_api_key()
    if not api_key:
        return None

    from storefront.theming.palette.anthropic_adapter import AnthropicPaletteGenerator

    return AnthropicPaletteGenerator(api_key=api_key)


def set_palette_generator(generator: PaletteGenerator) -> None:
    """Override the active generator (useful for tests)."""
    global _current_generator
    _current_generator = generator


def reset_palette_generator() -> None:
    global _current_generator
    _current_generator = None
