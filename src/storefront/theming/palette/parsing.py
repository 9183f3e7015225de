import json
import re

from storefront.theming.palette.port import PaletteGenerationError

HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")
_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)

REQUIRED_KEYS = (
    "comic-red",
    "comic-cyan",
    "comic-yellow",
    "comic-ink",
    "comic-paper",
    "comic-on-primary",
    "comic-on-secondary",
    "comic-on-accent",
)


def parse_palette(text: str) -> dict[str, str]:
    """Pull the JSON object out of a model reply and check the core tokens are hex colours."""
    match = _JSON_OBJECT.search(text or "")
    if match is None:
        raise PaletteGenerationError("Could not parse AI response")

    try:
        colors = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise PaletteGenerationError("Could not parse AI response") from exc

    if not isinstance(colors, dict):
        raise PaletteGenerationError("Could not parse AI response")

    for key in REQUIRED_KEYS:
        value = colors.get(key)
        if not isinstance(value, str) or not HEX_COLOR.match(value):
            raise PaletteGenerationError(f"Invalid or missing color for {key}")

    return colors
