"""Built-in theme presets.

Each preset is a complete token set: 17 colours, 5 shadows and two font
stacks. Overrides only ever replace colours.
"""

from dataclasses import dataclass, field

COLOR_KEYS = (
    "comic-red",
    "comic-red-dark",
    "comic-cyan",
    "comic-cyan-dark",
    "comic-yellow",
    "comic-yellow-dark",
    "comic-blue",
    "comic-pink",
    "comic-ink",
    "comic-paper",
    "comic-panel",
    "comic-muted",
    "comic-light-gray",
    "comic-error",
    "comic-on-primary",
    "comic-on-secondary",
    "comic-on-accent",
)

SHADOW_KEYS = ("comic", "comic-hover", "comic-pressed", "comic-sm", "comic-color")


@dataclass(frozen=True)
class GoogleFont:
    family: str
    weights: tuple[int, ...]


@dataclass(frozen=True)
class ThemePreset:
    id: str
    name: str
    description: str
    colors: dict[str, str]
    shadows: dict[str, str]
    font_sans: str
    font_display: str
    google_fonts: tuple[GoogleFont, ...] = field(default_factory=tuple)


def _preset(preset_id, name, description, colors, shadows, font_sans, font_display, google_fonts=()):
    return ThemePreset(
        id=preset_id,
        name=name,
        description=description,
        colors=dict(zip(COLOR_KEYS, colors, strict=True)),
        shadows=dict(zip(SHADOW_KEYS, shadows, strict=True)),
        font_sans=font_sans,
        font_display=font_display,
        google_fonts=tuple(google_fonts),
    )


def _hard_shadows(color, accent):
    return (
        f"4px 4px 0px {color}",
        f"6px 6px 0px {color}",
        f"2px 2px 0px {color}",
        f"3px 3px 0px {color}",
        f"4px 4px 0px {accent}",
    )


MANGA = _preset(
    "manga",
    "Manga",
    "Dark indigo & neon pink manga aesthetic",
    (
        "#7C3AED", "#6D28D9", "#DB2777", "#BE185D", "#1E1B2E", "#16132A",
        "#8B5CF6", "#F472B6", "#0F0D1A", "#F0EFF4", "#FFFFFF", "#6B7280",
        "#E8E6F0", "#EF4444", "#FFFFFF", "#FFFFFF", "#FFFFFF",
    ),
    _hard_shadows("#0F0D1A", "#7C3AED"),
    '"Inter", ui-sans-serif, system-ui, sans-serif',
    '"Rajdhani", ui-sans-serif, system-ui, sans-serif',
)  # fmt: skip

COMIC = _preset(
    "comic",
    "Comic",
    "Bright pop-art comic book style",
    (
        "#EF4444", "#DC2626", "#06B6D4", "#0891B2", "#FACC15", "#EAB308",
        "#3B82F6", "#EC4899", "#1A1A2E", "#FFFEF5", "#FFFFFF", "#6B7280",
        "#F3F4F6", "#EF4444", "#FFFFFF", "#1A1A2E", "#1A1A2E",
    ),
    _hard_shadows("#1A1A2E", "#EF4444"),
    '"Bangers", cursive, system-ui, sans-serif',
    '"Bangers", cursive, system-ui, sans-serif',
    (GoogleFont("Bangers", (400,)),),
)  # fmt: skip

PASTEL = _preset(
    "pastel",
    "Pastel",
    "Soft pastels with a gentle, friendly feel",
    (
        "#F9A8D4", "#F472B6", "#A78BFA", "#8B5CF6", "#FDE68A", "#FCD34D",
        "#93C5FD", "#FBCFE8", "#4B5563", "#FFF7ED", "#FFFFFF", "#9CA3AF",
        "#F3F4F6", "#F87171", "#4B5563", "#FFFFFF", "#4B5563",
    ),
    _hard_shadows("#D1D5DB", "#F9A8D4"),
    '"Nunito", ui-sans-serif, system-ui, sans-serif',
    '"Nunito", ui-sans-serif, system-ui, sans-serif',
    (GoogleFont("Nunito", (400, 600, 700, 800)),),
)  # fmt: skip

NEON = _preset(
    "neon",
    "Neon",
    "High-contrast neon glow on dark background",
    (
        "#FF3E6C", "#E6355F", "#00F5D4", "#00D4B7", "#0A0A1A", "#050510",
        "#7B61FF", "#FF6EFF", "#E0E0FF", "#0F0F23", "#1A1A35", "#6B7094",
        "#252545", "#FF4444", "#FFFFFF", "#0A0A1A", "#FFFFFF",
    ),
    (
        "4px 4px 0px #FF3E6C66",
        "6px 6px 0px #FF3E6C88",
        "2px 2px 0px #FF3E6C44",
        "3px 3px 0px #FF3E6C44",
        "4px 4px 0px #7B61FF66",
    ),
    '"Orbitron", ui-sans-serif, system-ui, sans-serif',
    '"Orbitron", ui-sans-serif, system-ui, sans-serif',
    (GoogleFont("Orbitron", (400, 500, 600, 700)),),
)  # fmt: skip

MINIMAL = _preset(
    "minimal",
    "Minimal",
    "Near-monochrome with a single accent color",
    (
        "#2563EB", "#1D4ED8", "#2563EB", "#1D4ED8", "#1F2937", "#111827",
        "#3B82F6", "#93C5FD", "#111827", "#FAFAFA", "#FFFFFF", "#9CA3AF",
        "#F3F4F6", "#EF4444", "#FFFFFF", "#FFFFFF", "#FFFFFF",
    ),
    (
        "0 1px 3px rgba(0,0,0,0.12)",
        "0 4px 6px rgba(0,0,0,0.12)",
        "0 1px 2px rgba(0,0,0,0.08)",
        "0 1px 2px rgba(0,0,0,0.08)",
        "0 1px 3px rgba(37,99,235,0.3)",
    ),
    '"Inter", ui-sans-serif, system-ui, sans-serif',
    '"Inter", ui-sans-serif, system-ui, sans-serif',
)  # fmt: skip

PRESETS: dict[str, ThemePreset] = {p.id: p for p in (MANGA, COMIC, PASTEL, NEON, MINIMAL)}

DEFAULT_PRESET_ID = MANGA.id


def get_preset(preset_id: str) -> ThemePreset | None:
    return PRESETS.get(preset_id)
