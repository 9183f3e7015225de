"""Anthropic Messages API adapter for palette generation."""

import requests
import structlog

from storefront.theming.palette.port import PaletteGenerationError, PaletteGenerator

logger = structlog.get_logger(__name__)

MESSAGES_URL = "https://api.anthropic.com/v1/messages"
API_VERSION = "2023-06-01"
MODEL = "claude-sonnet-4-5-20250929"
MAX_TOKENS = 1024

SYSTEM_PROMPT = """You are a color palette designer for an e-commerce storefront. Given either a text \
description or reference image, generate a cohesive color palette mapped to CSS token names.

Respond with ONLY a valid JSON object (no markdown, no explanation) with these exact keys:
comic-red (primary action color), comic-red-dark, comic-cyan (secondary color), comic-cyan-dark,
comic-yellow (accent color), comic-yellow-dark, comic-blue, comic-pink, comic-ink (main text and borders),
comic-paper (page background), comic-panel (card background), comic-muted (secondary text),
comic-light-gray, comic-error, comic-on-primary, comic-on-secondary, comic-on-accent.

Rules:
- All values must be 6-digit hex colors with a # prefix
- Keep WCAG AA contrast (4.5:1) for comic-on-primary/comic-red, comic-on-secondary/comic-cyan,
  comic-on-accent/comic-yellow and comic-ink/comic-paper
- comic-paper should be a light, subtle background; comic-ink dark enough for body text"""

IMAGE_INSTRUCTION = (
    "Analyze this image and extract its aesthetic intent, mood, and color story. "
    "Generate a cohesive storefront color palette inspired by this image."
)


class AnthropicPaletteGenerator(PaletteGenerator):
    def __init__(self, api_key: str, timeout: float = 60.0) -> None:
        self.api_key = api_key
        self.timeout = timeout

    def _content(self, mode, prompt, image, media_type):
        if mode == "text":
            return [{"type": "text", "text": f'Generate a color palette for a storefront described as: "{prompt}"'}]
        return [
            {"type": "image", "source": {"type": "base64", "media_type": media_type, "data": image}},
            {"type": "text", "text": IMAGE_INSTRUCTION},
        ]

    def generate(self, mode: str, prompt: str | None = None, image: str | None = None, media_type: str = "image/jpeg") -> str:
        payload = {
            "model": MODEL,
            "max_tokens": MAX_TOKENS,
            "system": SYSTEM_PROMPT,
            "messages": [{"role": "user", "content": self._content(mode, prompt, image, media_type)}],
        }
        headers = {"x-api-key": self.api_key, "anthropic-version": API_VERSION, "content-type": "application/json"}

        try:
            response = requests.post(MESSAGES_URL, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Palette request failed", error=str(exc))
            raise PaletteGenerationError(f"AI generation failed: {exc}") from exc

        if not response.ok:
            logger.error("Palette request rejected", status_code=response.status_code)
            raise PaletteGenerationError(f"AI generation failed: HTTP {response.status_code}")

        for block in response.json().get("content", []):
            if block.get("type") == "text" and block.get("text"):
                return block["text"]
        raise PaletteGenerationError("No response from AI")
