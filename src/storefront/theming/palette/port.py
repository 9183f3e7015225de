"""Palette generator port: turns a description or image into raw model text."""

from abc import ABC, abstractmethod


class PaletteGenerationError(Exception):
    """The upstream service failed or returned something unusable."""


class PaletteGenerator(ABC):
    @abstractmethod
    def generate(self, mode: str, prompt: str | None = None, image: str | None = None, media_type: str = "image/jpeg") -> str:
        """Return the model's text reply; should contain one JSON object of colour tokens.

        Raises:
            PaletteGenerationError: when the upstream call fails.
        """
        ...
