"""Fake palette generator: canned replies and recorded calls for tests."""

import json

from storefront.theming.palette.port import PaletteGenerationError, PaletteGenerator
from storefront.theming.presets import MANGA


class FakePaletteGenerator(PaletteGenerator):
    def __init__(self, reply: str | None = None):
        self.reply = reply if reply is not None else json.dumps(MANGA.colors)
        self.failure: str | None = None
        self.calls: list[dict] = []

    def configure(self, reply: str | None = None, failure: str | None = None):
        if reply is not None:
            self.reply = reply
        self.failure = failure

    def generate(self, mode: str, prompt: str | None = None, image: str | None = None, media_type: str = "image/jpeg") -> str:
        self.calls.append({"mode": mode, "prompt": prompt, "image": image, "media_type": media_type})
        if self.failure:
            raise PaletteGenerationError(self.failure)
        return self.reply
