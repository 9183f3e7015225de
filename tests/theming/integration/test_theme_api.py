"""Theme endpoints, including AI palette generation."""

import pytest

from storefront.theming.palette import set_palette_generator
from storefront.theming.palette.fake_adapter import FakePaletteGenerator


@pytest.fixture
def palette_generator():
    generator = FakePaletteGenerator()
    set_palette_generator(generator)
    return generator


class TestThemeAPI:
    def test_public_theme_defaults_to_manga(self, client):
        response = client.get("/theme")
        assert response.status_code == 200
        assert response.json()["presetId"] == "manga"
        assert response.json()["googleFontsUrl"] is None

    def test_admin_updates_theme(self, admin_client):
        response = admin_client.put(
            "/admin/theme",
            json={"preset": "pastel", "customOverrides": {"comic-ink": "#222222"}},
        )
        assert response.status_code == 200
        assert response.json()["presetId"] == "pastel"

        public = admin_client.get("/theme").json()
        assert public["presetId"] == "pastel"
        assert public["cssVars"]["--color-comic-ink"] == "#222222"

    def test_unknown_preset_is_400(self, admin_client):
        response = admin_client.put("/admin/theme", json={"preset": "vaporwave"})
        assert response.status_code == 400
        assert response.json()["error"] == "Unknown preset: vaporwave"

    def test_theme_requires_session(self, client):
        assert client.put("/admin/theme", json={"preset": "neon"}).status_code == 401


class TestPaletteGenerationAPI:
    def test_unconfigured_is_503(self, admin_client):
        response = admin_client.post("/admin/theme/ai-generate", json={"mode": "text", "prompt": "sunset"})
        assert response.status_code == 503

    def test_text_prompt(self, admin_client, palette_generator):
        response = admin_client.post("/admin/theme/ai-generate", json={"mode": "text", "prompt": "sunset"})
        assert response.status_code == 200
        assert response.json()["colors"]["comic-red"].startswith("#")
        assert palette_generator.calls[0]["prompt"] == "sunset"

    def test_image_mode(self, admin_client, palette_generator):
        response = admin_client.post(
            "/admin/theme/ai-generate",
            json={"mode": "image", "image": "aGVsbG8=", "mediaType": "image/png"},
        )
        assert response.status_code == 200
        assert palette_generator.calls[0]["media_type"] == "image/png"

    def test_text_mode_needs_prompt(self, admin_client, palette_generator):
        response = admin_client.post("/admin/theme/ai-generate", json={"mode": "text", "prompt": "  "})
        assert response.status_code == 400

    def test_bad_mode_is_400(self, admin_client, palette_generator):
        response = admin_client.post("/admin/theme/ai-generate", json={"mode": "audio"})
        assert response.status_code == 400

    def test_unparseable_reply_is_502(self, admin_client, palette_generator):
        palette_generator.configure(reply="Sorry, no colours today")
        response = admin_client.post("/admin/theme/ai-generate", json={"mode": "text", "prompt": "sunset"})
        assert response.status_code == 502
        assert response.json()["error"] == "Could not parse AI response"

    def test_upstream_failure_is_502(self, admin_client, palette_generator):
        palette_generator.configure(failure="AI service error")
        response = admin_client.post("/admin/theme/ai-generate", json={"mode": "text", "prompt": "sunset"})
        assert response.status_code == 502
