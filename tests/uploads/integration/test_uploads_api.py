PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class TestUploadAPI:
    def test_requires_session(self, client):
        response = client.post("/admin/upload", files={"file": ("cat.png", PNG_BYTES, "image/png")})
        assert response.status_code == 401

    def test_upload_then_serve(self, admin_client):
        response = admin_client.post("/admin/upload", files={"file": ("cat.png", PNG_BYTES, "image/png")})
        assert response.status_code == 200
        body = response.json()
        assert body["url"] == f"/uploads/{body['filename']}"

        served = admin_client.get(body["url"])
        assert served.status_code == 200
        assert served.content == PNG_BYTES
        assert served.headers["content-type"] == "image/png"
        assert served.headers["cache-control"] == "public, max-age=31536000, immutable"

    def test_rejects_non_images(self, admin_client):
        response = admin_client.post("/admin/upload", files={"file": ("notes.txt", b"meow", "text/plain")})
        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid file type")


class TestServeUploadAPI:
    def test_invalid_name_is_400(self, client):
        response = client.get("/uploads/cat%20photo.png")
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid filename"}

    def test_missing_file_is_404(self, client):
        response = client.get("/uploads/missing.png")
        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}
