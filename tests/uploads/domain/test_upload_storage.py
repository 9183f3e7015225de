"""Disk storage for uploaded images and safe lookups."""

from pathlib import Path

import pytest

from storefront.uploads.storage import (
    MAX_UPLOAD_BYTES,
    UnsafePath,
    UploadRejected,
    content_type_for,
    resolve_upload,
    save_upload,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class TestSaveUpload:
    def test_stores_under_random_name(self, tmp_path):
        stored = save_upload(PNG_BYTES, "image/png", upload_dir=tmp_path)

        assert stored.filename.endswith(".png")
        assert stored.url == f"/uploads/{stored.filename}"
        assert stored.path.read_bytes() == PNG_BYTES

    def test_names_do_not_collide(self, tmp_path):
        first = save_upload(PNG_BYTES, "image/png", upload_dir=tmp_path)
        second = save_upload(PNG_BYTES, "image/png", upload_dir=tmp_path)
        assert first.filename != second.filename

    def test_creates_missing_directory(self, tmp_path):
        stored = save_upload(PNG_BYTES, "image/webp", upload_dir=tmp_path / "nested" / "uploads")
        assert stored.path.exists()
        assert stored.filename.endswith(".webp")

    def test_rejects_non_images(self, tmp_path):
        with pytest.raises(UploadRejected, match="Invalid file type"):
            save_upload(b"hello", "text/plain", upload_dir=tmp_path)

    def test_rejects_oversized_files(self, tmp_path):
        with pytest.raises(UploadRejected, match="File too large"):
            save_upload(b"\x00" * (MAX_UPLOAD_BYTES + 1), "image/jpeg", upload_dir=tmp_path)
        assert list(tmp_path.iterdir()) == []


class TestResolveUpload:
    def test_existing_file(self, tmp_path):
        stored = save_upload(PNG_BYTES, "image/png", upload_dir=tmp_path)
        assert resolve_upload(stored.filename, upload_dir=tmp_path) == stored.path.resolve()

    @pytest.mark.parametrize("filename", ["../secret.png", "a/b.png", "cat photo.png", ""])
    def test_rejects_unsafe_characters(self, tmp_path, filename):
        with pytest.raises(ValueError):
            resolve_upload(filename, upload_dir=tmp_path)

    @pytest.mark.parametrize("filename", ["..", "."])
    def test_rejects_escaping_names(self, tmp_path, filename):
        with pytest.raises(UnsafePath):
            resolve_upload(filename, upload_dir=tmp_path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            resolve_upload("missing.png", upload_dir=tmp_path)


def test_content_types():
    assert content_type_for(Path("cat.JPEG")) == "image/jpeg"
    assert content_type_for(Path("cat.gif")) == "image/gif"
    assert content_type_for(Path("cat.bin")) == "application/octet-stream"
