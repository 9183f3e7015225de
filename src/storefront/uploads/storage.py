"""Local-disk image storage for product and theme uploads."""

import re
import secrets
from dataclasses import dataclass
from pathlib import Path

import structlog

from storefront import config

logger = structlog.get_logger(__name__)

MAX_UPLOAD_BYTES = 10 * 1024 * 1024

EXTENSIONS_BY_TYPE = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}

CONTENT_TYPES_BY_EXTENSION = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
    "gif": "image/gif",
}

SAFE_FILENAME = re.compile(r"^[\w\-.]+$")


class UploadRejected(Exception):
    """The file is not an accepted image or is too large."""


class UnsafePath(Exception):
    """A requested file name would resolve outside the upload directory."""


@dataclass(frozen=True)
class StoredUpload:
    filename: str
    url: str
    path: Path


def save_upload(content: bytes, content_type: str, upload_dir: Path | None = None) -> StoredUpload:
    extension = EXTENSIONS_BY_TYPE.get(content_type)
    if extension is None:
        raise UploadRejected("Invalid file type. Allowed: JPEG, PNG, WebP, GIF")
    if len(content) > MAX_UPLOAD_BYTES:
        raise UploadRejected("File too large. Maximum size is 10MB")

    directory = upload_dir or config.upload_dir()
    directory.mkdir(parents=True, exist_ok=True)

    filename = f"{secrets.token_urlsafe(16)}.{extension}"
    path = directory / filename
    path.write_bytes(content)
    logger.info("Upload stored", filename=filename, size=len(content), content_type=content_type)
    return StoredUpload(filename=filename, url=f"/uploads/{filename}", path=path)


def resolve_upload(filename: str, upload_dir: Path | None = None) -> Path:
    """Absolute path for a stored upload.

    Raises:
        ValueError: the name has characters outside ``[A-Za-z0-9_.-]``.
        UnsafePath: the name resolves outside the upload directory.
        FileNotFoundError: nothing stored under that name.
    """
    if not SAFE_FILENAME.match(filename or ""):
        raise ValueError("Invalid filename")

    root = (upload_dir or config.upload_dir()).resolve()
    path = (root / filename).resolve()
    if not path.is_relative_to(root) or path == root:
        raise UnsafePath(filename)
    if not path.is_file():
        raise FileNotFoundError(filename)
    return path


def content_type_for(path: Path) -> str:
    return CONTENT_TYPES_BY_EXTENSION.get(path.suffix.lstrip(".").lower(), "application/octet-stream")
