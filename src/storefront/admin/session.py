"""Signed admin session tokens.

Format: ``base64url(json payload) + "." + hex(HMAC-SHA256(secret, encoded payload))``.
The payload carries userId, username and ``iat`` in milliseconds.
"""

import base64
import hashlib
import hmac
import json
import time
from dataclasses import dataclass

from storefront import config

LEGACY_USER_ID = "legacy"


@dataclass(frozen=True)
class SessionData:
    user_id: str
    username: str
    issued_at_ms: int | None = None


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(text: str) -> bytes:
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


def _sign(encoded_payload: str, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), encoded_payload.encode("ascii"), hashlib.sha256).hexdigest()


def _now_ms() -> int:
    return int(time.time() * 1000)


def create_session_token(user_id: str, username: str, secret: str | None = None, now_ms: int | None = None) -> str:
    payload = {"userId": user_id, "username": username, "iat": now_ms if now_ms is not None else _now_ms()}
    encoded = _b64encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))
    return f"{encoded}.{_sign(encoded, secret or config.session_secret())}"


def verify_session_token(token: str | None, secret: str | None = None, now_ms: int | None = None) -> SessionData | None:
    """Decoded session for a valid, unexpired token; None otherwise."""
    if not token or token.count(".") != 1 or not token.isascii():
        return None

    encoded, signature = token.split(".")
    expected = _sign(encoded, secret or config.session_secret())
    if not hmac.compare_digest(signature.encode("ascii", "replace"), expected.encode("ascii")):
        return None

    try:
        payload = json.loads(_b64decode(encoded))
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(payload, dict):
        return None

    # Tokens minted before multi-admin support only carried {"user": "admin"}
    if payload.get("user") == "admin" and "userId" not in payload:
        return SessionData(user_id=LEGACY_USER_ID, username="admin")

    user_id, username, issued_at = payload.get("userId"), payload.get("username"), payload.get("iat")
    if not user_id or not username or not isinstance(issued_at, int):
        return None

    now_ms = now_ms if now_ms is not None else _now_ms()
    if now_ms - issued_at > config.SESSION_MAX_AGE_SECONDS * 1000:
        return None

    return SessionData(user_id=str(user_id), username=str(username), issued_at_ms=issued_at)
