"""scrypt password hashing, stored as ``<salt hex>:<hash hex>``."""

import hashlib
import hmac
import secrets

SALT_BYTES = 16
KEY_LENGTH = 64
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1


def _derive(password: str, salt: bytes) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt,
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=KEY_LENGTH,
    )


def hash_password(password: str) -> str:
    salt = secrets.token_bytes(SALT_BYTES)
    return f"{salt.hex()}:{_derive(password, salt).hex()}"


def verify_password(password: str, stored: str) -> bool:
    salt_hex, _, hash_hex = (stored or "").partition(":")
    try:
        salt, expected = bytes.fromhex(salt_hex), bytes.fromhex(hash_hex)
    except ValueError:
        return False
    if not salt or len(expected) != KEY_LENGTH:
        return False
    return hmac.compare_digest(_derive(password, salt), expected)
