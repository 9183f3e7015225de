"""Email address normalization and structural validation."""

from protean.exceptions import ValidationError

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def is_valid_email(email: str) -> bool:
    """Check that an address has exactly one @ and sane local/domain parts."""
    if not email or any(ch in email for ch in (" ", "\t", "\n")):
        return False

    if email.count("@") != 1:
        return False

    local_part, domain_part = email.split("@", 1)

    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return False

    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        return False

    if "." not in domain_part:
        return False

    if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
        return False

    if ".." in local_part or ".." in domain_part:
        return False

    return not any(ch in email for ch in _FORBIDDEN)


def normalize_email(email: str, field: str = "email") -> str:
    """Trim and lowercase an address, raising ValidationError when malformed."""
    normalized = (email or "").strip().lower()
    if not is_valid_email(normalized):
        raise ValidationError({field: ["Invalid email address"]})
    return normalized
