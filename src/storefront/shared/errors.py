"""Domain exceptions beyond the ones Protean ships."""

from protean.exceptions import ValidationError


class ConflictError(ValidationError):
    """A write would clash with existing state (duplicate key, referenced record)."""
