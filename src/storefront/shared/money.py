"""Helpers for integer minor-unit money (pence)."""

CURRENCY = "GBP"
CURRENCY_SYMBOL = "£"


def format_price(amount_in_minor_units: int) -> str:
    """Render pence as a GBP display string, e.g. 2499 -> '£24.99'."""
    sign = "-" if amount_in_minor_units < 0 else ""
    pounds, pence = divmod(abs(amount_in_minor_units), 100)
    return f"{sign}{CURRENCY_SYMBOL}{pounds:,}.{pence:02d}"
