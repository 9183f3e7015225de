"""Response error extraction for load test observability.

Fat Cat API errors always carry ``{"error": "msg"}``; validation failures
add ``{"errors": {"field": ["msg", ...]}}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Compact error string for Locust failure messages and log lines."""
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    if isinstance(body.get("errors"), dict):
        return " | ".join(f"{field}: {', '.join(map(str, messages))}" for field, messages in body["errors"].items())

    if "error" in body:
        return str(body["error"])

    return str(body)[:300]
