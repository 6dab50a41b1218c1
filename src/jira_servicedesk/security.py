"""Host validation and header redaction helpers."""

from __future__ import annotations

from typing import Mapping
from urllib.parse import urlparse

from .exceptions import ServiceDeskValidationError


SENSITIVE_HEADERS = {
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
}

LOCAL_HOSTS = {"localhost", "127.0.0.1", "::1"}


def sanitize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Return headers with credential values redacted for logging."""
    redacted: dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS:
            redacted[key] = "[REDACTED]"
        else:
            redacted[key] = value
    return redacted


def validate_host(url: str, *, allow_http: bool = False) -> None:
    """Validate the Jira base URL.

    The host is concatenated with the API prefix as-is, so it must carry a
    scheme and network location. Plain ``http`` is only accepted for local
    hosts unless ``allow_http`` is set.
    """
    if "\x00" in url:
        raise ServiceDeskValidationError("Invalid host")
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ServiceDeskValidationError("host must include scheme and network location")
    if parsed.scheme not in {"http", "https"}:
        raise ServiceDeskValidationError(f"Unsupported host scheme: {parsed.scheme}")
    if parsed.scheme == "http" and not allow_http:
        if (parsed.hostname or "").lower() not in LOCAL_HOSTS:
            raise ServiceDeskValidationError("Non-HTTPS host is not allowed without allow_http=True")
