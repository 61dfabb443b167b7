"""Validation utilities for shortlink."""

import re
from urllib.parse import urlsplit, urlunsplit
from typing import Tuple

MAX_URL_LENGTH = 2048

DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
}

_FORBIDDEN_CHARS_RE = re.compile(r"[\s\x00-\x1f\x7f]")


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate an absolute URL.

    A URL is accepted when it has a scheme and a host. Relative references,
    bare words and scheme-only URIs such as ``mailto:`` are rejected.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    if _FORBIDDEN_CHARS_RE.search(url):
        return False, "URL must not contain whitespace or control characters"

    try:
        result = urlsplit(url)

        if not result.scheme:
            return False, "URL must be absolute (include a scheme such as https://)"

        if not result.netloc or not result.hostname:
            return False, "URL must have a valid host"

        # Raises ValueError for non-numeric or out-of-range ports
        result.port

        return True, ""

    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"


def canonicalize_url(url: str) -> str:
    """Return the canonical form of an already validated URL.

    Lowercases the scheme and host and drops the default port for http and
    https. Userinfo, path, query and fragment are kept as given.

    Args:
        url: A URL accepted by :func:`is_valid_url`

    Returns:
        Canonical URL string
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()

    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"

    port = parts.port
    if port is not None and DEFAULT_PORTS.get(scheme) != port:
        host = f"{host}:{port}"

    userinfo, sep, _ = parts.netloc.rpartition("@")
    netloc = f"{userinfo}{sep}{host}"

    return urlunsplit((scheme, netloc, parts.path, parts.query, parts.fragment))
