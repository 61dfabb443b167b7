"""Resolve the public origin short links are issued on."""

from typing import Dict, Optional


def first_forwarded_value(headers: Dict[str, str], name: str) -> Optional[str]:
    """Return the client-facing entry of a forwarded header.

    Each proxy in a chain appends its own value, so ``X-Forwarded-Host:
    sho.rt, internal:9200`` yields ``sho.rt``. Header names match
    case-insensitively. Missing or blank headers yield None.
    """
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            entry = value.split(",", 1)[0].strip()
            return entry or None
    return None


def build_base_url(
    headers: Dict[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Build the origin that short URLs are composed on.

    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host
    2. Request scheme + host
    3. Fallback base URL from config

    Returns:
        Base URL without a trailing slash (e.g., https://sho.rt)
    """
    proto = first_forwarded_value(headers, "x-forwarded-proto")
    host = first_forwarded_value(headers, "x-forwarded-host")
    if proto and host:
        return f"{proto.lower()}://{host}"

    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return fallback_base_url.rstrip("/")
