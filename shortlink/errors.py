"""Error classes for the shortlink package."""

from typing import Optional


class ShortLinkError(Exception):
    """Base error for shortlink operations."""

    message: str = "Short link error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


class InvalidUrlError(ShortLinkError, ValueError):
    """The submitted URL is not an absolute, parseable URL."""

    message = "URL is invalid"


class DecodeError(ShortLinkError, ValueError):
    """A path segment is not a chunk produced by the codec."""

    message = "Invalid chunk"


class StoreError(ShortLinkError):
    """The link store failed or is unavailable."""

    message = "Link store error"
