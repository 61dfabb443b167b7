"""Core business logic for shortlink."""

from .codec import encode, decode
from .errors import ShortLinkError, InvalidUrlError, DecodeError, StoreError
from .service import ShortenerService, RedirectorService

__all__ = [
    "encode",
    "decode",
    "ShortLinkError",
    "InvalidUrlError",
    "DecodeError",
    "StoreError",
    "ShortenerService",
    "RedirectorService",
]
