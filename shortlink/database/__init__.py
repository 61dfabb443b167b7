"""Database layer for shortlink."""

from .base import LinkStoreBase
from .sqlite import SQLiteLinkStore
from .models import ShortLink

__all__ = ["LinkStoreBase", "SQLiteLinkStore", "ShortLink"]
