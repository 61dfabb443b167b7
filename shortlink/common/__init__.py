"""Common utilities for shortlink."""

from .validators import is_valid_url, canonicalize_url
from .headers import first_forwarded_value, build_base_url
from .url_builder import build_short_url
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "canonicalize_url",
    "first_forwarded_value",
    "build_base_url",
    "build_short_url",
    "setup_logging",
    "get_logger",
]
