"""FastAPI web application for shortlink."""

from .app_factory import create_app

__all__ = ["create_app"]
