"""Web routes: homepage, form endpoint and catch-all redirect."""

from .routes import router as web_router

__all__ = ["web_router"]
