"""Terminal front end for Gembot."""

from .app import app

__all__ = ["app"]
