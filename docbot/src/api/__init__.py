"""API package for the bot backend.

This package contains the API endpoints, middleware and error types.
"""

from .core import setup_api

__all__ = ["setup_api"]
