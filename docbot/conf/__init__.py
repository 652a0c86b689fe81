"""Configuration package: runtime settings and prompt templates."""

from .config import Config

__all__ = ["Config"]
