"""Command-line interface for asmigrate."""

from .app import app

__all__ = ["app"]
