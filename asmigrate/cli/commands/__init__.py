"""CLI commands for asmigrate."""

from . import (
    generate,
    config_cmd,
    history,
)

__all__ = [
    "generate",
    "config_cmd",
    "history",
]
