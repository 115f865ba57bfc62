"""Pure utility functions for asmigrate.

No dependencies on asmigrate models, so these can be imported from anywhere.
"""

from .paths import is_absolute_path, resolve_relative_to

__all__ = [
    "is_absolute_path",
    "resolve_relative_to",
]
