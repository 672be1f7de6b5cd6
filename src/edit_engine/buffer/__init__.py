"""Clipboard storage and buffer range validation."""

from .clipboard import Clipboard
from .validation import ensure_range, normalize_range

__all__ = [
    "Clipboard",
    "ensure_range",
    "normalize_range",
]
