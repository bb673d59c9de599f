"""Formatting utilities for notemark content."""

from ..core.normalize import normalize_blocks
from .formatter import FormatResult, format_content, format_note

__all__ = [
    "normalize_blocks",
    "format_content",
    "format_note",
    "FormatResult",
]
