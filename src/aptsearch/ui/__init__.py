"""User interface components for APT Search.

This module provides the Rich console view and the formatting utilities
used to render results, captions and suggestions in the terminal.
"""

from aptsearch.ui.console import SEARCH_THEME, SearchConsole, get_console
from aptsearch.ui.formatters import (
    format_caption,
    format_pagination,
    format_result,
    format_seconds,
    format_snippet,
    truncate_text,
)

__all__ = [
    # Console
    "SearchConsole",
    "get_console",
    "SEARCH_THEME",
    # Formatters
    "format_caption",
    "format_pagination",
    "format_result",
    "format_seconds",
    "format_snippet",
    "truncate_text",
]
