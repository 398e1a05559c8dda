"""Utility modules for Chirp.

Provides:
- text: ensure_text, escape_html, escape_html_full for input handling
- logger: get_logger for logging
"""

from chirp.utils.logger import get_logger
from chirp.utils.text import EscapeMode, ensure_text, escape, escape_html, escape_html_full

__all__ = [
    "EscapeMode",
    "ensure_text",
    "escape",
    "escape_html",
    "escape_html_full",
    "get_logger",
]
