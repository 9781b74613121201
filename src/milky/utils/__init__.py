"""Utility modules for Milky.

Provides:
- text: escape_html, decode_url for text processing
- logger: get_logger for logging
"""

from milky.utils.logger import get_logger
from milky.utils.text import decode_url, escape_html

__all__ = [
    "decode_url",
    "escape_html",
    "get_logger",
]
