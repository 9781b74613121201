"""Text processing utilities for Milky.

Example:
    >>> from milky.utils.text import escape_html
    >>> escape_html("a < b")
    'a &lt; b'
"""

from __future__ import annotations

import html as html_module
from urllib.parse import unquote


def escape_html(text: str) -> str:
    """Escape HTML special characters for text and attribute values.

    Converts the five special characters to HTML entities:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;
    - ' becomes &#x27;

    Text without special characters is returned unchanged.

    Args:
        text: Text to escape

    Returns:
        HTML-escaped text

    Examples:
        >>> escape_html("<script>alert('xss')</script>")
        '&lt;script&gt;alert(&#x27;xss&#x27;)&lt;/script&gt;'
    """
    if not text:
        return ""

    return html_module.escape(text, quote=True)


def decode_url(url: str) -> str:
    """Undo percent-encoding applied by the Markdown link normalizer.

    Asset destinations are recorded in their authored form so the
    publishing layer can locate the file on disk.

    Examples:
        >>> decode_url("images/my%20cat.png")
        'images/my cat.png'
    """
    return unquote(url)
