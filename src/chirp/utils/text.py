"""Text utilities for Chirp: input validation and HTML escaping.

Escaping happens once, on the whole input, before any token is matched.
Neither escaper double-encodes: an existing character reference such as
``&amp;`` or ``&#039;`` passes through untouched, so escaping is idempotent.

Example:
    >>> from chirp.utils.text import escape_html
    >>> escape_html("Tom & Jerry <3")
    'Tom &amp; Jerry &lt;3'
    >>> escape_html("Tom &amp; Jerry")
    'Tom &amp; Jerry'
"""

from __future__ import annotations

import re
from enum import Enum
from html.entities import codepoint2name

from chirp.errors import EncodingError

# Named, decimal and hex character references.
_CHAR_REF = re.compile(r"&(?:[a-zA-Z][a-zA-Z0-9]*|#[0-9]+|#[xX][0-9a-fA-F]+);")

_MINIMAL_TABLE = {
    ord("&"): "&amp;",
    ord("<"): "&lt;",
    ord(">"): "&gt;",
    ord('"'): "&quot;",
    ord("'"): "&#039;",
}

# Every codepoint HTML names, plus the apostrophe which it does not.
_FULL_TABLE = {cp: f"&{name};" for cp, name in codepoint2name.items()}
_FULL_TABLE[ord("'")] = "&#039;"


class EscapeMode(Enum):
    """How input text is escaped before annotation.

    NONE: the caller already escaped it.
    MINIMAL: ``& < > " '`` only.
    FULL: every character that has an HTML named entity.
    """

    NONE = "none"
    MINIMAL = "minimal"
    FULL = "full"


def ensure_text(text: str | bytes) -> str:
    """Return ``text`` as a well-formed ``str``.

    Bytes are decoded as strict UTF-8. Strings are checked for lone
    surrogates, which cannot be encoded and would corrupt offsets.

    Raises:
        EncodingError: On undecodable bytes or lone surrogates.
        TypeError: If ``text`` is neither ``str`` nor ``bytes``.
    """
    if isinstance(text, bytes):
        try:
            return text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EncodingError("invalid UTF-8 input", position=exc.start) from exc
    if not isinstance(text, str):
        raise TypeError(f"expected str or bytes, got {type(text).__name__}")
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodingError("lone surrogate in input", position=exc.start) from exc
    return text


def _translate_outside_refs(text: str, table: dict[int, str]) -> str:
    if "&" not in text:
        return text.translate(table)
    parts: list[str] = []
    pos = 0
    for ref in _CHAR_REF.finditer(text):
        parts.append(text[pos : ref.start()].translate(table))
        parts.append(ref.group())
        pos = ref.end()
    parts.append(text[pos:].translate(table))
    return "".join(parts)


def escape_html(text: str) -> str:
    """Escape ``& < > " '`` without re-encoding existing references.

    Examples:
        >>> escape_html("<b>\\"hi\\"</b>")
        '&lt;b&gt;&quot;hi&quot;&lt;/b&gt;'
        >>> escape_html("it's")
        'it&#039;s'
    """
    if not text:
        return ""
    return _translate_outside_refs(text, _MINIMAL_TABLE)


def escape_html_full(text: str) -> str:
    """Encode every character that has an HTML named entity.

    Examples:
        >>> escape_html_full("café & crème")
        'caf&eacute; &amp; cr&egrave;me'
    """
    if not text:
        return ""
    return _translate_outside_refs(text, _FULL_TABLE)


def escape(text: str, mode: EscapeMode) -> str:
    """Escape ``text`` according to ``mode``."""
    match mode:
        case EscapeMode.NONE:
            return text
        case EscapeMode.MINIMAL:
            return escape_html(text)
        case EscapeMode.FULL:
            return escape_html_full(text)
    raise ValueError(f"unknown escape mode: {mode!r}")


__all__ = [
    "EscapeMode",
    "ensure_text",
    "escape",
    "escape_html",
    "escape_html_full",
]
