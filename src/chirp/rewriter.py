"""Cursor-based text rewriting.

Rebuilds a source string by copying unmatched spans verbatim and emitting a
replacement for each matched span, in one left-to-right pass. Output parts
accumulate in a list and are joined once at the end, O(n) in the output size.

Both autolinking modes use it: entity mode feeds it the extractor's entity
spans, loose mode feeds it one pass's accepted candidates.

Thread Safety:
TextRewriter instances are local to each call. No shared mutable state.

"""

from __future__ import annotations


class TextRewriter:
    """Splice replacements into a source string.

    Replacements must arrive in ascending, non-overlapping order.

    Usage:
            >>> rw = TextRewriter("say #hi now")
            >>> rw.replace(4, 7, "<b>#hi</b>")
            >>> rw.build()
            'say <b>#hi</b> now'

    """

    __slots__ = ("_source", "_parts", "_cursor")

    def __init__(self, source: str) -> None:
        self._source = source
        self._parts: list[str] = []
        self._cursor = 0

    @property
    def cursor(self) -> int:
        """Offset into the source up to which output has been produced."""
        return self._cursor

    def copy_to(self, pos: int) -> None:
        """Copy source text from the cursor up to ``pos`` unchanged."""
        if pos < self._cursor:
            raise ValueError(f"cannot copy backwards: cursor {self._cursor}, target {pos}")
        if pos > self._cursor:
            self._parts.append(self._source[self._cursor : pos])
            self._cursor = pos

    def replace(self, start: int, end: int, replacement: str) -> None:
        """Copy up to ``start``, emit ``replacement`` and skip past ``end``."""
        if end < start:
            raise ValueError(f"inverted span [{start}, {end})")
        self.copy_to(start)
        if replacement:
            self._parts.append(replacement)
        self._cursor = end

    def build(self) -> str:
        """Copy the remaining source and return the rewritten text."""
        return "".join(self._parts) + self._source[self._cursor :]

    def __len__(self) -> int:
        """Return number of parts emitted so far (not total length)."""
        return len(self._parts)
