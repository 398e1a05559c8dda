"""Tests for chirp.rewriter.TextRewriter."""

import pytest

from chirp.rewriter import TextRewriter


class TestTextRewriter:
    def test_no_replacements(self) -> None:
        assert TextRewriter("unchanged").build() == "unchanged"

    def test_replacements_in_order(self) -> None:
        rw = TextRewriter("a #b c @d")
        rw.replace(2, 4, "[B]")
        rw.replace(7, 9, "[D]")
        assert rw.build() == "a [B] c [D]"
        assert rw.cursor == 9

    def test_adjacent_replacements(self) -> None:
        rw = TextRewriter("abcd")
        rw.replace(0, 2, "X")
        rw.replace(2, 4, "Y")
        assert rw.build() == "XY"

    def test_empty_replacement_deletes(self) -> None:
        rw = TextRewriter("a-b")
        rw.replace(1, 2, "")
        assert rw.build() == "ab"

    def test_copy_to(self) -> None:
        rw = TextRewriter("hello world")
        rw.copy_to(5)
        assert rw.cursor == 5
        assert len(rw) == 1
        rw.copy_to(5)
        assert len(rw) == 1
        assert rw.build() == "hello world"

    def test_backwards_rejected(self) -> None:
        rw = TextRewriter("abcdef")
        rw.replace(3, 5, "x")
        with pytest.raises(ValueError, match="backwards"):
            rw.replace(1, 2, "y")

    def test_inverted_span_rejected(self) -> None:
        with pytest.raises(ValueError, match="inverted"):
            TextRewriter("abc").replace(2, 1, "x")
