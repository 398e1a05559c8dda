"""Property-based tests for extraction and annotation using Hypothesis.

These tests verify invariants that should hold for any input:
1. Entities are ordered and never overlap
2. Every entity's indices slice out exactly its value
3. Entity-mode annotation only adds markup around the escaped text
4. Both annotation modes agree on single tokens
5. Nothing crashes on arbitrary Unicode
"""

import re

from hypothesis import given, settings
from hypothesis import strategies as st

from chirp import (
    AnnotateMode,
    Cashtag,
    EscapeMode,
    Hashtag,
    Mention,
    MentionList,
    annotate,
    extract,
)
from chirp.utils.text import escape_html

# Fragments that tend to form, break or join tokens when concatenated.
fragments = st.sampled_from([
    "#", "$", "@", "a", "Z", "7", "_", ".", "/", ":", " ", "-", "&", "'", '"', "<",
    "com", "http://", "https://t.co/", "x.co", "AAPL", chr(0x05D0), chr(0xFF03),
    chr(0xFF20), chr(0x1F600), chr(0x0301),
])
token_soup = st.lists(fragments, max_size=30).map("".join)

# No URLs, whose preceding-character rule differs for a quote and a ";".
quoted_soup = st.lists(
    st.sampled_from(["#", "$", "@", "a", "Z", "7", "_", "/", " ", "-", "'", '"', chr(0xFF03)]),
    max_size=30,
).map("".join)

ANCHOR_TAGS = re.compile(r"<a [^>]*>|</a>")

SIGILS = {
    Hashtag: "#" + chr(0xFF03),
    Cashtag: "$" + chr(0xFF04),
    Mention: "@" + chr(0xFF20),
    MentionList: "@" + chr(0xFF20),
}


class TestExtractionProperties:
    """Invariants of extract()."""

    @given(text=token_soup)
    @settings(max_examples=300)
    def test_ordered_and_disjoint(self, text: str) -> None:
        entities = extract(text)
        for prev, cur in zip(entities, entities[1:]):
            assert prev.end <= cur.token_start

    @given(text=token_soup)
    @settings(max_examples=300)
    def test_indices_slice_value(self, text: str) -> None:
        for entity in extract(text):
            assert entity.indices.slice(text) == entity.value
            assert entity.token_start >= 0

    @given(text=token_soup)
    @settings(max_examples=200)
    def test_sigil_precedes_indices(self, text: str) -> None:
        for entity in extract(text):
            signs = SIGILS.get(type(entity))
            if signs is not None:
                assert text[entity.token_start] in signs

    @given(text=token_soup)
    @settings(max_examples=200)
    def test_bytes_and_str_agree(self, text: str) -> None:
        assert extract(text.encode()) == extract(text)

    @given(text=quoted_soup)
    @settings(max_examples=300)
    def test_escaping_keeps_tag_and_mention_values(self, text: str) -> None:
        """Quotes turning into references do not change which tokens are found."""

        def tokens(source: str) -> list[tuple[str, str]]:
            return [(type(e).__name__, e.value) for e in extract(source)]

        assert tokens(escape_html(text)) == tokens(text)

    @given(text=st.text(alphabet=st.characters(exclude_characters="&<>\"'"), max_size=100))
    @settings(max_examples=200)
    def test_escaping_is_a_no_op_without_special_characters(self, text: str) -> None:
        assert extract(escape_html(text)) == extract(text)

    @given(text=st.text(max_size=200))
    @settings(max_examples=200)
    def test_never_crashes(self, text: str) -> None:
        extract(text)


class TestAnnotationProperties:
    """Invariants of annotate()."""

    @given(text=token_soup)
    @settings(max_examples=300)
    def test_only_adds_markup(self, text: str) -> None:
        result = annotate(text)
        assert ANCHOR_TAGS.sub("", result) == escape_html(text)

    @given(text=token_soup)
    @settings(max_examples=200)
    def test_pre_escaped_input(self, text: str) -> None:
        assert annotate(escape_html(text), escape=EscapeMode.NONE) == annotate(text)

    @given(tag=st.from_regex(r"[a-z][a-z0-9_]{0,15}", fullmatch=True))
    def test_modes_agree_on_hashtag(self, tag: str) -> None:
        text = f"#{tag}"
        assert annotate(text, mode=AnnotateMode.LOOSE) == annotate(text)

    @given(tag=st.from_regex(r"[A-Za-z]{1,6}", fullmatch=True))
    def test_modes_agree_on_cashtag(self, tag: str) -> None:
        text = f"${tag}"
        assert annotate(text, mode=AnnotateMode.LOOSE) == annotate(text)

    @given(
        name=st.from_regex(r"[a-z0-9_]{1,20}", fullmatch=True),
        slug=st.one_of(st.just(""), st.from_regex(r"[a-z][a-z0-9_-]{0,10}", fullmatch=True)),
    )
    def test_modes_agree_on_mention(self, name: str, slug: str) -> None:
        text = f"@{name}/{slug}" if slug else f"@{name}"
        assert annotate(text, mode=AnnotateMode.LOOSE) == annotate(text)

    @given(text=st.text(max_size=200))
    @settings(max_examples=200)
    def test_never_crashes(self, text: str) -> None:
        for mode in AnnotateMode:
            annotate(text, mode=mode)
