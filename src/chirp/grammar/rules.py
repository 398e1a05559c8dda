"""Grammar rules: pattern scans and following-context probes.

A scan yields every syntactically valid :class:`Candidate` of one kind, left
to right. Whether a candidate survives is decided by the probes, which look
at a bounded window of text just after the token. The probed characters are
never part of the token.

Both the extractor and loose-mode autolinking go through these functions,
so the two modes agree on what a valid token is. Loose mode additionally
applies :func:`breaks_markup`, which also looks one character back.

Example:
    >>> from chirp.grammar.rules import scan_hashtags, hashtag_rejected
    >>> text = "#ok #no#"
    >>> [c.text for c in scan_hashtags(text) if not hashtag_rejected(text, c)]
    ['#ok']

Thread Safety:
    All functions are pure. Candidates are immutable.

"""

import re
from collections.abc import Iterator
from dataclasses import dataclass

from chirp.entities import EntityKind
from chirp.grammar.charsets import QUOTES
from chirp.grammar.patterns import (
    END_CASHTAG,
    END_HASHTAG,
    END_MENTION,
    RTL_CHARS,
    SHORT_COUNTRY_DOMAIN,
    TRAILING_CHAR_REF,
    URL_PATH_TAIL,
    URL_QUERY_TAIL,
    VALID_CASHTAG,
    VALID_HASHTAG,
    VALID_MENTION_OR_LIST,
    VALID_REPLY,
    VALID_TCO_URL,
    VALID_URL,
)

# Longest terminator is "://".
_PROBE_WIDTH = 3


@dataclass(frozen=True, slots=True)
class Candidate:
    """One raw pattern match.

    Attributes:
        kind: Token kind. Mentions with a list slug are MENTION_LIST.
        match: The underlying match object; named groups per
            :mod:`chirp.grammar.patterns`.
        start: Token start, sigil included.
        end: Token end (exclusive).
        value_start: Start of the token value, sigil excluded.
    """

    kind: EntityKind
    match: re.Match[str]
    start: int
    end: int
    value_start: int

    @property
    def text(self) -> str:
        """Matched token, sigil included."""
        return self.match.string[self.start : self.end]

    @property
    def value(self) -> str:
        return self.match.string[self.value_start : self.end]

    def group(self, name: str) -> str | None:
        return self.match.group(name)


def _following(text: str, end: int) -> str:
    return text[end : end + _PROBE_WIDTH]


# =============================================================================
# Scans
# =============================================================================


def scan_urls(text: str) -> Iterator[Candidate]:
    """Yield URL candidates.

    Matching runs on escaped text, where a path can end on the name of a
    reference whose ``;`` it cannot include (``.../foo&#039;``). Such a URL
    stops before the ``&``, then backs off to a legal path or query ending.
    """
    for m in VALID_URL.finditer(text):
        start, end = m.span("url")
        if text.startswith(";", end):
            ref = TRAILING_CHAR_REF.search(text, start, end)
            if ref is not None:
                end = _trim_url_tail(text, m, start, ref.start())
        yield Candidate(EntityKind.URL, m, start, end, start)


def _trim_url_tail(text: str, m: re.Match[str], start: int, end: int) -> int:
    in_query = m.start("query") != -1 and end > m.start("query")
    tail = (URL_QUERY_TAIL if in_query else URL_PATH_TAIL).search(text, start, end)
    return tail.start() if tail is not None else end


def scan_hashtags(text: str) -> Iterator[Candidate]:
    for m in VALID_HASHTAG.finditer(text):
        yield Candidate(EntityKind.HASHTAG, m, m.start("sigil"), m.end("tag"), m.start("tag"))


def scan_cashtags(text: str) -> Iterator[Candidate]:
    for m in VALID_CASHTAG.finditer(text):
        yield Candidate(EntityKind.CASHTAG, m, m.start("sigil"), m.end("tag"), m.start("tag"))


def scan_mentions(text: str) -> Iterator[Candidate]:
    for m in VALID_MENTION_OR_LIST.finditer(text):
        if m.group("list_slug"):
            yield Candidate(
                EntityKind.MENTION_LIST, m, m.start("sigil"), m.end("list_slug"),
                m.start("screen_name"),
            )
        else:
            yield Candidate(
                EntityKind.MENTION, m, m.start("sigil"), m.end("screen_name"),
                m.start("screen_name"),
            )


def match_reply(text: str) -> re.Match[str] | None:
    """Match a mention that opens the text, ignoring leading whitespace."""
    m = VALID_REPLY.match(text)
    if m is None or END_MENTION.match(_following(text, m.end())):
        return None
    return m


# =============================================================================
# Probes
# =============================================================================


def breaks_markup(text: str, candidate: Candidate) -> bool:
    """Token sits against a closing tag or an unbalanced quote.

    Only loose-mode linking applies this guard, to keep later passes out of
    the attributes and element text that earlier passes inserted.
    """
    after = _following(text, candidate.end)
    if after.startswith("</"):
        return True
    before = text[candidate.start - 1 : candidate.start]
    return after[:1] in QUOTES and before not in QUOTES


def hashtag_rejected(text: str, candidate: Candidate) -> bool:
    return END_HASHTAG.match(_following(text, candidate.end)) is not None


def cashtag_rejected(text: str, candidate: Candidate) -> bool:
    # The body must name a ticker, not a price.
    body = candidate.group("tag") or ""
    suffix = candidate.group("suffix") or ""
    if not any(c.isalpha() for c in body[: len(body) - len(suffix)]):
        return True
    return END_CASHTAG.match(_following(text, candidate.end)) is not None


def mention_rejected(text: str, candidate: Candidate) -> bool:
    # A list slug already ended on a non-slug character.
    if candidate.kind is EntityKind.MENTION_LIST:
        return False
    return END_MENTION.match(_following(text, candidate.end)) is not None


def url_has_protocol(candidate: Candidate) -> bool:
    return bool(candidate.group("protocol"))


def is_short_country_domain(candidate: Candidate) -> bool:
    """Bare ``name.cc`` without a path, e.g. ``twitter.co``."""
    if candidate.group("path"):
        return False
    return SHORT_COUNTRY_DOMAIN.fullmatch(candidate.group("domain") or "") is not None


def tco_length(url: str) -> int | None:
    """Length of the ``t.co`` prefix of ``url``, or None for other hosts."""
    m = VALID_TCO_URL.match(url)
    return m.end() if m else None


def has_rtl(text: str) -> bool:
    """True when ``text`` contains right-to-left script codepoints."""
    return RTL_CHARS.search(text) is not None


__all__ = [
    "Candidate",
    "breaks_markup",
    "cashtag_rejected",
    "has_rtl",
    "hashtag_rejected",
    "is_short_country_domain",
    "match_reply",
    "mention_rejected",
    "scan_cashtags",
    "scan_hashtags",
    "scan_mentions",
    "scan_urls",
    "tco_length",
    "url_has_protocol",
]
