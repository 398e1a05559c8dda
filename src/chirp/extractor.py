"""Entity extraction.

Turns the per-kind grammar scans into one ordered, non-overlapping tuple of
typed entities:

1. Scan every kind over the whole text, collecting candidates.
2. Drop candidates that fail their kind's context rules (terminators,
   missing protocol, short country domains).
3. Order by token start, breaking ties Url > Hashtag > Cashtag > Mention,
   and drop every candidate that overlaps one already kept.

Offsets are ``str`` indices, i.e. Unicode codepoints, whatever encoding the
input arrived in.

Example:
    >>> from chirp import extract
    >>> [e.value for e in extract("cc @alice/team-x about #devops")]
    ['alice/team-x', 'devops']

Thread Safety:
    Extractor holds only immutable options. Every call builds its own state,
    so one instance can serve any number of threads.

"""

from collections.abc import Iterable, Iterator

from chirp.entities import (
    Cashtag,
    Entity,
    EntityKind,
    Hashtag,
    Mention,
    MentionList,
    Span,
    Url,
)
from chirp.grammar import rules
from chirp.utils.logger import get_logger
from chirp.utils.text import ensure_text

logger = get_logger(__name__)


class Extractor:
    """Extract URLs, hashtags, cashtags and mentions with their offsets.

    Usage:
        >>> ex = Extractor(include_protocol_less_urls=False)
        >>> ex.extract_urls("see example.com or https://example.org")
        (Url(indices=Span(start=19, end=38), url='https://example.org'),)

    """

    __slots__ = ("_include_protocol_less_urls",)

    def __init__(self, *, include_protocol_less_urls: bool = True) -> None:
        """Initialize extractor.

        Args:
            include_protocol_less_urls: Accept bare domains such as
                ``example.com/path`` as URLs
        """
        self._include_protocol_less_urls = include_protocol_less_urls

    @property
    def include_protocol_less_urls(self) -> bool:
        return self._include_protocol_less_urls

    # =========================================================================
    # Public API
    # =========================================================================

    def extract_entities(self, text: str | bytes) -> tuple[Entity, ...]:
        """Extract every entity kind, ordered and without overlaps.

        Raises:
            EncodingError: If ``text`` is not valid Unicode.
        """
        text = ensure_text(text)
        if not text:
            return ()
        candidates: list[Entity] = [
            *self._urls(text),
            *self._hashtags(text),
            *self._cashtags(text),
            *self._mentions(text),
        ]
        return remove_overlaps(candidates)

    def extract_urls(self, text: str | bytes) -> tuple[Url, ...]:
        text = ensure_text(text)
        return tuple(self._urls(text))

    def extract_hashtags(self, text: str | bytes) -> tuple[Hashtag, ...]:
        """Extract hashtags that do not sit inside a URL."""
        text = ensure_text(text)
        hashtags = list(self._hashtags(text))
        if not hashtags:
            return ()
        urls = list(self._urls(text))
        return tuple(e for e in remove_overlaps([*urls, *hashtags]) if isinstance(e, Hashtag))

    def extract_cashtags(self, text: str | bytes) -> tuple[Cashtag, ...]:
        text = ensure_text(text)
        return tuple(self._cashtags(text))

    def extract_mentions(self, text: str | bytes) -> tuple[Mention | MentionList, ...]:
        """Extract mentions and list mentions."""
        text = ensure_text(text)
        return tuple(self._mentions(text))

    def extract_reply_screen_name(self, text: str | bytes) -> str | None:
        """Screen name the text replies to, when it opens with a mention."""
        text = ensure_text(text)
        m = rules.match_reply(text)
        return m.group("screen_name") if m else None

    # =========================================================================
    # Per-kind validation
    # =========================================================================

    def _urls(self, text: str) -> Iterator[Url]:
        for cand in rules.scan_urls(text):
            url = cand.value
            end = cand.end
            if rules.url_has_protocol(cand):
                tco = rules.tco_length(url)
                if tco is not None:
                    url = url[:tco]
                    end = cand.start + tco
            elif not self._include_protocol_less_urls:
                logger.debug("skipping URL without protocol at %d", cand.start)
                continue
            elif rules.is_short_country_domain(cand):
                logger.debug("skipping bare country-code domain %r", url)
                continue
            yield Url(Span(cand.start, end), url)

    def _hashtags(self, text: str) -> Iterator[Hashtag]:
        for cand in rules.scan_hashtags(text):
            if rules.hashtag_rejected(text, cand):
                logger.debug("hashtag %r rejected by terminator", cand.text)
                continue
            yield Hashtag(Span(cand.value_start, cand.end), cand.value)

    def _cashtags(self, text: str) -> Iterator[Cashtag]:
        for cand in rules.scan_cashtags(text):
            if rules.cashtag_rejected(text, cand):
                logger.debug("cashtag %r rejected", cand.text)
                continue
            yield Cashtag(Span(cand.value_start, cand.end), cand.value)

    def _mentions(self, text: str) -> Iterator[Mention | MentionList]:
        for cand in rules.scan_mentions(text):
            if rules.mention_rejected(text, cand):
                logger.debug("mention %r rejected by terminator", cand.text)
                continue
            span = Span(cand.value_start, cand.end)
            screen_name = cand.group("screen_name") or ""
            if cand.kind is EntityKind.MENTION_LIST:
                yield MentionList(span, screen_name, cand.group("list_slug") or "")
            else:
                yield Mention(span, screen_name)


def remove_overlaps(entities: Iterable[Entity]) -> tuple[Entity, ...]:
    """Order entities by token start and drop any that overlap an earlier one.

    Ties at the same start go to the higher-priority kind.
    """
    ordered = sorted(entities, key=lambda e: (e.token_start, e.kind.priority))
    kept: list[Entity] = []
    for entity in ordered:
        if kept and entity.token_start < kept[-1].end:
            logger.debug(
                "dropping %s at %d: overlaps %s ending at %d",
                entity.kind.value,
                entity.token_start,
                kept[-1].kind.value,
                kept[-1].end,
            )
            continue
        kept.append(entity)
    return tuple(kept)


_DEFAULT_EXTRACTOR = Extractor()
_STRICT_EXTRACTOR = Extractor(include_protocol_less_urls=False)


def extract(text: str | bytes, *, include_protocol_less_urls: bool = True) -> tuple[Entity, ...]:
    """Extract all entities from ``text``.

    Args:
        text: Post text; bytes are decoded as UTF-8
        include_protocol_less_urls: Accept bare domains as URLs

    Returns:
        Entities sorted by start, pairwise non-overlapping. Empty for empty text.

    Raises:
        EncodingError: If ``text`` is not valid Unicode. No partial result.

    Example:
        >>> [type(e).__name__ for e in extract("$AAPL up 2% http://x.com")]
        ['Cashtag', 'Url']
    """
    extractor = _DEFAULT_EXTRACTOR if include_protocol_less_urls else _STRICT_EXTRACTOR
    return extractor.extract_entities(text)


__all__ = ["Extractor", "extract", "remove_overlaps"]
