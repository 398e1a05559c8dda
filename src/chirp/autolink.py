"""Autolinking: wrap URLs, hashtags, cashtags and mentions in anchors.

Two modes:

ENTITY (default)
    Extract once, then splice one anchor per entity into the text. The
    entity list is sorted and overlap-free, so every token is linked at
    most once and anchors never nest.

LOOSE
    Four independent rewrite passes, URLs then hashtags then cashtags then
    mentions, each re-scanning the previous pass's output. Later passes see
    the markup earlier ones inserted and rely on the terminator rules, plus
    a guard against hashtags and cashtags that touch a closing tag or an
    unbalanced quote, to leave it alone. This is weaker than ENTITY mode,
    which needs no such guard. Protocol-less URLs are never linked in this
    mode.

Markup:
    ``<a class href rel target>`` for URLs and mentions, and
    ``<a href title class rel target>`` for hashtags and cashtags. ``class``,
    ``rel`` and ``target`` are omitted when empty. Hashtags containing
    right-to-left script get `` rtl`` appended to their class.

Example:
    >>> from chirp import annotate, StyleConfig
    >>> style = StyleConfig(external=False, nofollow=False, target="")
    >>> annotate("Great talk #devops2024!", style=style)
    'Great talk <a href="https://twitter.com/#!/search?q=%23devops2024" title="#devops2024" class="hashtag">#devops2024</a>!'

Thread Safety:
    An Autolinker holds only an immutable StyleConfig and escape mode. Each
    call snapshots the style it uses, so concurrent calls never interfere.

"""

from collections.abc import Iterable
from enum import Enum

from chirp.config import StyleConfig, get_style_config
from chirp.entities import Cashtag, Entity, Hashtag, Mention, MentionList, Url
from chirp.extractor import Extractor
from chirp.grammar import rules
from chirp.rewriter import TextRewriter
from chirp.utils.logger import get_logger
from chirp.utils.text import EscapeMode, ensure_text, escape, escape_html

logger = get_logger(__name__)

_ENTITY_EXTRACTOR = Extractor(include_protocol_less_urls=False)


class AnnotateMode(Enum):
    """Annotation strategy."""

    ENTITY = "entity"
    LOOSE = "loose"


# =============================================================================
# Markup
# =============================================================================


def _tail_attributes(style: StyleConfig) -> str:
    parts = []
    rel = style.rel
    if rel:
        parts.append(f' rel="{rel}"')
    if style.target:
        parts.append(f' target="{style.target}"')
    return "".join(parts)


def wrap(url: str, css_class: str, element: str, style: StyleConfig) -> str:
    """Anchor for URLs and mentions: ``class`` (if any) before ``href``."""
    link = "<a"
    if css_class:
        link += f' class="{css_class}"'
    link += f' href="{url}"'
    link += _tail_attributes(style)
    return f"{link}>{element}</a>"


def wrap_tag(url: str, css_class: str, element: str, style: StyleConfig) -> str:
    """Anchor for hashtags and cashtags: ``href``, ``title``, then ``class``."""
    link = f'<a href="{url}" title="{element}"'
    if css_class:
        link += f' class="{css_class}"'
    link += _tail_attributes(style)
    return f"{link}>{element}</a>"


def link_to_url(url: str, style: StyleConfig) -> str:
    # Grammar matches may capture a raw "&" inside a query string.
    safe = escape_html(url)
    return wrap(safe, style.url_class, safe, style)


def link_to_hashtag(sigil: str, tag: str, style: StyleConfig) -> str:
    element = sigil + tag
    css_class = style.hashtag_class
    if rules.has_rtl(element):
        css_class += " rtl"
    return wrap_tag(style.url_base_hash + tag, css_class, element, style)


def link_to_cashtag(sigil: str, tag: str, style: StyleConfig) -> str:
    return wrap_tag(style.url_base_cash + tag, style.cashtag_class, sigil + tag, style)


def link_to_mention(screen_name: str, style: StyleConfig) -> str:
    return wrap(style.url_base_user + screen_name, style.username_class, screen_name, style)


def link_to_list(screen_name: str, list_slug: str, style: StyleConfig) -> str:
    element = f"{screen_name}/{list_slug}"
    return wrap(style.url_base_list + element, style.list_class, element, style)


# =============================================================================
# Autolinker
# =============================================================================


class Autolinker:
    """Annotate post text with anchors.

    Usage:
        >>> linker = Autolinker(StyleConfig(external=False, target=""))
        >>> linker("@alice hi")
        '@<a class="username" href="https://twitter.com/alice" rel="nofollow">alice</a> hi'

        >>> # Loose mode, and individual passes over already-escaped text
        >>> linker("#a @b", mode=AnnotateMode.LOOSE) == linker("#a @b")
        True
        >>> linker.link_cashtags("$AAPL")[:2]
        '<a'

    Style resolution per call: explicit ``style`` argument, else the
    instance's, else the context's (``chirp.config.get_style_config``).

    """

    __slots__ = ("_style", "_escape")

    def __init__(
        self,
        style: StyleConfig | None = None,
        *,
        escape: EscapeMode = EscapeMode.MINIMAL,
    ) -> None:
        """Initialize autolinker.

        Args:
            style: Markup configuration (None follows the context's config)
            escape: How ``annotate`` escapes input before matching
        """
        self._style = style
        self._escape = escape

    @property
    def style(self) -> StyleConfig:
        return self._style if self._style is not None else get_style_config()

    def _resolve(self, style: StyleConfig | None) -> StyleConfig:
        return style if style is not None else self.style

    def __call__(
        self,
        text: str | bytes,
        *,
        mode: AnnotateMode = AnnotateMode.ENTITY,
        style: StyleConfig | None = None,
    ) -> str:
        return self.annotate(text, mode=mode, style=style)

    def annotate(
        self,
        text: str | bytes,
        *,
        mode: AnnotateMode = AnnotateMode.ENTITY,
        style: StyleConfig | None = None,
    ) -> str:
        """Escape ``text`` and link every token in it.

        Raises:
            EncodingError: If ``text`` is not valid Unicode.
        """
        style = self._resolve(style)
        source = escape(ensure_text(text), self._escape)
        if mode is AnnotateMode.LOOSE:
            return self.link_loose(source, style=style)
        entities = _ENTITY_EXTRACTOR.extract_entities(source)
        return self.autolink_entities(source, entities, style=style)

    # =========================================================================
    # Entity mode
    # =========================================================================

    def autolink_entities(
        self,
        text: str,
        entities: Iterable[Entity],
        *,
        style: StyleConfig | None = None,
    ) -> str:
        """Splice anchors for ``entities`` into ``text``.

        ``entities`` must come from extracting this exact text, in order.
        Sigils of hashtags and cashtags go inside the anchor; the ``@`` of a
        mention stays outside it.
        """
        style = self._resolve(style)
        rw = TextRewriter(text)
        for entity in entities:
            match entity:
                case Url(url=url):
                    rw.replace(entity.start, entity.end, link_to_url(url, style))
                case Hashtag(hashtag=tag):
                    sigil = text[entity.token_start]
                    rw.replace(entity.token_start, entity.end, link_to_hashtag(sigil, tag, style))
                case Cashtag(cashtag=tag):
                    sigil = text[entity.token_start]
                    rw.replace(entity.token_start, entity.end, link_to_cashtag(sigil, tag, style))
                case Mention(screen_name=name):
                    rw.replace(entity.start, entity.end, link_to_mention(name, style))
                case MentionList(screen_name=name, list_slug=slug):
                    rw.replace(entity.start, entity.end, link_to_list(name, slug, style))
                case _:
                    raise TypeError(f"not an entity: {entity!r}")
        return rw.build()

    # =========================================================================
    # Loose mode
    # =========================================================================

    def link_loose(self, text: str, *, style: StyleConfig | None = None) -> str:
        """Run all four passes in order over already-escaped text."""
        style = self._resolve(style)
        text = self.link_urls(text, style=style)
        text = self.link_hashtags(text, style=style)
        text = self.link_cashtags(text, style=style)
        return self.link_mentions(text, style=style)

    def link_urls(self, text: str, *, style: StyleConfig | None = None) -> str:
        """Link URLs that carry a protocol."""
        style = self._resolve(style)
        rw = TextRewriter(text)
        for cand in rules.scan_urls(text):
            if not rules.url_has_protocol(cand):
                continue
            rw.replace(cand.start, cand.end, link_to_url(cand.value, style))
        return rw.build()

    def link_hashtags(self, text: str, *, style: StyleConfig | None = None) -> str:
        style = self._resolve(style)
        rw = TextRewriter(text)
        for cand in rules.scan_hashtags(text):
            if rules.hashtag_rejected(text, cand) or rules.breaks_markup(text, cand):
                continue
            sigil = cand.group("sigil") or "#"
            rw.replace(cand.start, cand.end, link_to_hashtag(sigil, cand.value, style))
        return rw.build()

    def link_cashtags(self, text: str, *, style: StyleConfig | None = None) -> str:
        style = self._resolve(style)
        rw = TextRewriter(text)
        for cand in rules.scan_cashtags(text):
            if rules.cashtag_rejected(text, cand) or rules.breaks_markup(text, cand):
                continue
            sigil = cand.group("sigil") or "$"
            rw.replace(cand.start, cand.end, link_to_cashtag(sigil, cand.value, style))
        return rw.build()

    def link_mentions(self, text: str, *, style: StyleConfig | None = None) -> str:
        """Link mentions and list mentions; the ``@`` stays outside the anchor."""
        style = self._resolve(style)
        rw = TextRewriter(text)
        for cand in rules.scan_mentions(text):
            if rules.mention_rejected(text, cand):
                continue
            screen_name = cand.group("screen_name") or ""
            slug = cand.group("list_slug")
            if slug:
                anchor = link_to_list(screen_name, slug, style)
            else:
                anchor = link_to_mention(screen_name, style)
            rw.replace(cand.value_start, cand.end, anchor)
        return rw.build()


_DEFAULT_AUTOLINKER = Autolinker()


def annotate(
    text: str | bytes,
    *,
    mode: AnnotateMode = AnnotateMode.ENTITY,
    style: StyleConfig | None = None,
    escape: EscapeMode = EscapeMode.MINIMAL,
) -> str:
    """Annotate ``text`` with anchors.

    Args:
        text: Post text; bytes are decoded as UTF-8
        mode: ENTITY (extract, then link) or LOOSE (four rewrite passes)
        style: Markup configuration (None uses the context's config)
        escape: How to escape the input before matching

    Returns:
        The escaped text with every recognized token wrapped in an anchor.

    Raises:
        EncodingError: If ``text`` is not valid Unicode.
    """
    linker = _DEFAULT_AUTOLINKER if escape is EscapeMode.MINIMAL else Autolinker(escape=escape)
    return linker.annotate(text, mode=mode, style=style)


__all__ = [
    "AnnotateMode",
    "Autolinker",
    "annotate",
    "link_to_cashtag",
    "link_to_hashtag",
    "link_to_list",
    "link_to_mention",
    "link_to_url",
    "wrap",
    "wrap_tag",
]
