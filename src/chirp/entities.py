"""Typed entities produced by extraction.

All entities are frozen dataclasses with slots, one class per token kind,
each carrying only the fields that kind has. Consumers dispatch with
``match``:

    match entity:
        case Url(url=url): ...
        case Hashtag(hashtag=tag): ...
        case Cashtag(cashtag=tag): ...
        case Mention(screen_name=name): ...
        case MentionList(screen_name=name, list_slug=slug): ...

Entity Hierarchy:
Entity (base)
├── Url
├── Hashtag
├── Cashtag
├── Mention
└── MentionList

Offsets:
``indices`` is a half-open ``[start, end)`` range of codepoints into the
text that was extracted, covering exactly ``value``. Sigils (``#``, ``$``,
``@`` and their full-width forms) sit just before ``indices.start`` and are
not part of it; ``token_start`` includes them.

Thread Safety:
All entities are frozen (immutable) and safe to share across threads.

"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class EntityKind(Enum):
    """Token kinds, in scan priority order."""

    URL = "url"
    HASHTAG = "hashtag"
    CASHTAG = "cashtag"
    MENTION = "mention"
    MENTION_LIST = "mention_list"

    @property
    def priority(self) -> int:
        """Tie-break rank when two candidates start at the same offset (lower wins)."""
        return _PRIORITY[self]


_PRIORITY: dict[EntityKind, int] = {
    EntityKind.URL: 0,
    EntityKind.HASHTAG: 1,
    EntityKind.CASHTAG: 2,
    EntityKind.MENTION: 3,
    EntityKind.MENTION_LIST: 3,
}


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open codepoint range ``[start, end)``.

    Unpacks like the two-element ``indices`` array of the JSON form:

        >>> start, end = Span(6, 10)
        >>> (start, end)
        (6, 10)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"span start must be non-negative, got {self.start}")
        if self.end <= self.start:
            raise ValueError(f"span must not be empty: [{self.start}, {self.end})")

    def __iter__(self) -> Iterator[int]:
        yield self.start
        yield self.end

    def __len__(self) -> int:
        return self.end - self.start

    def slice(self, text: str) -> str:
        """Return the substring of ``text`` covered by this span."""
        return text[self.start : self.end]


@dataclass(frozen=True, slots=True)
class Entity:
    """Abstract base class for all extracted entities."""

    kind: ClassVar[EntityKind]
    sigil_width: ClassVar[int] = 1

    indices: Span

    @property
    def start(self) -> int:
        return self.indices.start

    @property
    def end(self) -> int:
        return self.indices.end

    @property
    def token_start(self) -> int:
        """Start of the whole token, sigil included."""
        return self.indices.start - self.sigil_width

    @property
    def value(self) -> str:
        """Token text without its sigil.

        Abstract: every entity class overrides it with its own field.
        """
        raise NotImplementedError(f"{type(self).__name__} does not define value")


@dataclass(frozen=True, slots=True)
class Url(Entity):
    """A URL, with or without protocol."""

    kind: ClassVar[EntityKind] = EntityKind.URL
    sigil_width: ClassVar[int] = 0

    url: str

    @property
    def value(self) -> str:
        return self.url


@dataclass(frozen=True, slots=True)
class Hashtag(Entity):
    """A hashtag; ``hashtag`` excludes the ``#``."""

    kind: ClassVar[EntityKind] = EntityKind.HASHTAG

    hashtag: str

    @property
    def value(self) -> str:
        return self.hashtag


@dataclass(frozen=True, slots=True)
class Cashtag(Entity):
    """A cashtag; ``cashtag`` excludes the ``$``."""

    kind: ClassVar[EntityKind] = EntityKind.CASHTAG

    cashtag: str

    @property
    def value(self) -> str:
        return self.cashtag


@dataclass(frozen=True, slots=True)
class Mention(Entity):
    """A mention of a single user; ``screen_name`` excludes the ``@``."""

    kind: ClassVar[EntityKind] = EntityKind.MENTION

    screen_name: str

    @property
    def value(self) -> str:
        return self.screen_name


@dataclass(frozen=True, slots=True)
class MentionList(Entity):
    """A mention of a user's list, ``@screen_name/list_slug``."""

    kind: ClassVar[EntityKind] = EntityKind.MENTION_LIST

    screen_name: str
    list_slug: str

    def __post_init__(self) -> None:
        if not self.list_slug:
            raise ValueError("MentionList requires a non-empty list_slug")

    @property
    def value(self) -> str:
        return f"{self.screen_name}/{self.list_slug}"


__all__ = [
    "Cashtag",
    "Entity",
    "EntityKind",
    "Hashtag",
    "Mention",
    "MentionList",
    "Span",
    "Url",
]
