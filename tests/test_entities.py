"""Tests for chirp.entities."""

import dataclasses

import pytest

from chirp import Cashtag, Entity, EntityKind, Hashtag, Mention, MentionList, Span, Url


class TestSpan:
    def test_unpacks(self) -> None:
        start, end = Span(3, 8)
        assert (start, end) == (3, 8)
        assert list(Span(3, 8)) == [3, 8]

    def test_len_and_slice(self) -> None:
        span = Span(4, 9)
        assert len(span) == 5
        assert span.slice("cc @alice hi") == "alice"

    @pytest.mark.parametrize(("start", "end"), [(-1, 2), (3, 3), (5, 2)])
    def test_invalid(self, start: int, end: int) -> None:
        with pytest.raises(ValueError):
            Span(start, end)

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            Span(0, 1).start = 2  # type: ignore[misc]


class TestEntities:
    def test_kinds(self) -> None:
        assert Url(Span(0, 5), "a.com").kind is EntityKind.URL
        assert Hashtag(Span(1, 2), "a").kind is EntityKind.HASHTAG
        assert Cashtag(Span(1, 2), "a").kind is EntityKind.CASHTAG
        assert Mention(Span(1, 2), "a").kind is EntityKind.MENTION
        assert MentionList(Span(1, 4), "a", "b").kind is EntityKind.MENTION_LIST

    def test_token_start(self) -> None:
        assert Url(Span(6, 11), "a.com").token_start == 6
        assert Hashtag(Span(6, 9), "abc").token_start == 5
        assert Mention(Span(6, 9), "abc").token_start == 5

    def test_values(self) -> None:
        assert Url(Span(0, 5), "a.com").value == "a.com"
        assert Cashtag(Span(1, 5), "AAPL").value == "AAPL"
        assert MentionList(Span(1, 7), "a", "list").value == "a/list"

    def test_base_value_is_abstract(self) -> None:
        with pytest.raises(NotImplementedError, match="Entity does not define value"):
            Entity(Span(0, 1)).value

    def test_list_requires_slug(self) -> None:
        with pytest.raises(ValueError, match="list_slug"):
            MentionList(Span(1, 2), "a", "")

    def test_priority_order(self) -> None:
        assert (
            EntityKind.URL.priority
            < EntityKind.HASHTAG.priority
            < EntityKind.CASHTAG.priority
            < EntityKind.MENTION.priority
        )
        assert EntityKind.MENTION.priority == EntityKind.MENTION_LIST.priority

    def test_pattern_matching(self) -> None:
        def describe(entity: object) -> str:
            match entity:
                case Hashtag(hashtag=tag):
                    return f"tag:{tag}"
                case MentionList(screen_name=name, list_slug=slug):
                    return f"list:{name}/{slug}"
                case _:
                    return "other"

        assert describe(Hashtag(Span(1, 3), "py")) == "tag:py"
        assert describe(MentionList(Span(1, 4), "a", "b")) == "list:a/b"
        assert describe(Mention(Span(1, 2), "a")) == "other"
