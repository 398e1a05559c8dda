"""Entity serialization to the familiar JSON entity shape.

Each entity becomes a flat dict keyed by its kind-specific field plus an
``indices`` pair:

    {"hashtag": "devops", "indices": [12, 18]}
    {"cashtag": "AAPL", "indices": [1, 5]}
    {"url": "https://example.com", "indices": [6, 25]}
    {"screen_name": "alice", "list_slug": "", "indices": [4, 9]}
    {"screen_name": "alice", "list_slug": "team-x", "indices": [4, 16]}

Plain mentions carry an empty ``list_slug`` so both mention shapes share one
schema. Output is deterministic (sorted keys).

Example:
    from chirp import extract
    from chirp.serialization import to_json, from_json

    entities = extract("cc @alice/team-x")
    assert from_json(to_json(entities)) == entities

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from collections.abc import Sequence
from typing import Any

from chirp.entities import Cashtag, Entity, Hashtag, Mention, MentionList, Span, Url


def to_dict(entity: Entity) -> dict[str, Any]:
    """Convert an entity to a JSON-compatible dict.

    Raises:
        TypeError: If ``entity`` is not one of the five entity classes.
    """
    indices = list(entity.indices)
    match entity:
        case Url(url=url):
            return {"url": url, "indices": indices}
        case Hashtag(hashtag=tag):
            return {"hashtag": tag, "indices": indices}
        case Cashtag(cashtag=tag):
            return {"cashtag": tag, "indices": indices}
        case Mention(screen_name=name):
            return {"screen_name": name, "list_slug": "", "indices": indices}
        case MentionList(screen_name=name, list_slug=slug):
            return {"screen_name": name, "list_slug": slug, "indices": indices}
    raise TypeError(f"cannot serialize {type(entity).__name__}")


def from_dict(data: dict[str, Any]) -> Entity:
    """Reconstruct a typed entity from a dict produced by :func:`to_dict`.

    The kind is inferred from which key is present.

    Raises:
        ValueError: If ``indices`` is missing or malformed, or no kind key
            is present.

    """
    raw = data.get("indices")
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        msg = f"Expected two-element 'indices', got {raw!r}"
        raise ValueError(msg)
    span = Span(int(raw[0]), int(raw[1]))

    if "url" in data:
        return Url(span, data["url"])
    if "hashtag" in data:
        return Hashtag(span, data["hashtag"])
    if "cashtag" in data:
        return Cashtag(span, data["cashtag"])
    if "screen_name" in data:
        slug = data.get("list_slug") or ""
        if slug:
            return MentionList(span, data["screen_name"], slug)
        return Mention(span, data["screen_name"])

    msg = f"Cannot determine entity kind from keys {sorted(data)!r}"
    raise ValueError(msg)


def to_json(entities: Sequence[Entity], *, indent: int | None = None) -> str:
    """Serialize a sequence of entities to a JSON array string."""
    return json.dumps([to_dict(e) for e in entities], sort_keys=True, indent=indent)


def from_json(data: str) -> tuple[Entity, ...]:
    """Deserialize entities from a JSON array string.

    Raises:
        ValueError: If the JSON is not an array of entity objects.
    """
    raw = json.loads(data)
    if not isinstance(raw, list):
        msg = f"Expected JSON array, got {type(raw).__name__}"
        raise ValueError(msg)
    return tuple(from_dict(item) for item in raw)


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
