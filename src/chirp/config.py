"""ContextVar-based style configuration for Chirp.

Style covers everything that shapes generated markup and nothing that shapes
matching: CSS classes, URL bases, ``rel`` flags and ``target``.

A StyleConfig is frozen. Pass one to ``annotate(style=...)``, give one to an
``Autolinker``, or install one for the current context; a call snapshots the
config once, so nothing a concurrent caller does can change it mid-call.

Usage:
    # Per call
    annotate("#python", style=StyleConfig(hashtag_class="tag"))

    # Derived copies
    base = StyleConfig(nofollow=False)
    plain = base.replace(external=False, target="")

    # Context-wide default
    with style_config_context(StyleConfig(url_base_user="https://example.com/")):
        annotate("@alice")

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage,
    so no locks are needed and configs set in one thread never leak into another.

"""

import dataclasses
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Iterator

from chirp.errors import ConfigurationError

_STRIPPED_FIELDS = (
    "url_class",
    "username_class",
    "list_class",
    "hashtag_class",
    "cashtag_class",
    "target",
)

_URL_BASE_FIELDS = (
    "url_base_user",
    "url_base_list",
    "url_base_hash",
    "url_base_cash",
)


@dataclass(frozen=True, slots=True)
class StyleConfig:
    """Immutable markup configuration.

    Attributes:
        url_class: CSS class for URL links
        username_class: CSS class for @mention links
        list_class: CSS class for @user/list links
        hashtag_class: CSS class for hashtag links
        cashtag_class: CSS class for cashtag links
        url_base_user: Prefix for mention hrefs (screen name is appended)
        url_base_list: Prefix for list hrefs ("name/slug" is appended)
        url_base_hash: Prefix for hashtag hrefs (tag without # is appended)
        url_base_cash: Prefix for cashtag hrefs (tag without $ is appended)
        nofollow: Add "nofollow" to the rel attribute
        external: Add "external" to the rel attribute
        target: Value of the target attribute; empty omits it

    Class names and target are stripped of surrounding whitespace. An empty
    class omits the class attribute. URL bases must be non-empty.

    """

    url_class: str = "url"
    username_class: str = "username"
    list_class: str = "list"
    hashtag_class: str = "hashtag"
    cashtag_class: str = "cashtag"
    url_base_user: str = "https://twitter.com/"
    url_base_list: str = "https://twitter.com/"
    url_base_hash: str = "https://twitter.com/#!/search?q=%23"
    url_base_cash: str = "https://twitter.com/#!/search?q=%24"
    nofollow: bool = True
    external: bool = True
    target: str = "_blank"

    def __post_init__(self) -> None:
        for name in _STRIPPED_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigurationError(name, f"expected str, got {type(value).__name__}")
            object.__setattr__(self, name, value.strip())
        for name in _URL_BASE_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ConfigurationError(name, "URL base must be a non-empty string")

    @property
    def rel(self) -> str:
        """Space-joined rel value; empty when both flags are off."""
        parts = []
        if self.external:
            parts.append("external")
        if self.nofollow:
            parts.append("nofollow")
        return " ".join(parts)

    def replace(self, **changes: Any) -> "StyleConfig":
        """Return a copy with ``changes`` applied (validated like the constructor)."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "StyleConfig":
        """Create StyleConfig from dictionary.

        Only includes keys that are valid StyleConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = StyleConfig.from_dict({
            ...     "hashtag_class": "tag",
            ...     "nofollow": False,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.hashtag_class
            'tag'

        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: StyleConfig = StyleConfig()

_style_config: ContextVar[StyleConfig] = ContextVar(
    "style_config",
    default=_DEFAULT_CONFIG,
)


def get_style_config() -> StyleConfig:
    """Get the style configuration active in this context."""
    return _style_config.get()


def set_style_config(config: StyleConfig) -> None:
    """Set style configuration for the current context.

    Only affects the current thread's context. Other threads are unaffected.
    """
    _style_config.set(config)


def reset_style_config() -> None:
    """Reset the current context to the default configuration."""
    _style_config.set(_DEFAULT_CONFIG)


@contextmanager
def style_config_context(config: StyleConfig) -> Iterator[None]:
    """Context manager for temporary style changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with style_config_context(StyleConfig(target="")):
        ...     get_style_config().target
        ''
        >>> get_style_config().target
        '_blank'

    """
    token = _style_config.set(config)
    try:
        yield
    finally:
        _style_config.reset(token)


__all__ = [
    "StyleConfig",
    "get_style_config",
    "reset_style_config",
    "set_style_config",
    "style_config_context",
]
