"""
Chirp: entity extraction and autolinking for short social posts

Finds URLs, @mentions (and @user/list mentions), #hashtags and $cashtags in
free-form Unicode text. Returns them as typed entities with exact codepoint
offsets, or rewrites the text with each token wrapped in an anchor.
Pure functions over immutable configuration, with no runtime dependencies.

Quick Start:
    >>> from chirp import extract, annotate
    >>> [(type(e).__name__, e.value) for e in extract("cc @alice/team-x")]
    [('MentionList', 'alice/team-x')]

    >>> annotate("$AAPL up 2%")
    '<a href="https://twitter.com/#!/search?q=%24AAPL" title="$AAPL" class="cashtag" rel="external nofollow" target="_blank">$AAPL</a> up 2%'

    >>> # Custom markup
    >>> from chirp import Autolinker, StyleConfig
    >>> linker = Autolinker(StyleConfig(url_base_user="https://example.social/@"))
    >>> html = linker("hi @bob")

Installation:
    pip install chirp                # Core (zero deps)
    pip install chirp[test]          # + pytest, hypothesis
"""

from chirp.autolink import AnnotateMode, Autolinker, annotate
from chirp.config import (
    StyleConfig,
    get_style_config,
    reset_style_config,
    set_style_config,
    style_config_context,
)
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
from chirp.errors import ChirpError, ConfigurationError, EncodingError
from chirp.extractor import Extractor, extract
from chirp.serialization import from_dict, from_json, to_dict, to_json
from chirp.utils.text import EscapeMode

__version__ = "0.1.0"

__all__ = [
    # Core API
    "annotate",
    "extract",
    "Autolinker",
    "Extractor",
    "AnnotateMode",
    "EscapeMode",
    # Configuration
    "StyleConfig",
    "get_style_config",
    "set_style_config",
    "reset_style_config",
    "style_config_context",
    # Entities
    "Entity",
    "EntityKind",
    "Span",
    "Url",
    "Hashtag",
    "Cashtag",
    "Mention",
    "MentionList",
    # Errors
    "ChirpError",
    "EncodingError",
    "ConfigurationError",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Version
    "__version__",
]
