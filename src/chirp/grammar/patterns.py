"""Compiled token patterns.

Each pattern matches the syntactic shape of one token kind. Preceding-context
rules are single-character lookbehinds so a match never consumes text that
belongs to a neighbouring token; what may legally *follow* a token is decided
separately by the terminator probes in :mod:`chirp.grammar.rules`.

Named groups:
    VALID_URL: url, protocol, domain, port, path, query
    VALID_HASHTAG: sigil, tag
    VALID_CASHTAG: sigil, tag, suffix
    VALID_MENTION_OR_LIST: sigil, screen_name, list_slug
    VALID_REPLY: screen_name

Thread Safety:
    Compiled patterns are immutable and safe to share across threads.

"""

import re

from chirp.grammar.charsets import (
    AT_SIGNS,
    CASH_SIGNS,
    COUNTRY_TLDS,
    DOMAIN_CHARS,
    GENERIC_TLDS,
    HASH_SIGNS,
    HASHTAG_ALPHA,
    HASHTAG_ALPHANUMERIC,
    HASHTAG_DIGITS,
    LATIN_ACCENTS,
    MENTION_PRECEDING_INVALID,
    RETWEET_PRECEDING_INVALID,
    RTL_CHARACTERS,
    SPACES,
    URL_PATH_CHARS,
    URL_PATH_ENDING_CHARS,
    URL_PRECEDING_INVALID,
    URL_QUERY_CHARS,
    URL_QUERY_ENDING_CHARS,
)

_FLAGS = re.IGNORECASE

# =============================================================================
# URL
# =============================================================================

_SUBDOMAIN = rf"(?:(?:[{DOMAIN_CHARS}][{DOMAIN_CHARS}\-_]*)?[{DOMAIN_CHARS}]\.)"
_DOMAIN_NAME = rf"(?:(?:[{DOMAIN_CHARS}][{DOMAIN_CHARS}\-]*)?[{DOMAIN_CHARS}]\.)"

# A TLD must not run on into more alphanumerics ("example.comx").
_GENERIC_TLD = rf"(?:(?:{'|'.join(GENERIC_TLDS)})(?![0-9a-z]))"
_COUNTRY_TLD = rf"(?:(?:{'|'.join(COUNTRY_TLDS)})(?![0-9a-z]))"
_PUNYCODE = r"(?:xn--[0-9a-z]+)"

_DOMAIN = rf"(?:{_SUBDOMAIN}*{_DOMAIN_NAME}(?:{_GENERIC_TLD}|{_COUNTRY_TLD}|{_PUNYCODE}))"

_PATH_BALANCED_PARENS = rf"\([{URL_PATH_CHARS}]+\)"
_PATH_ENDING = rf"(?:[{URL_PATH_ENDING_CHARS}]|{_PATH_BALANCED_PARENS})"
_PATH = rf"(?:(?:[{URL_PATH_CHARS}]|{_PATH_BALANCED_PARENS})*{_PATH_ENDING})"

VALID_URL = re.compile(
    rf"(?<![{URL_PRECEDING_INVALID}])"
    r"(?P<url>"
    r"(?P<protocol>https?://)?"
    rf"(?P<domain>{_DOMAIN})"
    r"(?::(?P<port>[0-9]+))?"
    rf"(?P<path>/{_PATH}?)?"
    rf"(?P<query>\?[{URL_QUERY_CHARS}]*[{URL_QUERY_ENDING_CHARS}])?"
    r")",
    _FLAGS,
)

# Single-label domain under a country TLD ("twitter.co"), linked only with a path.
SHORT_COUNTRY_DOMAIN = re.compile(rf"{_DOMAIN_NAME}{_COUNTRY_TLD}", _FLAGS)

# t.co links carry no meaningful path characters past the slug.
VALID_TCO_URL = re.compile(r"https?://t\.co/[a-z0-9]+", _FLAGS)

# A character reference at the very end of a match, its ";" left outside.
TRAILING_CHAR_REF = re.compile(r"&(?:[a-z][a-z0-9]*|#[0-9]+|#x[0-9a-f]+)\Z", _FLAGS)

# Characters that may not end a path or a query, at the end of a cut match.
URL_PATH_TAIL = re.compile(rf"[^{URL_PATH_ENDING_CHARS}]+\Z", _FLAGS)
URL_QUERY_TAIL = re.compile(rf"[^{URL_QUERY_ENDING_CHARS}]+\Z", _FLAGS)

# =============================================================================
# Hashtag / Cashtag
# =============================================================================

VALID_HASHTAG = re.compile(
    rf"(?<![&{HASHTAG_ALPHANUMERIC}])"
    rf"(?P<sigil>[{HASH_SIGNS}])"
    rf"(?P<tag>[{HASHTAG_DIGITS}]*[{HASHTAG_ALPHA}][{HASHTAG_ALPHANUMERIC}]*)",
)

VALID_CASHTAG = re.compile(
    rf"(?:^|(?<=[{SPACES}]))"
    rf"(?P<sigil>[{CASH_SIGNS}])"
    r"(?P<tag>[a-z0-9]{1,6}(?P<suffix>[._][a-z]{1,2})?)",
    _FLAGS,
)

# =============================================================================
# Mention / List / Reply
# =============================================================================

VALID_MENTION_OR_LIST = re.compile(
    r"(?:"
    rf"(?<![{MENTION_PRECEDING_INVALID}])"
    rf"|(?<=(?<![{RETWEET_PRECEDING_INVALID}])RT)"
    rf"|(?<=(?<![{RETWEET_PRECEDING_INVALID}])RT:)"
    r")"
    rf"(?P<sigil>[{AT_SIGNS}])"
    r"(?P<screen_name>[a-z0-9_]{1,20})"
    r"(?:/(?P<list_slug>[a-z][a-z0-9_\-]{0,24}))?",
    _FLAGS,
)

VALID_REPLY = re.compile(
    rf"[{SPACES}]*[{AT_SIGNS}](?P<screen_name>[a-z0-9_]{{1,20}})",
    _FLAGS,
)

# =============================================================================
# Terminators and hints
# =============================================================================

END_HASHTAG = re.compile(rf"[{HASH_SIGNS}]|://")
END_CASHTAG = re.compile(rf"[{CASH_SIGNS}]|[a-z0-9_]|://", _FLAGS)
END_MENTION = re.compile(rf"[{AT_SIGNS}]|[{LATIN_ACCENTS}]|://", _FLAGS)

RTL_CHARS = re.compile(rf"[{RTL_CHARACTERS}]")
