"""Token grammar for Chirp.

- charsets: character class bodies and TLD tables
- patterns: compiled token patterns
- rules: scans yielding candidates, and following-context probes
"""

from chirp.grammar.rules import (
    Candidate,
    breaks_markup,
    cashtag_rejected,
    has_rtl,
    hashtag_rejected,
    is_short_country_domain,
    match_reply,
    mention_rejected,
    scan_cashtags,
    scan_hashtags,
    scan_mentions,
    scan_urls,
    tco_length,
    url_has_protocol,
)

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
