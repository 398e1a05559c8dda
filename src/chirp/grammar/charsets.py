"""Character classes for the token grammar.

Every ``*_CHARS``-style constant here is the *body* of a regex character
class (the text that goes between ``[`` and ``]``), so classes combine by
concatenation:

    from chirp.grammar.charsets import LATIN_ACCENTS, SPACES

    pattern = rf"[{SPACES}{LATIN_ACCENTS}]"

Non-ASCII classes are declared as codepoint tables and rendered to ``\\u``
escapes, and the Unicode-wide hashtag classes are derived once at import
from ``unicodedata`` categories rather than hand-maintained range tables.

Thread Safety:
    All values are immutable strings and frozensets built at import time.

"""

import sys
import unicodedata
from collections.abc import Callable, Iterable

# Codepoints above this are unassigned, private use or tag characters.
_SCAN_LIMIT = min(sys.maxunicode, 0x3FFFF)


def _escape(cp: int) -> str:
    if cp <= 0xFFFF:
        return f"\\u{cp:04x}"
    return f"\\U{cp:08x}"


def _render(start: int, end: int) -> str:
    if start == end:
        return _escape(start)
    return f"{_escape(start)}-{_escape(end)}"


def codepoints(*items: int | tuple[int, int]) -> str:
    """Render single codepoints and inclusive ``(start, end)`` pairs as a class body.

    Example:
        >>> codepoints(0x20, (0x2000, 0x200A))
        '\\\\u0020\\\\u2000-\\\\u200a'
    """
    parts: list[str] = []
    for item in items:
        if isinstance(item, tuple):
            parts.append(_render(*item))
        else:
            parts.append(_render(item, item))
    return "".join(parts)


def _category_ranges(predicate: Callable[[str], bool]) -> Iterable[tuple[int, int]]:
    start = None
    prev = 0
    for cp in range(_SCAN_LIMIT + 1):
        if predicate(unicodedata.category(chr(cp))):
            if start is None:
                start = cp
            prev = cp
        elif start is not None:
            yield start, prev
            start = None
    if start is not None:
        yield start, prev


def category_class(predicate: Callable[[str], bool]) -> str:
    """Class body of every codepoint whose general category satisfies ``predicate``."""
    return codepoints(*_category_ranges(predicate))


# Unicode whitespace: tab..CR, space, NEL, NBSP, Ogham space mark, Mongolian
# vowel separator, the En quad..hair space block, line/paragraph separators,
# narrow NBSP, medium math space and ideographic space.
SPACES = codepoints(
    (0x0009, 0x000D), 0x0020, 0x0085, 0x00A0, 0x1680, 0x180E,
    (0x2000, 0x200A), 0x2028, 0x2029, 0x202F, 0x205F, 0x3000,
)

# Directional overrides, BOM and the non-characters U+FFFE/U+FFFF.
INVALID_CHARACTERS = codepoints((0x202A, 0x202E), 0xFEFF, 0xFFFE, 0xFFFF)

# Latin-1 supplement, Latin Extended-A/B, IPA letters used in African
# orthographies, combining diacritics and Latin Extended Additional.
LATIN_ACCENTS = codepoints(
    (0x00C0, 0x00D6), (0x00D8, 0x00F6), (0x00F8, 0x00FF), (0x0100, 0x024F),
    0x0253, 0x0254, 0x0256, 0x0257, 0x0259, 0x025B, 0x0263, 0x0268, 0x026F,
    0x0272, 0x0289, 0x028B, 0x02BB, (0x0300, 0x036F), (0x1E00, 0x1EFF),
)

# Hebrew, Arabic, Arabic Supplement and Arabic Presentation Forms-B.
RTL_CHARACTERS = codepoints(
    (0x0590, 0x05FF), (0x0600, 0x06FF), (0x0750, 0x077F), (0xFE70, 0xFEFF),
)

# Connectors allowed inside a hashtag: underscore, middle dot, katakana
# middle dot, ditto mark and the Tibetan tsheg pair.
HASHTAG_CONNECTORS = codepoints(0x005F, 0x00B7, 0x30FB, 0x3003, 0x0F0B, 0x0F0C)

# ASCII sign followed by its full-width form.
HASH_SIGNS = "#" + codepoints(0xFF03)
CASH_SIGNS = r"\$" + codepoints(0xFF04)
AT_SIGNS = "@" + codepoints(0xFF20)

# Letters (L*) and combining marks (M*) from every script.
HASHTAG_LETTERS = category_class(lambda cat: cat[0] in "LM")

# Decimal digits (Nd) from every script.
HASHTAG_DIGITS = category_class(lambda cat: cat == "Nd")

HASHTAG_ALPHA = HASHTAG_LETTERS + HASHTAG_CONNECTORS
HASHTAG_ALPHANUMERIC = HASHTAG_ALPHA + HASHTAG_DIGITS

# An @ right after one of these is part of a longer word, not a mention.
MENTION_PRECEDING_INVALID = r"a-z0-9_!#\$%&*" + AT_SIGNS

# An "RT" or "RT:" retweet prefix may sit flush against the @ when nothing
# word-like precedes it ("RT@alice").
RETWEET_PRECEDING_INVALID = r"a-z0-9_+~.\-"

# A URL cannot start right after one of these.
URL_PRECEDING_INVALID = (
    r"\-/\"'!=a-z0-9_" + AT_SIGNS + r"\$" + HASH_SIGNS + r"." + INVALID_CHARACTERS
)

DOMAIN_CHARS = r"0-9a-z" + LATIN_ACCENTS

URL_PATH_CHARS = r"a-z0-9!\*;:=\+,.\$/%#\[\]\-_~&|@" + LATIN_ACCENTS
URL_PATH_ENDING_CHARS = r"a-z0-9=_#/\+\-" + LATIN_ACCENTS
URL_QUERY_CHARS = r"a-z0-9!?\*'\(\);:&=\+\$/%#\[\]\-_.,~|@"
URL_QUERY_ENDING_CHARS = r"a-z0-9_&=#/"

QUOTES: frozenset[str] = frozenset("\"'")

# Generic top-level domains recognized without further qualification.
GENERIC_TLDS: tuple[str, ...] = (
    "aero", "asia", "biz", "cat", "com", "coop", "edu", "gov", "info", "int",
    "jobs", "mil", "mobi", "museum", "name", "net", "org", "pro", "tel",
    "travel", "xxx",
)

# Two-letter country-code top-level domains.
COUNTRY_TLDS: tuple[str, ...] = (
    "ac", "ad", "ae", "af", "ag", "ai", "al", "am", "an", "ao", "aq", "ar",
    "as", "at", "au", "aw", "ax", "az", "ba", "bb", "bd", "be", "bf", "bg",
    "bh", "bi", "bj", "bm", "bn", "bo", "br", "bs", "bt", "bv", "bw", "by",
    "bz", "ca", "cc", "cd", "cf", "cg", "ch", "ci", "ck", "cl", "cm", "cn",
    "co", "cr", "cs", "cu", "cv", "cx", "cy", "cz", "dd", "de", "dj", "dk",
    "dm", "do", "dz", "ec", "ee", "eg", "eh", "er", "es", "et", "eu", "fi",
    "fj", "fk", "fm", "fo", "fr", "ga", "gb", "gd", "ge", "gf", "gg", "gh",
    "gi", "gl", "gm", "gn", "gp", "gq", "gr", "gs", "gt", "gu", "gw", "gy",
    "hk", "hm", "hn", "hr", "ht", "hu", "id", "ie", "il", "im", "in", "io",
    "iq", "ir", "is", "it", "je", "jm", "jo", "jp", "ke", "kg", "kh", "ki",
    "km", "kn", "kp", "kr", "kw", "ky", "kz", "la", "lb", "lc", "li", "lk",
    "lr", "ls", "lt", "lu", "lv", "ly", "ma", "mc", "md", "me", "mg", "mh",
    "mk", "ml", "mm", "mn", "mo", "mp", "mq", "mr", "ms", "mt", "mu", "mv",
    "mw", "mx", "my", "mz", "na", "nc", "ne", "nf", "ng", "ni", "nl", "no",
    "np", "nr", "nu", "nz", "om", "pa", "pe", "pf", "pg", "ph", "pk", "pl",
    "pm", "pn", "pr", "ps", "pt", "pw", "py", "qa", "re", "ro", "rs", "ru",
    "rw", "sa", "sb", "sc", "sd", "se", "sg", "sh", "si", "sj", "sk", "sl",
    "sm", "sn", "so", "sr", "ss", "st", "su", "sv", "sx", "sy", "sz", "tc",
    "td", "tf", "tg", "th", "tj", "tk", "tl", "tm", "tn", "to", "tp", "tr",
    "tt", "tv", "tw", "tz", "ua", "ug", "uk", "us", "uy", "uz", "va", "vc",
    "ve", "vg", "vi", "vn", "vu", "wf", "ws", "ye", "yt", "za", "zm", "zw",
)
