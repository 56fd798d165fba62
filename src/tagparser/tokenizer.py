"""Flat tag tokenizer.

The whole document is scanned with a single regular expression. Each match
is either a start/end tag (which becomes a :class:`TagRecord`) or a comment
or declaration (which is consumed and dropped). Anything the pattern cannot
match is skipped, so the tokenizer never raises on malformed markup. Text
before the first tag, a byte-order mark included, belongs to no record.
"""

import re

from .tokens import TagRecord

_ASCII_LOWER_TABLE = str.maketrans({chr(code): chr(code + 32) for code in range(65, 91)})

# Starts at "<" so that a failed attempt costs only the candidate tag, not a
# rescan of the text in front of it.
_TAG_PATTERN = re.compile(
    r"""
    <
    (?:
        (?P<closing> / )?
        (?P<name> [^/!<>\s"'=]+ )
        (?P<attrs> (?:"[^"]*"|'[^']*'|[^"'<>])+ )?
    |
        (?P<comment> !--.*?-- | ![^\-].*? )
    )
    >
    (?P<text> [^<]* )
    """,
    re.DOTALL | re.VERBOSE,
)


def ascii_lower(text):
    """Fold A-Z only; tag names, attribute keys and queries all use this."""
    return text.translate(_ASCII_LOWER_TABLE)


def iter_records(html):
    for match in _TAG_PATTERN.finditer(html or ""):
        if match.group("comment") is not None:
            continue
        is_closing = match.group("closing") is not None
        yield TagRecord(
            is_closing,
            ascii_lower(match.group("name")),
            None if is_closing else match.group("attrs"),
            match.group("text"),
        )


def tokenize(html):
    """Return the ordered list of tag records found in ``html``."""
    return list(iter_records(html))
