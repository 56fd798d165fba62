"""Lazy element views over a flat record sequence."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from .entities import xml_unescape
from .tokenizer import ascii_lower

if TYPE_CHECKING:
    from .document import Document
    from .tokens import TagRecord

_ATTR_PATTERN = re.compile(
    r"""
    (?P<key> [^\s="']+ )
    (?P<assign> \s*=\s*
        (?:
            " (?P<double> .*? ) "
        |   ' (?P<single> .*? ) '
        |   (?P<bare> [^'"\s=]+ ) ['"]*
        )
    )?
    """,
    re.DOTALL | re.VERBOSE,
)


def parse_attributes(raw: str | None) -> dict[str, str]:
    """Parse the attribute text of a start tag.

    A key without ``=value`` maps to itself (``disabled`` becomes
    ``{"disabled": "disabled"}``). Only explicit values are unescaped.
    """
    attrs: dict[str, str] = {}
    if not raw:
        return attrs
    for match in _ATTR_PATTERN.finditer(raw):
        key = match.group("key")
        if match.group("assign"):
            value = match.group("double")
            if value is None:
                value = match.group("single")
            if value is None:
                value = match.group("bare")
            attrs[ascii_lower(key)] = xml_unescape(value)
        else:
            attrs[ascii_lower(key)] = key
    return attrs


class Element:
    """A view of one tag record.

    Holds the record sequence that was current when the element was created,
    so a later re-parse of the document does not shift what it points to.
    Attributes and inner text are computed on first access and stored on the
    record; every element for the same record shares the result.
    """

    __slots__ = ("_records", "document", "index")

    def __init__(self, document: Document, index: int, records: tuple[TagRecord, ...] | None = None) -> None:
        self.document = document
        self.index = index
        self._records = records if records is not None else document.records

    @property
    def record(self) -> TagRecord:
        return self._records[self.index]

    @property
    def tag_name(self) -> str:
        return self.record.tag_name

    @property
    def is_closing(self) -> bool:
        return self.record.is_closing

    @property
    def is_self_closing(self) -> bool:
        return self.record.is_self_closing

    @property
    def id(self) -> str | None:
        return self.get_attribute("id")

    @property
    def attributes(self) -> dict[str, str]:
        return dict(self._parsed_attributes())

    def _parsed_attributes(self) -> dict[str, str]:
        record = self.record
        if record.parsed_attributes is None:
            record.parsed_attributes = parse_attributes(record.raw_attributes)
        return record.parsed_attributes

    def get_attribute(self, key: str) -> str | None:
        return self._parsed_attributes().get(ascii_lower(key))

    def has_attribute(self, key: str) -> bool:
        return ascii_lower(key) in self._parsed_attributes()

    @property
    def inner_text(self) -> str | None:
        """Text from this tag up to the next tag with the same name.

        Nesting is not tracked: ``<div><div>x</div></div>`` stops at the inner
        ``<div>``. Closing and self-closing tags have no inner text.
        """
        record = self.record
        if record.cached_inner_text is not None:
            return record.cached_inner_text
        if record.is_closing or record.is_self_closing:
            return None

        records = self._records
        last = len(records) - 1
        fragments = []
        cur = self.index
        while cur < last:
            fragments.append(records[cur].trailing_text)
            if records[cur + 1].tag_name == record.tag_name:
                break
            cur += 1

        text = "".join(fragment for fragment in fragments if fragment).strip()
        record.cached_inner_text = xml_unescape(text)
        return record.cached_inner_text

    def __eq__(self, other):
        if not isinstance(other, Element):
            return NotImplemented
        return self._records is other._records and self.index == other.index

    def __hash__(self):
        return hash((id(self._records), self.index))

    def __repr__(self):
        return f"<Element {self.tag_name} #{self.index}>"
