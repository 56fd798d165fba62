"""Document: the parsed record sequence and its query surface.

Every query is a linear scan over the records. :meth:`Document.find_all`
and :meth:`Document.find_first` share one predicate-driven scan, and each
``get_elements_by_*`` method has a ``get_element_by_*`` twin that stops at
the first match.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable, Iterator
from pathlib import Path

from .charset import find_meta_charset, guess_legacy_charset, has_non_ascii, transcode
from .element import Element
from .errors import EmptyDocument, FileUnreadable
from .opts import ParserOpts
from .tokenizer import ascii_lower, tokenize

logger = logging.getLogger(__name__)

Predicate = Callable[[Element], bool]

_URL_PATTERN = re.compile(r"^https?://\w")
_PATH_FORBIDDEN_PATTERN = re.compile(r"[<>|]")
_MARKUP_PATTERN = re.compile(r"<.*>")


def by_tag_name(name: str) -> Predicate:
    tag_name = ascii_lower(name)

    def predicate(element: Element) -> bool:
        return not element.is_closing and element.tag_name == tag_name

    return predicate


def by_attribute(key: str, value: str) -> Predicate:
    key = ascii_lower(key)

    def predicate(element: Element) -> bool:
        if element.is_closing or not element.has_attribute(key):
            return False
        return element.get_attribute(key) == value

    return predicate


class Document:
    """A tolerant, flat HTML document.

    ``source`` may be a URL, a path to an existing file, or markup (``str`` or
    ``bytes``). A string that is none of these leaves the document empty.
    Extra keyword arguments are passed to :meth:`fetch` for URLs.
    """

    __slots__ = ("charset", "modified", "opts", "records")

    def __init__(self, source: str | bytes | os.PathLike | None = None, *, opts: ParserOpts | None = None, **fetch_params) -> None:
        self.opts = opts or ParserOpts()
        self.records = ()
        self.charset = None
        self.modified = None

        if source is None:
            return
        if isinstance(source, (bytes, bytearray)):
            self.parse(bytes(source))
        elif isinstance(source, os.PathLike):
            self.open(source)
        elif _URL_PATTERN.match(source):
            self.fetch(source, **fetch_params)
        elif not _PATH_FORBIDDEN_PATTERN.search(source) and os.path.isfile(source):
            self.open(source)
        elif _MARKUP_PATTERN.search(source):
            self.parse(source)
        else:
            logger.debug("Source is neither URL, file nor markup; document left empty")

    def fetch(self, url: str, **params) -> int | None:
        """Fetch ``url`` and parse it.

        Returns ``None`` without parsing when the server answers
        ``304 Not Modified``.
        """
        response = self.opts.get_fetcher().fetch(url, **params)
        if response.not_modified:
            logger.info("Not modified: %s", url)
            return None
        if response.last_modified is not None:
            self.modified = _truncate_to_minute(response.last_modified)
        return self.parse(response.content)

    def open(self, path: str | os.PathLike) -> int:
        """Read and parse a local file."""
        path = Path(path)
        try:
            data = path.read_bytes()
            mtime = path.stat().st_mtime
        except OSError as exc:
            raise FileUnreadable(str(path), exc.strerror) from exc
        self.modified = _truncate_to_minute(int(mtime))
        return self.parse(data)

    def parse(self, source: str | bytes) -> int:
        """Tokenize ``source``, replacing any previously parsed records.

        ``bytes`` are transcoded to the internal encoding first, using the
        declared or guessed charset. ``str`` input is already decoded, so its
        declared charset is only recorded. Returns the number of records.
        """
        if isinstance(source, str):
            text = source
            charset = find_meta_charset(text)
        else:
            text, charset = self._decode(source)

        # The first charset ever detected sticks across re-parses.
        self.charset = self.charset or charset

        records = tuple(tokenize(text))
        if not records:
            raise EmptyDocument()
        logger.debug("Parsed %d tag records (charset=%s)", len(records), charset)
        self.records = records
        return len(records)

    def _decode(self, data: bytes) -> tuple[str, str | None]:
        opts = self.opts
        # Latin-1 maps every byte to one character, which is enough to find an
        # ASCII <meta> declaration in any ASCII-compatible encoding.
        charset = find_meta_charset(data.decode("latin-1"))
        if charset:
            logger.debug("Declared charset: %s", charset)
        elif opts.guess_charset and has_non_ascii(data):
            charset = guess_legacy_charset(data)
        if charset:
            data = transcode(data, charset, opts.internal_encoding, opts.transcoder)
        return data.decode(opts.internal_encoding, errors="replace"), charset

    def __len__(self) -> int:
        return len(self.records)

    def _scan(self, predicate: Predicate) -> Iterator[Element]:
        records = self.records
        for index in range(len(records)):
            element = Element(self, index, records)
            if predicate(element):
                yield element

    def find_all(self, predicate: Predicate) -> list[Element]:
        return list(self._scan(predicate))

    def find_first(self, predicate: Predicate) -> Element | None:
        return next(self._scan(predicate), None)

    def get_elements_by_tag_name(self, name: str) -> list[Element]:
        return self.find_all(by_tag_name(name))

    def get_element_by_tag_name(self, name: str) -> Element | None:
        return self.find_first(by_tag_name(name))

    def get_elements_by_attribute(self, key: str, value: str) -> list[Element]:
        return self.find_all(by_attribute(key, value))

    def get_element_by_attribute(self, key: str, value: str) -> Element | None:
        return self.find_first(by_attribute(key, value))

    def get_elements_by_class_name(self, class_name: str) -> list[Element]:
        return self.get_elements_by_attribute("class", class_name)

    def get_element_by_class_name(self, class_name: str) -> Element | None:
        return self.get_element_by_attribute("class", class_name)

    def get_elements_by_name(self, name: str) -> list[Element]:
        return self.get_elements_by_attribute("name", name)

    def get_element_by_name(self, name: str) -> Element | None:
        return self.get_element_by_attribute("name", name)

    def get_element_by_id(self, element_id: str) -> Element | None:
        return self.get_element_by_attribute("id", element_id)

    def __repr__(self):
        return f"<Document records={len(self.records)} charset={self.charset!r}>"


def _truncate_to_minute(epoch: int) -> int:
    return epoch - epoch % 60


def parse(source: str | bytes, *, opts: ParserOpts | None = None) -> Document:
    """Parse markup into a :class:`Document`, raising :class:`EmptyDocument` if no tags are found."""
    document = Document(opts=opts)
    document.parse(source)
    return document
