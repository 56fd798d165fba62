"""Character set detection and transcoding.

Documents are normalised to UTF-8 before tokenizing. A charset declared in a
``<meta>`` element always wins. Without one, non-ASCII bytes are handed to
``chardet`` and the guess is kept only when it names one of the legacy
Japanese encodings in :data:`LEGACY_CHARSETS`.

Conversion goes through a :class:`Transcoder`. The default chain tries
Python's codecs first and falls back to Latin-1 byte doubling.
"""

from __future__ import annotations

import codecs
import logging
import re
from collections.abc import Iterable
from typing import Protocol

import chardet

from .errors import TranscodingUnavailable

logger = logging.getLogger(__name__)

# Short (Jcode style) encoding names to canonical charset names.
LEGACY_CHARSETS = {
    "jis": "ISO-2022-JP",
    "sjis": "Shift_JIS",
    "euc": "EUC-JP",
    "ucs2": "UCS2",
}

# Names Python's codec registry does not know under the same spelling.
CODEC_ALIASES = {
    "ucs2": "utf-16",
    "ucs-2": "utf-16",
    "windows-31j": "cp932",
    "x-sjis": "shift_jis",
}

LATIN1_CHARSETS = frozenset({"ISO-8859-1", "US-ASCII", "LATIN-1", "LATIN1"})

_META_HTTP_EQUIV_PATTERN = re.compile(
    r"""<meta \s ( (?: [^>]+\s )? http-equiv=['"]?Content-Type [^>]+ ) >""",
    re.DOTALL | re.VERBOSE | re.IGNORECASE,
)
_CONTENT_CHARSET_PATTERN = re.compile(r"""charset=['"]?([^'"\s/]+)""", re.IGNORECASE)
_META_CHARSET_PATTERN = re.compile(r"""<meta\s[^>]*?\bcharset=['"]?([^'"\s/>]+)""", re.IGNORECASE)
_NON_ASCII_PATTERN = re.compile(rb"[\x80-\xff]")


def find_meta_charset(text: str) -> str | None:
    """Return the charset declared by a ``<meta>`` element, if any."""
    for match in _META_HTTP_EQUIV_PATTERN.finditer(text):
        found = _CONTENT_CHARSET_PATTERN.search(match.group(1))
        if found:
            return found.group(1)
    match = _META_CHARSET_PATTERN.search(text)
    if match:
        return match.group(1)
    return None


def has_non_ascii(data: bytes) -> bool:
    return _NON_ASCII_PATTERN.search(data) is not None


def get_jcode_name(charset: str | None) -> str | None:
    """Map a charset name to its short Japanese family name.

    Returns one of ``utf8``, ``euc``, ``sjis``, ``jis``, ``ucs2`` or ``None``
    for anything outside those families.
    """
    if not charset:
        return None
    if re.fullmatch(r"utf-?8", charset, re.IGNORECASE):
        return "utf8"
    if re.fullmatch(r"euc.*jp", charset, re.IGNORECASE):
        return "euc"
    if re.fullmatch(r"shift.*jis|cp932|windows-31j|x-sjis", charset, re.IGNORECASE):
        return "sjis"
    if re.match(r"iso-2022-jp", charset, re.IGNORECASE):
        return "jis"
    if re.fullmatch(r"ucs-?2|utf-16(?:[bl]e)?", charset, re.IGNORECASE):
        return "ucs2"
    return None


def guess_legacy_charset(data: bytes, detector=None) -> str | None:
    """Guess a legacy Japanese charset for undeclared, non-ASCII ``data``.

    ``detector`` defaults to :func:`chardet.detect`; any callable returning a
    mapping with an ``encoding`` key will do.
    """
    detect = detector or chardet.detect
    encoding = detect(data).get("encoding")
    short = get_jcode_name(encoding)
    charset = LEGACY_CHARSETS.get(short) if short else None
    if charset:
        logger.debug("Guessed legacy charset %s (detector said %s)", charset, encoding)
    elif encoding:
        logger.debug("Ignoring non-legacy charset guess %s", encoding)
    return charset


class Transcoder(Protocol):
    def transcode(self, data: bytes, from_charset: str, to_charset: str) -> bytes: ...


class CodecTranscoder:
    """Full transcoder backed by Python's codec registry.

    Characters the target charset cannot represent become XML character
    references.
    """

    __slots__ = ()

    def transcode(self, data: bytes, from_charset: str, to_charset: str) -> bytes:
        source = self._lookup(from_charset, from_charset, to_charset)
        target = self._lookup(to_charset, from_charset, to_charset)
        if source.name == target.name:
            return data
        text = data.decode(source.name, errors="replace")
        return text.encode(target.name, errors="xmlcharrefreplace")

    @staticmethod
    def _lookup(charset, from_charset, to_charset):
        name = CODEC_ALIASES.get(charset.lower(), charset)
        try:
            return codecs.lookup(name)
        except LookupError as exc:
            raise TranscodingUnavailable(from_charset, to_charset, unknown=charset) from exc


class Latin1Transcoder:
    """Fallback that converts Latin-1 family bytes to UTF-8 by byte doubling."""

    __slots__ = ()

    def transcode(self, data: bytes, from_charset: str, to_charset: str) -> bytes:
        if from_charset.upper() not in LATIN1_CHARSETS or get_jcode_name(to_charset) != "utf8":
            raise TranscodingUnavailable(from_charset, to_charset)
        return _NON_ASCII_PATTERN.sub(_double_byte, data)


def _double_byte(match):
    byte = match.group()[0]
    return bytes((0xC0 | (byte >> 6), 0x80 | (byte & 0x3F)))


class FallbackTranscoder:
    """Try each transcoder in order until one accepts the charset pair."""

    __slots__ = ("transcoders",)

    def __init__(self, transcoders: Iterable[Transcoder] | None = None) -> None:
        if transcoders is None:
            transcoders = (CodecTranscoder(), Latin1Transcoder())
        self.transcoders = tuple(transcoders)

    def transcode(self, data: bytes, from_charset: str, to_charset: str) -> bytes:
        for transcoder in self.transcoders:
            try:
                return transcoder.transcode(data, from_charset, to_charset)
            except TranscodingUnavailable:
                logger.debug("%s cannot convert %s to %s", type(transcoder).__name__, from_charset, to_charset)
        raise TranscodingUnavailable(from_charset, to_charset)


def transcode(data: bytes, from_charset: str | None, to_charset: str | None, transcoder: Transcoder | None = None) -> bytes:
    """Convert ``data`` between charsets, skipping same-family pairs."""
    if not from_charset or not to_charset:
        return data
    if from_charset.upper() == to_charset.upper():
        return data
    jfrom = get_jcode_name(from_charset)
    if jfrom is not None and jfrom == get_jcode_name(to_charset):
        return data
    return (transcoder or FallbackTranscoder()).transcode(data, from_charset, to_charset)
