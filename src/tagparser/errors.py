"""Exception types raised by tagparser."""

from __future__ import annotations


class TagParserError(Exception):
    """Base class for every error raised while loading or parsing a document."""


class EmptyDocument(TagParserError, ValueError):
    """Tokenizing produced no tag records (binary or non-HTML input)."""

    def __init__(self, message: str = "Null HTML document.") -> None:
        super().__init__(message)


class FetchFailed(TagParserError):
    """A remote document could not be retrieved."""

    def __init__(self, url: str, message: str | None = None, status: int | None = None) -> None:
        self.url = url
        self.status = status
        if message is None:
            message = f"HTTP {status}" if status is not None else "request failed"
        super().__init__(f"{message}: {url}")


class FileUnreadable(TagParserError, OSError):
    """A local document could not be opened or read."""

    def __init__(self, path: str, reason: str | None = None) -> None:
        self.path = path
        super().__init__(f"{reason or 'cannot read file'} - {path}")

    def __str__(self) -> str:
        return self.args[0]


class TranscodingUnavailable(TagParserError, LookupError):
    """No transcoder can convert between the requested character sets."""

    def __init__(self, from_charset: str, to_charset: str, unknown: str | None = None) -> None:
        self.from_charset = from_charset
        self.to_charset = to_charset
        self.unknown = unknown
        message = f"no transcoder available: {from_charset} to {to_charset}"
        if unknown is not None:
            message += f" (unknown charset {unknown})"
        super().__init__(message)
