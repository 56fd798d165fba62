from .charset import CodecTranscoder, FallbackTranscoder, Latin1Transcoder, Transcoder
from .document import Document, by_attribute, by_tag_name, parse
from .element import Element
from .errors import EmptyDocument, FetchFailed, FileUnreadable, TagParserError, TranscodingUnavailable
from .fetch import Fetcher, FetchResponse
from .opts import ParserOpts
from .tokenizer import tokenize
from .tokens import TagRecord

__version__ = "0.1.0"

__all__ = [
    "CodecTranscoder",
    "Document",
    "Element",
    "EmptyDocument",
    "FallbackTranscoder",
    "FetchFailed",
    "FetchResponse",
    "Fetcher",
    "FileUnreadable",
    "Latin1Transcoder",
    "ParserOpts",
    "TagParserError",
    "TagRecord",
    "Transcoder",
    "TranscodingUnavailable",
    "by_attribute",
    "by_tag_name",
    "parse",
    "tokenize",
]
