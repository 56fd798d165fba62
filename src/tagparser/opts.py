from .charset import FallbackTranscoder
from .fetch import Fetcher


class ParserOpts:
    __slots__ = ("fetcher", "guess_charset", "internal_encoding", "transcoder")

    def __init__(self, transcoder=None, fetcher=None, guess_charset=True, internal_encoding="utf-8"):
        self.transcoder = transcoder or FallbackTranscoder()
        # Created on first fetch so that parsing never opens an HTTP session.
        self.fetcher = fetcher
        self.guess_charset = bool(guess_charset)
        self.internal_encoding = internal_encoding

    def get_fetcher(self):
        if self.fetcher is None:
            self.fetcher = Fetcher()
        return self.fetcher
