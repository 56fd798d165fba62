"""HTTP retrieval of remote documents.

:class:`Fetcher` wraps a :class:`requests.Session` configured with a retry
adapter. It returns raw bytes so that charset handling stays with the
document, never with ``requests``' own text decoding.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from email.utils import formatdate, parsedate_to_datetime

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import FetchFailed

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "tagparser/0.1 (+https://pypi.org/project/tagparser/)"
DEFAULT_TIMEOUT = 30


@dataclass(frozen=True, slots=True)
class FetchResponse:
    url: str
    status: int
    content: bytes = b""
    last_modified: int | None = None
    etag: str | None = None

    @property
    def not_modified(self) -> bool:
        return self.status == 304


def parse_http_date(value: str | None) -> int | None:
    """Convert an HTTP date header to epoch seconds, or ``None`` if unparsable."""
    if not value:
        return None
    try:
        return int(parsedate_to_datetime(value).timestamp())
    except (TypeError, ValueError):
        logger.debug("Ignoring malformed HTTP date %r", value)
        return None


class Fetcher:
    __slots__ = ("retries", "session", "timeout", "user_agent")

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        retries: int = 3,
        session: requests.Session | None = None,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self.retries = retries
        self.session = session if session is not None else self._create_session()

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        retry_strategy = Retry(
            total=self.retries,
            backoff_factor=0.5,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET", "HEAD"],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update(
            {
                "User-Agent": self.user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            }
        )
        return session

    def fetch(self, url: str, *, if_modified_since: int | None = None, etag: str | None = None) -> FetchResponse:
        """GET ``url``.

        A ``304 Not Modified`` answer to the conditional headers is returned as
        a response with ``not_modified`` set. Transport errors and any status
        of 400 or above raise :class:`FetchFailed`.
        """
        headers = {}
        if if_modified_since is not None:
            headers["If-Modified-Since"] = formatdate(if_modified_since, usegmt=True)
        if etag:
            headers["If-None-Match"] = etag

        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise FetchFailed(url, str(exc)) from exc

        logger.debug("GET %s -> %s", url, response.status_code)
        if response.status_code >= 400:
            raise FetchFailed(url, status=response.status_code)

        return FetchResponse(
            url=url,
            status=response.status_code,
            content=response.content if response.status_code != 304 else b"",
            last_modified=parse_http_date(response.headers.get("Last-Modified")),
            etag=response.headers.get("ETag"),
        )
