"""
HTTP Fetcher

Async GET requests over httpx. Every fetch opens its own client with its own
timeout; non-2xx responses are returned, never raised, so callers can inspect
status codes and Location headers.
"""

import logging
from dataclasses import dataclass, field, asdict
from typing import Mapping
from urllib.parse import urljoin

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_REDIRECTS = 10


@dataclass(frozen=True)
class FetchResponse:
    url: str
    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status < 400 and bool(self.headers.get("location"))


@dataclass(frozen=True)
class RedirectHop:
    url: str
    status: int

    def to_dict(self) -> dict:
        return asdict(self)


class TooManyRedirectsError(Exception):
    """Raised when a redirect chain exceeds the configured hop limit."""

    def __init__(self, url: str, max_redirects: int):
        super().__init__(f"Exceeded {max_redirects} redirects starting at {url}")
        self.url = url
        self.max_redirects = max_redirects


class HTTPFetcher:
    """Performs GET requests with configurable headers, timeout and redirect handling."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        # Tests inject httpx.MockTransport here
        self._transport = transport

    async def fetch(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        follow_redirects: bool = True,
    ) -> FetchResponse:
        """GET a URL. Raises httpx.HTTPError subclasses on transport failures only."""
        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=follow_redirects,
            headers=dict(headers or {}),
            transport=self._transport,
        ) as client:
            response = await client.get(url)

        logger.debug(f"GET {url} -> {response.status_code}")
        return FetchResponse(
            url=str(response.url),
            status=response.status_code,
            headers={k.lower(): v for k, v in response.headers.items()},
            body=response.text,
        )


async def fetch_with_redirect_chain(
    fetcher: HTTPFetcher,
    url: str,
    headers: Mapping[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    max_redirects: int = DEFAULT_MAX_REDIRECTS,
) -> tuple[list[RedirectHop], FetchResponse]:
    """Follow redirects one hop at a time, recording each hop.

    Returns the chain (including the final, non-redirect response) and the
    final response.
    """
    chain: list[RedirectHop] = []
    current_url = url

    while True:
        response = await fetcher.fetch(
            current_url,
            headers=headers,
            timeout=timeout,
            follow_redirects=False,
        )
        chain.append(RedirectHop(url=current_url, status=response.status))

        if not response.is_redirect:
            return chain, response

        if len(chain) > max_redirects:
            raise TooManyRedirectsError(url, max_redirects)

        next_url = urljoin(current_url, response.headers["location"])
        logger.debug(f"Redirect {response.status}: {current_url} -> {next_url}")
        current_url = next_url
