"""
Outbound page retrieval.

The handler only depends on the ``Fetcher`` and ``FetchResponse`` protocols.
``HttpxFetcher`` is the default implementation used by the server.
"""

import logging
from http import HTTPStatus
from typing import Optional, Protocol

import httpx

from .core.config import Settings
from .core.exceptions import AbortError, FetchError

logger = logging.getLogger(__name__)


class Headers(Protocol):
    def get(self, name: str) -> Optional[str]: ...


class FetchResponse(Protocol):
    ok: bool
    status: int
    status_text: str
    headers: Headers

    async def text(self) -> str: ...


class Fetcher(Protocol):
    async def fetch(self, url: str) -> FetchResponse:
        """Retrieve ``url`` with a plain GET.

        Raises:
            AbortError: If the request timed out or was aborted
            Exception: Any other transport failure
        """
        ...


def reason_phrase(status: int, reported: str = "") -> str:
    """Status text for a response, falling back to the standard phrase."""
    if reported:
        return reported
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


class HttpxResponse:
    """``FetchResponse`` backed by a fully read ``httpx.Response``."""

    def __init__(self, response: httpx.Response):
        self._response = response
        self.status = response.status_code
        self.ok = response.is_success
        self.status_text = reason_phrase(response.status_code, response.reason_phrase)
        self.headers = response.headers

    async def text(self) -> str:
        return self._response.text


class HttpxFetcher:
    """Fetcher using an ``httpx.AsyncClient`` per request."""

    def __init__(
        self,
        timeout_seconds: float = 30,
        follow_redirects: bool = True,
        proxy: Optional[str] = None,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout_seconds = timeout_seconds
        self.follow_redirects = follow_redirects
        self.proxy = proxy
        self.user_agent = user_agent
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "HttpxFetcher":
        return cls(
            timeout_seconds=settings.timeout_seconds,
            follow_redirects=settings.follow_redirects,
            proxy=settings.http_proxy,
            user_agent=settings.user_agent,
        )

    def _client_kwargs(self) -> dict:
        kwargs = {
            "timeout": self.timeout_seconds,
            "follow_redirects": self.follow_redirects,
        }
        if self.user_agent:
            kwargs["headers"] = {"User-Agent": self.user_agent}
        if self.transport is not None:
            kwargs["transport"] = self.transport
        elif self.proxy:
            kwargs["proxy"] = self.proxy
        return kwargs

    async def fetch(self, url: str) -> HttpxResponse:
        logger.debug("Fetching %s", url)
        try:
            async with httpx.AsyncClient(**self._client_kwargs()) as client:
                response = await client.get(url)
        except httpx.TimeoutException as e:
            logger.warning("Fetching %s timed out after %ss", url, self.timeout_seconds)
            raise AbortError(f"Request to {url} timed out") from e
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch {url}: {e}") from e

        logger.debug("Fetched %s: %d", url, response.status_code)
        return HttpxResponse(response)
