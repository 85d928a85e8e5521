import httpx
import pytest

from html_md_server.core.config import Settings
from html_md_server.core.exceptions import AbortError, FetchError
from html_md_server.fetcher import HttpxFetcher, reason_phrase


def fetcher_for(handler, **kwargs) -> HttpxFetcher:
    return HttpxFetcher(transport=httpx.MockTransport(handler), **kwargs)


class TestHttpxFetcher:
    @pytest.mark.asyncio
    async def test_successful_fetch(self):
        def handler(request):
            return httpx.Response(
                200,
                text="<h1>Test</h1>",
                headers={"Content-Type": "text/html; charset=utf-8"},
            )

        response = await fetcher_for(handler).fetch("https://example.com/")

        assert response.ok is True
        assert response.status == 200
        assert response.status_text == "OK"
        assert response.headers.get("content-type") == "text/html; charset=utf-8"
        assert await response.text() == "<h1>Test</h1>"

    @pytest.mark.asyncio
    async def test_plain_get_without_body(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200)

        await fetcher_for(handler, user_agent="test-agent/1.0").fetch(
            "https://example.com/page?x=1"
        )

        (request,) = seen
        assert request.method == "GET"
        assert str(request.url) == "https://example.com/page?x=1"
        assert request.content == b""
        assert request.headers["User-Agent"] == "test-agent/1.0"

    @pytest.mark.asyncio
    async def test_non_success_status(self):
        def handler(request):
            return httpx.Response(404, text="")

        response = await fetcher_for(handler).fetch("https://example.com/notfound")

        assert response.ok is False
        assert response.status == 404
        assert response.status_text == "Not Found"

    @pytest.mark.asyncio
    async def test_reported_reason_phrase_is_kept(self):
        def handler(request):
            return httpx.Response(503, extensions={"reason_phrase": b"Back Soon"})

        response = await fetcher_for(handler).fetch("https://example.com/")
        assert response.status_text == "Back Soon"

    @pytest.mark.asyncio
    async def test_follows_redirects(self):
        def handler(request):
            if request.url.path == "/old":
                return httpx.Response(301, headers={"Location": "https://example.com/new"})
            return httpx.Response(200, text="moved", headers={"Content-Type": "text/html"})

        response = await fetcher_for(handler).fetch("https://example.com/old")

        assert response.status == 200
        assert await response.text() == "moved"

    @pytest.mark.asyncio
    async def test_redirects_not_followed_when_disabled(self):
        def handler(request):
            return httpx.Response(302, headers={"Location": "https://example.com/new"})

        response = await fetcher_for(handler, follow_redirects=False).fetch(
            "https://example.com/old"
        )
        assert response.ok is False
        assert response.status == 302

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exception_class", [httpx.ReadTimeout, httpx.ConnectTimeout, httpx.PoolTimeout]
    )
    async def test_timeout_raises_abort_error(self, exception_class):
        def handler(request):
            raise exception_class("timed out", request=request)

        with pytest.raises(AbortError):
            await fetcher_for(handler).fetch("https://slow.example.com/")

    @pytest.mark.asyncio
    async def test_connection_failure_raises_fetch_error(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        with pytest.raises(FetchError) as exc_info:
            await fetcher_for(handler).fetch("https://down.example.com/")

        assert "Connection refused" in str(exc_info.value)
        assert not isinstance(exc_info.value, AbortError)

    def test_from_settings(self):
        settings = Settings(
            _env_file=None,
            timeout_seconds=5,
            follow_redirects=False,
            http_proxy="http://proxy:3128",
            user_agent="custom/2.0",
        )
        fetcher = HttpxFetcher.from_settings(settings)

        assert fetcher.timeout_seconds == 5
        assert fetcher.follow_redirects is False
        assert fetcher.proxy == "http://proxy:3128"
        assert fetcher.user_agent == "custom/2.0"


class TestReasonPhrase:
    def test_reported_phrase_wins(self):
        assert reason_phrase(404, "Gone Fishing") == "Gone Fishing"

    def test_standard_phrase_fallback(self):
        assert reason_phrase(404) == "Not Found"
        assert reason_phrase(500, "") == "Internal Server Error"

    def test_unknown_status(self):
        assert reason_phrase(599) == ""
