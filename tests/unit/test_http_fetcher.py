"""
Unit tests for the HTTP fetcher and redirect chain tracking.
"""
import httpx
import pytest

from seo_auditor.integrations.http_fetcher import (
    FetchResponse,
    HTTPFetcher,
    RedirectHop,
    TooManyRedirectsError,
    fetch_with_redirect_chain,
)
from tests.fixtures.fake_fetcher import FakeFetcher


def redirect(status: int, location: str) -> FetchResponse:
    return FetchResponse(url="", status=status, headers={"location": location}, body="")


class TestFetchResponse:
    """Test FetchResponse helpers."""

    def test_ok(self):
        assert FetchResponse(url="u", status=200).ok is True
        assert FetchResponse(url="u", status=299).ok is True
        assert FetchResponse(url="u", status=301).ok is False
        assert FetchResponse(url="u", status=404).ok is False

    def test_is_redirect_requires_location(self):
        """Test a 3xx without Location is not treated as a redirect."""
        assert redirect(301, "/next").is_redirect is True
        assert FetchResponse(url="u", status=304).is_redirect is False
        assert FetchResponse(url="u", status=200, headers={"location": "/x"}).is_redirect is False


class TestHTTPFetcher:
    """Test HTTPFetcher against an in-process transport."""

    @pytest.mark.asyncio
    async def test_returns_status_body_and_headers(self):
        """Test response fields are copied with lowercased header names."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<h1>Hi</h1>", headers={"Content-Type": "text/html"})

        response = await HTTPFetcher(transport=httpx.MockTransport(handler)).fetch("https://example.com/")

        assert response.status == 200
        assert response.body == "<h1>Hi</h1>"
        assert response.headers["content-type"] == "text/html"
        assert response.url == "https://example.com/"

    @pytest.mark.asyncio
    async def test_sends_headers(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["user-agent"] = request.headers.get("user-agent")
            return httpx.Response(200, text="ok")

        fetcher = HTTPFetcher(transport=httpx.MockTransport(handler))
        await fetcher.fetch("https://example.com/", headers={"User-Agent": "TestBot/1.0"})

        assert seen["user-agent"] == "TestBot/1.0"

    @pytest.mark.asyncio
    async def test_error_status_is_not_raised(self):
        """Test 4xx/5xx responses are returned for the caller to inspect."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="down")

        response = await HTTPFetcher(transport=httpx.MockTransport(handler)).fetch("https://example.com/")

        assert response.status == 503
        assert response.ok is False

    @pytest.mark.asyncio
    async def test_follows_redirects_when_asked(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/old":
                return httpx.Response(301, headers={"Location": "https://example.com/new"})
            return httpx.Response(200, text="new page")

        fetcher = HTTPFetcher(transport=httpx.MockTransport(handler))

        followed = await fetcher.fetch("https://example.com/old")
        manual = await fetcher.fetch("https://example.com/old", follow_redirects=False)

        assert followed.status == 200
        assert followed.url == "https://example.com/new"
        assert manual.status == 301
        assert manual.is_redirect is True
        assert manual.headers["location"] == "https://example.com/new"

    @pytest.mark.asyncio
    async def test_transport_failure_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        fetcher = HTTPFetcher(transport=httpx.MockTransport(handler))

        with pytest.raises(httpx.ConnectError):
            await fetcher.fetch("https://example.com/")


class TestRedirectChain:
    """Test manual redirect following."""

    @pytest.mark.asyncio
    async def test_records_every_hop(self):
        """Test each hop is recorded with its status, final response last."""
        fetcher = FakeFetcher({
            "https://example.com/a": redirect(301, "https://example.com/b"),
            "https://example.com/b": redirect(302, "/c"),
            "https://example.com/c": (200, "<p>done</p>"),
        })

        chain, final = await fetch_with_redirect_chain(fetcher, "https://example.com/a")

        assert chain == [
            RedirectHop("https://example.com/a", 301),
            RedirectHop("https://example.com/b", 302),
            RedirectHop("https://example.com/c", 200),
        ]
        assert final.body == "<p>done</p>"
        assert all(call["follow_redirects"] is False for call in fetcher.calls)

    @pytest.mark.asyncio
    async def test_no_redirect(self):
        fetcher = FakeFetcher({"https://example.com/": (200, "ok")})

        chain, final = await fetch_with_redirect_chain(fetcher, "https://example.com/")

        assert [hop.to_dict() for hop in chain] == [{"url": "https://example.com/", "status": 200}]
        assert final.status == 200

    @pytest.mark.asyncio
    async def test_error_status_ends_chain(self):
        """Test the chain ends at an error response without raising."""
        fetcher = FakeFetcher({"https://example.com/old": redirect(308, "/gone")})

        chain, final = await fetch_with_redirect_chain(fetcher, "https://example.com/old")

        assert [hop.status for hop in chain] == [308, 404]
        assert final.status == 404

    @pytest.mark.asyncio
    async def test_redirect_loop_is_capped(self):
        fetcher = FakeFetcher({"https://example.com/loop": redirect(302, "/loop")})

        with pytest.raises(TooManyRedirectsError) as exc_info:
            await fetch_with_redirect_chain(fetcher, "https://example.com/loop", max_redirects=3)

        assert exc_info.value.max_redirects == 3
        assert len(fetcher.calls) == 4

    @pytest.mark.asyncio
    async def test_exactly_max_redirects_is_allowed(self):
        routes = {
            f"https://example.com/{i}": redirect(301, f"/{i + 1}") for i in range(3)
        }
        routes["https://example.com/3"] = (200, "end")
        fetcher = FakeFetcher(routes)

        chain, final = await fetch_with_redirect_chain(fetcher, "https://example.com/0", max_redirects=3)

        assert len(chain) == 4
        assert final.body == "end"

    @pytest.mark.asyncio
    async def test_headers_and_timeout_forwarded(self):
        fetcher = FakeFetcher({"https://example.com/": (200, "ok")})

        await fetch_with_redirect_chain(
            fetcher, "https://example.com/", headers={"User-Agent": "X"}, timeout=2.5
        )

        assert fetcher.calls[0]["headers"] == {"User-Agent": "X"}
        assert fetcher.calls[0]["timeout"] == 2.5
