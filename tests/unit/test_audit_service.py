"""
Unit tests for the audit service.

Tests single-page audits (redirect chains, fetch errors) and full-site
audits (sequential auditing, per-URL failure isolation).
"""
import httpx
import pytest
from unittest.mock import AsyncMock

from seo_auditor.config import USER_AGENTS, settings
from seo_auditor.integrations.http_fetcher import FetchResponse, TooManyRedirectsError
from seo_auditor.services.audit_service import (
    PageAuditFailure,
    PageAuditSuccess,
    PageFetchError,
    audit_url,
    run_full_audit,
)
from tests.fixtures.fake_fetcher import FakeFetcher
from tests.fixtures.sample_pages import PERFECT_PAGE_HTML, POOR_SEO_PAGE_HTML

HOMEPAGE = "https://example.com"


class TestAuditUrl:
    """Test single-page audits."""

    @pytest.mark.asyncio
    async def test_audit_with_redirect(self):
        """Test the redirect chain is recorded and the final page is audited."""
        fetcher = FakeFetcher({
            "https://example.com/old": FetchResponse(
                url="https://example.com/old", status=301,
                headers={"location": "https://example.com/perfect-page"},
            ),
            "https://example.com/perfect-page": (200, PERFECT_PAGE_HTML),
        })

        page = await audit_url("https://example.com/old", keyword="seo", fetcher=fetcher)

        assert page.url == "https://example.com/old"
        assert [(hop.url, hop.status) for hop in page.redirect_chain] == [
            ("https://example.com/old", 301),
            ("https://example.com/perfect-page", 200),
        ]
        assert page.audit.metadata.title == "Perfect SEO Page - Complete with All Elements"
        assert page.audit.keyword == "seo"

    @pytest.mark.asyncio
    async def test_to_dict_is_flat(self):
        """Test audit fields sit beside url and redirect_chain."""
        fetcher = FakeFetcher({"https://example.com/": (200, POOR_SEO_PAGE_HTML)})

        data = (await audit_url("https://example.com/", fetcher=fetcher)).to_dict()

        assert data["url"] == "https://example.com/"
        assert data["redirect_chain"] == [{"url": "https://example.com/", "status": 200}]
        assert data["images"]["missing_alt"] == 2
        assert data["intent"] == "Unknown"

    @pytest.mark.asyncio
    async def test_request_headers(self):
        """Test the named user agent and HTML accept header are sent."""
        fetcher = FakeFetcher({"https://example.com/": (200, PERFECT_PAGE_HTML)})

        await audit_url("https://example.com/", user_agent="googlebot", fetcher=fetcher)

        call = fetcher.calls[0]
        assert call["headers"]["User-Agent"] == USER_AGENTS["googlebot"]
        assert call["headers"]["Accept"] == "text/html"
        assert call["timeout"] == settings.PAGE_TIMEOUT_SECONDS
        assert call["follow_redirects"] is False

    @pytest.mark.asyncio
    async def test_unknown_user_agent_falls_back(self):
        fetcher = FakeFetcher({"https://example.com/": (200, PERFECT_PAGE_HTML)})

        await audit_url("https://example.com/", user_agent="netscape", fetcher=fetcher)

        assert fetcher.calls[0]["headers"]["User-Agent"] == USER_AGENTS["chrome"]

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        fetcher = FakeFetcher()

        with pytest.raises(PageFetchError) as exc_info:
            await audit_url("https://example.com/missing", fetcher=fetcher)

        assert exc_info.value.status == 404
        assert str(exc_info.value) == "Request failed with status: 404"

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self):
        fetcher = FakeFetcher({"https://example.com/": httpx.ConnectError("connection refused")})

        with pytest.raises(httpx.ConnectError):
            await audit_url("https://example.com/", fetcher=fetcher)

    @pytest.mark.asyncio
    async def test_redirect_loop_raises(self):
        fetcher = FakeFetcher({
            "https://example.com/loop": FetchResponse(
                url="https://example.com/loop", status=302, headers={"location": "/loop"},
            ),
        })

        with pytest.raises(TooManyRedirectsError):
            await audit_url("https://example.com/loop", fetcher=fetcher)

        assert len(fetcher.calls) == settings.MAX_REDIRECTS + 1


class TestRunFullAudit:
    """Test full-site audits."""

    @pytest.mark.asyncio
    async def test_failure_does_not_stop_audit(self, site_fetcher):
        """Test a failing page is reported and the rest are still audited."""
        report = await run_full_audit(HOMEPAGE, fetcher=site_fetcher)

        assert report.total_urls == 4
        assert report.audited_urls == 4
        assert [r.url for r in report.results] == [
            "https://example.com/",
            "https://example.com/about",
            "https://example.com/services",
            "https://example.com/contact",
        ]
        assert [r.ok for r in report.results] == [True, True, False, True]

        failure = report.results[2]
        assert isinstance(failure, PageAuditFailure)
        assert failure.error == "Request failed with status: 500"

    @pytest.mark.asyncio
    async def test_audits_sequentially_in_order(self, site_fetcher):
        await run_full_audit(HOMEPAGE, fetcher=site_fetcher)

        page_requests = site_fetcher.requested_urls[1:]
        assert page_requests == [
            "https://example.com/",
            "https://example.com/about",
            "https://example.com/services",
            "https://example.com/contact",
        ]

    @pytest.mark.asyncio
    async def test_default_limit_from_settings(self, fake_fetcher):
        crawl = AsyncMock(return_value=[])

        await run_full_audit(HOMEPAGE, fetcher=fake_fetcher, crawl=crawl)

        crawl.assert_awaited_once_with(HOMEPAGE, settings.FULL_AUDIT_DEFAULT_LIMIT, fetcher=fake_fetcher)

    @pytest.mark.asyncio
    async def test_explicit_limit(self, site_fetcher):
        report = await run_full_audit(HOMEPAGE, limit=2, fetcher=site_fetcher)

        assert report.total_urls == 2

    @pytest.mark.asyncio
    async def test_nothing_discovered(self, fake_fetcher):
        report = await run_full_audit(HOMEPAGE, fetcher=fake_fetcher)

        assert report.to_dict() == {
            "homepage": HOMEPAGE,
            "total_urls": 0,
            "audited_urls": 0,
            "results": [],
        }

    @pytest.mark.asyncio
    async def test_error_without_message_uses_type_name(self):
        fetcher = FakeFetcher({"https://example.com/a": ValueError()})
        crawl = AsyncMock(return_value=["https://example.com/a"])

        report = await run_full_audit(HOMEPAGE, fetcher=fetcher, crawl=crawl)

        assert report.results[0].to_dict() == {"url": "https://example.com/a", "error": "ValueError"}

    @pytest.mark.asyncio
    async def test_keyword_and_user_agent_applied(self):
        fetcher = FakeFetcher({"https://example.com/a": (200, PERFECT_PAGE_HTML)})
        crawl = AsyncMock(return_value=["https://example.com/a"])

        report = await run_full_audit(
            HOMEPAGE, keyword="seo", user_agent="iphone13pmax", fetcher=fetcher, crawl=crawl
        )

        success = report.results[0]
        assert isinstance(success, PageAuditSuccess)
        assert success.audit.keyword == "seo"
        assert fetcher.calls[0]["headers"]["User-Agent"] == USER_AGENTS["iphone13pmax"]
        assert set(success.to_dict()) == {"url", "audit"}
