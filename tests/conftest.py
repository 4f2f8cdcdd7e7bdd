"""
Pytest configuration and fixtures for SEO Auditor tests.
"""
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from seo_auditor.core.deps import get_fetcher
from tests.fixtures.fake_fetcher import FakeFetcher
from tests.fixtures.sample_pages import (
    NAV_HOMEPAGE_HTML,
    PERFECT_PAGE_HTML,
    ROBOTS_TXT,
    SITEMAP_XML,
)


# ============================================================================
# Fetcher Fixtures
# ============================================================================

@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    """Fetcher with no routes; every URL answers 404 until routes are added."""
    return FakeFetcher()


@pytest.fixture
def site_fetcher() -> FakeFetcher:
    """Fetcher serving a small example.com site with a sitemap."""
    return FakeFetcher({
        "https://example.com/sitemap.xml": (200, SITEMAP_XML, {"content-type": "application/xml"}),
        "https://example.com/robots.txt": (200, ROBOTS_TXT, {"content-type": "text/plain"}),
        "https://example.com": (200, NAV_HOMEPAGE_HTML),
        "https://example.com/": (200, PERFECT_PAGE_HTML),
        "https://example.com/about": (200, PERFECT_PAGE_HTML),
        "https://example.com/services": (500, "Server Error"),
        "https://example.com/contact": (200, PERFECT_PAGE_HTML),
    })


# ============================================================================
# FastAPI App Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def app(fake_fetcher: FakeFetcher) -> FastAPI:
    """Create test FastAPI application with outbound HTTP replaced."""
    from seo_auditor.main import app as main_app

    main_app.dependency_overrides[get_fetcher] = lambda: fake_fetcher

    yield main_app

    main_app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ============================================================================
# Sample Content Fixtures
# ============================================================================

@pytest.fixture
def sample_html_page() -> str:
    """Sample HTML page for extractor tests."""
    return PERFECT_PAGE_HTML


@pytest.fixture
def sample_robots_txt() -> str:
    """Sample robots.txt declaring two sitemaps."""
    return ROBOTS_TXT


@pytest.fixture
def sample_sitemap_xml() -> str:
    """Sample urlset sitemap."""
    return SITEMAP_XML
