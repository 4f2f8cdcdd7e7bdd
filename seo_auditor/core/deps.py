"""
FastAPI dependencies.
"""
from seo_auditor.integrations.http_fetcher import HTTPFetcher


def get_fetcher() -> HTTPFetcher:
    """Provide the HTTP fetcher used for outbound page, sitemap and robots requests."""
    return HTTPFetcher()
