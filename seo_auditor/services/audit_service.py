"""
Page and site audit service.

Fetches pages and runs the SEO checks on them:
- audit_url(): single page, redirects followed manually so every hop is recorded
- run_full_audit(): crawl a site, then audit each discovered URL one at a time

Per-URL failures in a full audit are returned as data, never raised.
"""

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Union

from seo_auditor.config import resolve_user_agent, settings
from seo_auditor.integrations.http_fetcher import (
    HTTPFetcher,
    RedirectHop,
    fetch_with_redirect_chain,
)
from seo_auditor.services.crawler import crawl_site
from seo_auditor.services.seo_checker import AuditResult, run_seo_checks

logger = logging.getLogger(__name__)

CrawlFunction = Callable[..., Awaitable[list[str]]]


class PageFetchError(Exception):
    """Raised when a page can't be fetched for auditing."""

    def __init__(self, url: str, status: int):
        super().__init__(f"Request failed with status: {status}")
        self.url = url
        self.status = status


@dataclass(frozen=True)
class PageAudit:
    url: str
    redirect_chain: list[RedirectHop]
    audit: AuditResult

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "redirect_chain": [hop.to_dict() for hop in self.redirect_chain],
            **self.audit.to_dict(),
        }


@dataclass(frozen=True)
class PageAuditSuccess:
    url: str
    audit: AuditResult
    ok: bool = field(default=True, init=False)

    def to_dict(self) -> dict:
        return {"url": self.url, "audit": self.audit.to_dict()}


@dataclass(frozen=True)
class PageAuditFailure:
    url: str
    error: str
    ok: bool = field(default=False, init=False)

    def to_dict(self) -> dict:
        return {"url": self.url, "error": self.error}


PageAuditOutcome = Union[PageAuditSuccess, PageAuditFailure]


@dataclass(frozen=True)
class FullAuditReport:
    homepage: str
    total_urls: int
    results: list[PageAuditOutcome]

    @property
    def audited_urls(self) -> int:
        return len(self.results)

    def to_dict(self) -> dict:
        return {
            "homepage": self.homepage,
            "total_urls": self.total_urls,
            "audited_urls": self.audited_urls,
            "results": [r.to_dict() for r in self.results],
        }


def _request_headers(user_agent: str | None) -> dict[str, str]:
    return {"User-Agent": resolve_user_agent(user_agent), "Accept": "text/html"}


async def audit_url(
    url: str,
    keyword: str | None = None,
    user_agent: str | None = None,
    fetcher: HTTPFetcher | None = None,
) -> PageAudit:
    """Fetch one page (recording its redirect chain) and audit it.

    Raises:
        PageFetchError: the final response status is 400 or above.
        TooManyRedirectsError: the redirect chain is longer than MAX_REDIRECTS.
        httpx.HTTPError: transport failure or timeout.
    """
    fetcher = fetcher or HTTPFetcher()

    redirect_chain, response = await fetch_with_redirect_chain(
        fetcher,
        url,
        headers=_request_headers(user_agent),
        timeout=settings.PAGE_TIMEOUT_SECONDS,
        max_redirects=settings.MAX_REDIRECTS,
    )
    if response.status >= 400:
        raise PageFetchError(url, response.status)

    if len(redirect_chain) > 1:
        logger.info(f"{url} redirected {len(redirect_chain) - 1} times to {redirect_chain[-1].url}")

    audit = run_seo_checks(response.body, url, keyword)
    return PageAudit(url=url, redirect_chain=redirect_chain, audit=audit)


async def _audit_crawled_url(
    url: str,
    keyword: str | None,
    headers: dict[str, str],
    fetcher: HTTPFetcher,
) -> PageAuditOutcome:
    try:
        response = await fetcher.fetch(
            url,
            headers=headers,
            timeout=settings.PAGE_TIMEOUT_SECONDS,
            follow_redirects=True,
        )
        if response.status >= 400:
            raise PageFetchError(url, response.status)
        return PageAuditSuccess(url=url, audit=run_seo_checks(response.body, url, keyword))
    except Exception as e:
        logger.warning(f"Audit failed for {url}: {e}")
        return PageAuditFailure(url=url, error=str(e) or type(e).__name__)


async def run_full_audit(
    homepage: str,
    limit: int | None = None,
    keyword: str | None = None,
    user_agent: str | None = None,
    fetcher: HTTPFetcher | None = None,
    crawl: CrawlFunction = crawl_site,
) -> FullAuditReport:
    """Crawl a site and audit every discovered URL sequentially.

    URLs are audited one at a time to bound outbound request volume.
    """
    fetcher = fetcher or HTTPFetcher()
    max_urls = limit if limit is not None else settings.FULL_AUDIT_DEFAULT_LIMIT

    urls = await crawl(homepage, max_urls, fetcher=fetcher)
    logger.info(f"Full audit of {homepage}: {len(urls)} URLs to audit")

    headers = _request_headers(user_agent)
    results: list[PageAuditOutcome] = []
    for url in urls:
        results.append(await _audit_crawled_url(url, keyword, headers, fetcher))

    failed = sum(1 for r in results if not r.ok)
    logger.info(f"Full audit of {homepage} complete: {len(results) - failed} ok, {failed} failed")

    return FullAuditReport(homepage=homepage, total_urls=len(urls), results=results)
