"""
Audit API Endpoints

- GET /audit: audit a single page, recording its redirect chain
- GET /full-audit: discover a site's URLs and audit each one sequentially
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from seo_auditor.core.deps import get_fetcher
from seo_auditor.core.exceptions import BadRequestError, InternalServerError
from seo_auditor.integrations.http_fetcher import HTTPFetcher
from seo_auditor.schemas.audit import AuditResponse, FullAuditResponse
from seo_auditor.schemas.common import ErrorResponse
from seo_auditor.services.audit_service import audit_url, run_full_audit

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Audit"])


@router.get(
    "/audit",
    response_model=AuditResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Audit a single page",
    description="""
    Fetch a page (following redirects one hop at a time) and run all SEO checks:
    metadata, structured data, Open Graph, headings, links, anchors, images,
    word count, intent, keyword usage and suggestions.

    Example: /audit?url=https://example.com&keyword=seo&user-agent=googlebot
    """,
)
async def audit_page(
    url: Optional[str] = Query(None, description="Page URL to audit"),
    keyword: Optional[str] = Query(None, description="Target keyword"),
    user_agent: Optional[str] = Query(
        None,
        alias="user-agent",
        description="User agent name: chrome, googlebot, samsung5g, iphone13pmax",
    ),
    fetcher: HTTPFetcher = Depends(get_fetcher),
) -> AuditResponse:
    if not url:
        raise BadRequestError("Missing 'url' parameter")

    try:
        page = await audit_url(url, keyword=keyword, user_agent=user_agent, fetcher=fetcher)
    except Exception as e:
        logger.error(f"Audit error for {url}: {e}")
        raise InternalServerError(str(e) or type(e).__name__) from e

    return AuditResponse.model_validate(page.to_dict())


@router.get(
    "/full-audit",
    response_model=FullAuditResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Audit every discovered page of a site",
    description="""
    Discover up to `limit` URLs (sitemap, robots.txt sitemaps, then navigation
    links) and audit them one at a time. A page that fails to load is reported
    with an `error` field; the remaining pages are still audited.

    Example: /full-audit?homepage=https://example.com&limit=5&keyword=seo
    """,
)
async def full_audit(
    homepage: Optional[str] = Query(None, description="Site homepage URL"),
    limit: Optional[int] = Query(None, ge=1, description="Maximum URLs to audit (default 5)"),
    keyword: Optional[str] = Query(None, description="Target keyword"),
    user_agent: Optional[str] = Query(None, alias="user-agent", description="User agent name"),
    fetcher: HTTPFetcher = Depends(get_fetcher),
) -> FullAuditResponse:
    if not homepage:
        raise BadRequestError("Homepage parameter is required")

    try:
        report = await run_full_audit(
            homepage,
            limit=limit,
            keyword=keyword,
            user_agent=user_agent,
            fetcher=fetcher,
        )
    except Exception as e:
        logger.error(f"Full audit error for {homepage}: {e}")
        raise InternalServerError(str(e) or type(e).__name__) from e

    return FullAuditResponse.model_validate(report.to_dict())
