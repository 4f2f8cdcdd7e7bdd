"""
Crawl API Endpoint

Discovers a site's URLs without auditing them.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from seo_auditor.config import settings
from seo_auditor.core.deps import get_fetcher
from seo_auditor.core.exceptions import BadRequestError, InternalServerError
from seo_auditor.integrations.http_fetcher import HTTPFetcher
from seo_auditor.schemas.common import ErrorResponse
from seo_auditor.schemas.crawl import CrawlResponse
from seo_auditor.services.crawler import crawl_site

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Crawl"])


@router.get(
    "/crawl",
    response_model=CrawlResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Discover a site's URLs",
)
async def crawl(
    homepage: Optional[str] = Query(None, description="Site homepage URL"),
    limit: int = Query(settings.CRAWL_DEFAULT_LIMIT, ge=1, description="Maximum URLs to return"),
    fetcher: HTTPFetcher = Depends(get_fetcher),
) -> CrawlResponse:
    if not homepage:
        raise BadRequestError("Homepage URL is required")

    try:
        urls = await crawl_site(homepage, limit, fetcher=fetcher)
    except Exception as e:
        logger.error(f"Error in crawl API: {e}")
        raise InternalServerError("Failed to crawl site") from e

    return CrawlResponse(homepage=homepage, count=len(urls), urls=urls)
