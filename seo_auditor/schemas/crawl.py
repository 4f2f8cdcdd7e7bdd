"""
Crawl API schemas.
"""
from typing import List

from seo_auditor.schemas.common import BaseSchema


class CrawlResponse(BaseSchema):
    homepage: str
    count: int
    urls: List[str] = []
