"""
Pydantic schemas for the SEO Auditor API.
"""
from seo_auditor.schemas.common import BaseSchema, ErrorResponse, HealthResponse
from seo_auditor.schemas.audit import (
    AuditResponse,
    AuditResultSchema,
    FullAuditResponse,
    PageAuditFailureSchema,
    PageAuditSuccessSchema,
)
from seo_auditor.schemas.crawl import CrawlResponse
from seo_auditor.schemas.recommend import RecommendRequest, RecommendResponse

__all__ = [
    "BaseSchema",
    "ErrorResponse",
    "HealthResponse",
    "AuditResponse",
    "AuditResultSchema",
    "FullAuditResponse",
    "PageAuditFailureSchema",
    "PageAuditSuccessSchema",
    "CrawlResponse",
    "RecommendRequest",
    "RecommendResponse",
]
