"""
API v1 router aggregating all endpoints.
"""
from fastapi import APIRouter

from seo_auditor.api.v1.audit import router as audit_router
from seo_auditor.api.v1.crawl import router as crawl_router
from seo_auditor.api.v1.recommend import router as recommend_router

api_router = APIRouter()

api_router.include_router(audit_router)
api_router.include_router(crawl_router)
api_router.include_router(recommend_router)
