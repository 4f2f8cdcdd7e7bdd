"""
Core utilities for SEO Auditor.
"""
from seo_auditor.core.deps import get_fetcher
from seo_auditor.core.exceptions import BadRequestError, InternalServerError
from seo_auditor.core.logging import configure_logging

__all__ = [
    "get_fetcher",
    "BadRequestError",
    "InternalServerError",
    "configure_logging",
]
