"""
Recommendation API schemas.
"""
from typing import Any, Dict, Optional

from pydantic import ConfigDict, Field

from seo_auditor.schemas.common import BaseSchema


class RecommendRequest(BaseSchema):
    """Audit data to turn into recommendations. Accepts ``auditData`` too."""

    audit_data: Optional[Dict[str, Any]] = Field(None, alias="auditData")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "audit_data": {
                    "url": "https://example.com",
                    "headings": {"h1": 0},
                    "suggestions": ["No top-level heading found."],
                }
            }
        },
    )


class RecommendResponse(BaseSchema):
    recommendations: str
