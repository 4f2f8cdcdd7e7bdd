"""
Recommendation API Endpoint

Forwards audit results to the configured LLM and returns its recommendations.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends

from seo_auditor.core.exceptions import BadRequestError, InternalServerError
from seo_auditor.integrations.llm import LLMClient, get_llm_client
from seo_auditor.schemas.common import ErrorResponse
from seo_auditor.schemas.recommend import RecommendRequest, RecommendResponse
from seo_auditor.services.recommendation_service import generate_recommendations

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Recommendations"])


@router.post(
    "/recommend",
    response_model=RecommendResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Generate LLM recommendations from audit data",
)
async def recommend(
    request: Optional[RecommendRequest] = Body(None),
    client: LLMClient = Depends(get_llm_client),
) -> RecommendResponse:
    if request is None or request.audit_data is None:
        raise BadRequestError("Missing auditData in request body")

    try:
        text = await generate_recommendations(request.audit_data, client=client)
    except Exception as e:
        logger.error(f"Recommendation error: {e}")
        raise InternalServerError(str(e) or type(e).__name__) from e

    return RecommendResponse(recommendations=text)
