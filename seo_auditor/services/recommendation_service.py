"""
LLM-written SEO recommendations from audit results.
"""

import json
import logging
from typing import Any, Dict, Optional

from seo_auditor.integrations.llm import LLMClient, Message

logger = logging.getLogger(__name__)

RECOMMENDATION_COUNT = 5


def build_recommendation_prompt(audit_data: Dict[str, Any]) -> str:
    audit_json = json.dumps(audit_data, indent=2, ensure_ascii=False, default=str)
    return f"""You are an SEO expert. Here is an SEO audit in JSON:
{audit_json}

Give me {RECOMMENDATION_COUNT} key SEO recommendations (clear, actionable, non-generic)."""


async def generate_recommendations(
    audit_data: Dict[str, Any],
    client: Optional[LLMClient] = None,
) -> str:
    """Ask the configured LLM for recommendations and return its text."""
    prompt = build_recommendation_prompt(audit_data)

    if client is None:
        async with LLMClient() as owned_client:
            response = await owned_client.chat([Message(role="user", content=prompt)])
    else:
        response = await client.chat([Message(role="user", content=prompt)])

    logger.info(f"Generated recommendations with {response.model} ({len(response.content)} chars)")
    return response.content.strip()
