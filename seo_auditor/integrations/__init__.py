"""
External collaborators for SEO Auditor.

- html_document: read-only CSS-selector access to parsed HTML/XML
- http_fetcher: async GET requests and manual redirect-chain following
- llm: LLM client for recommendations (supports Gemini/OpenAI/Anthropic/local)
"""

from seo_auditor.integrations.html_document import Element, HTMLDocument, parse
from seo_auditor.integrations.http_fetcher import (
    FetchResponse,
    HTTPFetcher,
    RedirectHop,
    TooManyRedirectsError,
    fetch_with_redirect_chain,
)
from seo_auditor.integrations.llm import (
    LLMClient,
    LLMConfig,
    LLMConfigurationError,
    LLMProvider,
    LLMResponse,
    Message,
    get_llm_client,
)

__all__ = [
    "Element",
    "HTMLDocument",
    "parse",
    "FetchResponse",
    "HTTPFetcher",
    "RedirectHop",
    "TooManyRedirectsError",
    "fetch_with_redirect_chain",
    "LLMClient",
    "LLMConfig",
    "LLMConfigurationError",
    "LLMProvider",
    "LLMResponse",
    "Message",
    "get_llm_client",
]
