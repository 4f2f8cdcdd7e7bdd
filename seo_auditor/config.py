from types import MappingProxyType
from typing import List, Mapping

from pydantic_settings import BaseSettings


USER_AGENTS: Mapping[str, str] = MappingProxyType({
    "chrome": "Mozilla/5.0 (Windows NT 10.0; Win64; x64)",
    "googlebot": "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)",
    "samsung5g": "Mozilla/5.0 (Linux; Android 13; SM-S901B)",
    "iphone13pmax": "Mozilla/5.0 (iPhone14,3; CPU iPhone OS 15_0)",
})


class Settings(BaseSettings):
    PROJECT_NAME: str = "SEO Auditor"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    API_V1_STR: str = "/api/v1"

    CORS_ORIGINS: str = "http://localhost:3000"

    LOG_LEVEL: str = "INFO"

    # Crawl / audit limits
    CRAWL_DEFAULT_LIMIT: int = 20
    FULL_AUDIT_DEFAULT_LIMIT: int = 5

    # Per call-site request timeouts
    SITEMAP_TIMEOUT_SECONDS: float = 10.0
    ROBOTS_TIMEOUT_SECONDS: float = 8.0
    NAVIGATION_TIMEOUT_SECONDS: float = 10.0
    PAGE_TIMEOUT_SECONDS: float = 15.0
    MAX_REDIRECTS: int = 10

    # Key into USER_AGENTS
    DEFAULT_USER_AGENT: str = "chrome"

    # LLM Configuration
    # Provider: "gemini", "openai", "anthropic", or "local" (LM Studio)
    LLM_PROVIDER: str = "gemini"
    LLM_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    LLM_API_KEY: str = ""
    LLM_MODEL: str = "gemini-2.0-flash"
    LLM_TIMEOUT_SECONDS: float = 120.0

    # Gemini-specific (alias for LLM_API_KEY)
    GEMINI_API_KEY: str = ""

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def cors_origins_list(self) -> List[str]:
        if isinstance(self.CORS_ORIGINS, str):
            return [o.strip() for o in self.CORS_ORIGINS.split(",")]
        return self.CORS_ORIGINS

    @property
    def llm_api_key(self) -> str:
        return self.LLM_API_KEY or self.GEMINI_API_KEY


def resolve_user_agent(name: str | None) -> str:
    """Map a user-agent name to its header value, falling back to the default."""
    if name and name in USER_AGENTS:
        return USER_AGENTS[name]
    return USER_AGENTS.get(settings.DEFAULT_USER_AGENT, USER_AGENTS["chrome"])


settings = Settings()
