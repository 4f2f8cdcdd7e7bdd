"""
LLM Client

Sends chat prompts over httpx to one of:
- Google Gemini generateContent (default)
- OpenAI chat completions, also served locally by LM Studio
- Anthropic messages

Used to turn audit results into natural-language SEO recommendations.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, AsyncGenerator, Dict, List, Optional, Tuple

import httpx
from pydantic import BaseModel

from seo_auditor.config import settings

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"


class LLMProvider(str, Enum):
    GEMINI = "gemini"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    LOCAL = "local"


class Message(BaseModel):
    role: str  # system, user or assistant
    content: str


class LLMResponse(BaseModel):
    content: str
    model: str
    usage: Optional[Dict[str, int]] = None
    finish_reason: Optional[str] = None


class LLMConfigurationError(Exception):
    """Raised when a hosted provider is used without an API key."""


@dataclass
class LLMConfig:
    provider: LLMProvider
    base_url: str
    api_key: str
    model: str
    temperature: float = 0.7
    max_tokens: int = 2048
    timeout: float = 120.0

    @classmethod
    def from_settings(cls) -> "LLMConfig":
        return cls(
            provider=LLMProvider(settings.LLM_PROVIDER.lower()),
            base_url=settings.LLM_BASE_URL.rstrip("/"),
            api_key=settings.llm_api_key,
            model=settings.LLM_MODEL,
            timeout=settings.LLM_TIMEOUT_SECONDS,
        )


def _split_system(messages: List[Message]) -> Tuple[Optional[str], List[Message]]:
    """Separate the system prompt from the conversation turns."""
    system = None
    turns = []
    for message in messages:
        if message.role == "system":
            system = message.content
        else:
            turns.append(message)
    return system, turns


class LLMClient:
    """Chat client for the configured provider.

    Owns one httpx.AsyncClient, created lazily and closed by close() or on
    leaving an ``async with`` block.
    """

    def __init__(
        self,
        config: Optional[LLMConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or LLMConfig.from_settings()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def provider(self) -> LLMProvider:
        return self.config.provider

    def _auth_headers(self) -> Dict[str, str]:
        key = self.config.api_key
        if self.provider == LLMProvider.GEMINI:
            return {"x-goog-api-key": key}
        if self.provider == LLMProvider.ANTHROPIC:
            return {"x-api-key": key, "anthropic-version": ANTHROPIC_VERSION}
        # LM Studio ignores auth unless a real key is configured
        if key and key != "not-needed":
            return {"Authorization": f"Bearer {key}"}
        return {}

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout,
                headers={"Content-Type": "application/json", **self._auth_headers()},
                transport=self._transport,
            )
        return self._client

    def _endpoint(self) -> str:
        base = self.config.base_url
        if self.provider == LLMProvider.GEMINI:
            return f"{base}/models/{self.config.model}:generateContent"
        if self.provider == LLMProvider.ANTHROPIC:
            return f"{base}/messages"
        return f"{base}/chat/completions"

    def _build_payload(self, messages: List[Message], temperature: float, max_tokens: int) -> Dict[str, Any]:
        system, turns = _split_system(messages)

        if self.provider == LLMProvider.GEMINI:
            payload: Dict[str, Any] = {
                "contents": [
                    {
                        "role": "model" if m.role == "assistant" else "user",
                        "parts": [{"text": m.content}],
                    }
                    for m in turns
                ],
                "generationConfig": {"temperature": temperature, "maxOutputTokens": max_tokens},
            }
            if system:
                payload["systemInstruction"] = {"parts": [{"text": system}]}
            return payload

        if self.provider == LLMProvider.ANTHROPIC:
            payload = {
                "model": self.config.model,
                "messages": [{"role": m.role, "content": m.content} for m in turns],
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
            if system:
                payload["system"] = system
            return payload

        return {
            "model": self.config.model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

    def _parse_response(self, data: Dict[str, Any]) -> LLMResponse:
        model = data.get("modelVersion") or data.get("model") or self.config.model

        if self.provider == LLMProvider.GEMINI:
            candidates = data.get("candidates") or []
            if not candidates:
                # Prompt was blocked; promptFeedback says why
                logger.warning(f"Gemini returned no candidates: {data.get('promptFeedback')}")
                return LLMResponse(content="", model=model)
            first = candidates[0]
            metadata = data.get("usageMetadata", {})
            return LLMResponse(
                content="".join(p.get("text", "") for p in first.get("content", {}).get("parts", [])),
                model=model,
                usage={
                    "prompt_tokens": metadata.get("promptTokenCount", 0),
                    "completion_tokens": metadata.get("candidatesTokenCount", 0),
                },
                finish_reason=first.get("finishReason"),
            )

        if self.provider == LLMProvider.ANTHROPIC:
            blocks = data.get("content") or []
            usage = data.get("usage", {})
            return LLMResponse(
                content="".join(b.get("text", "") for b in blocks if b.get("type", "text") == "text"),
                model=model,
                usage={
                    "prompt_tokens": usage.get("input_tokens", 0),
                    "completion_tokens": usage.get("output_tokens", 0),
                },
                finish_reason=data.get("stop_reason"),
            )

        choices = data.get("choices") or [{}]
        return LLMResponse(
            content=choices[0].get("message", {}).get("content") or "",
            model=model,
            usage=data.get("usage"),
            finish_reason=choices[0].get("finish_reason"),
        )

    async def chat(
        self,
        messages: List[Message],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """Send a conversation and return the model's reply.

        Raises:
            LLMConfigurationError: a hosted provider has no API key.
            httpx.HTTPStatusError: the provider answered with an error status.
        """
        if self.provider != LLMProvider.LOCAL and not self.config.api_key:
            raise LLMConfigurationError(
                f"No API key configured for LLM provider '{self.provider.value}'"
            )

        payload = self._build_payload(
            messages,
            temperature=self.config.temperature if temperature is None else temperature,
            max_tokens=max_tokens or self.config.max_tokens,
        )

        client = await self._get_client()
        response = await client.post(self._endpoint(), json=payload)
        if response.is_error:
            logger.error(f"{self.provider.value} returned {response.status_code}: {response.text[:200]}")
        response.raise_for_status()

        return self._parse_response(response.json())

    async def close(self):
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "LLMClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


async def get_llm_client() -> AsyncGenerator[LLMClient, None]:
    """FastAPI dependency yielding a per-request LLM client."""
    async with LLMClient() as client:
        yield client
