from __future__ import annotations

from typing import Optional

from api.config import Settings
from llm.providers.base import LLMProvider


def provider_from_settings(settings: Settings) -> LLMProvider:
    if settings.llm_provider == "mock":
        from llm.providers.mock_provider import MockProvider

        return MockProvider()

    from llm.providers.gemini_provider import GeminiProvider

    return GeminiProvider(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
        timeout_s=settings.gemini_timeout_s,
    )


class LLMClient:
    """Thin wrapper that sends a prompt to the configured provider and returns its text."""

    def __init__(self, provider: Optional[LLMProvider] = None, settings: Optional[Settings] = None):
        if provider is None:
            provider = provider_from_settings(settings or Settings())
        self.provider = provider

    def complete(self, prompt: str) -> str:
        return self.provider.generate(user=prompt)
