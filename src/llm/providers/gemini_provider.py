from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from todo_ai.errors import ConfigurationError, NetworkError, ParseError, RemoteServiceError
from .base import LLMProvider

logger = logging.getLogger(__name__)


def _join_candidate_text(data: Any) -> str:
    """Concatenate every text part of the first candidate, in order."""
    try:
        parts = data["candidates"][0]["content"]["parts"] or []
    except (KeyError, IndexError, TypeError):
        parts = []
    return "".join(
        str(part.get("text") or "") for part in parts if isinstance(part, dict)
    ).strip()


class GeminiProvider(LLMProvider):
    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout_s: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key.strip()
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport

        if not self.api_key:
            raise ConfigurationError()

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout_s, transport=self._transport)

    def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        params = {"key": self.api_key}
        try:
            with self._client() as client:
                r = client.request(method, url, params=params, **kwargs)
        except httpx.TransportError as e:
            logger.error(f"Gemini request failed: {e.__class__.__name__}: {e}")
            raise NetworkError() from e

        if r.is_error:
            logger.error(f"Gemini API error: {r.status_code} {r.text[:500]}")
            raise RemoteServiceError(r.status_code, detail=r.text)
        return r

    def generate(self, *, user: str, model: str | None = None) -> str:
        url = f"{self.base_url}/models/{model or self.model}:generateContent"
        payload = {
            "contents": [
                {"role": "user", "parts": [{"text": user}]},
            ],
        }

        r = self._request("POST", url, json=payload)
        try:
            data = r.json()
        except ValueError as e:
            raise ParseError(detail="Gemini returned a non-JSON body") from e

        return _join_candidate_text(data)

    def list_models(self) -> dict:
        r = self._request("GET", f"{self.base_url}/models")
        return r.json()
