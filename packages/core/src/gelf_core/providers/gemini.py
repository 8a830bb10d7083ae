from __future__ import annotations

import json
from collections.abc import Iterator

import httpx

from gelf_core.providers.base import BaseProvider, ProviderError


class GeminiProvider(BaseProvider):
    API_URL = "https://generativelanguage.googleapis.com/v1beta/models"
    FAST_MODEL = "gemini-2.5-flash"
    STRONG_MODEL = "gemini-2.5-pro"

    def __init__(self, api_key: str, model: str | None = None, client: httpx.Client | None = None):
        super().__init__(model)
        self.api_key = api_key
        self.client = client or httpx.Client(timeout=self.TIMEOUT)

    def _payload(self, prompt: str, temperature: float) -> dict:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": temperature, "maxOutputTokens": self.MAX_TOKENS},
        }

    def _call_api(self, prompt: str, temperature: float) -> str:
        response = self.client.post(
            f"{self.API_URL}/{self.model}:generateContent",
            headers={"x-goog-api-key": self.api_key},
            json=self._payload(prompt, temperature),
        )
        response.raise_for_status()
        return _extract_text(response.json())

    def _stream_api(self, prompt: str, temperature: float) -> Iterator[str]:
        with self.client.stream(
            "POST",
            f"{self.API_URL}/{self.model}:streamGenerateContent",
            params={"alt": "sse"},
            headers={"x-goog-api-key": self.api_key},
            json=self._payload(prompt, temperature),
        ) as response:
            response.raise_for_status()
            for line in response.iter_lines():
                if not line.startswith("data:"):
                    continue
                data = json.loads(line[len("data:") :].strip())
                candidates = data.get("candidates") or []
                if not candidates:
                    continue
                parts = (candidates[0].get("content") or {}).get("parts") or []
                for part in parts:
                    if part.get("text"):
                        yield part["text"]


def _extract_text(data: dict) -> str:
    candidates = data.get("candidates") or []
    if not candidates:
        feedback = data.get("promptFeedback") or {}
        reason = feedback.get("blockReason")
        raise ProviderError(f"Blocked: {reason}" if reason else "no candidates in response")
    parts = (candidates[0].get("content") or {}).get("parts") or []
    if not parts:
        raise ProviderError("no content parts in response")
    return "".join(part.get("text", "") for part in parts)
