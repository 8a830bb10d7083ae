from __future__ import annotations

from collections.abc import Iterator

try:
    from openai import OpenAI as _OpenAI
except ImportError:
    _OpenAI = None  # type: ignore[assignment,misc]

from gelf_core.providers.base import BaseProvider


class OpenAIProvider(BaseProvider):
    FAST_MODEL = "gpt-4o-mini"
    STRONG_MODEL = "gpt-4o"
    # Lower than the base default to lean toward deterministic JSON output.
    TEMPERATURE = 0.2

    def __init__(self, api_key: str, model: str | None = None):
        if _OpenAI is None:
            raise ImportError(
                "The 'openai' package is required for this provider. " "Install it with: pip install 'gelf[openai]'"
            )
        super().__init__(model)
        self.client = _OpenAI(api_key=api_key, timeout=self.TIMEOUT)

    def _call_api(self, prompt: str, temperature: float) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=self.MAX_TOKENS,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    def _stream_api(self, prompt: str, temperature: float) -> Iterator[str]:
        stream = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=self.MAX_TOKENS,
            stream=True,
        )
        for chunk in stream:
            if chunk.choices and chunk.choices[0].delta.content:
                yield chunk.choices[0].delta.content
