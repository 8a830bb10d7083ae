from __future__ import annotations

from collections.abc import Iterator

from gelf_core.providers.base import BaseProvider


class AnthropicProvider(BaseProvider):
    FAST_MODEL = "claude-3-5-haiku-latest"
    STRONG_MODEL = "claude-sonnet-4-20250514"

    def __init__(self, api_key: str, model: str | None = None):
        try:
            from anthropic import Anthropic
        except ImportError:
            raise ImportError(
                "The 'anthropic' package is required for this provider. "
                "Install it with: pip install 'gelf[anthropic]'"
            )
        super().__init__(model)
        self.client = Anthropic(api_key=api_key, timeout=self.TIMEOUT)

    def _call_api(self, prompt: str, temperature: float) -> str:
        # Imported inside the method because the anthropic package is optional;
        # __init__ already validated it is installed before we reach here.
        from anthropic.types import TextBlock

        response = self.client.messages.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=self.MAX_TOKENS,
        )
        text_blocks = [block.text for block in response.content if isinstance(block, TextBlock)]
        return "".join(text_blocks).strip()

    def _stream_api(self, prompt: str, temperature: float) -> Iterator[str]:
        with self.client.messages.stream(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=self.MAX_TOKENS,
        ) as stream:
            yield from stream.text_stream
