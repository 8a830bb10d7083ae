"""Tests for the streamed free-form review."""

import pytest

from gelf_core.providers.base import BaseProvider, ProviderError
from gelf_core.stream import ReviewStream


class _ChunkProvider(BaseProvider):
    def __init__(self, chunks, error=None):
        super().__init__("stub")
        self.chunks = chunks
        self.error = error
        self.prompts = []

    def _call_api(self, prompt: str, temperature: float) -> str:
        return "".join(self.chunks)

    def _stream_api(self, prompt, temperature):
        self.prompts.append(prompt)
        yield from self.chunks
        if self.error is not None:
            raise self.error


class _BlockingProvider(BaseProvider):
    def _call_api(self, prompt: str, temperature: float) -> str:
        return "## Review\nAll good."


def test_chunks_arrive_in_order():
    provider = _ChunkProvider(["## Overview\n", "Adds a ", "flag."])
    assert list(ReviewStream(provider, "diff --git a/x b/x")) == ["## Overview\n", "Adds a ", "flag."]


def test_prompt_built_from_diff_and_language():
    provider = _ChunkProvider(["ok"])
    list(ReviewStream(provider, "+new line", language="german"))
    assert "+new line" in provider.prompts[0]
    assert "german" in provider.prompts[0]
    assert "[MUST], [WANT], [NITS], [FYI], [IMO]" in provider.prompts[0]


def test_non_streaming_provider_yields_whole_response():
    assert list(ReviewStream(_BlockingProvider("stub"), "diff")) == ["## Review\nAll good."]


def test_failure_after_partial_output():
    stream = ReviewStream(_ChunkProvider(["partial "], error=RuntimeError("connection reset")), "diff")
    received = []
    with pytest.raises(ProviderError, match="connection reset"):
        for chunk in stream:
            received.append(chunk)
    assert received == ["partial "]


def test_start_is_idempotent():
    stream = ReviewStream(_ChunkProvider(["a"]), "diff")
    assert stream.start() is stream
    assert stream.start() is stream
    assert list(stream) == ["a"]
