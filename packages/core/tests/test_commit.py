"""Tests for commit message generation."""

import pytest

from gelf_core.commit import CommitMessageError, generate_commit_message
from gelf_core.providers.base import BaseProvider

DIFF = "diff --git a/app.py b/app.py\n--- a/app.py\n+++ b/app.py\n@@ -1 +1,2 @@\n import os\n+import sys"


class _StubProvider(BaseProvider):
    def __init__(self, response):
        super().__init__("stub")
        self.response = response
        self.prompts = []

    def _call_api(self, prompt: str, temperature: float) -> str:
        self.prompts.append(prompt)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def test_message_is_stripped():
    provider = _StubProvider("\n  feat(app): import sys\n\n")
    assert generate_commit_message(provider, DIFF) == "feat(app): import sys"


def test_prompt_carries_diff_and_language():
    provider = _StubProvider("feat: x")
    generate_commit_message(provider, DIFF, language="japanese")
    assert "+import sys" in provider.prompts[0]
    assert "japanese" in provider.prompts[0]
    assert "Conventional Commits" in provider.prompts[0]


def test_single_ai_call():
    provider = _StubProvider("fix: y")
    generate_commit_message(provider, DIFF)
    assert len(provider.prompts) == 1


def test_provider_failure_raises(mocker):
    mocker.patch("gelf_core.providers.base.time.sleep")
    with pytest.raises(CommitMessageError, match="failed to generate commit message"):
        generate_commit_message(_StubProvider(RuntimeError("quota exceeded")), DIFF)


def test_empty_response_raises():
    with pytest.raises(CommitMessageError):
        generate_commit_message(_StubProvider("   "), DIFF)
