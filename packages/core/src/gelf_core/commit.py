"""Commit message generation."""

from __future__ import annotations

import logging

from gelf_core.prompts import build_commit_prompt
from gelf_core.providers.base import BaseProvider, ProviderError

logger = logging.getLogger(__name__)

_COMMIT_TEMPERATURE = 0.3


class CommitMessageError(Exception):
    """The AI call failed or produced no message."""


def generate_commit_message(provider: BaseProvider, diff: str, language: str = "english") -> str:
    """Return a single Conventional Commits line for ``diff``.

    The format is requested from the model but not enforced here; the result
    is only stripped of surrounding whitespace.
    """
    try:
        message = provider.complete(build_commit_prompt(diff, language), temperature=_COMMIT_TEMPERATURE)
    except ProviderError as e:
        raise CommitMessageError(f"failed to generate commit message: {e}") from e

    message = message.strip()
    if not message:
        raise CommitMessageError("failed to generate commit message: empty response")
    logger.debug("Generated commit message: %s", message)
    return message
