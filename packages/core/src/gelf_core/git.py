"""Thin wrappers around the git command line."""

from __future__ import annotations

import logging
import subprocess

logger = logging.getLogger(__name__)

# Extra context lines give the reviewer more to anchor comments against.
DIFF_CONTEXT_LINES = 5


class GitError(Exception):
    """A git command failed. The message is git's own stderr."""


def _run(args: list[str]) -> str:
    logger.debug("Running %s", " ".join(args))
    try:
        result = subprocess.run(args, capture_output=True, text=True, encoding="utf-8", errors="replace")
    except FileNotFoundError:
        raise GitError("git executable not found. Is Git installed and on your PATH?")
    if result.returncode != 0:
        detail = result.stderr.strip() or result.stdout.strip() or f"exit status {result.returncode}"
        raise GitError(detail)
    return result.stdout


def get_diff(staged: bool = False) -> str:
    """Return the staged or unstaged diff, stripped of surrounding whitespace."""
    args = ["git", "--no-pager", "diff"]
    if staged:
        args.append("--staged")
    args.append(f"-U{DIFF_CONTEXT_LINES}")
    return _run(args).strip()


def commit(message: str) -> None:
    _run(["git", "commit", "-m", message])
