"""Core review orchestration.

    diff → split_diff() → review_file() × N (thread pool) → summarize() → StructuredReview

Each file gets exactly one AI call. A file whose call or response fails is
dropped from the result and listed in ``failed_files``; the rest of the
batch carries on. Only when every attempted file fails does the run raise.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Optional

from gelf_core.diff import split_diff
from gelf_core.models import (
    CATEGORIES,
    FileDiffSegment,
    FileReview,
    ReviewComment,
    StructuredReview,
    normalize_category,
)
from gelf_core.prompts import MAX_COMMENTS_PER_FILE, build_file_review_prompt, build_summary_prompt
from gelf_core.providers.base import BaseProvider, ProviderError
from gelf_core.utils.code import skip_reason

logger = logging.getLogger(__name__)

NO_ISSUES_SUMMARY = "No significant issues found in the code changes."
SUMMARY_UNAVAILABLE = "Summary unavailable."

# Low temperature keeps the JSON structure stable across files.
_REVIEW_TEMPERATURE = 0.1
_SUMMARY_TEMPERATURE = 0.3

_FENCE_OPEN_RE = re.compile(r"^```(?:json)?\s*")
_FENCE_CLOSE_RE = re.compile(r"\s*```$")

ProgressCallback = Callable[[FileDiffSegment, Optional[FileReview]], None]


class ReviewParseError(Exception):
    """A per-file review response could not be interpreted."""


class ReviewError(Exception):
    """No file in the diff could be reviewed."""


# ---------------------------------------------------------------------------
# Per-file review
# ---------------------------------------------------------------------------


def _strip_fences(raw: str) -> str:
    # Strip only the outer ```json ... ``` fence — NOT backticks inside message values.
    cleaned = _FENCE_OPEN_RE.sub("", raw.strip())
    return _FENCE_CLOSE_RE.sub("", cleaned.strip())


def _load_payload(raw: str):
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        pass
    try:
        return json.loads(_strip_fences(raw))
    except json.JSONDecodeError as e:
        raise ReviewParseError(f"response is not valid JSON: {e}") from e


def _parse_line_no(value) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value.isdigit():
            return None
        value = int(value)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and value > 0:
        return value
    return None


def parse_review_response(raw: str, file_name: str) -> list[ReviewComment]:
    """Parse one file's AI response into at most MAX_COMMENTS_PER_FILE comments.

    Accepts ``{"comments": [...]}`` or a bare list, optionally wrapped in a
    Markdown code fence. Raises ReviewParseError for anything else.
    """
    payload = _load_payload(raw)
    if isinstance(payload, dict):
        if "comments" not in payload:
            raise ReviewParseError("response object has no \"comments\" key")
        items = payload["comments"]
    else:
        items = payload
    if not isinstance(items, list):
        raise ReviewParseError(f"expected a list of comments, got {type(items).__name__}")

    comments: list[ReviewComment] = []
    for item in items:
        if not isinstance(item, dict):
            logger.debug("%s: skipping non-object comment %r", file_name, item)
            continue
        message = item.get("message") or item.get("comment")
        if not isinstance(message, str) or not message.strip():
            logger.debug("%s: skipping comment without message", file_name)
            continue
        comments.append(
            ReviewComment(
                file_name=file_name,
                category=normalize_category(item.get("type", item.get("category"))),
                message=message.strip(),
                line_no=_parse_line_no(item.get("lineNo", item.get("line"))),
            )
        )

    if len(comments) > MAX_COMMENTS_PER_FILE:
        logger.debug("%s: dropping %d comment(s) over the limit", file_name, len(comments) - MAX_COMMENTS_PER_FILE)
        comments = comments[:MAX_COMMENTS_PER_FILE]
    return comments


def review_file(
    provider: BaseProvider,
    segment: FileDiffSegment,
    language: str,
    max_chars: int = 20000,
) -> FileReview:
    """Review one file with exactly one AI call.

    Raises ProviderError or ReviewParseError; the caller decides whether
    that is fatal.
    """
    diff_text = segment.diff_text
    if len(diff_text) > max_chars:
        diff_text = diff_text[:max_chars] + "\n... [diff truncated]"

    prompt = build_file_review_prompt(segment.file_name, diff_text, language)
    raw = provider.complete(prompt, temperature=_REVIEW_TEMPERATURE)
    comments = parse_review_response(raw, segment.file_name)
    return FileReview(file_name=segment.file_name, diff_text=segment.diff_text, comments=tuple(comments))


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def count_by_category(file_reviews) -> dict[str, int]:
    counts = {c: 0 for c in CATEGORIES}
    for fr in file_reviews:
        for comment in fr.comments:
            counts[comment.category] += 1
    return counts


def summarize(provider: BaseProvider, counts: dict[str, int], language: str) -> str:
    """One-or-two sentence overview of the findings.

    Makes no AI call when there are no comments, and degrades to a fixed
    string when the call fails.
    """
    if sum(counts.values()) == 0:
        return NO_ISSUES_SUMMARY
    try:
        return provider.complete(build_summary_prompt(counts, language), temperature=_SUMMARY_TEMPERATURE).strip()
    except ProviderError as e:
        logger.warning("Could not generate review summary: %s", e)
        return SUMMARY_UNAVAILABLE


def _review_or_none(provider, segment, language, max_chars) -> FileReview | None:
    try:
        return review_file(provider, segment, language, max_chars)
    except (ProviderError, ReviewParseError) as e:
        logger.warning("Review failed for %s: %s", segment.file_name, e)
        return None


def partition_segments(diff: str, exclude_patterns: list[str] | None) -> tuple[list[FileDiffSegment], list[str]]:
    """Split ``diff`` into the segments to review and the names of skipped files."""
    segments: list[FileDiffSegment] = []
    skipped: list[str] = []
    for segment in split_diff(diff):
        reason = skip_reason(segment.file_name, exclude_patterns or [])
        if reason:
            logger.info("Skipping %s: %s", segment.file_name, reason)
            skipped.append(segment.file_name)
        else:
            segments.append(segment)
    return segments, skipped


def run_review(
    provider: BaseProvider,
    diff: str,
    config: dict,
    progress: ProgressCallback | None = None,
) -> StructuredReview:
    """Review every file in ``diff`` concurrently and aggregate the results.

    Results are placed in per-file slots so the output follows diff order,
    not completion order. A KeyboardInterrupt while waiting abandons the
    outstanding calls instead of waiting for them.
    """
    language = config.get("review_language") or config.get("language") or "english"
    max_chars = config.get("max_chars_per_file") or 20000
    max_workers = max(1, config.get("max_workers") or 8)

    segments, skipped = partition_segments(diff, config.get("exclude"))

    if not segments:
        return StructuredReview(
            summary=NO_ISSUES_SUMMARY,
            skipped_files=tuple(skipped),
            category_counts=count_by_category([]),
        )

    slots: list[FileReview | None] = [None] * len(segments)

    def _run(index: int, segment: FileDiffSegment) -> None:
        slots[index] = _review_or_none(provider, segment, language, max_chars)
        if progress is not None:
            progress(segment, slots[index])

    executor = ThreadPoolExecutor(max_workers=min(max_workers, len(segments)), thread_name_prefix="gelf-review")
    try:
        futures = [executor.submit(_run, i, segment) for i, segment in enumerate(segments)]
        wait(futures)
        for future in futures:
            # _run absorbs per-file errors; anything raised here is a bug worth surfacing.
            future.result()
    except KeyboardInterrupt:
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    executor.shutdown(wait=True)

    file_reviews = [fr for fr in slots if fr is not None]
    failed = [segment.file_name for segment, fr in zip(segments, slots) if fr is None]

    if not file_reviews:
        raise ReviewError(f"Review failed for all {len(segments)} file(s): {', '.join(failed)}")

    counts = count_by_category(file_reviews)
    return StructuredReview(
        summary=summarize(provider, counts, language),
        file_reviews=tuple(file_reviews),
        failed_files=tuple(failed),
        skipped_files=tuple(skipped),
        category_counts=counts,
    )
