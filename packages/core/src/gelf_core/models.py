"""Review data models.

All models are frozen dataclasses: created once by the parser or aggregator
and read-only afterwards, so concurrent per-file reviews never share
mutable state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

# Ordered from most to least severe; renderers and summaries iterate in this order.
CATEGORIES = ("must", "want", "nits", "fyi", "imo")

FALLBACK_CATEGORY = "fyi"

_CATEGORY_ALIASES = {
    "nit": "nits",
    "nitpick": "nits",
    "info": "fyi",
    "note": "fyi",
    "critical": "must",
    "required": "must",
    "should": "want",
    "suggestion": "want",
    "opinion": "imo",
}


def normalize_category(value) -> str:
    """Map a model-supplied category onto one of CATEGORIES.

    Case and surrounding whitespace are ignored and a few common synonyms are
    recognised. Anything else becomes FALLBACK_CATEGORY.
    """
    if not isinstance(value, str):
        return FALLBACK_CATEGORY
    key = value.strip().lower()
    if key in CATEGORIES:
        return key
    if key in _CATEGORY_ALIASES:
        return _CATEGORY_ALIASES[key]
    logger.debug("Unrecognised review category %r; using %r", value, FALLBACK_CATEGORY)
    return FALLBACK_CATEGORY


@dataclass(frozen=True)
class FileDiffSegment:
    """One file's slice of a unified diff, header line included."""

    file_name: str
    diff_text: str


@dataclass(frozen=True)
class DiffFileStat:
    file_name: str
    added_lines: int = 0
    deleted_lines: int = 0


@dataclass(frozen=True)
class ReviewComment:
    """A single review finding.

    line_no is a new-file line number, or None for a file-level comment.
    """

    file_name: str
    category: str
    message: str
    line_no: int | None = None

    def __post_init__(self):
        if self.category not in CATEGORIES:
            raise ValueError(f"Unknown review category: {self.category!r}")


@dataclass(frozen=True)
class FileReview:
    file_name: str
    diff_text: str
    comments: tuple[ReviewComment, ...] = ()

    @property
    def has_issues(self) -> bool:
        return bool(self.comments)


@dataclass(frozen=True)
class StructuredReview:
    """Aggregated result of a review run, handed to the renderer.

    file_reviews keeps the original diff order. failed_files and
    skipped_files are reported separately so nothing is silently lost.
    """

    summary: str
    file_reviews: tuple[FileReview, ...] = ()
    failed_files: tuple[str, ...] = ()
    skipped_files: tuple[str, ...] = ()
    category_counts: dict[str, int] = field(default_factory=dict)

    @property
    def total_comments(self) -> int:
        return sum(len(fr.comments) for fr in self.file_reviews)
