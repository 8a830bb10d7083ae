"""Unified diff splitting and line-count summaries."""

from __future__ import annotations

import re

from gelf_core.models import DiffFileStat, FileDiffSegment

DIFF_HEADER_PREFIX = "diff --git"

_HEADER_RE = re.compile(r'^diff --git "?a/(.*?)"? "?b/(.*?)"?$')


def parse_file_name(header: str) -> str:
    """Return the new-side path from a ``diff --git a/<path> b/<path>`` line.

    Unquoted paths may contain spaces, so ``a/x b/y.py b/x b/y.py`` is
    ambiguous to a regex; when both sides name the same path the header is
    split into equal halves instead. Falls back to the last whitespace token
    (with any ``b/`` prefix removed) when the header does not follow the
    usual shape.
    """
    header = header.rstrip()
    body = header[len(DIFF_HEADER_PREFIX) :].lstrip()
    if body.startswith("a/") and len(body) % 2 == 1:
        half = len(body) // 2
        old, sep, new = body[:half], body[half], body[half + 1 :]
        if sep == " " and new.startswith("b/") and new[2:] and old[2:] == new[2:]:
            return new[2:]

    match = _HEADER_RE.match(header)
    if match and match.group(2):
        return match.group(2)
    parts = header.split()
    if len(parts) > 2:
        return parts[-1].strip('"').removeprefix("b/")
    return "(unknown)"


def split_diff(diff: str) -> list[FileDiffSegment]:
    """Split a unified diff into one segment per ``diff --git`` header.

    Lines before the first header are dropped. A diff without headers yields
    an empty list.
    """
    segments: list[FileDiffSegment] = []
    current_name: str | None = None
    current_lines: list[str] = []

    for line in diff.split("\n"):
        if line.startswith(DIFF_HEADER_PREFIX):
            if current_name is not None:
                segments.append(FileDiffSegment(current_name, "\n".join(current_lines)))
            current_name = parse_file_name(line)
            current_lines = [line]
        elif current_name is not None:
            current_lines.append(line)

    if current_name is not None:
        segments.append(FileDiffSegment(current_name, "\n".join(current_lines)))

    return segments


def parse_diff_summary(diff: str) -> list[DiffFileStat]:
    """Count added and deleted lines per file.

    ``+++`` and ``---`` file markers are excluded by ignoring any line that
    starts with two of the same sign.
    """
    stats: list[DiffFileStat] = []
    name: str | None = None
    added = deleted = 0

    for line in diff.split("\n"):
        if line.startswith(DIFF_HEADER_PREFIX):
            if name is not None:
                stats.append(DiffFileStat(name, added, deleted))
            name = parse_file_name(line)
            added = deleted = 0
        elif name is None:
            continue
        elif line.startswith("+") and not line.startswith("++"):
            added += 1
        elif line.startswith("-") and not line.startswith("--"):
            deleted += 1

    if name is not None:
        stats.append(DiffFileStat(name, added, deleted))

    return stats


def format_file_stat(stat: DiffFileStat) -> str:
    """Render a stat as ``path (+3, -1)``, or just the path when nothing changed."""
    changes = []
    if stat.added_lines:
        changes.append(f"+{stat.added_lines}")
    if stat.deleted_lines:
        changes.append(f"-{stat.deleted_lines}")
    if changes:
        return f"{stat.file_name} ({', '.join(changes)})"
    return stat.file_name
