"""Code-context extraction for review comments.

Given one file's diff text and the new-file line numbers that review comments
point at, pick out the diff lines a reader needs to see: the owning hunk
header plus a window of lines around each target. Line numbers follow the
hunk headers (``@@ -a,b +c,d @@``): context and added lines advance the
new-file counter, removed lines do not.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = 3

# Only these file header lines are echoed back; mode/rename lines are not.
_FILE_HEADER_PREFIXES = ("diff --git", "index ", "--- ", "+++ ")


@dataclass
class DiffLine:
    """One line of a file diff, annotated with its hunk and line anchor.

    ``anchor`` is the new-file line number for context and added lines. For a
    removed line it is the number the next new-file line will get, which is
    where the removal sits from the reader's point of view.
    """

    text: str
    kind: str  # "header" | "hunk" | "add" | "del" | "context" | "meta"
    hunk: int = -1
    anchor: int | None = None


def parse_hunk_start(header: str) -> int:
    """Return the new-file start line of a hunk header, or 1 if it cannot be parsed."""
    try:
        new_file_range = header.split("+")[1].split(" ")[0]
        start = int(new_file_range.split(",")[0])
    except (IndexError, ValueError):
        logger.debug("Unparseable hunk header %r; counting from line 1", header)
        return 1
    # "+0,0" marks a deleted file; there is no line 0 to anchor to.
    return max(start, 1)


def annotate_diff(diff_text: str) -> list[DiffLine]:
    lines: list[DiffLine] = []
    hunk = -1
    counter: int | None = None

    for text in diff_text.split("\n"):
        if text.startswith("@@"):
            hunk += 1
            counter = parse_hunk_start(text)
            lines.append(DiffLine(text, "hunk", hunk))
        elif counter is None:
            lines.append(DiffLine(text, "header"))
        elif text.startswith("+"):
            lines.append(DiffLine(text, "add", hunk, counter))
            counter += 1
        elif text.startswith("-"):
            lines.append(DiffLine(text, "del", hunk, counter))
        elif text.startswith("\\"):
            # "\ No newline at end of file" belongs to the line before it.
            previous = lines[-1].anchor if lines else None
            lines.append(DiffLine(text, "meta", hunk, previous))
        else:
            lines.append(DiffLine(text, "context", hunk, counter))
            counter += 1

    # A trailing newline in the input is a split artifact, not a context line.
    if lines and lines[-1].text == "" and lines[-1].kind in ("context", "header"):
        lines.pop()

    return lines


def _targeted(lines: list[DiffLine], targets: list[int], window: int) -> set[int]:
    selected = set()
    for i, line in enumerate(lines):
        if line.kind in ("header", "hunk") or line.anchor is None:
            continue
        if min(abs(line.anchor - t) for t in targets) <= window:
            selected.add(i)
    return selected


def _changed_hunks(lines: list[DiffLine], window: int) -> set[int]:
    selected = set()
    by_hunk: dict[int, list[int]] = {}
    for i, line in enumerate(lines):
        if line.kind in ("add", "del", "context", "meta"):
            by_hunk.setdefault(line.hunk, []).append(i)

    for indices in by_hunk.values():
        changed = [pos for pos, i in enumerate(indices) if lines[i].kind in ("add", "del")]
        for pos in changed:
            lo = max(pos - window, 0)
            hi = min(pos + window, len(indices) - 1)
            selected.update(indices[lo : hi + 1])
    return selected


def extract_line_context(
    diff_text: str,
    line_numbers: Iterable[int | None] | None = None,
    window: int = DEFAULT_WINDOW,
) -> list[str]:
    """Return the diff lines relevant to the given new-file line numbers.

    Each target pulls in every line whose anchor is within ``window`` of it;
    overlapping windows are merged and lines keep their original order. The
    owning hunk header is included for every hunk that contributes a line,
    and the file header lines are included whenever anything is.

    With no positive line numbers (file-level comments only) the result is
    every changed hunk, trimmed to ``window`` lines around each change.
    """
    lines = annotate_diff(diff_text)
    targets = sorted({n for n in (line_numbers or ()) if isinstance(n, int) and n > 0})

    if targets:
        selected = _targeted(lines, targets, window)
    else:
        selected = _changed_hunks(lines, window)

    if not selected:
        return []

    hunks = {lines[i].hunk for i in selected}
    result = []
    for i, line in enumerate(lines):
        if line.kind == "header":
            if line.text.startswith(_FILE_HEADER_PREFIXES):
                result.append(line.text)
        elif line.kind == "hunk":
            if line.hunk in hunks:
                result.append(line.text)
        elif i in selected:
            result.append(line.text)
    return result
