"""Decide which changed files are worth a review call."""

from __future__ import annotations

import fnmatch

NON_CODE_EXTENSIONS = frozenset(
    {
        ".png",
        ".jpg",
        ".jpeg",
        ".gif",
        ".ico",
        ".webp",
        ".bmp",
        ".pdf",
        ".woff",
        ".woff2",
        ".ttf",
        ".eot",
        ".otf",
        ".mp4",
        ".mp3",
        ".wav",
        ".ogg",
        ".zip",
        ".tar",
        ".gz",
        ".rar",
        ".7z",
        ".jar",
        ".so",
        ".dll",
        ".dylib",
        ".exe",
        ".pyc",
        ".lock",  # poetry.lock, Cargo.lock, yarn.lock
    }
)

# Generated dependency manifests whose extension alone does not give them away.
LOCKFILE_NAMES = frozenset({"package-lock.json", "pnpm-lock.yaml", "go.sum", "npm-shrinkwrap.json"})


def is_code_file(file_name: str) -> bool:
    lowered = file_name.lower()
    if lowered.rsplit("/", 1)[-1] in LOCKFILE_NAMES:
        return False
    return not lowered.endswith(tuple(NON_CODE_EXTENSIONS))


def is_excluded(file_name: str, patterns: list[str]) -> bool:
    """Return True if file_name matches any exclude pattern.

    A pattern matches as an fnmatch glob against the full path
    ("src/generated/*.py") or the basename ("*.min.js"), or as a directory
    name anywhere in the path ("migrations/", "vendor").
    """
    base_name = file_name.rsplit("/", 1)[-1]
    for pattern in patterns:
        if fnmatch.fnmatch(file_name, pattern) or fnmatch.fnmatch(base_name, pattern):
            return True
        directory = pattern.rstrip("/") + "/"
        if file_name.startswith(directory) or f"/{directory}" in file_name:
            return True
    return False


def skip_reason(file_name: str, patterns: list[str]) -> str | None:
    """Why file_name should not be reviewed, or None if it should."""
    if is_excluded(file_name, patterns):
        return "matches an exclude pattern"
    if not is_code_file(file_name):
        return "not a code file"
    return None
