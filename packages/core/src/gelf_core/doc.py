"""Documentation generation from a source tree.

    src → analyze_source() → SourceInfo → build_doc_prompt() → one AI call → format_output()

Only code files are read; hidden paths, dependency and build directories,
and files ``is_code_file`` rejects are skipped.
"""

from __future__ import annotations

import json
import logging
import os
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from gelf_core.prompts import build_doc_prompt
from gelf_core.providers.base import BaseProvider, ProviderError
from gelf_core.utils.code import is_code_file

logger = logging.getLogger(__name__)

TEMPLATES = {
    "readme": ("README", "Comprehensive project README with installation, usage and contribution guidelines"),
    "api": ("API Documentation", "Detailed API reference with endpoints, parameters and examples"),
    "changelog": ("Changelog", "Version history following the Keep a Changelog format"),
    "architecture": ("Architecture Documentation", "System design, components and data flow"),
    "godoc": ("Go Package Documentation", "Package documentation following Go doc conventions"),
}

OUTPUT_FORMATS = ("markdown", "json")

SKIP_DIRS = frozenset({"node_modules", ".git", ".vscode", "vendor", "target", "dist", "build", "__pycache__"})

MAX_FILE_BYTES = 1024 * 1024
_BINARY_SNIFF_BYTES = 512

_DOC_TEMPERATURE = 0.3

LANGUAGES_BY_EXTENSION = {
    ".go": "Go",
    ".js": "JavaScript",
    ".ts": "TypeScript",
    ".py": "Python",
    ".java": "Java",
    ".c": "C",
    ".cpp": "C++",
    ".h": "C/C++ Header",
    ".rs": "Rust",
    ".rb": "Ruby",
    ".php": "PHP",
    ".sh": "Shell",
    ".bash": "Bash",
    ".zsh": "Zsh",
    ".md": "Markdown",
    ".yaml": "YAML",
    ".yml": "YAML",
    ".json": "JSON",
    ".xml": "XML",
    ".html": "HTML",
    ".css": "CSS",
    ".scss": "SCSS",
    ".sass": "Sass",
    ".sql": "SQL",
}


class DocError(Exception):
    """The source tree could not be analyzed or documentation not generated."""


@dataclass(frozen=True)
class SourceFile:
    path: str  # relative to the analyzed root, "/"-separated
    content: str
    language: str
    size: int


@dataclass
class SourceInfo:
    root: str
    files: list[SourceFile] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)  # first-seen order
    structure: str = ""
    summary: str = ""


def detect_language(path: str) -> str:
    return LANGUAGES_BY_EXTENSION.get(Path(path).suffix.lower(), "Unknown")


def should_skip(rel_path: str) -> bool:
    """True for hidden files, files under skipped directories, and non-code assets."""
    parts = rel_path.split("/")
    if parts[-1].startswith("."):
        return True
    if any(part in SKIP_DIRS for part in parts[:-1]):
        return True
    return not is_code_file(rel_path)


def _read_source(path: Path, size: int) -> str:
    if size > MAX_FILE_BYTES:
        return f"[File too large: {size} bytes]"
    data = path.read_bytes()
    if b"\x00" in data[:_BINARY_SNIFF_BYTES]:
        return "[Binary file]"
    return data.decode("utf-8", errors="replace")


def _walk(root: Path):
    """Yield ``(depth, dir_path, file_names)`` top-down, pruning hidden and skipped directories."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS and not d.startswith("."))
        current = Path(dirpath)
        yield len(current.relative_to(root).parts), current, sorted(filenames)


def build_structure(root: Path) -> str:
    """Indented tree of ``root``, two spaces per level, directories suffixed with "/"."""
    lines: list[str] = []
    for depth, current, file_names in _walk(root):
        name = current.name if depth else (root.resolve().name or str(root))
        lines.append("  " * depth + name + "/")
        for file_name in file_names:
            rel_path = (current / file_name).relative_to(root).as_posix()
            if not should_skip(rel_path):
                lines.append("  " * (depth + 1) + file_name)
    return "\n".join(lines) + "\n"


def summarize_sources(root: str, files: list[SourceFile], languages: list[str]) -> str:
    summary = f"Source analysis for: {root}\nTotal files: {len(files)}\nLanguages detected: {', '.join(languages)}\n"
    counts = Counter(f.language for f in files)
    if counts:
        summary += "\nFile counts by language:\n"
        summary += "".join(f"  {language}: {counts[language]}\n" for language in languages)
    return summary


def analyze_source(src: str) -> SourceInfo:
    """Collect code files under ``src`` (a directory or a single file).

    Unreadable files are logged and left out. Files over MAX_FILE_BYTES and
    binary files are kept with a placeholder instead of their content.
    """
    root = Path(src)
    if not root.exists():
        raise DocError(f"source path does not exist: {src}")

    if root.is_file():
        candidates = [(root, root.name)]
    else:
        candidates = []
        for _, current, file_names in _walk(root):
            for name in file_names:
                path = current / name
                candidates.append((path, path.relative_to(root).as_posix()))

    info = SourceInfo(root=str(src))
    for path, rel_path in candidates:
        if should_skip(rel_path):
            logger.debug("Skipping %s", rel_path)
            continue
        try:
            size = path.stat().st_size
            content = _read_source(path, size)
        except OSError as e:
            logger.warning("Could not read %s: %s", path, e)
            continue
        language = detect_language(rel_path)
        info.files.append(SourceFile(path=rel_path, content=content, language=language, size=size))
        if language not in info.languages:
            info.languages.append(language)

    info.structure = build_structure(root) if root.is_dir() else f"{root.name}\n"
    info.summary = summarize_sources(str(src), info.files, info.languages)
    logger.info("Analyzed %d file(s) under %s", len(info.files), src)
    return info


def generate_documentation(provider: BaseProvider, info: SourceInfo, template: str, language: str = "english") -> str:
    """Generate one document for ``template`` with a single AI call."""
    if template not in TEMPLATES:
        raise DocError(f"invalid template: {template} (valid options: {', '.join(TEMPLATES)})")
    try:
        content = provider.complete(build_doc_prompt(info, template, language), temperature=_DOC_TEMPERATURE)
    except ProviderError as e:
        raise DocError(f"failed to generate documentation: {e}") from e

    content = content.strip()
    if not content:
        raise DocError("failed to generate documentation: empty response")
    return content


def format_output(content: str, fmt: str) -> str:
    fmt = fmt.lower()
    if fmt == "markdown":
        return content
    if fmt == "json":
        return json.dumps({"type": "documentation", "format": "markdown", "content": content}, indent=2)
    raise DocError(f"unsupported format: {fmt} (valid options: {', '.join(OUTPUT_FORMATS)})")
