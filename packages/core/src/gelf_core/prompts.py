"""Prompt construction for commit messages, per-file reviews, summaries and docs.

Every prompt is single-turn and self-contained. The per-file review prompt
pins down a strict JSON contract so the response can be parsed without
guesswork; see reviewer.parse_review_response for the receiving side.
"""

from __future__ import annotations

from gelf_core.models import CATEGORIES

MAX_COMMENTS_PER_FILE = 5

COMMIT_TYPES = ("feat", "fix", "docs", "style", "refactor", "test", "chore", "perf", "ci", "build", "revert")

_CATEGORY_GUIDE = {
    "must": "critical issues that must be fixed before merging",
    "want": "important improvements that should be made",
    "nits": "minor style or formatting issues",
    "fyi": "informational notes, no action required",
    "imo": "opinion-based suggestions",
}


def build_commit_prompt(diff: str, language: str) -> str:
    return f"""Analyze the git diff below and write one commit message following the Conventional Commits specification.

How to read the diff:
- File paths show which parts of the codebase are affected.
- Lines starting with '+' were added, lines starting with '-' were removed.
- Lines starting with a space are unchanged context.

Commit message rules:
1. Write in {language}.
2. Format: <type>(<optional scope>): <description>
3. Valid types: {', '.join(COMMIT_TYPES)}
4. At most 72 characters in total.
5. Imperative mood ("add", not "added").
6. Start the description with a lowercase letter.
7. No period at the end.
8. If there are several changes, describe the most significant one.

Examples:
- feat(auth): add JWT token validation
- fix(api): handle empty response from user service
- refactor(db): simplify connection pooling

Git diff:
{diff}

Respond with only the commit message, no additional text or formatting."""


def build_file_review_prompt(file_name: str, diff_text: str, language: str) -> str:
    guide = "\n".join(f'- "{c}": {_CATEGORY_GUIDE[c]}' for c in CATEGORIES)
    return f"""Review the git diff for file "{file_name}" and write code review comments in {language}.

### Output Format:
Respond with **only** a valid JSON object — no markdown fences, no text before or after it:

{{
  "comments": [
    {{
      "fileName": "{file_name}",
      "lineNo": <line number in the new file (integer), or 0 for a file-level comment>,
      "type": "<{'|'.join(CATEGORIES)}>",
      "message": "<concise, actionable comment>"
    }}
  ]
}}

Comment types:
{guide}

Rules:
- Focus on the most important issues only, at most {MAX_COMMENTS_PER_FILE} comments.
- Line numbers refer to the new file, counted from the @@ hunk headers.
- Be specific and actionable.
- If there are no issues, return: {{"comments": []}}

File diff:
{diff_text}"""


def build_summary_prompt(counts: dict[str, int], language: str) -> str:
    total = sum(counts.values())
    return f"""Based on the following code review findings, write a brief summary (1-2 sentences) in {language}.

Findings:
- Critical issues (must): {counts.get('must', 0)}
- Important suggestions (want): {counts.get('want', 0)}
- Minor issues (nits): {counts.get('nits', 0)}
- Informational notes (fyi): {counts.get('fyi', 0)}
- Opinions (imo): {counts.get('imo', 0)}
- Total comments: {total}

Describe the overall code quality and the main areas of concern. Respond with the summary only."""


def build_stream_review_prompt(diff: str, language: str) -> str:
    labels = ", ".join(f"[{c.upper()}]" for c in CATEGORIES)
    return f"""You are a senior engineer reviewing a change.
Write a code review of the git diff below in {language}, formatted as Markdown.

Structure:
1. A one-paragraph overview of what the change does.
2. Issues, grouped by file, each labelled with one of: {labels}.
3. A short closing verdict.

Only comment on what the diff shows. Be concise and actionable.

Git diff:
{diff}"""


# ---------------------------------------------------------------------------
# Documentation
# ---------------------------------------------------------------------------

MAX_DOC_FILES = 10
MAX_DOC_FILE_CHARS = 2000

# template -> (what to generate, include tree, include source excerpts, requirements, closing line)
_DOC_TEMPLATES = {
    "readme": (
        "a README.md for this project",
        True,
        True,
        [
            "Include the project title and a short description.",
            "Add installation instructions.",
            "Provide usage examples.",
            "Include API documentation if applicable.",
            "Add contribution guidelines.",
            "Include license information.",
            "Be comprehensive but concise, focusing on what users need to know.",
        ],
        "Generate a complete README.md for users and contributors.",
    ),
    "api": (
        "API documentation for this codebase",
        False,
        True,
        [
            "Document every public function, method and class.",
            "Describe parameters with their types.",
            "Document return values.",
            "Add a usage example for each API.",
            "Include error handling information.",
            "Group related functions together.",
            "Include authentication requirements if applicable.",
            "Document every endpoint completely if this is a web API.",
        ],
        "Generate API documentation developers can use to integrate with this codebase.",
    ),
    "changelog": (
        "a CHANGELOG.md template for this project",
        True,
        False,
        [
            "Follow the Keep a Changelog format.",
            "Include sections for each kind of version.",
            "Use the categories Added, Changed, Deprecated, Removed, Fixed and Security.",
            "Give examples of how to document changes.",
            "Include an Unreleased section.",
            "Include guidelines for maintaining the changelog.",
        ],
        "Generate a CHANGELOG.md template the team can use to track project changes.",
    ),
    "architecture": (
        "architecture documentation for this system",
        True,
        True,
        [
            "Describe the overall system architecture.",
            "Document the key components and their responsibilities.",
            "Explain data flow and interactions between components.",
            "Name the design patterns in use.",
            "Document external dependencies.",
            "Describe security considerations.",
            "Include the deployment architecture if applicable.",
            "Draw diagrams in plain text.",
            "Explain design decisions and their trade-offs.",
        ],
        "Generate architecture documentation that explains the system design and implementation.",
    ),
    "godoc": (
        "Go package documentation for this code",
        False,
        True,
        [
            "Follow Go documentation conventions and godoc formatting.",
            "Document every exported function, type and variable.",
            "Include package-level documentation explaining its purpose and design.",
            "Give clear examples for complex functions, written so they can run as tests.",
            "Document interfaces and their implementations.",
            "Include performance notes where relevant.",
        ],
        "Generate Go package documentation that follows Go community standards.",
    ),
}


def format_source_code(info) -> str:
    """Summary plus the first MAX_DOC_FILES files, each cut at MAX_DOC_FILE_CHARS."""
    out = [f"Summary: {info.summary}\n"]
    for index, source in enumerate(info.files):
        if index >= MAX_DOC_FILES:
            out.append("... (additional files truncated for brevity)\n")
            break
        if len(source.content) > MAX_DOC_FILE_CHARS:
            out.append(
                f"File: {source.path} ({source.language}, {source.size} bytes)\n"
                f"Content: {source.content[:MAX_DOC_FILE_CHARS]}...\n"
            )
        else:
            out.append(f"File: {source.path} ({source.language})\nContent:\n{source.content}\n")
    return "\n".join(out)


def build_doc_prompt(info, template: str, language: str) -> str:
    """Prompt for one documentation template; ``info`` is a doc.SourceInfo."""
    kind, with_structure, with_sources, requirements, closing = _DOC_TEMPLATES[template]
    rules = [f"Write in {language}.", *requirements, "Use proper Markdown formatting."]

    sections = [
        f"Generate {kind} in {language}.",
        f"PROJECT ANALYSIS:\nLanguages: {', '.join(info.languages) or 'unknown'}\nFile count: {len(info.files)}",
    ]
    if with_structure:
        sections.append(f"Project structure:\n{info.structure}")
    if with_sources:
        sections.append(f"SOURCE CODE ANALYSIS:\n{format_source_code(info)}")
    sections.append("REQUIREMENTS:\n" + "\n".join(f"{n}. {rule}" for n, rule in enumerate(rules, 1)))
    sections.append(closing)
    return "\n\n".join(sections)
