"""Terminal rendering for reviews and commit messages.

All styling lives in a RenderStyle built once per invocation from the config
and passed to every function here; there is no module-level style state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.console import Console, Group
from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

from gelf_core.config import use_color
from gelf_core.models import CATEGORIES, FileReview, ReviewComment, StructuredReview
from gelf_core.utils.context import DEFAULT_WINDOW, extract_line_context

# Long file-level snippets are cut to this many lines.
MAX_SNIPPET_LINES = 40

_DEFAULT_CATEGORY_STYLES = {
    "must": "bold red",
    "want": "bold yellow",
    "nits": "blue",
    "fyi": "cyan",
    "imo": "magenta",
}


@dataclass(frozen=True)
class RenderStyle:
    color: bool = True
    styled: bool = True  # False = plain text, no panels or markup
    context_lines: int = DEFAULT_WINDOW
    category_styles: dict[str, str] = field(default_factory=lambda: dict(_DEFAULT_CATEGORY_STYLES))
    warning: str = "bold yellow"
    success: str = "bold green"
    added: str = "green"
    removed: str = "red"
    hunk: str = "cyan"

    @classmethod
    def from_config(cls, config: dict, styled: bool = True) -> RenderStyle:
        return cls(
            color=use_color(config),
            styled=styled,
            context_lines=config.get("context_lines", DEFAULT_WINDOW),
        )

    def console(self, stderr: bool = False) -> Console:
        return Console(stderr=stderr, no_color=not self.color, highlight=False)


def print_warning(console: Console, style: RenderStyle, message: str) -> None:
    if style.styled:
        console.print(Text(f"⚠ {message}", style=style.warning))
    else:
        console.print(f"Warning: {message}", markup=False)


def render_commit_message(console: Console, style: RenderStyle, message: str) -> None:
    if not style.styled:
        console.print(f"Generated commit message:\n{message}\n", markup=False)
        return
    console.print(Panel(Text(message, style="italic"), title="📝 Generated Commit Message", border_style="blue"))


# ---------------------------------------------------------------------------
# Review
# ---------------------------------------------------------------------------


def comment_context(file_review: FileReview, comment: ReviewComment, window: int = DEFAULT_WINDOW) -> list[str]:
    """Diff lines to show under a comment, without the file header.

    The file name is already printed above every comment, so everything
    before the first hunk header is dropped.
    """
    targets = [comment.line_no] if comment.line_no else None
    lines = extract_line_context(file_review.diff_text, targets, window)
    for i, line in enumerate(lines):
        if line.startswith("@@"):
            lines = lines[i:]
            break
    if len(lines) > MAX_SNIPPET_LINES:
        lines = lines[:MAX_SNIPPET_LINES] + ["..."]
    return lines


def _snippet(lines: list[str], style: RenderStyle) -> Text:
    text = Text()
    for line in lines:
        if line.startswith("@@"):
            line_style = style.hunk
        elif line.startswith("+"):
            line_style = style.added
        elif line.startswith("-"):
            line_style = style.removed
        else:
            line_style = "dim"
        text.append(line + "\n", style=line_style)
    text.rstrip()
    return text


def _category_label(category: str, style: RenderStyle) -> Text:
    return Text(f"[{category.upper()}]", style=style.category_styles.get(category, "white"))


def _counts_line(review: StructuredReview) -> str:
    counts = review.category_counts or {}
    return " · ".join(f"{c} {counts.get(c, 0)}" for c in CATEGORIES)


class ReviewRenderer:
    """Render a StructuredReview file by file."""

    def __init__(self, console: Console, style: RenderStyle):
        self.console = console
        self.style = style

    def render(self, review: StructuredReview) -> None:
        if self.style.styled:
            self._render_styled(review)
        else:
            self.console.print(self.render_plain(review), markup=False)

    def _render_styled(self, review: StructuredReview) -> None:
        self.console.print(
            Panel(
                Group(Text(review.summary), Text(_counts_line(review), style="dim")),
                title="Review summary",
                border_style="cyan",
            )
        )
        for file_review in review.file_reviews:
            self.console.print(Rule(Text(file_review.file_name, style="bold cyan"), align="left"))
            if not file_review.has_issues:
                self.console.print(Text("✓ No issues", style=self.style.success))
                continue
            for comment in file_review.comments:
                header = _category_label(comment.category, self.style)
                if comment.line_no:
                    header.append(f" line {comment.line_no}", style="bold")
                header.append(f"  {comment.message}")
                self.console.print(header)
                lines = comment_context(file_review, comment, self.style.context_lines)
                if lines:
                    self.console.print(Panel(_snippet(lines, self.style), border_style="dim", expand=False))
            self.console.print()
        self._render_footer(review)

    def _render_footer(self, review: StructuredReview) -> None:
        if review.failed_files:
            print_warning(
                self.console,
                self.style,
                f"{len(review.failed_files)} file(s) could not be reviewed: {', '.join(review.failed_files)}",
            )
        if review.skipped_files:
            self.console.print(
                Text(f"Skipped {len(review.skipped_files)} file(s): {', '.join(review.skipped_files)}", style="dim")
            )

    def render_plain(self, review: StructuredReview) -> str:
        out = [f"Summary: {review.summary}", _counts_line(review), ""]
        for file_review in review.file_reviews:
            out.append(f"== {file_review.file_name} ==")
            if not file_review.has_issues:
                out.append("No issues")
            for comment in file_review.comments:
                where = f" line {comment.line_no}" if comment.line_no else ""
                out.append(f"[{comment.category.upper()}]{where}: {comment.message}")
                out.extend(f"    {line}" for line in comment_context(file_review, comment, self.style.context_lines))
            out.append("")
        if review.failed_files:
            failed = ", ".join(review.failed_files)
            out.append(f"Warning: {len(review.failed_files)} file(s) could not be reviewed: {failed}")
        if review.skipped_files:
            out.append(f"Skipped {len(review.skipped_files)} file(s): {', '.join(review.skipped_files)}")
        return "\n".join(out).rstrip()
