"""Tests for terminal rendering of reviews and commit messages."""

import io

from rich.console import Console

from gelf_cli.render import (
    MAX_SNIPPET_LINES,
    RenderStyle,
    ReviewRenderer,
    comment_context,
    print_warning,
    render_commit_message,
)
from gelf_core.models import FileReview, ReviewComment, StructuredReview

DIFF = "\n".join(
    [
        "diff --git a/app.py b/app.py",
        "--- a/app.py",
        "+++ b/app.py",
        "@@ -1,10 +1,11 @@",
    ]
    + [f" line{n}" for n in range(1, 6)]
    + ["+added6"]
    + [f" line{n}" for n in range(7, 12)]
)


def _console():
    buf = io.StringIO()
    return Console(file=buf, width=120, color_system=None), buf


def _comment(line_no=6, category="want", message="Name this better"):
    return ReviewComment(file_name="app.py", category=category, message=message, line_no=line_no)


def _review(*comments, failed=(), skipped=()):
    return StructuredReview(
        summary="Minor naming issues.",
        file_reviews=(FileReview("app.py", DIFF, tuple(comments)), FileReview("clean.py", "diff --git a/c b/c")),
        failed_files=tuple(failed),
        skipped_files=tuple(skipped),
        category_counts={"must": 0, "want": len(comments), "nits": 0, "fyi": 0, "imo": 0},
    )


class TestRenderStyle:
    def test_from_config(self):
        style = RenderStyle.from_config({"color": "never", "context_lines": 5}, styled=False)
        assert style.color is False
        assert style.styled is False
        assert style.context_lines == 5

    def test_defaults(self):
        style = RenderStyle.from_config({})
        assert style.color is True
        assert style.context_lines == 3
        assert set(style.category_styles) == {"must", "want", "nits", "fyi", "imo"}


class TestCommentContext:
    def test_file_header_dropped(self):
        lines = comment_context(FileReview("app.py", DIFF), _comment(line_no=6), window=1)
        assert lines == ["@@ -1,10 +1,11 @@", " line5", "+added6", " line7"]

    def test_file_level_comment_shows_changes(self):
        lines = comment_context(FileReview("app.py", DIFF), _comment(line_no=None), window=0)
        assert lines == ["@@ -1,10 +1,11 @@", "+added6"]

    def test_long_snippet_capped(self):
        big = "\n".join(["diff --git a/x b/x", "@@ -1,100 +1,100 @@"] + [f"+l{n}" for n in range(100)])
        lines = comment_context(FileReview("x", big), _comment(line_no=None), window=3)
        assert len(lines) == MAX_SNIPPET_LINES + 1
        assert lines[-1] == "..."


class TestReviewRenderer:
    def test_styled_output(self):
        console, buf = _console()
        ReviewRenderer(console, RenderStyle()).render(_review(_comment()))
        out = buf.getvalue()
        assert "Minor naming issues." in out
        assert "[WANT] line 6  Name this better" in out
        assert "+added6" in out
        assert "clean.py" in out
        assert "✓ No issues" in out

    def test_failed_and_skipped_listed(self):
        console, buf = _console()
        ReviewRenderer(console, RenderStyle()).render(_review(failed=["broken.py"], skipped=["logo.png"]))
        out = buf.getvalue()
        assert "1 file(s) could not be reviewed: broken.py" in out
        assert "Skipped 1 file(s): logo.png" in out

    def test_plain_text(self):
        renderer = ReviewRenderer(_console()[0], RenderStyle(styled=False, context_lines=0))
        text = renderer.render_plain(_review(_comment(), _comment(line_no=None, category="fyi", message="General")))
        assert text.splitlines()[0] == "Summary: Minor naming issues."
        assert "== app.py ==" in text
        assert "[WANT] line 6: Name this better" in text
        assert "[FYI]: General" in text
        assert "    +added6" in text
        assert "== clean.py ==\nNo issues" in text

    def test_plain_render_has_no_box_drawing(self):
        console, buf = _console()
        ReviewRenderer(console, RenderStyle(styled=False)).render(_review(_comment()))
        assert "╭" not in buf.getvalue()
        assert "[WANT] line 6: Name this better" in buf.getvalue()


class TestMessages:
    def test_commit_message_panel(self):
        console, buf = _console()
        render_commit_message(console, RenderStyle(), "feat(app): add login")
        assert "feat(app): add login" in buf.getvalue()
        assert "Generated Commit Message" in buf.getvalue()

    def test_commit_message_plain(self):
        console, buf = _console()
        render_commit_message(console, RenderStyle(styled=False), "fix: [scope] brackets kept")
        assert "fix: [scope] brackets kept" in buf.getvalue()

    def test_warning_plain(self):
        console, buf = _console()
        print_warning(console, RenderStyle(styled=False), "careful")
        assert buf.getvalue().strip() == "Warning: careful"
