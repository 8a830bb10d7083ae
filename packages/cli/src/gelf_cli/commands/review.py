"""review command — run an AI code review on the working tree diff."""

from __future__ import annotations

import threading

import click
from rich.live import Live
from rich.markdown import Markdown

from gelf_cli.auth import build_provider
from gelf_cli.commands import cancel, load_command_config
from gelf_cli.render import RenderStyle, ReviewRenderer, print_warning
from gelf_core.git import GitError, get_diff
from gelf_core.providers.base import ProviderError
from gelf_core.reviewer import ReviewError, partition_segments, run_review
from gelf_core.stream import ReviewStream


def _stream(provider, diff: str, config: dict, style: RenderStyle, console) -> None:
    """Legacy mode: render free-form Markdown as it arrives."""
    stream = ReviewStream(provider, diff, config["review_language"])
    if not style.styled:
        for chunk in stream:
            click.echo(chunk, nl=False)
        click.echo()
        return

    text = ""
    with Live(Markdown(""), console=console, refresh_per_second=8, vertical_overflow="visible") as live:
        for chunk in stream:
            text += chunk
            live.update(Markdown(text))


def _structured(provider, diff: str, config: dict, style: RenderStyle, console, err_console) -> None:
    segments, _ = partition_segments(diff, config.get("exclude"))
    total = len(segments)
    done = 0
    lock = threading.Lock()

    with err_console.status(f"Reviewing {total} file(s)...") as status:

        def _progress(segment, file_review):
            nonlocal done
            with lock:
                done += 1
                status.update(f"Reviewing {total} file(s)... {done} finished, last: {segment.file_name}")

        review = run_review(provider, diff, config, progress=_progress)

    ReviewRenderer(console, style).render(review)


@click.command("review")
@click.option("--staged", is_flag=True, help="Review staged changes instead of unstaged changes.")
@click.option("--model", default=None, help="Model for this review. Overrides config file.")
@click.option("--language", default=None, help="Language of the review comments.")
@click.option("--no-style", "no_style", is_flag=True, help="Disable rich styling; print plain text.")
@click.option(
    "--stream",
    "stream",
    is_flag=True,
    help="Stream a free-form Markdown review instead of per-file comments.",
)
@click.pass_context
def review_cmd(ctx, staged: bool, model: str | None, language: str | None, no_style: bool, stream: bool):
    """AI-powered code review of your local changes.

    Each changed file is reviewed separately; comments are tagged
    must / want / nits / fyi / imo and shown with the surrounding diff.

    \b
    Required environment variable (depending on the configured provider):
      ANTHROPIC_API_KEY, OPENAI_API_KEY or GEMINI_API_KEY
    """
    config = load_command_config(ctx, {"review_model": model, "review_language": language})
    style = RenderStyle.from_config(config, styled=not no_style)
    console = style.console()
    err_console = style.console(stderr=True)

    try:
        diff = get_diff(staged=staged)
    except GitError as e:
        which = "staged" if staged else "unstaged"
        raise click.ClickException(f"failed to get {which} changes: {e}")

    if not diff:
        if staged:
            print_warning(console, style, "No staged changes found. Please stage some changes first with 'git add'.")
        else:
            print_warning(console, style, "No unstaged changes found.")
        return

    provider = build_provider(config, "review")

    try:
        if stream:
            _stream(provider, diff, config, style, console)
        else:
            _structured(provider, diff, config, style, console, err_console)
    except KeyboardInterrupt:
        cancel(err_console)
    except (ProviderError, ReviewError) as e:
        raise click.ClickException(f"failed to generate code review: {e}")
