"""commit command — generate a commit message for staged changes and commit."""

from __future__ import annotations

import click

from gelf_cli.auth import build_provider
from gelf_cli.commands import cancel, load_command_config
from gelf_cli.render import RenderStyle, print_warning, render_commit_message
from gelf_core.commit import CommitMessageError, generate_commit_message
from gelf_core.diff import format_file_stat, parse_diff_summary
from gelf_core.git import GitError, get_diff
from gelf_core.git import commit as git_commit

_NO_STAGED = "No staged changes found. Please stage some changes first with 'git add'."


def _echo_diff_overview(diff: str) -> None:
    stats = parse_diff_summary(diff)
    if stats:
        click.echo("=== Changed Files ===", err=True)
        for stat in stats:
            click.echo(format_file_stat(stat), err=True)
        click.echo(f"\n=== Full Diff ===\n{diff}\n", err=True)
    else:
        click.echo(f"=== Staged Changes ===\n{diff}\n", err=True)


@click.command("commit")
@click.option("--dry-run", "dry_run", is_flag=True, help="Print the generated message without committing.")
@click.option("--quiet", "-q", is_flag=True, help="With --dry-run, do not print the changed files and diff.")
@click.option("--model", default=None, help="Model for this run. Overrides config file.")
@click.option("--language", default=None, help="Language of the commit message (e.g. english, japanese).")
@click.option("--yes", "-y", is_flag=True, help="Commit without asking for confirmation.")
@click.pass_context
def commit_cmd(ctx, dry_run: bool, quiet: bool, model: str | None, language: str | None, yes: bool):
    """Generate a Conventional Commits message for staged changes and commit.

    \b
    Required environment variable (depending on the configured provider):
      ANTHROPIC_API_KEY, OPENAI_API_KEY or GEMINI_API_KEY
    """
    config = load_command_config(ctx, {"commit_model": model, "commit_language": language})
    style = RenderStyle.from_config(config)
    console = style.console()
    err_console = style.console(stderr=True)

    try:
        diff = get_diff(staged=True)
    except GitError as e:
        raise click.ClickException(f"failed to get staged changes: {e}")

    if not diff:
        if dry_run:
            print_warning(err_console, style, _NO_STAGED)
            raise click.ClickException("no staged changes")
        print_warning(console, style, _NO_STAGED)
        return

    provider = build_provider(config, "commit")

    if dry_run:
        if not quiet:
            _echo_diff_overview(diff)
        try:
            message = generate_commit_message(provider, diff, config["commit_language"])
        except CommitMessageError as e:
            raise click.ClickException(str(e))
        click.echo(message)
        return

    try:
        with err_console.status("Generating commit message..."):
            message = generate_commit_message(provider, diff, config["commit_language"])
    except CommitMessageError as e:
        raise click.ClickException(str(e))
    except KeyboardInterrupt:
        cancel(err_console)

    render_commit_message(console, style, message)

    if not yes and not click.confirm("Commit this message?", default=False):
        console.print("Commit cancelled.")
        return

    try:
        git_commit(message)
    except GitError as e:
        raise click.ClickException(f"failed to commit changes: {e}")

    console.print(f"✓ Committed: {message}", style=style.success if style.styled else None, markup=False)
