"""config command — inspect the resolved configuration."""

from __future__ import annotations

import os

import click
from rich.table import Table

from gelf_cli.commands import load_command_config
from gelf_cli.render import RenderStyle
from gelf_core.providers import PROVIDERS, model_for

# Shown as "(set)" / "(not set)" only; values are never printed.
_SECRET_ENV_VARS = ("ANTHROPIC_API_KEY", "OPENAI_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY")
_PLAIN_ENV_VARS = ("GELF_CONFIG", "XDG_CONFIG_HOME")

_SHOWN_KEYS = (
    "provider",
    "commit_model",
    "review_model",
    "doc_model",
    "language",
    "commit_language",
    "review_language",
    "doc_language",
    "max_workers",
    "context_lines",
    "max_chars_per_file",
    "exclude",
    "color",
)


def _resolved_model(config: dict, purpose: str) -> str:
    if config.get("provider") not in PROVIDERS:
        return "(unknown provider)"
    return model_for(config, purpose)


@click.group("config")
def config_cmd():
    """Manage gelf configuration."""


@config_cmd.command("list")
@click.pass_context
def config_list_cmd(ctx):
    """Show the current configuration and relevant environment variables."""
    config = load_command_config(ctx)
    style = RenderStyle.from_config(config)
    console = style.console()

    console.print(f"Config file: {config.get('config_path') or '(none found, using defaults)'}", markup=False)

    table = Table(title="Current Configuration", show_header=True, header_style="bold cyan")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for key in _SHOWN_KEYS:
        value = config.get(key)
        if isinstance(value, list):
            value = ", ".join(value) or "—"
        table.add_row(key, "—" if value is None else str(value))
    table.add_row("commit model (resolved)", _resolved_model(config, "commit"))
    table.add_row("review model (resolved)", _resolved_model(config, "review"))
    table.add_row("doc model (resolved)", _resolved_model(config, "doc"))
    console.print(table)

    env_table = Table(title="Environment Variables", show_header=True, header_style="bold cyan")
    env_table.add_column("Variable", style="bold")
    env_table.add_column("Value")
    for name in _SECRET_ENV_VARS:
        env_table.add_row(name, "(set)" if os.environ.get(name) else "(not set)")
    for name in _PLAIN_ENV_VARS:
        env_table.add_row(name, os.environ.get(name) or "(not set)")
    console.print(env_table)
