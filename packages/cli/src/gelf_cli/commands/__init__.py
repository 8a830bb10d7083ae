"""Shared helpers for gelf subcommands."""

from __future__ import annotations

import os

import click
from rich.console import Console

# Exit status conventionally used for SIGINT.
EXIT_CANCELLED = 130


def load_command_config(ctx: click.Context, overrides: dict | None = None) -> dict:
    from gelf_core.config import ConfigError, load_config

    config_path = ctx.obj.get("config_path") if ctx.obj else None
    try:
        return load_config(config_path, cli_overrides=overrides)
    except ConfigError as e:
        raise click.ClickException(str(e))


def cancel(console: Console) -> None:
    """Exit immediately after Ctrl-C.

    Worker threads blocked on AI calls would otherwise be joined at
    interpreter shutdown, so the process skips normal exit handling.
    """
    console.print("\nCancelled.")
    console.file.flush()
    os._exit(EXIT_CANCELLED)
