"""CLI entry point for gelf.

Commands:
  commit  — generate a commit message for staged changes and commit
  review  — per-file AI code review of local changes
  doc     — generate documentation from a source tree
  config  — inspect the resolved configuration
"""

from __future__ import annotations

import importlib.metadata
import logging

import click

from gelf_cli.commands.commit import commit_cmd
from gelf_cli.commands.config import config_cmd
from gelf_cli.commands.doc import doc_cmd
from gelf_cli.commands.review import review_cmd

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.group()
@click.version_option(
    version=importlib.metadata.version("gelf"),
    prog_name="gelf",
)
@click.option(
    "--config",
    "config_path",
    default=None,
    help="Path to the configuration file. Searched for in the usual places when omitted.",
    envvar="GELF_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool):
    """AI commit messages and code reviews for your local git changes."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose


main.add_command(commit_cmd)
main.add_command(review_cmd)
main.add_command(doc_cmd)
main.add_command(config_cmd)
