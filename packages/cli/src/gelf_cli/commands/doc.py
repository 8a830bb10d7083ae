"""doc command — generate project documentation from source code."""

from __future__ import annotations

from pathlib import Path

import click

from gelf_cli.auth import build_provider
from gelf_cli.commands import cancel, load_command_config
from gelf_cli.render import RenderStyle
from gelf_core.doc import OUTPUT_FORMATS, TEMPLATES, DocError, analyze_source, format_output, generate_documentation


@click.command("doc")
@click.option("--src", "-s", required=True, help="Source directory or file to analyze.")
@click.option("--dst", "-d", required=True, help="File to write the documentation to.")
@click.option("--template", "-t", required=True, type=click.Choice(list(TEMPLATES)), help="Kind of document.")
@click.option(
    "--format",
    "-f",
    "fmt",
    default="markdown",
    show_default=True,
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    help="Output format.",
)
@click.option("--model", "-m", default=None, help="Model for this run. Overrides config file.")
@click.option("--language", "-l", default=None, help="Language of the documentation (defaults to review_language).")
@click.pass_context
def doc_cmd(ctx, src: str, dst: str, template: str, fmt: str, model: str | None, language: str | None):
    """Generate documentation for a source tree with one AI call.

    \b
    Templates:
      readme        README with installation, usage and contribution guidelines
      api           API reference
      changelog     Keep a Changelog template
      architecture  system design, components and data flow
      godoc         Go package documentation
    """
    if not Path(src).exists():
        raise click.BadParameter(f"source path does not exist: {src}", param_hint="'--src'")

    config = load_command_config(ctx, {"doc_model": model, "doc_language": language})
    style = RenderStyle.from_config(config)
    console = style.console()
    err_console = style.console(stderr=True)

    provider = build_provider(config, "doc")
    title = TEMPLATES[template][0]

    try:
        err_console.print(f"Analyzing source code at: {src}", markup=False)
        info = analyze_source(src)
        with err_console.status(f"Generating {title} documentation..."):
            content = generate_documentation(provider, info, template, config["doc_language"])
        output = format_output(content, fmt)
    except DocError as e:
        raise click.ClickException(str(e))
    except KeyboardInterrupt:
        cancel(err_console)

    out_path = Path(dst)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(output + "\n", encoding="utf-8")
    except OSError as e:
        raise click.ClickException(f"failed to write {dst}: {e}")

    console.print(
        f"✓ Documentation generated successfully: {dst}",
        style=style.success if style.styled else None,
        markup=False,
    )
