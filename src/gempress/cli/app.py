"""Main Typer application for gempress."""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from gempress.cli.errorhandler import handle_cli_errors
from gempress.core.config_loader import DEFAULT_CONFIG_FILE, load_config
from gempress.logging_setup import configure_logging, console
from gempress.pipeline import build_capsule
from gempress.scaffold import create_new_post

app = typer.Typer(
    name="gempress",
    help="Build a Gemini capsule from gemtext posts with YAML metadata.",
    add_completion=False,
    no_args_is_help=True,
)

ConfigOption = Annotated[
    Path,
    typer.Option("--config", "-c", help="Path to the gempress config file.", dir_okay=False),
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logs.")]
DebugOption = Annotated[bool, typer.Option("--debug", help="Show tracebacks for errors.")]


@app.command()
def build(
    config: ConfigOption = DEFAULT_CONFIG_FILE,
    verbose: VerboseOption = False,
    debug: DebugOption = False,
) -> None:
    """Build the capsule into its public directory."""
    configure_logging(verbose=verbose)
    with handle_cli_errors(debug=debug):
        settings = load_config(config)
        report = build_capsule(settings)

    console.print(
        f"[bold green]Built {len(report.feed.entries)} post(s)[/bold green] "
        f"into {escape(str(settings.abs_public_dir))}"
    )


@app.command()
def new(
    slug: Annotated[str, typer.Argument(help="File name (without extension) of the new post.")],
    title: Annotated[str | None, typer.Option("--title", "-t", help="Title of the new post.")] = None,
    config: ConfigOption = DEFAULT_CONFIG_FILE,
    debug: DebugOption = False,
) -> None:
    """Create a new draft post: an empty gemtext file and its YAML metadata."""
    configure_logging()
    with handle_cli_errors(debug=debug):
        settings = load_config(config)
        pair = create_new_post(settings.abs_posts_dir, slug, title)

    console.print(f"Created {escape(str(pair.body_path))}")
    console.print(f"Created {escape(str(pair.metadata_path))}")
    console.print("Set [bold]draft: false[/bold] in the metadata file to publish it.")


if __name__ == "__main__":
    app()
