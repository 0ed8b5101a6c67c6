"""Main Typer application — imports and registers all CLI commands.

Entry point: ``shipforge`` (configured via pyproject.toml project.scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from shipforge.cli.commands.assets import assets_cmd
from shipforge.cli.commands.catalog import catalog_cmd
from shipforge.cli.commands.checksum import checksum_cmd
from shipforge.cli.commands.publish import publish_cmd
from shipforge.config import settings

app = typer.Typer(
    name="shipforge",
    help="Shipforge: incremental SBOM cataloging, checksums and release publishing.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="catalog", help="Generate SBOM catalogs for release artifacts.")(catalog_cmd)
app.command(name="checksum", help="Write individual checksums and manifests.")(checksum_cmd)
app.command(name="assets", help="Show the resolved assets of a publish target.")(assets_cmd)
app.command(name="publish", help="Catalog, checksum and publish release targets.")(publish_cmd)


def configure_logging(level: str) -> None:
    """Route log records through Rich on stderr."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None, "--log-level", help="Logging level (default: SHIPFORGE_LOG_LEVEL or INFO)."
    ),
    debug: bool = typer.Option(
        False, "--debug", help="Shortcut for --log-level DEBUG."
    ),
) -> None:
    """Shipforge release tooling."""
    if debug or settings.debug:
        level = "DEBUG"
    else:
        level = log_level or settings.log_level
    configure_logging(level)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
