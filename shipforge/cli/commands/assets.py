"""``shipforge assets`` — show what a target would publish.

Resolution only reads the filesystem: checksums, signatures and catalogs
appear only if they were generated beforehand.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from shipforge.cli.commands._common import load_run_context
from shipforge.cli.renderer import ReleaseRenderer
from shipforge.core.asset_resolver import resolve_assets

console = Console()


def assets_cmd(
    config: Path = typer.Option(
        None, "--config", "-f", help="Project file (default: shipforge.toml)."
    ),
    basedir: Path = typer.Option(
        None, "--basedir", "-b", help="Base directory for relative paths."
    ),
    select_platform: list[str] = typer.Option(
        None, "--select-platform", help="Only include artifacts for this platform."
    ),
    reject_platform: list[str] = typer.Option(
        None, "--reject-platform", help="Exclude artifacts for this platform."
    ),
    target: str = typer.Option(
        None, "--target", "-t", help="Release or uploader name (default: the release)."
    ),
) -> None:
    """Print the resolved, ordered assets of a publish target."""
    context = load_run_context(console, config, basedir, select_platform, reject_platform)

    publish_target = (
        context.model.find_target(target) if target else context.model.release
    )
    if publish_target is None:
        console.print(f"[bold red]Unknown target:[/bold red] {escape(target)}")
        raise typer.Exit(code=1)

    assets = resolve_assets(context, publish_target)
    ReleaseRenderer(console=console).print_assets(publish_target.name, assets, context)
