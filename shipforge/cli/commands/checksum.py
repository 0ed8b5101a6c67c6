"""``shipforge checksum`` — write individual checksums and manifests."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from shipforge.cli.commands._common import load_run_context
from shipforge.core.checksummer import ChecksumError, collect_and_write_checksums

console = Console()


def checksum_cmd(
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
) -> None:
    """Calculate checksums for the project's release artifacts."""
    context = load_run_context(console, config, basedir, select_platform, reject_platform)

    try:
        written = collect_and_write_checksums(context)
    except ChecksumError as exc:
        console.print(f"[bold red]Checksum failed:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    if not written:
        console.print("[dim]Checksums have not changed.[/dim]")
        return
    for manifest in written:
        console.print(f"[green]Wrote[/green] {escape(str(context.relativize(manifest)))}")
