"""``shipforge publish`` — catalog, checksum and publish release assets.

Each target is published into ``<output-dir>/<target name>`` by a local
directory publisher, or only logged with ``--dry-run``.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from shipforge.cli.commands._common import load_run_context, resolve_fail_fast
from shipforge.cli.renderer import ReleaseRenderer
from shipforge.config import settings
from shipforge.core.checksummer import ChecksumError, collect_and_write_checksums
from shipforge.core.publish_driver import PublishError, publish_all
from shipforge.models.config import PublishTarget
from shipforge.publishers import DryRunPublisher, LocalDirectoryPublisher, Publisher

console = Console()


def publish_cmd(
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
    target: list[str] = typer.Option(
        None, "--target", "-t", help="Only publish this target (repeatable)."
    ),
    output_dir: Path = typer.Option(
        None, "--output-dir", "-o", help="Publish directory (default: <output>/publish)."
    ),
    cataloger: list[str] = typer.Option(
        None, "--cataloger", "-c", help="Only run this cataloger (repeatable)."
    ),
    exclude_cataloger: list[str] = typer.Option(
        None, "--exclude-cataloger", "-x", help="Skip this cataloger (repeatable)."
    ),
    checksums: bool = typer.Option(
        True, "--checksums/--no-checksums", help="Write checksums before resolving."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Log the assets instead of publishing them."
    ),
    fail_fast: bool = typer.Option(
        None,
        "--fail-fast/--collect",
        help="Stop at the first failure, or publish everything and report.",
    ),
) -> None:
    """Publish the release and its uploaders."""
    context = load_run_context(console, config, basedir, select_platform, reject_platform)
    renderer = ReleaseRenderer(console=console)

    model = context.model
    if target:
        selected: list[PublishTarget] = []
        for name in target:
            found = model.find_target(name)
            if found is None:
                console.print(f"[bold red]Unknown target:[/bold red] {escape(name)}")
                raise typer.Exit(code=1)
            selected.append(found)
    else:
        selected = [model.release, *model.uploaders]

    base = output_dir or context.output_directory / "publish"
    pairs: list[tuple[PublishTarget, Publisher]] = [
        (t, DryRunPublisher(t.name) if dry_run else LocalDirectoryPublisher(base / t.name))
        for t in selected
    ]

    if checksums:
        try:
            collect_and_write_checksums(context)
        except ChecksumError as exc:
            console.print(f"[bold red]Checksum failed:[/bold red] {escape(str(exc))}")
            raise typer.Exit(code=1)

    try:
        report = publish_all(
            context,
            pairs,
            fail_fast=resolve_fail_fast(fail_fast),
            include=cataloger or (),
            exclude=exclude_cataloger or (),
            settings=settings,
        )
    except PublishError as exc:
        renderer.print_failures(f"Publish failed: {len(exc.failures)} failure(s).", exc.failures)
        raise typer.Exit(code=1)

    renderer.print_catalog_report(report.catalog)
    for name, assets in report.published.items():
        renderer.print_assets(name, assets, context)
    verb = "would be published" if dry_run else f"published to {escape(str(base))}"
    console.print(f"[bold green]{len(report.published)} target(s) {verb}.[/bold green]")
