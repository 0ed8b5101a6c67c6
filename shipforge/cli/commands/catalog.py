"""``shipforge catalog`` — generate SBOM catalogs for release artifacts.

Runs every enabled cataloger in declaration order.  Targets are only
regenerated when missing or older than their artifact.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from shipforge.catalog.catalogers import (
    CatalogingError,
    build_catalogers,
    run_catalogers,
)
from shipforge.cli.commands._common import load_run_context, resolve_fail_fast
from shipforge.cli.renderer import ReleaseRenderer
from shipforge.config import settings

console = Console()


def catalog_cmd(
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
    cataloger: list[str] = typer.Option(
        None, "--cataloger", "-c", help="Only run this cataloger (repeatable)."
    ),
    exclude_cataloger: list[str] = typer.Option(
        None, "--exclude-cataloger", "-x", help="Skip this cataloger (repeatable)."
    ),
    fail_fast: bool = typer.Option(
        None,
        "--fail-fast/--collect",
        help="Stop at the first failing cataloger, or run all and report.",
    ),
) -> None:
    """Generate SBOM catalogs for the project's release artifacts."""
    context = load_run_context(console, config, basedir, select_platform, reject_platform)
    renderer = ReleaseRenderer(console=console)

    catalogers = build_catalogers(
        context,
        include=cataloger or (),
        exclude=exclude_cataloger or (),
        settings=settings,
    )
    try:
        report = run_catalogers(catalogers, fail_fast=resolve_fail_fast(fail_fast))
    except CatalogingError as exc:
        renderer.print_failures("Cataloging aborted.", exc.failures)
        raise typer.Exit(code=1)

    renderer.print_catalog_report(report)
    if not report.ok:
        renderer.print_failures(
            f"{len(report.failures)} cataloger(s) failed.", dict(report.failures)
        )
        raise typer.Exit(code=1)
