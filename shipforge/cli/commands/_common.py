"""Helpers shared by the shipforge subcommands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from shipforge.config import settings
from shipforge.loader import ModelLoadError, load_context
from shipforge.models.artifacts import PlatformFilter
from shipforge.models.context import ReleaseContext


def load_run_context(
    console: Console,
    config: Path | None,
    basedir: Path | None,
    select_platform: list[str] | None,
    reject_platform: list[str] | None,
) -> ReleaseContext:
    """Load the project file into a run context, exiting with code 1 on error."""
    config_path = config or settings.config_file
    try:
        return load_context(
            config_path,
            basedir=basedir,
            platform_filter=PlatformFilter(
                selected=select_platform or [],
                rejected=reject_platform or [],
            ),
        )
    except ModelLoadError as exc:
        console.print(f"[bold red]Cannot load project:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)


def resolve_fail_fast(fail_fast: bool | None) -> bool:
    """Command-line flag, falling back to ``SHIPFORGE_FAIL_FAST``."""
    return settings.fail_fast if fail_fast is None else fail_fast
