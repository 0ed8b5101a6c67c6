"""Rich terminal renderer for release assets and run reports.

Color scheme
------------
- cyan      : standalone and distribution files
- green     : checksums
- magenta   : signatures
- yellow    : catalogs
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from shipforge.catalog.base import CatalogResult
from shipforge.catalog.catalogers import CatalogReport
from shipforge.models.assets import Asset, AssetKind
from shipforge.models.context import ReleaseContext

_KIND_STYLES: dict[AssetKind, str] = {
    AssetKind.FILE: "cyan",
    AssetKind.CHECKSUM: "green",
    AssetKind.SIGNATURE: "magenta",
    AssetKind.CATALOG: "yellow",
}

_RESULT_DISPLAY: dict[CatalogResult, str] = {
    CatalogResult.EXECUTED: "[green]EXECUTED[/green]",
    CatalogResult.UPTODATE: "[dim]UP TO DATE[/dim]",
    CatalogResult.NO_ARTIFACTS: "[dim]NO ARTIFACTS[/dim]",
}


class ReleaseRenderer:
    """Renders assets and cataloging outcomes as Rich tables.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_assets(
        self, title: str, assets: Sequence[Asset], context: ReleaseContext
    ) -> Table:
        table = Table(title=title, header_style="bold cyan", expand=True)
        table.add_column("#", style="dim", justify="right", width=4)
        table.add_column("Asset", min_width=20)
        table.add_column("Kind", justify="center", width=10)
        table.add_column("Distribution")
        table.add_column("Path", overflow="fold")

        for i, asset in enumerate(assets, start=1):
            style = _KIND_STYLES.get(asset.kind, "")
            table.add_row(
                str(i),
                f"[{style}]{escape(asset.filename)}[/{style}]",
                asset.kind.value,
                asset.distribution.name if asset.distribution else "[dim]-[/dim]",
                escape(str(context.relativize(asset.effective_path))),
            )
        return table

    def render_catalog_report(self, report: CatalogReport) -> Table:
        table = Table(title="SBOM catalogers", header_style="bold cyan")
        table.add_column("Cataloger")
        table.add_column("Result", justify="center")
        table.add_column("Details")

        for name, result in report.results.items():
            table.add_row(name, _RESULT_DISPLAY.get(result, result.value), "[dim]-[/dim]")
        for name, exc in report.failures.items():
            table.add_row(name, "[bold red]FAILED[/bold red]", f"[red]{escape(str(exc))}[/red]")
        return table

    # ------------------------------------------------------------------
    # Standalone print
    # ------------------------------------------------------------------

    def print_assets(
        self, title: str, assets: Sequence[Asset], context: ReleaseContext
    ) -> None:
        if not assets:
            self.console.print(f"[dim]{escape(title)}: no assets to publish.[/dim]")
            return
        self.console.print(self.render_assets(title, assets, context))

    def print_catalog_report(self, report: CatalogReport) -> None:
        if not report.results and not report.failures:
            self.console.print("[dim]No catalogers were run.[/dim]")
            return
        self.console.print(self.render_catalog_report(report))

    def print_failures(self, headline: str, failures: dict[str, Exception]) -> None:
        self.console.print(f"[bold red]{escape(headline)}[/bold red]")
        for name, exc in failures.items():
            self.console.print(f"  [red]- {escape(name)}: {escape(str(exc))}[/red]")
