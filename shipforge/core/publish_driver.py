"""Publish driver — catalogs, resolves and publishes release targets.

Order for one run:

    run enabled catalogers (once) -> for each enabled target:
        resolve assets -> hand them to the target's publisher

A cataloger that fails contributes no catalog assets to any target.  With
``fail_fast`` the first failure aborts the run.  Otherwise every
independent unit (cataloger or target) runs, failures are collected, and a
single ``PublishError`` naming them is raised at the end.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping, Sequence

from shipforge.catalog.catalogers import (
    CatalogReport,
    CatalogingError,
    build_catalogers,
    run_catalogers,
)
from shipforge.config import ShipforgeSettings
from shipforge.core.asset_resolver import resolve_assets
from shipforge.models.assets import Asset
from shipforge.models.config import PublishTarget
from shipforge.models.context import ReleaseContext
from shipforge.publishers.base import Publisher
from shipforge.tools.command import ToolInvoker

logger = logging.getLogger(__name__)


class PublishError(RuntimeError):
    """Raised when one or more catalogers or targets fail."""

    def __init__(self, failures: Mapping[str, Exception]) -> None:
        self.failures = dict(failures)
        super().__init__(
            f"{len(self.failures)} unit(s) failed: "
            + "; ".join(f"{name}: {exc}" for name, exc in self.failures.items())
        )


class PublishReport:
    """Outcome of a publish run."""

    def __init__(self, catalog: CatalogReport | None = None) -> None:
        self.catalog = catalog or CatalogReport()
        self.published: dict[str, list[Asset]] = {}
        self.failures: dict[str, Exception] = {}

    @property
    def ok(self) -> bool:
        return not self.failures and self.catalog.ok

    def all_failures(self) -> dict[str, Exception]:
        """Cataloger failures keyed ``catalog:<type>``, then target failures."""
        failures: dict[str, Exception] = {
            f"catalog:{name}": exc for name, exc in self.catalog.failures.items()
        }
        failures.update(self.failures)
        return failures

    def raise_for_failures(self) -> None:
        failures = self.all_failures()
        if failures:
            raise PublishError(failures)


def _wants_catalogs(target: PublishTarget) -> bool:
    return target.enabled and target.upload_assets and target.catalogs


class PublishDriver:
    """Runs the catalog, resolve and publish steps for a set of targets.

    Parameters
    ----------
    context:
        The run context.
    fail_fast:
        Abort at the first failing cataloger or target instead of
        collecting failures.
    include, exclude:
        Cataloger type filters, see ``build_catalogers``.
    tools:
        Tool invokers keyed by cataloger type, replacing the defaults.
    settings:
        Runtime settings used to build the default tools.
    """

    def __init__(
        self,
        context: ReleaseContext,
        *,
        fail_fast: bool = False,
        include: Collection[str] = (),
        exclude: Collection[str] = (),
        tools: Mapping[str, ToolInvoker] | None = None,
        settings: ShipforgeSettings | None = None,
    ) -> None:
        self.context = context
        self.fail_fast = fail_fast
        self.include = include
        self.exclude = exclude
        self.tools = tools
        self.settings = settings

    def run_catalogers(self) -> CatalogReport:
        """Run the enabled catalogers once.

        Raises
        ------
        PublishError
            In fail-fast mode, when a cataloger fails.
        """
        catalogers = build_catalogers(
            self.context,
            include=self.include,
            exclude=self.exclude,
            tools=self.tools,
            settings=self.settings,
        )
        try:
            return run_catalogers(catalogers, fail_fast=self.fail_fast)
        except CatalogingError as exc:
            raise PublishError(
                {f"catalog:{name}": err for name, err in exc.failures.items()}
            ) from exc

    def publish_target(
        self,
        target: PublishTarget,
        publisher: Publisher,
        catalog_report: CatalogReport,
    ) -> list[Asset]:
        """Resolve *target*'s assets and hand them to *publisher*."""
        assets = resolve_assets(
            self.context, target, excluded_catalogers=catalog_report.failed_types
        )
        logger.info(
            "Publishing %d asset(s) for %s with %s", len(assets), target.name, publisher.name
        )
        publisher.publish(assets)
        return assets

    def publish_all(
        self, targets: Sequence[tuple[PublishTarget, Publisher]]
    ) -> PublishReport:
        """Catalog once, then resolve and publish every enabled target.

        Raises
        ------
        PublishError
            On the first failure in fail-fast mode, otherwise after every
            unit ran if any failed.
        """
        if any(_wants_catalogs(target) for target, _ in targets):
            report = PublishReport(self.run_catalogers())
        else:
            report = PublishReport()

        for target, publisher in targets:
            if not target.enabled:
                logger.info("%s is not enabled. Skipping", target.name)
                continue
            try:
                report.published[target.name] = self.publish_target(
                    target, publisher, report.catalog
                )
            except Exception as exc:  # noqa: BLE001
                logger.error("Target %s failed: %s", target.name, exc)
                report.failures[target.name] = exc
                if self.fail_fast:
                    raise PublishError({target.name: exc}) from exc

        failures = report.all_failures()
        if failures:
            logger.warning("%d unit(s) failed", len(failures))
        report.raise_for_failures()
        return report


def publish(
    context: ReleaseContext,
    target: PublishTarget,
    publisher: Publisher,
    *,
    fail_fast: bool = False,
    include: Collection[str] = (),
    exclude: Collection[str] = (),
    tools: Mapping[str, ToolInvoker] | None = None,
    settings: ShipforgeSettings | None = None,
) -> PublishReport:
    """Catalog, resolve and publish a single target."""
    return publish_all(
        context,
        [(target, publisher)],
        fail_fast=fail_fast,
        include=include,
        exclude=exclude,
        tools=tools,
        settings=settings,
    )


def publish_all(
    context: ReleaseContext,
    targets: Sequence[tuple[PublishTarget, Publisher]],
    *,
    fail_fast: bool = False,
    include: Collection[str] = (),
    exclude: Collection[str] = (),
    tools: Mapping[str, ToolInvoker] | None = None,
    settings: ShipforgeSettings | None = None,
) -> PublishReport:
    """Catalog once, then resolve and publish every enabled target."""
    driver = PublishDriver(
        context,
        fail_fast=fail_fast,
        include=include,
        exclude=exclude,
        tools=tools,
        settings=settings,
    )
    return driver.publish_all(targets)
