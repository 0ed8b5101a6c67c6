"""Runs the enabled SBOM catalogers in declaration order.

Failures are handled per cataloger.  In fail-fast mode the first failure
aborts the run.  Otherwise every cataloger runs, failures are collected and
reported together by ``CatalogReport.raise_for_failures()``.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping

from shipforge.catalog.base import (
    BaseSbomCataloger,
    CatalogProcessingError,
    CatalogResult,
)
from shipforge.catalog.cyclonedx import CyclonedxSbomCataloger
from shipforge.catalog.syft import SyftSbomCataloger
from shipforge.config import ShipforgeSettings
from shipforge.models.context import ReleaseContext
from shipforge.tools.command import ToolInvoker

logger = logging.getLogger(__name__)

CATALOGER_TYPES: dict[str, type[BaseSbomCataloger]] = {
    "cyclonedx": CyclonedxSbomCataloger,
    "syft": SyftSbomCataloger,
}


class CatalogingError(RuntimeError):
    """Raised when one or more catalogers fail."""

    def __init__(self, failures: Mapping[str, Exception]) -> None:
        self.failures = dict(failures)
        super().__init__(
            f"{len(self.failures)} cataloger(s) failed: "
            + "; ".join(f"{name}: {exc}" for name, exc in self.failures.items())
        )


class CatalogReport:
    """Outcome of a multi-cataloger run."""

    def __init__(self) -> None:
        self.results: dict[str, CatalogResult] = {}
        self.failures: dict[str, CatalogProcessingError] = {}

    @property
    def failed_types(self) -> set[str]:
        return set(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures

    def raise_for_failures(self) -> None:
        if self.failures:
            raise CatalogingError(self.failures)


def build_catalogers(
    context: ReleaseContext,
    *,
    include: Collection[str] = (),
    exclude: Collection[str] = (),
    tools: Mapping[str, ToolInvoker] | None = None,
    settings: ShipforgeSettings | None = None,
) -> list[BaseSbomCataloger]:
    """Instantiate the catalogers to run, in declaration order.

    Parameters
    ----------
    include:
        Only run these cataloger types.  Unknown or disabled types are
        reported and ignored.
    exclude:
        Skip these cataloger types.  Ignored when *include* is given.
    tools:
        Tool invokers keyed by cataloger type, replacing the defaults.
    """
    sbom = context.model.catalog.sbom
    if not sbom.enabled:
        logger.info("SBOM catalogers are not enabled")
        return []

    active = sbom.active_cataloger_types()
    if include:
        types: list[str] = []
        for cataloger_type in include:
            if cataloger_type not in CATALOGER_TYPES:
                logger.warning("Unsupported cataloger %r", cataloger_type)
            elif cataloger_type not in active:
                logger.warning("Cataloger %r is not enabled", cataloger_type)
            elif cataloger_type not in types:
                types.append(cataloger_type)
    else:
        types = []
        for cataloger_type in active:
            if cataloger_type in exclude:
                logger.info("Cataloger %s excluded", cataloger_type)
            else:
                types.append(cataloger_type)

    configs = sbom.cataloger_configs()
    tools = tools or {}
    return [
        CATALOGER_TYPES[t](context, configs[t], tools.get(t), settings=settings)
        for t in types
    ]


def run_catalogers(
    catalogers: list[BaseSbomCataloger],
    *,
    fail_fast: bool = False,
) -> CatalogReport:
    """Run *catalogers* sequentially.

    Raises
    ------
    CatalogingError
        In fail-fast mode, on the first failing cataloger.  In collect mode
        failures are only recorded on the returned report.
    """
    report = CatalogReport()

    for cataloger in catalogers:
        cataloger_type = cataloger.cataloger_type
        logger.info("Cataloging artifacts with %s", cataloger_type)
        try:
            report.results[cataloger_type] = cataloger.catalog()
        except CatalogProcessingError as exc:
            logger.error("Cataloger %s failed: %s", cataloger_type, exc)
            report.failures[cataloger_type] = exc
            if fail_fast:
                raise CatalogingError({cataloger_type: exc}) from exc

    if not report.failures:
        outcomes = set(report.results.values())
        if not outcomes or outcomes == {CatalogResult.NO_ARTIFACTS}:
            logger.info("No catalogers were triggered")
        elif outcomes == {CatalogResult.UPTODATE}:
            logger.info("SBOM catalogs have not changed")
    else:
        logger.warning(
            "%d/%d catalogers failed", len(report.failures), len(catalogers)
        )

    return report


def catalog(
    context: ReleaseContext,
    *,
    include: Collection[str] = (),
    exclude: Collection[str] = (),
    fail_fast: bool = False,
    tools: Mapping[str, ToolInvoker] | None = None,
    settings: ShipforgeSettings | None = None,
) -> CatalogReport:
    """Build and run the catalogers, raising if any failed."""
    catalogers = build_catalogers(
        context, include=include, exclude=exclude, tools=tools, settings=settings
    )
    report = run_catalogers(catalogers, fail_fast=fail_fast)
    report.raise_for_failures()
    return report
