"""SBOM catalogers and their multi-backend runner."""

from shipforge.catalog.base import (
    BaseSbomCataloger,
    CatalogProcessingError,
    CatalogResult,
    ToolUnavailableError,
)
from shipforge.catalog.catalogers import (
    CATALOGER_TYPES,
    CatalogingError,
    CatalogReport,
    build_catalogers,
    catalog,
    run_catalogers,
)
from shipforge.catalog.cyclonedx import CyclonedxSbomCataloger
from shipforge.catalog.syft import SyftSbomCataloger

__all__ = [
    "CATALOGER_TYPES",
    "BaseSbomCataloger",
    "CatalogProcessingError",
    "CatalogReport",
    "CatalogResult",
    "CatalogingError",
    "CyclonedxSbomCataloger",
    "SyftSbomCataloger",
    "ToolUnavailableError",
    "build_catalogers",
    "catalog",
    "run_catalogers",
]
