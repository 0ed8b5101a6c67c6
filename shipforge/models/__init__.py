"""Shipforge data models — all Pydantic v2, all frozen (immutable)."""

from shipforge.models.artifacts import Artifact, Distribution, PlatformFilter
from shipforge.models.assets import Asset, AssetKind
from shipforge.models.config import (
    Algorithm,
    CatalogConfig,
    ChecksumConfig,
    CyclonedxCatalogerConfig,
    CyclonedxFormat,
    PackConfig,
    ProjectInfo,
    PublishTarget,
    ReleaseModel,
    SbomConfig,
    SigningConfig,
    SigningMode,
    SyftCatalogerConfig,
    SyftFormat,
)
from shipforge.models.context import ReleaseContext

__all__ = [
    # artifacts
    "Artifact",
    "Distribution",
    "PlatformFilter",
    # assets
    "Asset",
    "AssetKind",
    # config
    "Algorithm",
    "CatalogConfig",
    "ChecksumConfig",
    "CyclonedxCatalogerConfig",
    "CyclonedxFormat",
    "PackConfig",
    "ProjectInfo",
    "PublishTarget",
    "ReleaseModel",
    "SbomConfig",
    "SigningConfig",
    "SigningMode",
    "SyftCatalogerConfig",
    "SyftFormat",
    # context
    "ReleaseContext",
]
