"""Publishable asset model.

Two assets are the same asset when they point at the same effective path,
whatever their kind.  Assets sort by filename, which is the publish order.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from shipforge.models.artifacts import Artifact, Distribution


class AssetKind(str, Enum):
    """Role of an asset within a release."""

    FILE = "file"
    CHECKSUM = "checksum"
    SIGNATURE = "signature"
    CATALOG = "catalog"


class Asset(BaseModel):
    """One file to publish, tagged with its role."""

    model_config = ConfigDict(frozen=True)

    kind: AssetKind
    artifact: Artifact
    effective_path: Path
    distribution: Distribution | None = None

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def _of(
        cls,
        kind: AssetKind,
        path: Path,
        artifact: Artifact | None = None,
        distribution: Distribution | None = None,
    ) -> Asset:
        path = Path(path).resolve()
        return cls(
            kind=kind,
            artifact=artifact or Artifact.of(path),
            effective_path=path,
            distribution=distribution,
        )

    @classmethod
    def file(
        cls,
        path: Path,
        artifact: Artifact | None = None,
        distribution: Distribution | None = None,
    ) -> Asset:
        return cls._of(AssetKind.FILE, path, artifact, distribution)

    @classmethod
    def checksum(cls, path: Path) -> Asset:
        return cls._of(AssetKind.CHECKSUM, path)

    @classmethod
    def signature(cls, path: Path) -> Asset:
        return cls._of(AssetKind.SIGNATURE, path)

    @classmethod
    def catalog(cls, path: Path) -> Asset:
        return cls._of(AssetKind.CATALOG, path)

    # ------------------------------------------------------------------
    # Identity and ordering
    # ------------------------------------------------------------------

    @property
    def filename(self) -> str:
        return self.effective_path.name

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Asset):
            return NotImplemented
        return self.effective_path == other.effective_path

    def __hash__(self) -> int:
        return hash(self.effective_path)

    def __lt__(self, other: Asset) -> bool:
        return self.filename < other.filename

    def __repr__(self) -> str:
        return f"Asset({self.kind.value}, {self.filename!r})"
