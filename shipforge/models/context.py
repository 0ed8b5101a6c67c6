"""Per-run release context: a model bound to a base directory and platform filter."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from shipforge.models.artifacts import PlatformFilter
from shipforge.models.config import ReleaseModel


class ReleaseContext(BaseModel):
    """Resolved locations for one run of the pipeline.

    Parameters
    ----------
    model:
        The loaded release model.
    basedir:
        Directory that relative artifact paths and the output directory are
        anchored at.
    platform_filter:
        Platform selection applied to artifacts for this run.
    """

    model_config = ConfigDict(frozen=True)

    model: ReleaseModel
    basedir: Path = Field(default_factory=Path.cwd)
    platform_filter: PlatformFilter = PlatformFilter()

    @property
    def output_directory(self) -> Path:
        out = self.model.output_directory
        return out if out.is_absolute() else self.basedir / out

    @property
    def checksums_directory(self) -> Path:
        return self.output_directory / "checksums"

    @property
    def signatures_directory(self) -> Path:
        return self.output_directory / "signatures"

    @property
    def catalogs_directory(self) -> Path:
        return self.output_directory / "catalogs"

    def relativize(self, path: Path) -> Path:
        """Return *path* relative to the base directory when possible, for logs."""
        try:
            return path.relative_to(self.basedir.resolve())
        except ValueError:
            return path
