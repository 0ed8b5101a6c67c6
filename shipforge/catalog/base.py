"""Abstract SBOM cataloger with an enforced, incremental lifecycle.

Every backend inherits from ``BaseSbomCataloger`` and implements only how
its tool is created and which arguments produce one catalog file.  The
``catalog()`` method is **not overridable** — it enforces the lifecycle:

    collect candidates -> setup tool -> regenerate stale targets
        -> repack archive (if generated or missing)

Staleness is decided per (artifact, format) pair from file modification
times, so the external tool runs only for targets that are missing or
older than their source artifact.
"""

from __future__ import annotations

import abc
import logging
import tempfile
from enum import Enum
from pathlib import Path
from typing import final

from shipforge.catalog.layout import (
    CatalogerConfig,
    archive_path,
    catalog_directory,
    collect_candidates,
    target_paths,
)
from shipforge.config import ShipforgeSettings, settings as default_settings
from shipforge.core.fileops import copy_file, is_stale, zip_directory
from shipforge.models.context import ReleaseContext
from shipforge.tools.command import CommandFailedError, ToolInvoker, ToolSetupError

logger = logging.getLogger(__name__)


class CatalogProcessingError(RuntimeError):
    """Raised when a cataloger cannot complete its pass."""


class ToolUnavailableError(CatalogProcessingError):
    """Raised when the cataloger's external tool cannot be set up."""


class CatalogResult(str, Enum):
    """Outcome of one cataloger pass."""

    NO_ARTIFACTS = "no_artifacts"
    UPTODATE = "uptodate"
    EXECUTED = "executed"


class BaseSbomCataloger(abc.ABC):
    """Abstract base for all SBOM catalogers.

    Subclasses **must** implement:
        * ``cataloger_type`` — unique identifier (e.g. ``"syft"``).
        * ``create_tool()`` — the default tool invoker for the backend.
        * ``build_args(artifact_file, target, fmt)`` — arguments producing
          *target* for one artifact and format.

    Subclasses **must not** override ``catalog()``.

    Parameters
    ----------
    context:
        The run context.
    config:
        The backend's configuration (formats, packing).
    tool:
        Tool invoker to use.  Defaults to ``create_tool()``.
    settings:
        Runtime settings used to build the default tool.
    """

    def __init__(
        self,
        context: ReleaseContext,
        config: CatalogerConfig,
        tool: ToolInvoker | None = None,
        *,
        settings: ShipforgeSettings | None = None,
    ) -> None:
        self.context = context
        self.config = config
        self.settings = settings or default_settings
        self._tool = tool

    # ------------------------------------------------------------------
    # Abstract interface: subclasses implement these
    # ------------------------------------------------------------------

    @property
    @abc.abstractmethod
    def cataloger_type(self) -> str:
        """Backend identifier, also the catalog subdirectory name."""
        ...

    @abc.abstractmethod
    def create_tool(self) -> ToolInvoker:
        """Build the tool invoker used when none was injected."""
        ...

    @abc.abstractmethod
    def build_args(self, artifact_file: str, target: Path, fmt: Enum) -> list[str]:
        """Command-line arguments generating *target* in format *fmt*."""
        ...

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    @property
    def tool(self) -> ToolInvoker:
        if self._tool is None:
            self._tool = self.create_tool()
        return self._tool

    @property
    def catalog_directory(self) -> Path:
        return catalog_directory(self.context, self.cataloger_type)

    @property
    def archive_path(self) -> Path:
        return archive_path(self.context, self.cataloger_type, self.config)

    def collect_candidates(self) -> list[Path]:
        return collect_candidates(self.context, self.cataloger_type)

    # ------------------------------------------------------------------
    # Lifecycle (NOT overridable)
    # ------------------------------------------------------------------

    @final
    def catalog(self) -> CatalogResult:
        """Run one incremental cataloging pass.  **Do not override.**

        Returns ``NO_ARTIFACTS`` when there is nothing to describe,
        ``EXECUTED`` when at least one catalog file was regenerated and
        ``UPTODATE`` otherwise.  Rebuilding a missing archive alone does
        not change the result.

        Raises
        ------
        ToolUnavailableError
            If the tool cannot be set up.
        CatalogProcessingError
            If a tool invocation or any filesystem operation fails.
        """
        candidates = self.collect_candidates()
        if not candidates:
            logger.info("[%s] no artifacts to catalog", self.cataloger_type)
            return CatalogResult.NO_ARTIFACTS

        self._setup_tool()

        executed = False
        for artifact_path in candidates:
            if self._generate(artifact_path):
                executed = True

        if self.config.pack.enabled:
            archive = self.archive_path
            if executed or not archive.exists():
                self._pack(candidates, archive)

        return CatalogResult.EXECUTED if executed else CatalogResult.UPTODATE

    # ------------------------------------------------------------------
    # Lifecycle helpers (not overridable)
    # ------------------------------------------------------------------

    @final
    def _setup_tool(self) -> None:
        try:
            available = self.tool.setup()
        except ToolSetupError as exc:
            raise ToolUnavailableError(str(exc)) from exc
        if not available:
            raise ToolUnavailableError(f"Tool unavailable: {self.tool.name}")

    @final
    def _generate(self, artifact_path: Path) -> bool:
        """Regenerate every stale format of one artifact."""
        directory = self.catalog_directory
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CatalogProcessingError(
                f"Could not create catalog directory {directory}: {exc}"
            ) from exc

        artifact_file = artifact_path.name
        executed = False
        for fmt in self.config.formats:
            target = directory / f"{artifact_file}{fmt.extension}"
            if not target.exists():
                logger.debug("%s does not exist", self.context.relativize(target))
            elif is_stale(artifact_path, target):
                logger.debug(
                    "%s is newer than %s",
                    self.context.relativize(artifact_path),
                    self.context.relativize(target),
                )
            else:
                continue

            logger.info("[%s] - %s", self.cataloger_type, target.name)
            try:
                self.tool.invoke(
                    artifact_path.parent, self.build_args(artifact_file, target, fmt)
                )
            except (CommandFailedError, ToolSetupError) as exc:
                raise CatalogProcessingError(
                    f"{self.cataloger_type} failed to catalog {artifact_file}: {exc}"
                ) from exc
            executed = True

        return executed

    @final
    def _pack(self, candidates: list[Path], archive: Path) -> None:
        """Rebuild *archive* from every catalog file of this backend."""
        logger.info("[%s] packing %s", self.cataloger_type, archive.name)
        try:
            with tempfile.TemporaryDirectory(prefix=f"{self.cataloger_type}-") as tmp:
                working = Path(tmp) / archive.stem
                working.mkdir()
                for path in target_paths(
                    self.context, self.cataloger_type, self.config, candidates
                ):
                    if path.exists():
                        copy_file(path, working / path.name)
                zip_directory(working, archive)
        except OSError as exc:
            raise CatalogProcessingError(
                f"Unexpected error packing {archive.name}: {exc}"
            ) from exc

    def __repr__(self) -> str:
        pack = " [PACK]" if self.config.pack.enabled else ""
        return f"<{type(self).__name__} type={self.cataloger_type!r}{pack}>"
