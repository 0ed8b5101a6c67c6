"""Artifact and distribution models — the read-only inputs of a release.

An ``Artifact`` names a file by its logical ``path``.  The *effective path* is
that path after token substitution (platform classifier, project coordinates)
resolved against the project base directory.  Policy flags ride along in
``extra_properties`` using the camelCase keys of the project file.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from shipforge.models.context import ReleaseContext

# Extra property keys understood by the resolver and catalogers.
KEY_SKIP_CHECKSUM = "skipChecksum"
KEY_SKIP_SIGNING = "skipSigning"
KEY_SKIP_RELEASE = "skipRelease"
KEY_SKIP_RELEASE_SIGNATURES = "skipReleaseSignatures"
KEY_INDIVIDUAL_CHECKSUM = "individualChecksum"
KEY_OPTIONAL = "optional"
KEY_SKIP_SBOM = "skipSbom"

_TRUE_STRINGS = {"true", "yes", "on", "1"}


def is_true(value: Any) -> bool:
    """Interpret a loosely typed flag value (bool, int or string)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return False


class PlatformFilter(BaseModel):
    """Platform selection for the current run.

    A pattern matches a platform exactly or by its OS prefix, so ``linux``
    matches ``linux-x86_64``.
    """

    model_config = ConfigDict(frozen=True)

    selected: list[str] = []
    rejected: list[str] = []

    @staticmethod
    def _matches(pattern: str, platform: str) -> bool:
        return platform == pattern or platform.startswith(f"{pattern}-")

    def accepts(self, platform: str) -> bool:
        """Return ``True`` if an artifact built for *platform* is selected."""
        if not platform:
            return True
        if any(self._matches(p, platform) for p in self.rejected):
            return False
        if self.selected:
            return any(self._matches(p, platform) for p in self.selected)
        return True


class Artifact(BaseModel):
    """A file produced by the build that may be published."""

    model_config = ConfigDict(frozen=True)

    path: str
    platform: str = ""
    active: bool = True
    extra_properties: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def of(cls, path: Path | str, extra_properties: dict[str, Any] | None = None) -> Artifact:
        """Wrap an already resolved path as an artifact."""
        return cls(path=str(path), extra_properties=dict(extra_properties or {}))

    # ------------------------------------------------------------------
    # Extra properties
    # ------------------------------------------------------------------

    def extra_property_is_true(self, key: str) -> bool:
        return is_true(self.extra_properties.get(key))

    @property
    def is_optional(self) -> bool:
        return self.extra_property_is_true(KEY_OPTIONAL)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def is_selected(self, context: ReleaseContext) -> bool:
        return context.platform_filter.accepts(self.platform)

    def is_active_and_selected(self, context: ReleaseContext) -> bool:
        return self.active and self.is_selected(context)

    def effective_path(
        self,
        context: ReleaseContext,
        distribution: Distribution | None = None,
    ) -> Path:
        """Substitute path tokens and anchor the result at the base directory."""
        project = context.model.project
        tokens = {
            "{{platform}}": self.platform,
            "{{projectName}}": project.name,
            "{{projectVersion}}": project.version,
            "{{distributionName}}": distribution.name if distribution else "",
        }
        raw = self.path
        for token, value in tokens.items():
            raw = raw.replace(token, value)

        path = Path(raw)
        if not path.is_absolute():
            path = context.basedir / path
        return path.resolve()

    def resolved_path_exists(
        self,
        context: ReleaseContext,
        distribution: Distribution | None = None,
    ) -> bool:
        return self.effective_path(context, distribution).exists()


class Distribution(BaseModel):
    """A named group of artifacts sharing release and checksum policy."""

    model_config = ConfigDict(frozen=True)

    name: str
    active: bool = True
    artifacts: list[Artifact] = []
    extra_properties: dict[str, Any] = Field(default_factory=dict)

    def extra_property_is_true(self, key: str) -> bool:
        return is_true(self.extra_properties.get(key))

    @property
    def is_skip_release(self) -> bool:
        return self.extra_property_is_true(KEY_SKIP_RELEASE)
