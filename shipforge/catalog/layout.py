"""On-disk layout of SBOM catalogs and the candidate artifacts they cover.

Shared by the catalogers, which write these paths, and the asset resolver,
which only reads them.
"""

from __future__ import annotations

from pathlib import Path

from shipforge.models.artifacts import KEY_SKIP_RELEASE, KEY_SKIP_SBOM, Artifact
from shipforge.models.config import CyclonedxCatalogerConfig, SyftCatalogerConfig
from shipforge.models.context import ReleaseContext

CatalogerConfig = CyclonedxCatalogerConfig | SyftCatalogerConfig

_DEFAULT_PACK_PREFIX = "{{projectName}}-{{projectVersion}}"


def catalog_directory(context: ReleaseContext, cataloger_type: str) -> Path:
    return context.catalogs_directory / "sbom" / cataloger_type


def archive_path(
    context: ReleaseContext, cataloger_type: str, config: CatalogerConfig
) -> Path:
    project = context.model.project
    template = config.pack.name or f"{_DEFAULT_PACK_PREFIX}-{cataloger_type}-sboms"
    name = (
        template.replace("{{projectName}}", project.name)
        .replace("{{projectVersion}}", project.version)
    )
    return catalog_directory(context, cataloger_type) / f"{name}.zip"


def _is_sbom_skipped(artifact: Artifact, cataloger_type: str) -> bool:
    return artifact.extra_property_is_true(KEY_SKIP_SBOM) or artifact.extra_property_is_true(
        f"{KEY_SKIP_SBOM}{cataloger_type.capitalize()}"
    )


def collect_candidates(context: ReleaseContext, cataloger_type: str) -> list[Path]:
    """Effective paths of the release artifacts a cataloger should describe.

    Standalone files come first, then distribution artifacts, each in
    declaration order.  Paths are unique.
    """
    seen: dict[Path, None] = {}

    for artifact in context.model.files:
        if (
            not artifact.is_active_and_selected(context)
            or artifact.extra_property_is_true(KEY_SKIP_RELEASE)
            or _is_sbom_skipped(artifact, cataloger_type)
        ):
            continue
        path = artifact.effective_path(context)
        if path.exists():
            seen.setdefault(path, None)

    for distribution in context.model.active_distributions:
        if distribution.is_skip_release:
            continue
        for artifact in distribution.artifacts:
            if (
                not artifact.is_active_and_selected(context)
                or artifact.extra_property_is_true(KEY_SKIP_RELEASE)
                or _is_sbom_skipped(artifact, cataloger_type)
            ):
                continue
            path = artifact.effective_path(context, distribution)
            if path.exists():
                seen.setdefault(path, None)

    return list(seen)


def target_paths(
    context: ReleaseContext,
    cataloger_type: str,
    config: CatalogerConfig,
    candidates: list[Path],
) -> list[Path]:
    """Per-artifact, per-format catalog files, grouped by format."""
    directory = catalog_directory(context, cataloger_type)
    return [
        directory / f"{candidate.name}{fmt.extension}"
        for fmt in config.formats
        for candidate in candidates
    ]
