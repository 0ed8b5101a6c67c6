"""Asset resolution — the ordered, deduplicated set of files a target publishes.

Resolution reads the filesystem but never writes to it.  Checksums,
signatures and catalogs are included only when they already exist on disk;
producing them is the job of the checksummer, the signer and the catalogers.

Order of collection:
    standalone files -> distribution artifacts -> checksum manifests
        -> catalogs -> signatures

The collected set is deduplicated by effective path (first insertion wins)
and sorted by filename.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from pathlib import Path

from shipforge.catalog.layout import (
    archive_path,
    collect_candidates,
    target_paths,
)
from shipforge.core.checksum_policy import resolve_individual
from shipforge.models.artifacts import (
    KEY_SKIP_CHECKSUM,
    KEY_SKIP_RELEASE,
    KEY_SKIP_RELEASE_SIGNATURES,
    KEY_SKIP_SIGNING,
    Artifact,
    Distribution,
)
from shipforge.models.assets import Asset
from shipforge.models.config import PublishTarget, SigningMode
from shipforge.models.context import ReleaseContext

logger = logging.getLogger(__name__)


class _AssetSet:
    """Insertion-ordered set of assets keyed by effective path."""

    def __init__(self) -> None:
        self._assets: dict[Path, Asset] = {}

    def add(self, asset: Asset) -> bool:
        if asset.effective_path in self._assets:
            return False
        self._assets[asset.effective_path] = asset
        logger.debug("+ %s %s", asset.kind.value, asset.filename)
        return True

    def add_if_exists(self, asset: Asset) -> bool:
        if not asset.effective_path.exists():
            return False
        return self.add(asset)

    def snapshot(self) -> list[Asset]:
        return list(self._assets.values())

    def sorted(self) -> list[Asset]:
        return sorted(self._assets.values(), key=lambda a: a.filename)


def _is_publishable(
    context: ReleaseContext,
    artifact: Artifact,
    distribution: Distribution | None = None,
) -> bool:
    if not artifact.is_active_and_selected(context):
        return False
    if artifact.extra_property_is_true(KEY_SKIP_RELEASE):
        return False
    if artifact.is_optional and not artifact.resolved_path_exists(context, distribution):
        return False
    return True


# ---------------------------------------------------------------------------
# Collection steps
# ---------------------------------------------------------------------------


def _collect_files(context: ReleaseContext, target: PublishTarget, assets: _AssetSet) -> None:
    checksum = context.model.checksum
    for artifact in context.model.files:
        if not _is_publishable(context, artifact):
            continue
        path = artifact.effective_path(context)
        assets.add(Asset.file(path, Artifact.of(path, artifact.extra_properties)))

        if (
            target.checksums
            and checksum.files
            and resolve_individual(artifact, None, checksum)
            and not artifact.extra_property_is_true(KEY_SKIP_CHECKSUM)
        ):
            for algorithm in checksum.algorithms:
                assets.add_if_exists(
                    Asset.checksum(
                        context.checksums_directory / f"{path.name}.{algorithm.value}"
                    )
                )


def _collect_distribution_artifacts(
    context: ReleaseContext, target: PublishTarget, assets: _AssetSet
) -> None:
    checksum = context.model.checksum
    for distribution in context.model.active_distributions:
        if distribution.is_skip_release:
            continue
        for artifact in distribution.artifacts:
            if not _is_publishable(context, artifact, distribution):
                continue
            path = artifact.effective_path(context, distribution)
            assets.add(
                Asset.file(path, Artifact.of(path, artifact.extra_properties), distribution)
            )

            if (
                target.checksums
                and checksum.artifacts
                and resolve_individual(artifact, distribution, checksum)
                and not artifact.extra_property_is_true(KEY_SKIP_CHECKSUM)
            ):
                for algorithm in checksum.algorithms:
                    assets.add_if_exists(
                        Asset.checksum(
                            context.checksums_directory
                            / distribution.name
                            / f"{path.name}.{algorithm.value}"
                        )
                    )


def _collect_checksum_manifests(context: ReleaseContext, assets: _AssetSet) -> None:
    checksum = context.model.checksum
    if not (checksum.files or checksum.artifacts):
        return
    for algorithm in checksum.algorithms:
        assets.add_if_exists(
            Asset.checksum(context.checksums_directory / checksum.resolved_name(algorithm))
        )


def _collect_catalogs(
    context: ReleaseContext,
    assets: _AssetSet,
    excluded_catalogers: Collection[str],
) -> None:
    sbom = context.model.catalog.sbom
    configs = sbom.cataloger_configs()
    for cataloger_type in sbom.active_cataloger_types():
        if cataloger_type in excluded_catalogers:
            logger.debug("catalogs from %s excluded", cataloger_type)
            continue
        config = configs[cataloger_type]
        if config.pack.enabled:
            assets.add_if_exists(Asset.catalog(archive_path(context, cataloger_type, config)))
            continue
        candidates = collect_candidates(context, cataloger_type)
        for path in target_paths(context, cataloger_type, config, candidates):
            assets.add_if_exists(Asset.catalog(path))


def _collect_signatures(context: ReleaseContext, assets: _AssetSet) -> None:
    signing = context.model.signing
    extension = signing.resolved_signature_extension

    signatures_added = False
    for asset in assets.snapshot():
        if asset.artifact.extra_property_is_true(
            KEY_SKIP_SIGNING
        ) or asset.artifact.extra_property_is_true(KEY_SKIP_RELEASE_SIGNATURES):
            continue
        signature = context.signatures_directory / f"{asset.filename}{extension}"
        if signature.exists():
            assets.add(Asset.signature(signature))
            signatures_added = True

    if signatures_added and signing.mode == SigningMode.KEYLESS:
        assets.add_if_exists(Asset.signature(resolve_public_key_file(context)))


def resolve_public_key_file(context: ReleaseContext) -> Path:
    """Public key shipped next to keyless signatures."""
    configured = context.model.signing.public_key_file
    if configured is None:
        return context.signatures_directory / f"{context.model.project.name}.pub"
    return configured if configured.is_absolute() else context.basedir / configured


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def resolve_assets(
    context: ReleaseContext,
    target: PublishTarget,
    *,
    excluded_catalogers: Collection[str] = (),
) -> list[Asset]:
    """Resolve the assets *target* should publish, sorted by filename.

    Parameters
    ----------
    context:
        The run context.
    target:
        Activation flags of the release or upload target.
    excluded_catalogers:
        Cataloger types whose output must not be published, typically
        because their run failed.
    """
    if not target.upload_assets:
        logger.info("%s does not upload assets", target.name)
        return []

    assets = _AssetSet()

    if target.files:
        _collect_files(context, target, assets)
    if target.artifacts:
        _collect_distribution_artifacts(context, target, assets)
    if target.checksums:
        _collect_checksum_manifests(context, assets)
    if target.catalogs:
        _collect_catalogs(context, assets, excluded_catalogers)
    if target.signatures and context.model.signing.enabled:
        _collect_signatures(context, assets)

    resolved = assets.sorted()
    logger.info("%s: resolved %d asset(s)", target.name, len(resolved))
    return resolved
