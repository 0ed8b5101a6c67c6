"""Checksum generation — individual checksum files and per-algorithm manifests.

Individual files are a cache: ``<checksums>[/<distribution>]/<file>.<algo>``
is recomputed only when missing or older than its artifact.  Each manifest
lists ``<digest>  <name>`` for every checksummed artifact and is rewritten
only when its content changes, so unchanged releases keep their mtimes.
"""

from __future__ import annotations

import logging
from pathlib import Path

from shipforge.core.fileops import is_stale
from shipforge.core.hasher import file_digest
from shipforge.models.artifacts import KEY_SKIP_CHECKSUM, Artifact, Distribution
from shipforge.models.config import Algorithm
from shipforge.models.context import ReleaseContext

logger = logging.getLogger(__name__)


class ChecksumError(RuntimeError):
    """Raised when an artifact cannot be read or a checksum cannot be written."""


def _wants_checksum(
    context: ReleaseContext,
    artifact: Artifact,
    distribution: Distribution | None = None,
) -> bool:
    if not artifact.is_active_and_selected(context):
        return False
    if artifact.extra_property_is_true(KEY_SKIP_CHECKSUM):
        return False
    if artifact.is_optional and not artifact.resolved_path_exists(context, distribution):
        return False
    return True


def read_checksum(
    context: ReleaseContext,
    artifact_path: Path,
    checksum_path: Path,
    algorithm: Algorithm,
) -> str:
    """Return the digest of *artifact_path*, refreshing *checksum_path* if stale."""
    if not artifact_path.exists():
        raise ChecksumError(
            f"Artifact does not exist: {context.relativize(artifact_path)}"
        )

    if not checksum_path.exists():
        logger.debug("%s does not exist", context.relativize(checksum_path))
    elif is_stale(artifact_path, checksum_path):
        logger.debug(
            "%s is newer than %s",
            context.relativize(artifact_path),
            context.relativize(checksum_path),
        )
    else:
        try:
            return checksum_path.read_text(encoding="ascii").strip()
        except OSError as exc:
            raise ChecksumError(
                f"Could not read checksum {context.relativize(checksum_path)}: {exc}"
            ) from exc

    logger.info("%s (%s)", context.relativize(artifact_path), algorithm.value)
    try:
        digest = file_digest(artifact_path, algorithm)
        checksum_path.parent.mkdir(parents=True, exist_ok=True)
        checksum_path.write_text(digest, encoding="ascii")
    except OSError as exc:
        raise ChecksumError(
            f"Unexpected error calculating checksum for {artifact_path}: {exc}"
        ) from exc
    return digest


def _read_existing(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def _write_if_changed(path: Path, content: str) -> bool:
    if _read_existing(path) == content:
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return True


def collect_and_write_checksums(context: ReleaseContext) -> list[Path]:
    """Compute checksums for every release artifact and write the manifests.

    Returns the manifest paths that were (re)written.

    Raises
    ------
    ChecksumError
        If a required artifact is missing or a checksum cannot be written.
    """
    checksum = context.model.checksum
    directory = context.checksums_directory
    lines: dict[Algorithm, list[str]] = {a: [] for a in checksum.algorithms}

    if checksum.files:
        for artifact in context.model.files:
            if not _wants_checksum(context, artifact):
                continue
            path = artifact.effective_path(context)
            for algorithm in checksum.algorithms:
                digest = read_checksum(
                    context, path, directory / f"{path.name}.{algorithm.value}", algorithm
                )
                lines[algorithm].append(f"{digest}  {path.name}")

    if checksum.artifacts:
        for distribution in context.model.active_distributions:
            for artifact in distribution.artifacts:
                if not _wants_checksum(context, artifact, distribution):
                    continue
                path = artifact.effective_path(context, distribution)
                for algorithm in checksum.algorithms:
                    digest = read_checksum(
                        context,
                        path,
                        directory / distribution.name / f"{path.name}.{algorithm.value}",
                        algorithm,
                    )
                    lines[algorithm].append(f"{digest}  {distribution.name}/{path.name}")

    if not any(lines.values()):
        logger.info("No files configured for checksum. Skipping")
        return []

    written: list[Path] = []
    for algorithm, entries in lines.items():
        manifest = directory / checksum.resolved_name(algorithm)
        try:
            if _write_if_changed(manifest, "\n".join(entries) + "\n"):
                logger.info("Wrote %s", context.relativize(manifest))
                written.append(manifest)
            else:
                logger.debug("%s has not changed", context.relativize(manifest))
        except OSError as exc:
            raise ChecksumError(
                f"Unexpected error writing checksums to {manifest}: {exc}"
            ) from exc
    return written
