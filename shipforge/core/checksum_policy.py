"""Cascading resolution of the ``individualChecksum`` policy.

Artifact override, then distribution override, then the global default.
"""

from __future__ import annotations

from shipforge.models.artifacts import (
    KEY_INDIVIDUAL_CHECKSUM,
    Artifact,
    Distribution,
    is_true,
)
from shipforge.models.config import ChecksumConfig


def first_explicit(*overrides: bool | None, default: bool) -> bool:
    """Return the first override that is not ``None``, else *default*."""
    for value in overrides:
        if value is not None:
            return value
    return default


def _override(extra_properties: dict) -> bool | None:
    if KEY_INDIVIDUAL_CHECKSUM not in extra_properties:
        return None
    return is_true(extra_properties[KEY_INDIVIDUAL_CHECKSUM])


def resolve_individual(
    artifact: Artifact,
    distribution: Distribution | None,
    checksum: ChecksumConfig,
) -> bool:
    """Whether *artifact* gets its own checksum file."""
    group = _override(distribution.extra_properties) if distribution is not None else None
    return first_explicit(
        _override(artifact.extra_properties),
        group,
        default=checksum.individual,
    )
