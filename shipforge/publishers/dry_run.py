"""Dry-run publisher — logs what would be published and records it."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from shipforge.models.assets import Asset

logger = logging.getLogger(__name__)


class DryRunPublisher:
    """Publishes nothing.

    Every call is kept in ``published`` so callers can inspect what a real
    publisher would have received.
    """

    def __init__(self, name: str = "dry_run") -> None:
        self._name = name
        self.published: list[list[Asset]] = []

    @property
    def name(self) -> str:
        return self._name

    def publish(self, assets: Sequence[Asset]) -> None:
        self.published.append(list(assets))
        for asset in assets:
            logger.info("[dryrun] %s %s", asset.kind.value, asset.filename)
        logger.info("[dryrun] %d asset(s) would be published", len(assets))
