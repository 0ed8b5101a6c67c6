"""Local directory publisher — copies release assets into a directory.

Layout: {base_path}/{filename} for standalone files, checksums, signatures
and catalogs; {base_path}/{distribution}/{filename} for distribution
artifacts.  An ``assets.json`` index, serialized to canonical JSON, records
every published asset with its kind and content address.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from shipforge.core.fileops import copy_file
from shipforge.core.hasher import canonical_json_bytes, content_address
from shipforge.models.assets import Asset

logger = logging.getLogger(__name__)

INDEX_FILENAME = "assets.json"


class LocalDirectoryPublisher:
    """Publishes assets by copying them under a local directory.

    Parameters
    ----------
    base_path:
        Destination directory.  Created on first publish.
    """

    def __init__(self, base_path: Path | str) -> None:
        self._base = Path(base_path)

    @property
    def name(self) -> str:
        return "local_directory"

    @property
    def base_path(self) -> Path:
        return self._base

    def destination(self, asset: Asset) -> Path:
        """Where *asset* is copied to."""
        if asset.distribution is not None:
            return self._base / asset.distribution.name / asset.filename
        return self._base / asset.filename

    def publish(self, assets: Sequence[Asset]) -> None:
        """Copy every asset and rewrite the index."""
        self._base.mkdir(parents=True, exist_ok=True)

        entries: list[dict[str, Any]] = []
        for asset in assets:
            target = self.destination(asset)
            copy_file(asset.effective_path, target)
            entries.append(
                {
                    "name": target.relative_to(self._base).as_posix(),
                    "kind": asset.kind.value,
                    "distribution": asset.distribution.name if asset.distribution else None,
                    "digest": content_address(target),
                }
            )
            logger.debug("LocalDirectoryPublisher: copied %s to %s", asset.filename, target)

        index = self._base / INDEX_FILENAME
        index.write_bytes(canonical_json_bytes({"assets": entries}))
        logger.info("Published %d asset(s) to %s", len(entries), self._base)

    def list_published(self) -> list[Path]:
        """List every published file, excluding the index."""
        if not self._base.exists():
            return []
        return sorted(
            p for p in self._base.rglob("*") if p.is_file() and p.name != INDEX_FILENAME
        )

    def read_index(self) -> list[dict[str, Any]]:
        """Read and parse the asset index."""
        index = self._base / INDEX_FILENAME
        if not index.exists():
            return []
        return json.loads(index.read_bytes())["assets"]
