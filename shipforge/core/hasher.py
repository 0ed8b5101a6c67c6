"""Canonical hashing helpers for checksums and publish indexes.

File digests are streamed in fixed-size chunks so large release archives
are never loaded into memory.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

from shipforge.models.config import Algorithm

_CHUNK_SIZE = 1024 * 1024


def canonical_json_bytes(obj: Any) -> bytes:
    """Produce canonical JSON bytes — deterministic, sorted, compact.

    - sorted keys
    - no whitespace separators (",", ":")
    - ensure_ascii=True
    - UTF-8 encoding
    """
    return json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=True
    ).encode("utf-8")


def file_digest(path: Path, algorithm: Algorithm = Algorithm.SHA_256) -> str:
    """Hex digest of the file at *path* using *algorithm*."""
    digest = hashlib.new(algorithm.hashlib_name)
    with path.open("rb") as fh:
        for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def content_address(path: Path) -> str:
    """Content-address a file.

    Returns "sha256:<hex>" format used by publish indexes.
    """
    return f"sha256:{file_digest(path, Algorithm.SHA_256)}"
