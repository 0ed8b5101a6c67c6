"""Filesystem helpers: staleness checks, copies and atomic zip packing."""

from __future__ import annotations

import os
import shutil
import tempfile
import zipfile
from pathlib import Path


def is_stale(source: Path, target: Path) -> bool:
    """A target is stale if missing or strictly older than its source.

    Equal modification times count as up to date.
    """
    if not target.exists():
        return True
    return source.stat().st_mtime_ns > target.stat().st_mtime_ns


def copy_file(source: Path, dest: Path) -> Path:
    """Copy *source* to *dest*, preserving timestamps and creating parents."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(source, dest)
    return dest


def zip_directory(source_dir: Path, archive: Path) -> Path:
    """Compress every file under *source_dir* into *archive*.

    Entry names are relative to *source_dir* and sorted.  The archive is
    written next to its final location and moved into place with
    ``os.replace``, so an existing archive is either fully replaced or left
    untouched.
    """
    archive.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{archive.name}.", suffix=".tmp", dir=archive.parent
    )
    os.close(fd)
    tmp = Path(tmp_name)
    try:
        with zipfile.ZipFile(tmp, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for path in sorted(p for p in source_dir.rglob("*") if p.is_file()):
                zf.write(path, arcname=path.relative_to(source_dir).as_posix())
        os.replace(tmp, archive)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    return archive
