"""Release model loader — reads ``shipforge.toml`` or ``shipforge.json``.

The file mirrors ``ReleaseModel``::

    [project]
    name = "app"
    version = "1.0.0"

    [[files]]
    path = "build/app-{{projectVersion}}.jar"
    extra_properties = { individualChecksum = true }

    [catalog.sbom.syft]
    enabled = true
    formats = ["spdx-json"]

Relative paths are anchored at the directory holding the file unless a
base directory is given explicitly.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from shipforge.models.artifacts import PlatformFilter
from shipforge.models.config import ReleaseModel
from shipforge.models.context import ReleaseContext

logger = logging.getLogger(__name__)


class ModelLoadError(RuntimeError):
    """Raised when a project file is missing, malformed or invalid."""


def _read(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ModelLoadError(f"Cannot read project file {path}: {exc}") from exc

    try:
        if path.suffix == ".json":
            data = json.loads(raw)
        else:
            data = tomllib.loads(raw.decode("utf-8"))
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ModelLoadError(f"Malformed project file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ModelLoadError(f"Project file {path} must contain a table at the top level")
    return data


def load_model(path: Path | str) -> ReleaseModel:
    """Parse and validate the release model stored at *path*.

    Raises
    ------
    ModelLoadError
        If the file cannot be read, parsed or validated.
    """
    path = Path(path)
    data = _read(path)
    try:
        model = ReleaseModel.model_validate(data)
    except ValidationError as exc:
        raise ModelLoadError(f"Invalid project file {path}:\n{exc}") from exc
    logger.debug(
        "Loaded %s %s from %s", model.project.name, model.project.version, path
    )
    return model


def load_context(
    path: Path | str,
    *,
    basedir: Path | None = None,
    platform_filter: PlatformFilter | None = None,
) -> ReleaseContext:
    """Load the model at *path* and bind it to a run context.

    *basedir* defaults to the directory containing the project file.
    """
    path = Path(path)
    model = load_model(path)
    return ReleaseContext(
        model=model,
        basedir=(basedir or path.parent).resolve(),
        platform_filter=platform_filter or PlatformFilter(),
    )
