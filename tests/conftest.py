"""Shared test fixtures for shipforge."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from shipforge.models.config import ProjectInfo, ReleaseModel
from shipforge.models.context import ReleaseContext
from shipforge.tools.command import CommandFailedError, ToolSetupError

# Fixed, old modification time for source artifacts so that anything a test
# generates afterwards is newer.
BASE_MTIME_NS = 1_600_000_000 * 1_000_000_000


def set_mtime(path: Path, mtime_ns: int) -> None:
    os.utime(path, ns=(mtime_ns, mtime_ns))


# ---------------------------------------------------------------------------
# Fake tool
# ---------------------------------------------------------------------------


def _output_target(args: list[str]) -> Path | None:
    """Find the output file in syft or cyclonedx style arguments."""
    for i, arg in enumerate(args[:-1]):
        nxt = args[i + 1]
        if arg in ("--output-file", "--file"):
            return Path(nxt)
        if arg == "--output" and "=" in nxt:
            return Path(nxt.split("=", 1)[1])
    return None


class RecordingTool:
    """Tool invoker double that records calls and writes the requested target.

    Parameters
    ----------
    name:
        Tool name.
    available:
        Return value of ``setup()``.
    version:
        Version reported after setup.
    fail_with:
        Exit code to fail every invocation with, if set.
    setup_error:
        Raise ``ToolSetupError`` from ``setup()`` when true.
    """

    def __init__(
        self,
        name: str = "fake",
        *,
        available: bool = True,
        version: str | None = "1.0.0",
        fail_with: int | None = None,
        setup_error: bool = False,
    ) -> None:
        self.name = name
        self.available = available
        self.version = version
        self.fail_with = fail_with
        self.setup_error = setup_error
        self.setup_calls = 0
        self.calls: list[tuple[Path, list[str]]] = []

    def setup(self) -> bool:
        self.setup_calls += 1
        if self.setup_error:
            raise ToolSetupError(f"{self.name}: download failed")
        return self.available

    def invoke(self, working_dir: Path, args: list[str]) -> None:
        self.calls.append((working_dir, list(args)))
        if self.fail_with is not None:
            raise CommandFailedError(self.name, self.fail_with, "boom")
        target = _output_target(args)
        if target is not None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(f"sbom for {args[-1]}\n")

    @property
    def targets(self) -> list[str]:
        return [
            path.name for path in (_output_target(args) for _, args in self.calls) if path
        ]


@pytest.fixture
def make_tool() -> Callable[..., RecordingTool]:
    """Factory fixture: build a RecordingTool."""
    return RecordingTool


# ---------------------------------------------------------------------------
# Project tree
# ---------------------------------------------------------------------------


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Base directory of a throwaway project."""
    base = tmp_path / "project"
    base.mkdir()
    return base.resolve()


@pytest.fixture
def make_file(project_dir: Path) -> Callable[..., Path]:
    """Factory fixture: write a file under the project with an old mtime."""

    def _factory(
        relpath: str,
        content: str | bytes = "data",
        mtime_ns: int | None = BASE_MTIME_NS,
    ) -> Path:
        path = project_dir / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content)
        if mtime_ns is not None:
            set_mtime(path, mtime_ns)
        return path

    return _factory


@pytest.fixture
def make_context(project_dir: Path) -> Callable[..., ReleaseContext]:
    """Factory fixture: build a ReleaseContext for project ``app 1.0.0``."""

    def _factory(platform_filter: Any = None, **model_fields: Any) -> ReleaseContext:
        model_fields.setdefault("project", ProjectInfo(name="app", version="1.0.0"))
        model = ReleaseModel.model_validate(model_fields)
        kwargs: dict[str, Any] = {"model": model, "basedir": project_dir}
        if platform_filter is not None:
            kwargs["platform_filter"] = platform_filter
        return ReleaseContext(**kwargs)

    return _factory


@pytest.fixture
def touch() -> Callable[[Path, int], None]:
    """Set a file's modification time in nanoseconds."""
    return set_mtime
