"""CycloneDX CLI cataloger."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from shipforge.catalog.base import BaseSbomCataloger
from shipforge.tools.command import CommandTool, ToolInvoker


class CyclonedxSbomCataloger(BaseSbomCataloger):
    """Catalogs release artifacts with ``cyclonedx add files``."""

    @property
    def cataloger_type(self) -> str:
        return "cyclonedx"

    def create_tool(self) -> ToolInvoker:
        return CommandTool(
            "cyclonedx",
            self.settings.cyclonedx_executable,
            version_args=["--version"],
            timeout_seconds=self.settings.tool_timeout_seconds,
        )

    def build_args(self, artifact_file: str, target: Path, fmt: Enum) -> list[str]:
        return [
            "add",
            "files",
            "--no-input",
            "--output-format",
            fmt.value,
            "--output-file",
            str(target.absolute()),
            "--include",
            artifact_file,
        ]
