"""Syft SBOM cataloger.

Syft 0.99.0 deprecated ``--name``/``--file`` in favour of ``--source-name``
and ``--output <format>=<file>``; the argument shape follows the version the
tool reports during setup.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from shipforge.catalog.base import BaseSbomCataloger
from shipforge.tools.command import CommandTool, ToolInvoker, parse_version

_SOURCE_NAME_SINCE = (0, 99, 0)


class SyftSbomCataloger(BaseSbomCataloger):
    """Catalogs release artifacts with `syft <https://github.com/anchore/syft>`_."""

    @property
    def cataloger_type(self) -> str:
        return "syft"

    def create_tool(self) -> ToolInvoker:
        return CommandTool(
            "syft",
            self.settings.syft_executable,
            version_args=["version"],
            timeout_seconds=self.settings.tool_timeout_seconds,
        )

    def uses_source_name(self) -> bool:
        """Whether the tool accepts the post-0.99 argument style.

        Falls back to the configured version, and to the modern style when
        neither is known.
        """
        version = parse_version(self.tool.version or "") or parse_version(self.config.version)
        return version is None or version >= _SOURCE_NAME_SINCE

    def build_args(self, artifact_file: str, target: Path, fmt: Enum) -> list[str]:
        output = str(target.absolute())
        if self.uses_source_name():
            args = ["--source-name", artifact_file, "--output", f"{fmt.value}={output}"]
        else:
            args = ["--output", fmt.value, "--name", artifact_file, "--file", output]
        args.append(artifact_file)
        return args
