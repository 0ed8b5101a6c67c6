"""External command-line tools driven by the pipeline.

``ToolInvoker`` is the protocol catalogers depend on; ``CommandTool`` is the
subprocess-backed implementation.  Invocation is blocking: the child process
is spawned and waited on.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"(\d+)\.(\d+)(?:\.(\d+))?")


class ToolSetupError(RuntimeError):
    """Raised when a tool is found but cannot be prepared for use."""


class CommandFailedError(RuntimeError):
    """Raised when a tool exits with a non-zero status."""

    def __init__(self, command: str, exit_code: int, output: str) -> None:
        self.command = command
        self.exit_code = exit_code
        self.output = output
        super().__init__(f"{command} exited with status {exit_code}: {output.strip()}")


def parse_version(text: str) -> tuple[int, int, int] | None:
    """Extract the first ``major.minor[.patch]`` triple from *text*."""
    match = _VERSION_RE.search(text)
    if match is None:
        return None
    major, minor, patch = match.groups()
    return int(major), int(minor), int(patch or 0)


@runtime_checkable
class ToolInvoker(Protocol):
    """Protocol for external tool backends.

    ``setup()`` returns ``False`` when the tool cannot be resolved and may
    raise ``ToolSetupError``.  ``invoke()`` raises ``CommandFailedError`` on a
    non-zero exit.
    """

    name: str

    def setup(self) -> bool:
        ...

    @property
    def version(self) -> str:
        ...

    def invoke(self, working_dir: Path, args: list[str]) -> None:
        ...


class CommandTool:
    """A tool resolved from ``PATH`` (or an explicit executable path).

    Parameters
    ----------
    name:
        Display name, e.g. ``"syft"``.
    executable:
        Executable name or path.  Defaults to *name*.
    version_args:
        Arguments that make the tool print its version.
    timeout_seconds:
        Upper bound for a single invocation.  ``None`` waits forever.
    """

    def __init__(
        self,
        name: str,
        executable: str | None = None,
        *,
        version_args: list[str] | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self.name = name
        self._executable = executable or name
        self._version_args = version_args if version_args is not None else ["--version"]
        self._timeout = timeout_seconds
        self._resolved: str | None = None
        self._version = ""

    @property
    def version(self) -> str:
        return self._version

    @property
    def resolved_executable(self) -> str | None:
        return self._resolved

    def setup(self) -> bool:
        """Resolve the executable and record its version."""
        resolved = shutil.which(self._executable)
        if resolved is None:
            logger.warning("%s not found (looked for %r)", self.name, self._executable)
            return False
        self._resolved = resolved

        if self._version_args:
            try:
                result = subprocess.run(
                    [resolved, *self._version_args],
                    capture_output=True,
                    text=True,
                    timeout=self._timeout,
                )
            except (subprocess.SubprocessError, OSError) as exc:
                raise ToolSetupError(f"Could not query {self.name} version: {exc}") from exc
            self._version = (result.stdout.strip() or result.stderr.strip())

        logger.debug("%s resolved to %s (%s)", self.name, resolved, self._version or "unknown")
        return True

    def invoke(self, working_dir: Path, args: list[str]) -> None:
        """Run the tool in *working_dir* and wait for it to exit."""
        if self._resolved is None and not self.setup():
            raise ToolSetupError(f"{self.name} is not available")

        command = [self._resolved or self._executable, *args]
        logger.debug("$ %s (cwd=%s)", " ".join(command), working_dir)
        try:
            result = subprocess.run(
                command,
                cwd=working_dir,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise CommandFailedError(self.name, -1, f"timed out after {exc.timeout}s") from exc
        except OSError as exc:
            raise CommandFailedError(self.name, -1, str(exc)) from exc

        if result.returncode != 0:
            raise CommandFailedError(self.name, result.returncode, result.stderr or result.stdout)

    def __repr__(self) -> str:
        return f"CommandTool(name={self.name!r}, executable={self._executable!r})"
