"""External tool invocation."""

from shipforge.tools.command import (
    CommandFailedError,
    CommandTool,
    ToolInvoker,
    ToolSetupError,
    parse_version,
)

__all__ = [
    "CommandFailedError",
    "CommandTool",
    "ToolInvoker",
    "ToolSetupError",
    "parse_version",
]
