"""Runtime configuration — env-driven.

Centralized settings using pydantic-settings.  Reads from a .env file and
SHIPFORGE_* environment variables.  The release model itself (artifacts,
checksums, catalogs...) lives in the project file, see
``shipforge.loader``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ShipforgeSettings(BaseSettings):
    """Runtime settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export SHIPFORGE_LOG_LEVEL=DEBUG
        export SHIPFORGE_FAIL_FAST=true
        export SHIPFORGE_SYFT_EXECUTABLE=/opt/syft/bin/syft

    Or via .env file::

        SHIPFORGE_TOOL_TIMEOUT_SECONDS=120
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SHIPFORGE_",
        env_file_encoding="utf-8",
    )

    # Logging
    log_level: str = "INFO"
    debug: bool = False

    # Project file looked up when --config is not given
    config_file: Path = Path("shipforge.toml")

    # Failure policy: stop at the first failing cataloger/target, or run
    # everything and report an aggregate error
    fail_fast: bool = False

    # External tools
    tool_timeout_seconds: int = 600
    syft_executable: str = "syft"
    cyclonedx_executable: str = "cyclonedx"


# Module-level singleton, import as `from shipforge.config import settings`
settings = ShipforgeSettings()
