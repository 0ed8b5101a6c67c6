"""Shipforge: incremental SBOM cataloging, checksums and release publishing.

  - Deterministic asset resolution: deduplicated, filename-ordered publish sets
  - Cascading individual-checksum policy (artifact > distribution > global)
  - Incremental syft and cyclonedx catalogers with atomic archive packing
  - Fail-fast or collect-and-report publishing across release targets
"""

__version__ = "0.1.0"
__description__ = (
    "Incremental SBOM cataloging, checksums and release asset publishing"
)

from shipforge.core.asset_resolver import resolve_assets
from shipforge.core.publish_driver import PublishDriver, publish_all
from shipforge.cli.app import app as cli

__all__ = ["PublishDriver", "cli", "publish_all", "resolve_assets", "__version__"]
