"""Publishers — where resolved release assets end up."""

from shipforge.publishers.base import Publisher
from shipforge.publishers.dry_run import DryRunPublisher
from shipforge.publishers.local_directory import LocalDirectoryPublisher

__all__ = ["DryRunPublisher", "LocalDirectoryPublisher", "Publisher"]
