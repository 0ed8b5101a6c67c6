"""Publisher protocol for shipforge publish targets.

All publishers implement the ``Publisher`` protocol: a ``name`` property
and a ``publish(assets)`` method.  The publish driver calls ``publish``
once per target with the target's resolved, ordered asset list.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from shipforge.models.assets import Asset


@runtime_checkable
class Publisher(Protocol):
    """Protocol that every shipforge publisher must implement.

    Attributes
    ----------
    name : str
        A human-readable identifier for this publisher instance
        (e.g. ``"local_directory"``, ``"dry_run"``).
    """

    @property
    def name(self) -> str:
        """Return the name of this publisher."""
        ...

    def publish(self, assets: Sequence[Asset]) -> None:
        """Publish *assets* in the given order.

        Failures must raise; the driver records them against the target.

        Parameters
        ----------
        assets:
            The resolved assets, sorted by filename.
        """
        ...


