"""Abstract dataset loader interface.

Any source of D2 discovery data (ZooKeeper, a fixture file, ...) implements
this interface.
"""

from __future__ import annotations

import abc

from restsearch.models import Snapshot


class DatasetLoader(abc.ABC):
    """Produces a complete :class:`Snapshot` on every call."""

    @abc.abstractmethod
    def load_dataset(self, is_startup: bool) -> Snapshot:
        """Read the source from scratch and return a fresh snapshot.

        *is_startup* is ``True`` for the load performed while the hosting
        application boots.  Raises on failure; never returns a partial
        snapshot.
        """
        raise NotImplementedError
