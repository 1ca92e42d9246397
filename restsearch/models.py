"""Snapshot data model: clusters, services and announced endpoints.

Every record is a frozen dataclass.  A :class:`Snapshot` is built once per
load and never mutated afterwards; two loads never share objects.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any

from restsearch.ordering import cluster_sort_key


@dataclass(frozen=True)
class NodeStat:
    """ZooKeeper node metadata (epoch milliseconds)."""

    created_at: int
    modified_at: int


@dataclass(frozen=True)
class Service:
    name: str
    path: str
    cluster_name: str
    is_default_service: bool
    created_at: int | None = None
    modified_at: int | None = None


@dataclass(frozen=True)
class Endpoint:
    uri: str
    cluster_name: str


@dataclass(frozen=True)
class EndpointInfo:
    """Endpoints currently announced for a cluster."""

    uris: tuple[str, ...]


@dataclass(frozen=True)
class Cluster:
    name: str
    services: tuple[Service, ...]
    endpoint_info: EndpointInfo | None = None

    @property
    def uris(self) -> tuple[str, ...]:
        """Announced endpoint addresses, empty when nothing is announced."""
        return self.endpoint_info.uris if self.endpoint_info else ()


class Snapshot(Mapping[str, Cluster]):
    """Read-only mapping of cluster name → :class:`Cluster`.

    Args:
        clusters:  Cluster records keyed by name.  Copied on construction.
        loaded_at: When the underlying data was read.  Defaults to now (UTC).
    """

    __slots__ = ("_clusters", "_loaded_at")

    def __init__(
        self,
        clusters: Mapping[str, Cluster],
        loaded_at: datetime | None = None,
    ) -> None:
        self._clusters = MappingProxyType(dict(clusters))
        self._loaded_at = loaded_at or datetime.now(timezone.utc)

    def __getitem__(self, name: str) -> Cluster:
        return self._clusters[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._clusters)

    def __len__(self) -> int:
        return len(self._clusters)

    def __repr__(self) -> str:
        return f"Snapshot(clusters={len(self)}, loaded_at={self.loaded_at.isoformat()})"

    @property
    def loaded_at(self) -> datetime:
        return self._loaded_at

    @property
    def clusters(self) -> Mapping[str, Cluster]:
        return self._clusters

    @property
    def service_count(self) -> int:
        return sum(len(c.services) for c in self._clusters.values())

    def sorted_cluster_names(self) -> list[str]:
        """Cluster names in display order (case-insensitive)."""
        return sorted(self._clusters, key=cluster_sort_key)

    def to_dict(self) -> dict[str, Any]:
        """Render the snapshot as a JSON-serialisable dict."""
        return {
            "loaded_at": self.loaded_at.isoformat(),
            "clusters": {
                name: {
                    "services": [
                        {
                            "name": svc.name,
                            "path": svc.path,
                            "is_default_service": svc.is_default_service,
                            "created_at": svc.created_at,
                            "modified_at": svc.modified_at,
                        }
                        for svc in self._clusters[name].services
                    ],
                    "uris": list(self._clusters[name].uris),
                }
                for name in self.sorted_cluster_names()
            },
        }
