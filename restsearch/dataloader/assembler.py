"""Join decoded services and endpoints into a cluster-keyed snapshot."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime

from restsearch.models import Cluster, Endpoint, EndpointInfo, Service, Snapshot

logger = logging.getLogger(__name__)


def group_services(services: Iterable[Service]) -> dict[str, list[Service]]:
    grouped: dict[str, list[Service]] = defaultdict(list)
    for service in services:
        grouped[service.cluster_name].append(service)
    return dict(grouped)


def group_uris(endpoints: Iterable[Endpoint]) -> dict[str, list[str]]:
    grouped: dict[str, list[str]] = defaultdict(list)
    for endpoint in endpoints:
        grouped[endpoint.cluster_name].append(endpoint.uri)
    return dict(grouped)


def assemble_snapshot(
    services: Iterable[Service],
    endpoints: Iterable[Endpoint],
    loaded_at: datetime | None = None,
) -> Snapshot:
    """Build a :class:`Snapshot` from decoded services and endpoints.

    One :class:`Cluster` is created per cluster name that at least one
    service references.  URIs announced for a cluster that no service
    references are dropped.
    """
    services_by_cluster = group_services(services)
    uris_by_cluster = group_uris(endpoints)

    clusters: dict[str, Cluster] = {}
    for cluster_name, members in services_by_cluster.items():
        uris = uris_by_cluster.get(cluster_name)
        clusters[cluster_name] = Cluster(
            name=cluster_name,
            services=tuple(members),
            endpoint_info=EndpointInfo(uris=tuple(uris)) if uris is not None else None,
        )

    orphaned = set(uris_by_cluster) - set(clusters)
    if orphaned:
        logger.debug(
            "Dropping URIs for %d cluster(s) with no registered service: %s",
            len(orphaned),
            ", ".join(sorted(orphaned)),
        )

    return Snapshot(clusters, loaded_at=loaded_at)
