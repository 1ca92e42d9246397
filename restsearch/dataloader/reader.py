"""Read D2 subtrees out of ZooKeeper.

Listing a node's children is structural: if it fails, the error propagates
and the load aborts.  Reading a single leaf is not: a node can vanish between
being listed and being read (ephemeral URI nodes do this all the time), so
leaf reads yield an optional result instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from kazoo.client import KazooClient
from kazoo.exceptions import NoNodeError

from restsearch.models import NodeStat

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeRead:
    payload: bytes
    stat: NodeStat | None = None


def read_node(client: KazooClient, path: str) -> NodeRead | None:
    """Fetch payload and metadata of *path* in one round trip.

    Returns ``None`` when the node no longer exists or holds no payload.
    """
    try:
        data, zstat = client.get(path)
    except NoNodeError:
        logger.debug("Node vanished before it could be read: %s", path)
        return None
    if data is None:
        return None
    stat = NodeStat(created_at=zstat.ctime, modified_at=zstat.mtime) if zstat else None
    return NodeRead(payload=data, stat=stat)


def load_children(client: KazooClient, path: str) -> dict[str, NodeRead]:
    """Read every immediate child of *path*, keyed by child name."""
    results: dict[str, NodeRead] = {}
    for child in client.get_children(path):
        node = read_node(client, f"{path}/{child}")
        if node is not None:
            results[child] = node
    return results


def load_grandchildren(client: KazooClient, path: str) -> dict[str, bytes]:
    """Read every grandchild of *path*, keyed by ``"<child>/<grandchild>"``.

    Leaf read failures are logged and the leaf is skipped.
    """
    results: dict[str, bytes] = {}
    for grandparent in client.get_children(path):
        grandparent_path = f"{path}/{grandparent}"
        for parent in client.get_children(grandparent_path):
            leaf_path = f"{grandparent_path}/{parent}"
            try:
                node = read_node(client, leaf_path)
            except Exception:
                logger.error("Failed to load ZooKeeper data at %s", leaf_path, exc_info=True)
                continue
            if node is not None:
                results[f"{grandparent}/{parent}"] = node.payload
    return results
