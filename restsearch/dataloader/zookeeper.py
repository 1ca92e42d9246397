"""Load cluster, service and URI data from ZooKeeper."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from kazoo.client import KazooClient

from restsearch.config import LoaderConfig
from restsearch.dataloader.assembler import assemble_snapshot
from restsearch.dataloader.base import DatasetLoader
from restsearch.dataloader.decoders import decode_all_endpoints, decode_services
from restsearch.dataloader.reader import load_children, load_grandchildren
from restsearch.dataloader.session import zk_session
from restsearch.models import Snapshot

logger = logging.getLogger(__name__)


class ZkDatasetLoader(DatasetLoader):
    """Builds a :class:`Snapshot` from the D2 subtrees in ZooKeeper.

    Every call opens its own session, reads both subtrees sequentially and
    closes the session before returning or raising.  Nothing is cached
    between calls.

    Args:
        host:            ZooKeeper host.
        port:            ZooKeeper client port.
        services_root:   Parent of the service nodes.
        uris_root:       Parent of the per-cluster URI nodes.
        connect_timeout: Seconds to wait for the session to connect.
        session_timeout: ZooKeeper session timeout in seconds.
        client_factory:  Builds the client; tests pass a fake.
    """

    def __init__(
        self,
        host: str,
        port: int,
        services_root: str = "/d2/services",
        uris_root: str = "/d2/uris",
        connect_timeout: float = 180.0,
        session_timeout: float = 10.0,
        client_factory: Callable[..., KazooClient] = KazooClient,
    ) -> None:
        self.hosts = f"{host}:{port}"
        self.services_root = services_root.rstrip("/")
        self.uris_root = uris_root.rstrip("/")
        self.connect_timeout = connect_timeout
        self.session_timeout = session_timeout
        self._client_factory = client_factory

    @classmethod
    def from_config(
        cls,
        config: LoaderConfig,
        client_factory: Callable[..., KazooClient] = KazooClient,
    ) -> ZkDatasetLoader:
        return cls(
            config.zk_host,
            config.zk_port,
            services_root=config.services_root,
            uris_root=config.uris_root,
            connect_timeout=config.connect_timeout,
            session_timeout=config.session_timeout,
            client_factory=client_factory,
        )

    def load_dataset(self, is_startup: bool) -> Snapshot:
        """Read ZooKeeper and return a fresh snapshot.

        Raises:
            ZkConnectionError:   The session did not connect in time.
            DocumentDecodeError: A service node is structurally invalid.
        """
        with zk_session(
            self.hosts,
            self.connect_timeout,
            session_timeout=self.session_timeout,
            client_factory=self._client_factory,
        ) as client:
            return self._load(client, is_startup)

    def _load(self, client: KazooClient, is_startup: bool) -> Snapshot:
        logger.info("Loading dataset from zookeeper %s (startup=%s)...", self.hosts, is_startup)
        loaded_at = datetime.now(timezone.utc)

        service_nodes = load_children(client, self.services_root)
        uri_payloads = load_grandchildren(client, self.uris_root)

        services = decode_services(service_nodes)
        endpoints = decode_all_endpoints(uri_payloads)

        snapshot = assemble_snapshot(services, endpoints, loaded_at=loaded_at)
        logger.info(
            "...zookeeper dataset loaded: %d cluster(s), %d service(s), %d uri node(s)",
            len(snapshot),
            len(services),
            len(uri_payloads),
        )
        return snapshot
