"""ZooKeeper session management for a single dataset load."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from kazoo.client import KazooClient
from kazoo.exceptions import KazooException
from kazoo.handlers.threading import KazooTimeoutError

from restsearch.dataloader.errors import ZkConnectionError

logger = logging.getLogger(__name__)


@contextmanager
def zk_session(
    hosts: str,
    connect_timeout: float,
    session_timeout: float = 10.0,
    client_factory: Callable[..., KazooClient] = KazooClient,
) -> Iterator[KazooClient]:
    """Open a ZooKeeper session and close it when the block exits.

    Blocks until the session reports connected, for at most
    *connect_timeout* seconds.

    Raises:
        ZkConnectionError: The session did not connect in time, or the
            server refused it.
    """
    try:
        client = client_factory(hosts=hosts, timeout=session_timeout)
    except (ValueError, KazooException) as exc:
        raise ZkConnectionError(f"Cannot create ZooKeeper client for {hosts!r}: {exc}") from exc

    try:
        client.start(timeout=connect_timeout)
    except (KazooTimeoutError, KazooException) as exc:
        _release(client)
        raise ZkConnectionError(
            f"Cannot connect to ZooKeeper at {hosts} within {connect_timeout:g}s: {exc}"
        ) from exc

    logger.debug("ZooKeeper session connected: %s", hosts)
    try:
        yield client
    finally:
        _release(client)


def _release(client: KazooClient) -> None:
    try:
        client.stop()
        client.close()
    except Exception:
        logger.warning("Failed to close ZooKeeper session", exc_info=True)
