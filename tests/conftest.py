"""pytest configuration for restsearch tests."""

from __future__ import annotations

import json
from typing import Any

import pytest
from kazoo.exceptions import ConnectionLoss, NoNodeError
from kazoo.handlers.threading import KazooTimeoutError
from kazoo.protocol.states import ZnodeStat


class FakeZkClient:
    """In-memory stand-in for :class:`kazoo.client.KazooClient`.

    Nodes are registered by full path; parents are implied.  Paths listed in
    *failing* raise :class:`ConnectionLoss` when read, and paths listed in
    *vanished* are listed by their parent but gone by the time they are read.
    """

    def __init__(self, hosts: str = "", timeout: float = 10.0, connects: bool = True) -> None:
        self.hosts = hosts
        self.timeout = timeout
        self.connects = connects
        self.nodes: dict[str, bytes | None] = {}
        self.failing: set[str] = set()
        self.vanished: set[str] = set()
        self.dirs: set[str] = set()
        self.started = False
        self.stopped = False
        self.closed = False
        self.start_timeout: float | None = None

    # -- test helpers ------------------------------------------------------

    def mkdir(self, path: str) -> None:
        self.dirs.add(path.rstrip("/"))

    def add(self, path: str, doc: dict[str, Any] | bytes | None) -> None:
        if isinstance(doc, dict):
            doc = json.dumps(doc).encode("utf-8")
        self.nodes[path] = doc

    # -- KazooClient surface ----------------------------------------------

    def start(self, timeout: float = 15) -> None:
        self.start_timeout = timeout
        if not self.connects:
            raise KazooTimeoutError("Connection time-out")
        self.started = True

    def stop(self) -> None:
        self.stopped = True

    def close(self) -> None:
        self.closed = True

    def get_children(self, path: str) -> list[str]:
        prefix = path.rstrip("/") + "/"
        known = list(self.nodes) + list(self.vanished) + list(self.failing)
        if path.rstrip("/") not in self.dirs and not any(p.startswith(prefix) for p in known):
            raise NoNodeError(path)
        children = {p[len(prefix):].split("/", 1)[0] for p in known if p.startswith(prefix)}
        return sorted(children)

    def get(self, path: str) -> tuple[bytes | None, ZnodeStat]:
        if path in self.failing:
            raise ConnectionLoss()
        if path in self.vanished or path not in self.nodes:
            raise NoNodeError(path)
        data = self.nodes[path]
        return data, ZnodeStat(1, 2, 1000, 2000, 0, 0, 0, 0, len(data or b""), 0, 3)


@pytest.fixture
def zk():
    return FakeZkClient()


@pytest.fixture
def zk_factory(zk):
    """Client factory that hands out the shared fake and records its arguments."""
    calls: list[dict[str, Any]] = []

    def factory(**kwargs: Any) -> FakeZkClient:
        calls.append(kwargs)
        zk.hosts = kwargs.get("hosts", "")
        zk.timeout = kwargs.get("timeout", 10.0)
        return zk

    factory.calls = calls  # type: ignore[attr-defined]
    return factory
