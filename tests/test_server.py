"""Tests for the snapshot server."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import restsearch.server as server
from restsearch.dataloader import DatasetLoader, ZkConnectionError, ZkDatasetLoader
from restsearch.dataloader.assembler import assemble_snapshot
from restsearch.models import Endpoint, Service


class StubLoader(DatasetLoader):
    def __init__(self) -> None:
        self.calls: list[bool] = []
        self.fail = False

    def load_dataset(self, is_startup: bool):
        self.calls.append(is_startup)
        if self.fail:
            raise ZkConnectionError("zookeeper unreachable")
        services = [
            Service("svcA", "/a", "clusterX", True, 1000, 2000),
            Service("svcB", "/b", "clusterX", False),
            Service("svcC", "/c", "alpha", True),
        ]
        return assemble_snapshot(services, [Endpoint("http://h1", "clusterX")])


@pytest.fixture
def stub(monkeypatch):
    loader = StubLoader()
    monkeypatch.setattr(server, "_loader", loader)
    monkeypatch.setattr(server, "_snapshot", None)
    return loader


@pytest.fixture
def client(stub):
    return TestClient(server.app)


class TestSnapshotServer:
    def test_health_before_load(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "loaded": False}

    def test_list_clusters_loads_lazily(self, client, stub):
        resp = client.get("/clusters")
        assert resp.status_code == 200
        body = resp.json()
        assert [c["name"] for c in body["clusters"]] == ["alpha", "clusterX"]
        assert body["clusters"][1] == {"name": "clusterX", "service_count": 2, "uri_count": 1}
        assert stub.calls == [True]

        client.get("/clusters")
        assert stub.calls == [True]

    def test_get_cluster(self, client):
        resp = client.get("/clusters/clusterX")
        assert resp.status_code == 200
        body = resp.json()
        assert [s["name"] for s in body["services"]] == ["svcA", "svcB"]
        assert body["services"][0]["created_at"] == 1000
        assert body["uris"] == ["http://h1"]

    def test_unknown_cluster(self, client):
        assert client.get("/clusters/nope").status_code == 404

    def test_reload(self, client, stub):
        client.get("/clusters")
        resp = client.post("/reload")
        assert resp.status_code == 200
        assert stub.calls == [True, False]

    def test_reload_failure_keeps_previous_snapshot(self, client, stub):
        client.get("/clusters")
        stub.fail = True
        resp = client.post("/reload")
        assert resp.status_code == 503
        assert "unreachable" in resp.json()["detail"]
        assert client.get("/clusters").status_code == 200

    def test_default_loader_from_env(self, monkeypatch):
        monkeypatch.setattr(server, "_loader", None)
        monkeypatch.setenv("ZK_HOST", "zk.env")
        loader = server._get_loader()
        assert isinstance(loader, ZkDatasetLoader)
        assert loader.hosts == "zk.env:2181"
