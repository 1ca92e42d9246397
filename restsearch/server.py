"""restsearch — D2 snapshot server.

Holds the most recently loaded snapshot and exposes it read-only.

Exposes:
  GET  /health            — liveness check
  GET  /clusters          — clusters in display order with counts
  GET  /clusters/{name}   — one cluster's services and URIs
  POST /reload            — load a fresh snapshot from ZooKeeper

Start with::

    python -m restsearch.server
    # or
    uvicorn restsearch.server:app --host 0.0.0.0 --port 5200
"""

from __future__ import annotations

import logging
import os
from datetime import datetime

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from restsearch.config import LoaderConfig
from restsearch.dataloader import DatasetLoader, DatasetLoadError, ZkDatasetLoader
from restsearch.models import Snapshot

logger = logging.getLogger(__name__)

# ──────────────────────────────────────────────────────────────────
# FastAPI app
# ──────────────────────────────────────────────────────────────────

app = FastAPI(title="restsearch", version="1.0.0")

_loader: DatasetLoader | None = None
_snapshot: Snapshot | None = None


def _get_loader() -> DatasetLoader:
    global _loader
    if _loader is None:
        _loader = ZkDatasetLoader.from_config(LoaderConfig.from_env())
    return _loader


def _refresh(is_startup: bool) -> Snapshot:
    global _snapshot
    try:
        snapshot = _get_loader().load_dataset(is_startup)
    except DatasetLoadError as exc:
        logger.error("Dataset load failed: %s", exc)
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    _snapshot = snapshot
    return snapshot


def _get_snapshot() -> Snapshot:
    if _snapshot is None:
        return _refresh(is_startup=True)
    return _snapshot


# ──────────────────────────────────────────────────────────────────
# Response models
# ──────────────────────────────────────────────────────────────────

class ClusterSummary(BaseModel):
    name: str
    service_count: int
    uri_count: int


class ClusterListResponse(BaseModel):
    loaded_at: datetime
    clusters: list[ClusterSummary]


class ServiceInfo(BaseModel):
    name: str
    path: str
    is_default_service: bool
    created_at: int | None = None
    modified_at: int | None = None


class ClusterDetail(BaseModel):
    name: str
    loaded_at: datetime
    services: list[ServiceInfo]
    uris: list[str]


# ──────────────────────────────────────────────────────────────────
# Routes
# ──────────────────────────────────────────────────────────────────

@app.get("/health")
def health():
    return {"status": "ok", "loaded": _snapshot is not None}


@app.get("/clusters", response_model=ClusterListResponse)
def list_clusters():
    snapshot = _get_snapshot()
    return ClusterListResponse(
        loaded_at=snapshot.loaded_at,
        clusters=[
            ClusterSummary(
                name=name,
                service_count=len(snapshot[name].services),
                uri_count=len(snapshot[name].uris),
            )
            for name in snapshot.sorted_cluster_names()
        ],
    )


@app.get("/clusters/{name}", response_model=ClusterDetail)
def get_cluster(name: str):
    snapshot = _get_snapshot()
    cluster = snapshot.get(name)
    if cluster is None:
        raise HTTPException(status_code=404, detail=f"Unknown cluster '{name}'")
    return ClusterDetail(
        name=cluster.name,
        loaded_at=snapshot.loaded_at,
        services=[
            ServiceInfo(
                name=svc.name,
                path=svc.path,
                is_default_service=svc.is_default_service,
                created_at=svc.created_at,
                modified_at=svc.modified_at,
            )
            for svc in sorted(cluster.services, key=lambda s: s.name)
        ],
        uris=sorted(cluster.uris),
    )


@app.post("/reload", response_model=ClusterListResponse)
def reload_dataset():
    _refresh(is_startup=False)
    return list_clusters()


# ──────────────────────────────────────────────────────────────────
# Entry point
# ──────────────────────────────────────────────────────────────────

def main():
    import uvicorn
    host = os.environ.get("RESTSEARCH_HOST", "0.0.0.0")
    port = int(os.environ.get("RESTSEARCH_PORT", "5200"))
    logging.basicConfig(level=logging.INFO)
    logger.info("Starting restsearch server on %s:%d", host, port)
    uvicorn.run("restsearch.server:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
