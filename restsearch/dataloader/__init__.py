"""restsearch.dataloader — builds snapshots from D2 data in ZooKeeper.

Exports:
    DatasetLoader        — abstract loader interface
    ZkDatasetLoader      — ZooKeeper-backed loader
    DatasetLoadError     — base of all load errors
    ZkConnectionError    — session did not connect in time
    DocumentDecodeError  — a node payload could not be decoded
"""

from __future__ import annotations

from restsearch.dataloader.base import DatasetLoader
from restsearch.dataloader.errors import (
    DatasetLoadError,
    DocumentDecodeError,
    ZkConnectionError,
)
from restsearch.dataloader.zookeeper import ZkDatasetLoader

__all__ = [
    "DatasetLoader",
    "ZkDatasetLoader",
    "DatasetLoadError",
    "ZkConnectionError",
    "DocumentDecodeError",
]
