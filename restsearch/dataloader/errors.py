"""Errors raised while loading a dataset."""

from __future__ import annotations


class DatasetLoadError(Exception):
    """Base error for dataset load failures."""


class ZkConnectionError(DatasetLoadError):
    """Raised when the ZooKeeper session does not connect in time."""


class DocumentDecodeError(DatasetLoadError):
    """Raised when a node's JSON payload is missing a required field or is malformed."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"Cannot decode node {key!r}: {message}")
        self.key = key
