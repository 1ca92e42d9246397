"""Typed decoding of D2 service and URI documents.

Service node, ``/d2/services/example``::

    {"path": "/example",
     "serviceName": "example",
     "clusterName": "exampleCluster",
     "loadBalancerStrategyList": ["degraderV2", "degrader"],
     "serviceMetadataProperties": {"isDefaultService": false}}

URI node, ``/d2/uris/exampleCluster/ephemoral--XYZ``::

    {"clusterName": "exampleCluster",
     "weights": {"http://host1:1234/resources": 1.0},
     "partitionDesc": {"http://host1:1234/resources": {"0": {"weight": 1.0}}}}
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from restsearch.dataloader.errors import DocumentDecodeError
from restsearch.dataloader.reader import NodeRead
from restsearch.models import Endpoint, Service

logger = logging.getLogger(__name__)


class ServiceMetadataProperties(BaseModel):
    model_config = ConfigDict(extra="ignore")

    is_default_service: bool | None = Field(default=None, alias="isDefaultService")


class ServiceDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    path: str
    cluster_name: str = Field(alias="clusterName")
    service_metadata: ServiceMetadataProperties | None = Field(
        default=None, alias="serviceMetadataProperties"
    )

    @property
    def is_default_service(self) -> bool:
        # A service without any metadata block is the default service.
        if self.service_metadata is None:
            return True
        return bool(self.service_metadata.is_default_service)


class UriDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    cluster_name: str = Field(alias="clusterName")
    weights: dict[str, Any] | None = None


def decode_service(name: str, node: NodeRead) -> Service:
    """Decode one service node.

    Raises:
        DocumentDecodeError: ``path`` or ``clusterName`` is missing or not a
            string, or the payload is not valid JSON.
    """
    try:
        doc = ServiceDocument.model_validate_json(node.payload)
    except ValidationError as exc:
        raise DocumentDecodeError(name, str(exc)) from exc
    return Service(
        name=name,
        path=doc.path,
        cluster_name=doc.cluster_name,
        is_default_service=doc.is_default_service,
        created_at=node.stat.created_at if node.stat else None,
        modified_at=node.stat.modified_at if node.stat else None,
    )


def decode_endpoints(key: str, payload: bytes) -> list[Endpoint]:
    """Decode one URI node into one :class:`Endpoint` per ``weights`` key.

    A document without ``weights`` is a valid, empty announcement.
    """
    try:
        doc = UriDocument.model_validate_json(payload)
    except ValidationError as exc:
        raise DocumentDecodeError(key, str(exc)) from exc
    if doc.weights is None:
        return []
    return [Endpoint(uri=uri, cluster_name=doc.cluster_name) for uri in doc.weights]


def decode_services(nodes: Mapping[str, NodeRead]) -> list[Service]:
    """Decode every service node; the first failure propagates."""
    return [decode_service(name, node) for name, node in nodes.items()]


def decode_all_endpoints(payloads: Mapping[str, bytes]) -> list[Endpoint]:
    """Decode every URI node, skipping (and logging) documents that fail."""
    endpoints: list[Endpoint] = []
    for key, payload in payloads.items():
        try:
            endpoints.extend(decode_endpoints(key, payload))
        except DocumentDecodeError as exc:
            logger.warning("Skipping URI node: %s", exc)
    return endpoints
