"""Configuration for the ZooKeeper dataset loader."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# Minutes the loader waits for the ZooKeeper session to connect.
ZK_CONNECT_TIMEOUT_MINUTES = 3


@dataclass
class LoaderConfig:
    """Loader configuration — loaded from a JSON file or the environment."""

    zk_host: str = "localhost"
    zk_port: int = 2181

    # D2 tree layout
    services_root: str = "/d2/services"
    uris_root: str = "/d2/uris"

    # Seconds
    connect_timeout: float = ZK_CONNECT_TIMEOUT_MINUTES * 60.0
    session_timeout: float = 10.0

    @property
    def hosts(self) -> str:
        """Connect string in ``host:port`` form."""
        return f"{self.zk_host}:{self.zk_port}"

    @classmethod
    def load(cls, path: str | Path) -> LoaderConfig:
        path = Path(path)
        if path.exists():
            with open(path) as f:
                data = json.load(f)
            known = {k for k in cls.__dataclass_fields__}
            filtered = {k: v for k, v in data.items() if k in known}
            return cls(**filtered)
        logger.warning("Config not found at %s, using defaults", path)
        return cls()

    @classmethod
    def from_env(cls) -> LoaderConfig:
        """Build a config from ``ZK_*`` environment variables over the defaults."""
        defaults = cls()
        return cls(
            zk_host=os.environ.get("ZK_HOST", defaults.zk_host),
            zk_port=int(os.environ.get("ZK_PORT", str(defaults.zk_port))),
            services_root=os.environ.get("ZK_SERVICES_ROOT", defaults.services_root),
            uris_root=os.environ.get("ZK_URIS_ROOT", defaults.uris_root),
            connect_timeout=float(
                os.environ.get("ZK_CONNECT_TIMEOUT", str(defaults.connect_timeout))
            ),
            session_timeout=float(
                os.environ.get("ZK_SESSION_TIMEOUT", str(defaults.session_timeout))
            ),
        )
