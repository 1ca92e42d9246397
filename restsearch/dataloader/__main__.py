"""Load the D2 dataset once and print it.

Usage::

    python -m restsearch.dataloader [--host HOST] [--port PORT] [--config PATH] [--json]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys


def main() -> None:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    parser = argparse.ArgumentParser(
        prog="python -m restsearch.dataloader",
        description="Load D2 clusters, services and URIs from ZooKeeper",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        default=None,
        help="JSON config file (default: ZK_* environment variables)",
    )
    parser.add_argument("--host", default=None, help="ZooKeeper host")
    parser.add_argument("--port", type=int, default=None, help="ZooKeeper port")
    parser.add_argument(
        "--connect-timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Give up if the session does not connect within this many seconds",
    )
    parser.add_argument("--json", action="store_true", help="Dump the full snapshot as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log load progress")
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    from restsearch.config import LoaderConfig
    from restsearch.dataloader import DatasetLoadError, ZkDatasetLoader

    config = LoaderConfig.load(args.config) if args.config else LoaderConfig.from_env()
    if args.host is not None:
        config.zk_host = args.host
    if args.port is not None:
        config.zk_port = args.port
    if args.connect_timeout is not None:
        config.connect_timeout = args.connect_timeout

    try:
        snapshot = ZkDatasetLoader.from_config(config).load_dataset(is_startup=True)
    except DatasetLoadError as exc:
        print(f"Load failed: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(snapshot.to_dict(), indent=2))
        return

    print(f"Loaded {len(snapshot)} cluster(s) at {snapshot.loaded_at.isoformat()}")
    for name in snapshot.sorted_cluster_names():
        cluster = snapshot[name]
        print(f"  {name}: {len(cluster.services)} service(s), {len(cluster.uris)} uri(s)")


if __name__ == "__main__":
    main()
