"""restsearch — D2 service-discovery dataset loader.

Reads the service and URI subtrees that D2 keeps in ZooKeeper and builds an
immutable snapshot of clusters, their services and announced endpoints.

Quickstart::

    from restsearch.dataloader import ZkDatasetLoader

    loader = ZkDatasetLoader("zk.example.com", 2181)
    snapshot = loader.load_dataset(is_startup=True)
    for name in snapshot.sorted_cluster_names():
        print(name, len(snapshot[name].services))
"""

__version__ = "1.0.0"
