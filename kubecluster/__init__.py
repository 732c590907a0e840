"""KubeCluster resource model with defaulting, validation, listers, metrics and expectation tracking."""

__version__ = "0.1.0"

__all__ = [
    "api",
    "common",
    "defaults",
    "lister",
    "meta",
    "metrics",
    "reconciler",
    "validation",
    "workqueue",
]