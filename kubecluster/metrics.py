"""Counters tracking the lifecycle of clusters, labelled by namespace and cluster type."""

from __future__ import annotations

import threading
from collections.abc import Sequence

from kubecluster.api import ClusterType

_CLUSTER_LABELS = ("cluster_namespace", "cluster_type")


class CounterVec:
    """A family of monotonically increasing counters split by label values."""

    def __init__(self, name: str, help: str, label_names: Sequence[str]) -> None:
        self.name = name
        self.help = help
        self.label_names = tuple(label_names)
        self._values: dict[tuple[str, ...], float] = {}
        self._lock = threading.Lock()

    def _key(self, label_values: Sequence[str]) -> tuple[str, ...]:
        if len(label_values) != len(self.label_names):
            raise ValueError(
                f"{self.name}: expected {len(self.label_names)} label values "
                f"{self.label_names}, got {len(label_values)}"
            )
        return tuple(str(value) for value in label_values)

    def inc(self, *args: str) -> None:
        """Add one to the counter for the given label values."""
        key = self._key(args)
        with self._lock:
            self._values[key] = self._values.get(key, 0) + 1

    def value(self, *args: str) -> float:
        """Current count for the given label values; zero when never incremented."""
        key = self._key(args)
        with self._lock:
            return self._values.get(key, 0)

    def __repr__(self) -> str:
        return f"CounterVec(name={self.name!r}, labels={self.label_names!r})"


clusters_created_count = CounterVec(
    "training_operator_clusters_created_total",
    "Counts number of clusters created",
    _CLUSTER_LABELS,
)
clusters_deleted_count = CounterVec(
    "training_operator_clusters_deleted_total",
    "Counts number of clusters deleted",
    _CLUSTER_LABELS,
)
clusters_failed_count = CounterVec(
    "training_operator_clusters_failed_total",
    "Counts number of clusters failed",
    _CLUSTER_LABELS,
)
clusters_restarted_count = CounterVec(
    "training_operator_clusters_restarted_total",
    "Counts number of clusters restarted",
    _CLUSTER_LABELS,
)

REGISTRY: dict[str, CounterVec] = {
    counter.name: counter
    for counter in (
        clusters_created_count,
        clusters_deleted_count,
        clusters_failed_count,
        clusters_restarted_count,
    )
}


def created_clusters_counter_inc(namespace: str, cluster_type: ClusterType) -> None:
    clusters_created_count.inc(namespace, str(cluster_type))


def deleted_clusters_counter_inc(namespace: str, cluster_type: ClusterType) -> None:
    clusters_deleted_count.inc(namespace, str(cluster_type))


def failed_clusters_counter_inc(namespace: str, cluster_type: ClusterType) -> None:
    clusters_failed_count.inc(namespace, str(cluster_type))


def restarted_clusters_counter_inc(namespace: str, cluster_type: ClusterType) -> None:
    clusters_restarted_count.inc(namespace, str(cluster_type))