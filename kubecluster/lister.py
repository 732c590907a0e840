"""An in-memory indexer of KubeClusters and listers reading from it."""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from typing import Union

from kubecluster.api import KubeCluster
from kubecluster.meta import GroupResource, resource

Selector = Union[None, Mapping[str, str], Callable[[Mapping[str, str]], bool]]

NAMESPACE_ALL = ""


class NotFoundError(LookupError):
    """Raised when a requested object does not exist."""

    def __init__(self, group_resource: GroupResource, name: str) -> None:
        self.group_resource = group_resource
        self.name = name
        super().__init__(f'{group_resource} "{name}" not found')


def _meta_namespace_key(obj: KubeCluster) -> str:
    meta = obj.metadata
    return f"{meta.namespace}/{meta.name}" if meta.namespace else meta.name


def _matches(selector: Selector, labels: Mapping[str, str]) -> bool:
    if selector is None:
        return True
    if callable(selector):
        return bool(selector(labels))
    return all(labels.get(key) == value for key, value in selector.items())


class Indexer:
    """Thread-safe store of objects keyed by ``namespace/name``."""

    def __init__(self) -> None:
        self._items: dict[str, KubeCluster] = {}
        self._lock = threading.Lock()

    def add(self, obj: KubeCluster) -> None:
        """Insert or replace an object."""
        with self._lock:
            self._items[_meta_namespace_key(obj)] = obj

    def delete(self, obj: KubeCluster) -> None:
        """Remove an object; absent objects are ignored."""
        with self._lock:
            self._items.pop(_meta_namespace_key(obj), None)

    def get_by_key(self, key: str) -> KubeCluster | None:
        with self._lock:
            return self._items.get(key)

    def list(self) -> list[KubeCluster]:
        with self._lock:
            return list(self._items.values())

    def by_namespace(self, namespace: str) -> list[KubeCluster]:
        with self._lock:
            return [obj for obj in self._items.values() if obj.metadata.namespace == namespace]


class KubeClusterLister:
    """Lists KubeClusters held by an indexer. Returned objects are read-only."""

    def __init__(self, indexer: Indexer) -> None:
        self.indexer = indexer

    def list(self, selector: Selector = None) -> list[KubeCluster]:
        """All clusters whose labels match ``selector``."""
        return [obj for obj in self.indexer.list() if _matches(selector, obj.metadata.labels)]

    def kube_clusters(self, namespace: str) -> KubeClusterNamespaceLister:
        """A lister restricted to one namespace."""
        return KubeClusterNamespaceLister(self.indexer, namespace)


class KubeClusterNamespaceLister:
    """Lists and gets KubeClusters of one namespace."""

    def __init__(self, indexer: Indexer, namespace: str) -> None:
        self.indexer = indexer
        self.namespace = namespace

    def list(self, selector: Selector = None) -> list[KubeCluster]:
        """Clusters in this namespace whose labels match ``selector``."""
        if self.namespace == NAMESPACE_ALL:
            candidates = self.indexer.list()
        else:
            candidates = self.indexer.by_namespace(self.namespace)
        return [obj for obj in candidates if _matches(selector, obj.metadata.labels)]

    def get(self, name: str) -> KubeCluster:
        """The cluster with the given name; raises NotFoundError when absent."""
        obj = self.indexer.get_by_key(f"{self.namespace}/{name}")
        if obj is None:
            raise NotFoundError(resource("kubecluster"), name)
        return obj