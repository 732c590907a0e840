"""Expectation tracking and event predicates for objects owned by KubeClusters."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from kubecluster.api import (
    CLUSTER_TYPE_LABEL,
    KUBE_CLUSTER_KIND,
    REPLICA_TYPE_LABEL,
    KubeCluster,
    ReplicaType,
)
from kubecluster.lister import KubeClusterLister
from kubecluster.meta import (
    GROUP_VERSION,
    GroupVersionKind,
    HasMetadata,
    OwnerReference,
    Pod,
    Service,
    get_controller_of,
)

_log = logging.getLogger(__name__)

EXPECTATIONS_TIMEOUT = 5 * 60.0


class Expectations(Protocol):
    """What the predicates need from an expectation store."""

    def creation_observed(self, key: str) -> None: ...

    def deletion_observed(self, key: str) -> None: ...

    def satisfied_expectations(self, key: str) -> bool: ...

    def pre_satisfied_expectations(self, key: str) -> bool: ...


@dataclass
class _Record:
    adds: int = 0
    dels: int = 0
    timestamp: float = 0.0

    def fulfilled(self) -> bool:
        return self.adds <= 0 and self.dels <= 0


class ControllerExpectations:
    """Counts of creations and deletions a controller still waits to observe, by key."""

    def __init__(
        self,
        ttl: float = EXPECTATIONS_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._records: dict[str, _Record] = {}
        self._lock = threading.Lock()

    def expect_creations(self, key: str, adds: int) -> None:
        """Record that ``adds`` creations are expected under ``key``."""
        with self._lock:
            self._records[key] = _Record(adds=adds, dels=0, timestamp=self._clock())

    def expect_deletions(self, key: str, dels: int) -> None:
        """Record that ``dels`` deletions are expected under ``key``."""
        with self._lock:
            self._records[key] = _Record(adds=0, dels=dels, timestamp=self._clock())

    def creation_observed(self, key: str) -> None:
        """Lower the expected creations under ``key`` by one."""
        with self._lock:
            record = self._records.get(key)
            if record is not None:
                record.adds -= 1

    def deletion_observed(self, key: str) -> None:
        """Lower the expected deletions under ``key`` by one."""
        with self._lock:
            record = self._records.get(key)
            if record is not None:
                record.dels -= 1

    def satisfied_expectations(self, key: str) -> bool:
        """True when nothing is expected under ``key``, all was observed, or the record expired."""
        with self._lock:
            record = self._records.get(key)
            if record is None or record.fulfilled():
                return True
            return self._clock() - record.timestamp > self.ttl

    def pre_satisfied_expectations(self, key: str) -> bool:
        """True when the pre-sync expectations under ``key`` are satisfied."""
        return self.satisfied_expectations(key)


class ClusterController:
    """Resolves KubeClusters by name from an informer cache."""

    def __init__(
        self,
        lister: KubeClusterLister,
        schema_reconcilers: Mapping[str, Expectations] | None = None,
    ) -> None:
        self.lister = lister
        self.schema_reconcilers: dict[str, Expectations] = dict(schema_reconcilers or {})

    def api_group_version_kind(self) -> GroupVersionKind:
        return GROUP_VERSION.with_kind(KUBE_CLUSTER_KIND)

    def get_cluster_from_informer_cache(self, namespace: str, name: str) -> KubeCluster:
        """The cached cluster; raises NotFoundError when absent."""
        return self.lister.kube_clusters(namespace).get(name)


@dataclass
class CreateEvent:
    object: Any


@dataclass
class UpdateEvent:
    object_old: Any
    object_new: Any


@dataclass
class DeleteEvent:
    object: Any
    delete_state_unknown: bool = field(default=False)


def gen_expectation_generic_key(cluster_key: str, replica_type: str, plural: str) -> str:
    return f"{cluster_key}/{replica_type.lower()}/{plural}"


def gen_expectation_pods_key(cluster_key: str, replica_type: str) -> str:
    return gen_expectation_generic_key(cluster_key, replica_type, "pods")


def gen_expectation_services_key(cluster_key: str, replica_type: str) -> str:
    return gen_expectation_generic_key(cluster_key, replica_type, "services")


def gen_pre_satisfied_key(cluster_key: str) -> str:
    return f"{cluster_key}/pre-satisfied"


def satisfied_expectations(
    exp: Expectations, cluster_key: str, replica_types: Iterable[ReplicaType]
) -> bool:
    """True when every expected pod and service change of the cluster has been observed."""
    if not exp.pre_satisfied_expectations(gen_pre_satisfied_key(cluster_key)):
        return False
    return all(
        exp.satisfied_expectations(gen_expectation_pods_key(cluster_key, str(rtype)))
        and exp.satisfied_expectations(gen_expectation_services_key(cluster_key, str(rtype)))
        for rtype in replica_types
    )


def _kind_of(obj: Any) -> str:
    return getattr(type(obj), "KIND", type(obj).__name__)


def logger_for_generic_kind(obj: HasMetadata, kind: str) -> logging.LoggerAdapter:
    """A logger carrying the owning cluster, the object and its UID."""
    cluster = ""
    ref = get_controller_of(obj)
    if ref is not None and ref.kind == kind:
        cluster = f"{obj.metadata.namespace}.{ref.name}"
    extra = {
        "cluster": cluster,
        kind: f"{obj.metadata.namespace}.{obj.metadata.name}",
        "uid": obj.metadata.uid,
    }
    return logging.LoggerAdapter(_log, extra)


def resolve_controller_ref(
    controller: ClusterController, namespace: str, controller_ref: OwnerReference
) -> KubeCluster | None:
    """The cluster a controller reference points to, or None when it cannot be matched."""
    if controller_ref.kind != controller.api_group_version_kind().kind:
        return None
    try:
        cluster = controller.get_cluster_from_informer_cache(namespace, controller_ref.name)
    except LookupError:
        return None
    if cluster.metadata.uid != controller_ref.uid:
        return None
    return cluster


def _typed_expectation_key(obj: Any, cluster_key: str, rtype: str) -> str | None:
    if isinstance(obj, Pod):
        return gen_expectation_pods_key(cluster_key, rtype)
    if isinstance(obj, Service):
        return gen_expectation_services_key(cluster_key, rtype)
    return None


def _observe(
    exp: Expectations,
    obj: Any,
    key_for: Callable[[Any, str, str], str | None],
    observe: Callable[[Expectations, str], None],
) -> bool:
    rtype = obj.metadata.labels.get(REPLICA_TYPE_LABEL, "")
    if not rtype:
        return False
    ref = get_controller_of(obj)
    if ref is None:
        return True
    cluster_key = f"{obj.metadata.namespace}/{ref.name}"
    key = key_for(obj, cluster_key, rtype)
    if key is None:
        return False
    observe(exp, key)
    return True


def _generic_key(obj: Any, cluster_key: str, rtype: str) -> str:
    return gen_expectation_generic_key(cluster_key, rtype, _kind_of(obj).lower() + "s")


def expectation_create_predicate(exp: Expectations) -> Callable[[CreateEvent], bool]:
    """Predicate lowering pod/service creation expectations."""

    def predicate(event: CreateEvent) -> bool:
        return _observe(exp, event.object, _typed_expectation_key, type(exp).creation_observed)

    return predicate


def expectation_delete_predicate(exp: Expectations) -> Callable[[DeleteEvent], bool]:
    """Predicate lowering pod/service deletion expectations."""

    def predicate(event: DeleteEvent) -> bool:
        return _observe(exp, event.object, _typed_expectation_key, type(exp).deletion_observed)

    return predicate


def _schema_expectations(
    schema_reconcilers: Mapping[str, Expectations], obj: Any
) -> Expectations | None:
    cluster_type = obj.metadata.labels.get(CLUSTER_TYPE_LABEL, "")
    if not cluster_type:
        return None
    return schema_reconcilers.get(cluster_type)


def on_dependent_create_func(
    schema_reconcilers: Mapping[str, Expectations],
) -> Callable[[CreateEvent], bool]:
    """Create predicate dispatching to the expectations of the object's cluster type."""

    def predicate(event: CreateEvent) -> bool:
        exp = _schema_expectations(schema_reconcilers, event.object)
        if exp is None:
            return False
        return expectation_create_predicate(exp)(event)

    return predicate


def on_dependent_delete_func(
    schema_reconcilers: Mapping[str, Expectations],
) -> Callable[[DeleteEvent], bool]:
    """Delete predicate dispatching to the expectations of the object's cluster type."""

    def predicate(event: DeleteEvent) -> bool:
        exp = _schema_expectations(schema_reconcilers, event.object)
        if exp is None:
            return False
        return expectation_delete_predicate(exp)(event)

    return predicate


def on_dependent_create_func_generic(
    schema_reconcilers: Mapping[str, Expectations],
) -> Callable[[CreateEvent], bool]:
    """Create predicate for dependents of any kind, keyed by the kind's plural."""

    def predicate(event: CreateEvent) -> bool:
        exp = _schema_expectations(schema_reconcilers, event.object)
        if exp is None:
            return False
        return _observe(exp, event.object, _generic_key, type(exp).creation_observed)

    return predicate


def on_dependent_delete_func_generic(
    schema_reconcilers: Mapping[str, Expectations],
) -> Callable[[DeleteEvent], bool]:
    """Delete predicate for dependents of any kind, keyed by the kind's plural."""

    def predicate(event: DeleteEvent) -> bool:
        exp = _schema_expectations(schema_reconcilers, event.object)
        if exp is None:
            return False
        return _observe(exp, event.object, _generic_key, type(exp).deletion_observed)

    return predicate


def _update_passes(
    controller: ClusterController, event: UpdateEvent, logger: logging.LoggerAdapter, what: str
) -> bool:
    new_obj, old_obj = event.object_new, event.object_old
    new_ref = get_controller_of(new_obj)
    old_ref = get_controller_of(old_obj)
    if new_ref != old_ref and old_ref is not None:
        if resolve_controller_ref(controller, old_obj.metadata.namespace, old_ref) is not None:
            logger.info("%s controller ref updated: %s, %s", what, new_obj, old_obj)
            return True
    if new_ref is not None:
        if resolve_controller_ref(controller, new_obj.metadata.namespace, new_ref) is None:
            return False
        logger.debug("%s has a controller ref: %s, %s", what, new_obj, old_obj)
        return True
    return False


def on_dependent_update_func(controller: ClusterController) -> Callable[[UpdateEvent], bool]:
    """Update predicate for pods and services owned by a resolvable cluster."""

    def predicate(event: UpdateEvent) -> bool:
        new_obj = event.object_new
        if new_obj.metadata.resource_version == event.object_old.metadata.resource_version:
            return False
        if not isinstance(new_obj, (Pod, Service)):
            return False
        logger = logger_for_generic_kind(new_obj, controller.api_group_version_kind().kind)
        return _update_passes(controller, event, logger, "pod/service")

    return predicate


def on_dependent_update_func_generic(
    controller: ClusterController,
) -> Callable[[UpdateEvent], bool]:
    """Update predicate for dependents of any kind owned by a resolvable cluster."""

    def predicate(event: UpdateEvent) -> bool:
        new_obj = event.object_new
        if new_obj.metadata.resource_version == event.object_old.metadata.resource_version:
            return False
        kind = controller.api_group_version_kind().kind
        logger = logger_for_generic_kind(new_obj, kind)
        return _update_passes(controller, event, logger, kind)

    return predicate