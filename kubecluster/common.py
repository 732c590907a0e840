"""Shared controller helpers: naming, metadata cleanup and object list filters."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import TypeVar

from kubecluster.api import ReplicaSpec, ReplicaType
from kubecluster.meta import HasMetadata, ObjectMeta, Pod, Service, is_controlled_by

CONTROLLER_NAME = "kubecluster-controller"

T = TypeVar("T")


def gen_general_name(cluster_name: str, rtype: ReplicaType, index: str | int) -> str:
    """Name of a dependent object: ``<cluster>-<replica type>-<index>`` with '/' replaced."""
    name = f"{cluster_name}-{str(rtype).lower()}-{index}"
    return name.replace("/", "-")


def clear_generated_fields(objmeta: ObjectMeta) -> None:
    """Clear server-generated fields so the object can be written back."""
    objmeta.uid = ""
    objmeta.creation_timestamp = None


def convert_service_list(services: Iterable[Service] | None) -> list[Service] | None:
    """Return the services as a list, keeping ``None`` as ``None``."""
    if services is None:
        return None
    return list(services)


def controlled_pod_list(pods: Iterable[Pod] | None, cluster: HasMetadata) -> list[Pod] | None:
    """Return the pods whose controller is ``cluster``."""
    if pods is None:
        return None
    return [pod for pod in pods if is_controlled_by(pod, cluster)]


def get_replica_types(specs: Mapping[ReplicaType, ReplicaSpec | None]) -> list[ReplicaType]:
    """Return the replica types of a replica spec mapping."""
    return list(specs)


def convert_pod_list_with_filter(
    pods: Iterable[T] | None, predicate: Callable[[T], bool] | None
) -> list[T] | None:
    """Return the pods passing ``predicate``; all of them when it is ``None``."""
    if pods is None:
        return None
    if predicate is None:
        return list(pods)
    return [pod for pod in pods if predicate(pod)]