"""Defaulting of KubeCluster objects and helpers for pod template defaults."""

from __future__ import annotations

from collections.abc import MutableMapping

from kubecluster.api import (
    CLUSTER_DEFAULT_CONTAINER_NAME,
    CleanKubeNodePolicy,
    KubeCluster,
    KubeClusterList,
    ReplicaSpec,
    ReplicaType,
    RestartPolicy,
)
from kubecluster.meta import ContainerPort, PodSpec


def set_defaults_kube_cluster(kcluster: KubeCluster) -> None:
    """Fill in the main container, the cleanup policy and replica counts."""
    spec = kcluster.spec
    if not spec.main_container:
        spec.main_container = CLUSTER_DEFAULT_CONTAINER_NAME
    if spec.run_policy.clean_kube_node_policy is None:
        spec.run_policy.clean_kube_node_policy = CleanKubeNodePolicy.ALL
    for replica_spec in spec.cluster_replica_spec.values():
        set_default_replicas(replica_spec, 1)


def set_defaults_kube_cluster_list(cluster_list: KubeClusterList) -> None:
    """Apply cluster defaults to every item of a list."""
    for kcluster in cluster_list.items:
        set_defaults_kube_cluster(kcluster)


def get_default_container_index(spec: PodSpec, default_container_name: str) -> int:
    """Index of the container with the given name, or 0 when there is none."""
    return next(
        (i for i, container in enumerate(spec.containers) if container.name == default_container_name),
        0,
    )


def has_default_port(spec: PodSpec, container_index: int, default_port_name: str) -> bool:
    """Tell whether the container already exposes a port with the given name."""
    return any(port.name == default_port_name for port in spec.containers[container_index].ports)


def set_default_port(
    spec: PodSpec, default_port_name: str, default_port: int, default_container_index: int
) -> None:
    """Append a named port to the container at the given index."""
    spec.containers[default_container_index].ports.append(
        ContainerPort(name=default_port_name, container_port=default_port)
    )


def set_default_restart_policy(
    replica_spec: ReplicaSpec | None, default_restart_policy: RestartPolicy
) -> None:
    """Set the restart policy when the replica spec has none."""
    if replica_spec is not None and not replica_spec.restart_policy:
        replica_spec.restart_policy = default_restart_policy


def set_default_replicas(replica_spec: ReplicaSpec | None, replicas: int) -> None:
    """Set the replica count when the replica spec has none."""
    if replica_spec is not None and replica_spec.replicas is None:
        replica_spec.replicas = replicas


def set_type_name_to_camel_case(
    replica_specs: MutableMapping[ReplicaType, ReplicaSpec | None], typ: ReplicaType
) -> None:
    """Rename the first key equal to ``typ`` ignoring case to exactly ``typ``."""
    wanted = typ.casefold()
    for key in list(replica_specs):
        if key.casefold() == wanted and key != typ:
            replica_specs[typ] = replica_specs.pop(key)
            return