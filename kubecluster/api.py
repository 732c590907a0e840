"""The KubeCluster resource and the types it is built from."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import ClassVar

from kubecluster.meta import GROUP_VERSION, ObjectMeta, PodTemplateSpec

KUBE_CLUSTER_KIND = "KubeCluster"
KUBE_CLUSTER_PLURAL = "KubeClusters"
KUBE_CLUSTER_SINGULAR = "KubeCluster"

CONTROLLER_NAME_LABEL = "kubeclusetr.org/controller-name"
CLUSTER_NAME_LABEL = "kubeclusetr.org/clusetr-name"
CLUSTER_TYPE_LABEL = "kubeclusetr.org/clusetr-type"
REPLICA_INDEX_LABEL = "kubeclusetr.org/replica-index"
REPLICA_TYPE_LABEL = "kubeclusetr.org/replica-type"
CLUSTER_ROLE_LABEL = "kubeclusetr.org/clusetr-role"

CLUSTER_DEFAULT_CONTAINER_NAME = "kubenode"

CONDITION_TRUE = "True"
CONDITION_FALSE = "False"
CONDITION_UNKNOWN = "Unknown"

ClusterType = str
ReplicaType = str
ReplicaTemplate = PodTemplateSpec


class ClusterConditionType(str, Enum):
    CREATED = "Created"
    RUNNING = "Running"
    RESTARTING = "Restarting"
    SUSPENDED = "Suspended"
    FAILED = "Failed"


class CleanKubeNodePolicy(str, Enum):
    UNDEFINED = ""
    ALL = "All"
    RUNNING = "Running"
    NONE = "None"


class RestartPolicy(str, Enum):
    ALWAYS = "Always"
    ON_FAILURE = "OnFailure"
    NEVER = "Never"
    # Exit codes 1-127 are permanent errors, 128-255 are retryable.
    EXIT_CODE = "ExitCode"


@dataclass
class ReplicaStatus:
    """Observed state of one replica type."""

    active: int = 0
    activating: int = 0
    failed: int = 0
    selector: str = ""


@dataclass
class ReplicaSpec:
    """Desired replica count, pod template and restart policy of a replica type."""

    replicas: int | None = None
    template: PodTemplateSpec = field(default_factory=PodTemplateSpec)
    restart_policy: RestartPolicy | None = None


@dataclass
class ClusterCondition:
    type: ClusterConditionType
    status: str
    reason: str = ""
    message: str = ""
    last_update_time: datetime | None = None
    last_transition_time: datetime | None = None


@dataclass
class SchedulingPolicy:
    min_available: int | None = None
    queue: str = ""
    min_resources: dict[str, str] | None = None
    priority_class: str = ""
    schedule_timeout_seconds: int | None = None


@dataclass
class RunPolicy:
    """Runtime policies: cleanup, deadlines, retries, scheduling and suspension."""

    clean_kube_node_policy: CleanKubeNodePolicy | None = None
    ttl_seconds_after_finished: int | None = None
    active_deadline_seconds: int | None = None
    backoff_limit: int | None = None
    scheduling_policy: SchedulingPolicy | None = None
    suspend: bool | None = None


@dataclass
class ClusterSpec:
    """Desired state of a KubeCluster."""

    cluster_type: ClusterType = ""
    cluster_replica_spec: dict[ReplicaType, ReplicaSpec | None] = field(default_factory=dict)
    main_container: str = ""
    run_policy: RunPolicy = field(default_factory=RunPolicy)


@dataclass
class ClusterStatus:
    """Observed state of a KubeCluster."""

    conditions: list[ClusterCondition] = field(default_factory=list)
    replica_statuses: dict[ReplicaType, ReplicaStatus] = field(default_factory=dict)
    start_time: datetime | None = None
    last_reconcile_time: datetime | None = None
    completion_time: datetime | None = None


@dataclass
class KubeCluster:
    """A cluster of pods described by replica types."""

    KIND: ClassVar[str] = KUBE_CLUSTER_KIND
    API_VERSION: ClassVar[str] = str(GROUP_VERSION)

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: ClusterSpec = field(default_factory=ClusterSpec)
    status: ClusterStatus = field(default_factory=ClusterStatus)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    def deep_copy(self) -> KubeCluster:
        """Return an independent copy of this cluster."""
        return copy.deepcopy(self)


@dataclass
class KubeClusterList:
    resource_version: str = ""
    items: list[KubeCluster] = field(default_factory=list)