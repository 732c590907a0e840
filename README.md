# kubecluster

A pure-Python model of the `KubeCluster` custom resource
(`kubecluster.org/v1alpha1`), together with the defaulting, validation and
bookkeeping helpers a controller for it needs. It has no dependencies outside
the standard library.

## Modules

- `kubecluster.meta` — `GroupVersion`, `GroupVersionKind`,
  `GroupVersionResource`, `GroupResource` and the group-version constant
  `GROUP_VERSION`; a minimal object model (`ObjectMeta`, `OwnerReference`,
  `Pod`, `Service`, `ConfigMap`, `PodTemplateSpec`, `PodSpec`, `Container`,
  `ContainerPort`); `resource(name)`, `get_controller_of(obj)` and
  `is_controlled_by(obj, owner)` (matched by UID).
- `kubecluster.api` — the resource types `KubeCluster` (with `deep_copy()`),
  `KubeClusterList`, `ClusterSpec`, `ClusterStatus`, `ReplicaSpec`,
  `ReplicaStatus`, `RunPolicy`, `SchedulingPolicy`, `ClusterCondition`, the
  enums `ClusterConditionType`, `CleanKubeNodePolicy` and `RestartPolicy`, and
  the label-key constants such as `REPLICA_TYPE_LABEL` and `CLUSTER_TYPE_LABEL`.
- `kubecluster.defaults` — `set_defaults_kube_cluster` (main container
  `kubenode`, clean-up policy `All`, one replica where none is given),
  `set_defaults_kube_cluster_list`, `set_default_replicas`,
  `set_default_restart_policy`, `set_default_port`, `has_default_port`,
  `get_default_container_index` and `set_type_name_to_camel_case`.
- `kubecluster.validation` — `validate_cluster` and `validate_cluster_spec`,
  which raise `ValidationError`; `is_dns1035_label` and
  `name_is_dns1035_label`, which return a list of reasons (empty when valid).
- `kubecluster.common` — `gen_general_name`, `clear_generated_fields`,
  `convert_service_list`, `controlled_pod_list`, `get_replica_types` and
  `convert_pod_list_with_filter`.
- `kubecluster.metrics` — `CounterVec`, a thread-safe labelled counter, and
  four counters by namespace and cluster type, incremented through
  `created_clusters_counter_inc`, `deleted_clusters_counter_inc`,
  `failed_clusters_counter_inc` and `restarted_clusters_counter_inc`; they are
  also reachable by metric name in `REGISTRY`.
- `kubecluster.workqueue` — `FakeWorkQueue`, which accepts every work-queue
  call, records it in `calls`, and never holds an item.
- `kubecluster.lister` — an in-memory, thread-safe `Indexer` keyed by
  `namespace/name`, `KubeClusterLister` and `KubeClusterNamespaceLister`
  (label selectors as a mapping or a callable); `get` raises `NotFoundError`.
- `kubecluster.reconciler` — `ControllerExpectations` (expected creations and
  deletions per key, with expiry), `ClusterController` (resolves clusters
  through a lister), the event types `CreateEvent`, `UpdateEvent` and
  `DeleteEvent`, the key builders (`gen_expectation_pods_key`,
  `gen_expectation_services_key`, `gen_expectation_generic_key`,
  `gen_pre_satisfied_key`), `satisfied_expectations`,
  `resolve_controller_ref`, `logger_for_generic_kind`, and the event
  predicates `expectation_create_predicate`, `expectation_delete_predicate`,
  `on_dependent_create_func`, `on_dependent_update_func`,
  `on_dependent_delete_func` and their `_generic` variants.

## Installation

```
pip install .
```

## Example: defaulting and validation

```python
from kubecluster.api import ClusterSpec, KubeCluster, ReplicaSpec
from kubecluster.defaults import set_defaults_kube_cluster
from kubecluster.meta import Container, ObjectMeta, PodSpec, PodTemplateSpec
from kubecluster.validation import ValidationError, validate_cluster

cluster = KubeCluster(
    metadata=ObjectMeta(name="demo", namespace="default"),
    spec=ClusterSpec(
        cluster_type="slurm",
        cluster_replica_spec={
            "worker": ReplicaSpec(
                template=PodTemplateSpec(
                    spec=PodSpec(containers=[Container(name="kubenode", image="centos")])
                )
            )
        },
    ),
)

set_defaults_kube_cluster(cluster)
assert cluster.spec.cluster_replica_spec["worker"].replicas == 1

try:
    validate_cluster(cluster)
except ValidationError as err:
    print("invalid:", err)
```

## Example: tracking expectations

```python
from kubecluster.api import REPLICA_TYPE_LABEL
from kubecluster.meta import ObjectMeta, OwnerReference, Pod
from kubecluster.reconciler import (
    ControllerExpectations,
    CreateEvent,
    expectation_create_predicate,
    gen_expectation_pods_key,
)

exp = ControllerExpectations()
key = gen_expectation_pods_key("default/demo", "worker")
exp.expect_creations(key, 1)

pod = Pod(
    metadata=ObjectMeta(
        namespace="default",
        labels={REPLICA_TYPE_LABEL: "worker"},
        owner_references=[
            OwnerReference(kind="KubeCluster", name="demo", uid="uid-1", controller=True)
        ],
    )
)

assert expectation_create_predicate(exp)(CreateEvent(pod))
assert exp.satisfied_expectations(key)
```

## What this package does not do

It has no command and runs no controller: it does not talk to an API server,
watch resources, create or delete pods and services, or run a reconcile loop.
Objects live only in memory (the `Indexer` is filled by the caller), and the
metrics counters are kept in-process with no endpoint that exports them.

## Running the tests

```
pip install .[test]
pytest
```