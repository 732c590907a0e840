import pytest

from kubecluster.api import (
    KUBE_CLUSTER_KIND,
    CleanKubeNodePolicy,
    ClusterCondition,
    ClusterConditionType,
    ClusterSpec,
    KubeCluster,
    KubeClusterList,
    ReplicaSpec,
    ReplicaStatus,
    RestartPolicy,
)
from kubecluster.meta import Container, ObjectMeta, PodSpec, PodTemplateSpec


def _cluster():
    template = PodTemplateSpec(spec=PodSpec(containers=[Container(name="kubenode", image="centos")]))
    return KubeCluster(
        metadata=ObjectMeta(name="test", namespace="default"),
        spec=ClusterSpec(
            cluster_type="test",
            cluster_replica_spec={"worker": ReplicaSpec(replicas=2, template=template)},
        ),
    )


def test_enums_parse_source_values():
    assert RestartPolicy("ExitCode") is RestartPolicy.EXIT_CODE
    assert CleanKubeNodePolicy("All") is CleanKubeNodePolicy.ALL
    assert ClusterConditionType("Suspended") is ClusterConditionType.SUSPENDED


def test_enum_rejects_unknown_value():
    with pytest.raises(ValueError):
        RestartPolicy("Sometimes")


def test_deep_copy_is_independent():
    original = _cluster()
    clone = original.deep_copy()
    assert clone == original
    clone.spec.cluster_replica_spec["worker"].replicas = 5
    clone.spec.cluster_replica_spec["worker"].template.spec.containers[0].image = "other"
    clone.status.replica_statuses["worker"] = ReplicaStatus(active=1)
    assert original.spec.cluster_replica_spec["worker"].replicas == 2
    assert original.spec.cluster_replica_spec["worker"].template.spec.containers[0].image == "centos"
    assert original.status.replica_statuses == {}


def test_deep_copy_copies_conditions():
    original = _cluster()
    original.status.conditions.append(
        ClusterCondition(type=ClusterConditionType.CREATED, status="True")
    )
    clone = original.deep_copy()
    clone.status.conditions[0].message = "changed"
    assert original.status.conditions[0].message == ""


def test_defaults_are_unset():
    cluster = KubeCluster()
    assert cluster.spec.main_container == ""
    assert cluster.spec.run_policy.clean_kube_node_policy is None
    assert cluster.status.start_time is None
    assert ReplicaSpec().replicas is None
    assert ReplicaSpec().restart_policy is None


def test_name_and_namespace_follow_metadata():
    cluster = _cluster()
    assert (cluster.name, cluster.namespace) == ("test", "default")
    assert cluster.KIND == KUBE_CLUSTER_KIND


def test_list_items_not_shared():
    first, second = KubeClusterList(), KubeClusterList()
    first.items.append(_cluster())
    assert second.items == []
    assert len(first.items) == 1