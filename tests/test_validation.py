import pytest

from kubecluster.api import (
    CLUSTER_DEFAULT_CONTAINER_NAME,
    ClusterSpec,
    KubeCluster,
    ReplicaSpec,
)
from kubecluster.meta import Container, ObjectMeta, PodSpec, PodTemplateSpec
from kubecluster.validation import (
    ValidationError,
    is_dns1035_label,
    name_is_dns1035_label,
    validate_cluster,
    validate_cluster_spec,
)


def _replica(containers):
    return ReplicaSpec(replicas=1, template=PodTemplateSpec(spec=PodSpec(containers=containers)))


def _valid_spec() -> ClusterSpec:
    return ClusterSpec(
        cluster_type="test",
        cluster_replica_spec={
            "test": _replica([Container(name=CLUSTER_DEFAULT_CONTAINER_NAME, image="centos")])
        },
    )


def test_valid_kube_cluster():
    cluster = KubeCluster(metadata=ObjectMeta(name="test"), spec=_valid_spec())
    assert validate_cluster(cluster) is None


def test_name_does_not_meet_dns1035():
    cluster = KubeCluster(metadata=ObjectMeta(name="0-test"), spec=_valid_spec())
    with pytest.raises(ValidationError, match="name is invalid"):
        validate_cluster(cluster)


def test_cluster_type_empty():
    cluster = KubeCluster(metadata=ObjectMeta(name="test"), spec=ClusterSpec(cluster_type=""))
    with pytest.raises(ValidationError, match="cluster type expected"):
        validate_cluster(cluster)


@pytest.mark.parametrize(
    "spec",
    [
        pytest.param(ClusterSpec(cluster_type="test", cluster_replica_spec={}), id="replica specs empty"),
        pytest.param(
            ClusterSpec(cluster_type="test", cluster_replica_spec={"test": _replica([])}),
            id="no containers",
        ),
        pytest.param(
            ClusterSpec(
                cluster_type="test",
                cluster_replica_spec={"test": _replica([Container(image="centos")])},
            ),
            id="main container name not present",
        ),
        pytest.param(
            ClusterSpec(
                cluster_type="test",
                main_container="testmain",
                cluster_replica_spec={
                    "test": _replica([Container(name=CLUSTER_DEFAULT_CONTAINER_NAME, image="centos")])
                },
            ),
            id="main container name not consistent",
        ),
        pytest.param(
            ClusterSpec(
                cluster_type="test",
                cluster_replica_spec={"test": _replica([Container(name=CLUSTER_DEFAULT_CONTAINER_NAME)])},
            ),
            id="image empty",
        ),
    ],
)
def test_invalid_cluster_specs(spec):
    with pytest.raises(ValidationError):
        validate_cluster_spec(spec)


def test_none_replica_spec_rejected():
    spec = ClusterSpec(cluster_type="test", cluster_replica_spec={"test": None})
    with pytest.raises(ValidationError, match="containers definition expected"):
        validate_cluster_spec(spec)


def test_invalid_replica_type_name():
    spec = ClusterSpec(
        cluster_type="test",
        cluster_replica_spec={
            "0bad": _replica([Container(name=CLUSTER_DEFAULT_CONTAINER_NAME, image="centos")])
        },
    )
    with pytest.raises(ValidationError, match="DNS-1035"):
        validate_cluster_spec(spec)


def test_is_dns1035_label():
    assert is_dns1035_label("test") == []
    assert is_dns1035_label("0-test")
    assert is_dns1035_label("a" * 64)
    assert is_dns1035_label("a" * 63) == []


def test_name_is_dns1035_label_prefix_allows_trailing_dash():
    assert name_is_dns1035_label("cluster-test-", True) == []
    assert name_is_dns1035_label("cluster-test-", False)