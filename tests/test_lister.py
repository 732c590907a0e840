import pytest

from kubecluster.api import KubeCluster
from kubecluster.lister import Indexer, KubeClusterLister, NotFoundError
from kubecluster.meta import ObjectMeta, resource


def make(name, namespace, labels=None):
    return KubeCluster(metadata=ObjectMeta(name=name, namespace=namespace, labels=labels or {}))


@pytest.fixture
def indexer():
    idx = Indexer()
    idx.add(make("a", "ns1", {"app": "x"}))
    idx.add(make("b", "ns1", {"app": "y"}))
    idx.add(make("c", "ns2", {"app": "x"}))
    return idx


def test_indexer_get_by_key(indexer):
    obj = indexer.get_by_key("ns1/a")
    assert obj.metadata.name == "a"
    assert indexer.get_by_key("ns1/missing") is None


def test_indexer_add_replaces_and_delete_removes(indexer):
    indexer.add(make("a", "ns1", {"app": "z"}))
    assert len(indexer.list()) == 3
    assert indexer.get_by_key("ns1/a").metadata.labels == {"app": "z"}
    indexer.delete(make("a", "ns1"))
    assert indexer.get_by_key("ns1/a") is None
    indexer.delete(make("a", "ns1"))
    assert len(indexer.list()) == 2


def test_indexer_by_namespace(indexer):
    names = sorted(obj.metadata.name for obj in indexer.by_namespace("ns1"))
    assert names == ["a", "b"]


def test_lister_list_all_and_by_selector(indexer):
    lister = KubeClusterLister(indexer)
    assert len(lister.list()) == 3
    assert sorted(o.metadata.name for o in lister.list({"app": "x"})) == ["a", "c"]
    assert sorted(o.metadata.name for o in lister.list(lambda labels: labels.get("app") == "y")) == ["b"]


def test_namespace_lister_list(indexer):
    ns_lister = KubeClusterLister(indexer).kube_clusters("ns1")
    assert sorted(o.metadata.name for o in ns_lister.list()) == ["a", "b"]
    assert [o.metadata.name for o in ns_lister.list({"app": "x"})] == ["a"]


def test_namespace_all_lists_everything(indexer):
    assert len(KubeClusterLister(indexer).kube_clusters("").list()) == 3


def test_namespace_lister_get(indexer):
    lister = KubeClusterLister(indexer)
    assert lister.kube_clusters("ns2").get("c").metadata.namespace == "ns2"


def test_namespace_lister_get_missing_raises(indexer):
    lister = KubeClusterLister(indexer)
    with pytest.raises(NotFoundError) as info:
        lister.kube_clusters("ns2").get("a")
    assert info.value.name == "a"
    assert info.value.group_resource == resource("kubecluster")
    assert '"a" not found' in str(info.value)
    assert isinstance(info.value, LookupError)