from datetime import timedelta

from kubecluster.workqueue import FakeWorkQueue


def test_added_items_are_not_kept():
    queue = FakeWorkQueue()
    queue.add("ns/a")
    queue.add_rate_limited("ns/b")
    queue.add_after("ns/c", timedelta(seconds=5))
    assert len(queue) == 0


def test_get_returns_nothing_and_not_shutdown():
    queue = FakeWorkQueue()
    queue.add("ns/a")
    assert queue.get() == (None, False)


def test_reports_shutting_down():
    queue = FakeWorkQueue()
    assert queue.shutting_down() is True
    queue.shut_down()
    queue.shut_down_with_drain()
    assert queue.shutting_down() is True


def test_num_requeues_is_zero():
    queue = FakeWorkQueue()
    queue.add_rate_limited("ns/a")
    queue.forget("ns/a")
    queue.done("ns/a")
    assert queue.num_requeues("ns/a") == 0