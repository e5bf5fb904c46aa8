import threading
import time

import pytest

from nymkit.successgroup import Group


def _failing(exc):
    def task(cancel):
        raise exc

    return task


def test_all_failures_are_returned():
    group = Group()
    errors = [ValueError("first"), KeyError("second"), RuntimeError("third")]
    for exc in errors:
        group.go(_failing(exc))
    result = group.wait()
    assert {id(e) for e in result} == {id(e) for e in errors}
    assert len(result) == len(errors)


def test_wait_cancels_after_all_failed():
    group = Group()
    group.go(_failing(ValueError("boom")))
    assert len(group.wait()) == 1
    assert group.cancelled()


def test_one_success_means_no_errors():
    group = Group()
    group.go(_failing(ValueError("boom")))
    group.go(lambda cancel: None)
    assert group.wait() == []
    assert group.cancelled()


def test_success_cancels_other_tasks():
    group = Group()
    started = threading.Event()
    seen = []

    def slow(cancel):
        started.set()
        seen.append(cancel.wait(5))
        raise RuntimeError("gave up")

    group.go(slow)
    assert started.wait(5)
    group.go(lambda cancel: None)
    assert group.wait() == []
    assert seen == [True]


def test_empty_group():
    group = Group()
    assert not group.cancelled()
    assert group.wait() == []
    assert group.cancelled()


def test_limit_bounds_concurrency():
    group = Group()
    group.set_limit(2)
    lock = threading.Lock()
    state = {"active": 0, "max": 0, "done": 0}

    def task(cancel):
        with lock:
            state["active"] += 1
            state["max"] = max(state["max"], state["active"])
        time.sleep(0.02)
        with lock:
            state["active"] -= 1
            state["done"] += 1
        raise ValueError("keep going")

    for _ in range(6):
        group.go(task)
    errors = group.wait()
    assert len(errors) == 6
    assert state["done"] == 6
    assert state["max"] <= 2


def test_set_limit_while_active_raises():
    group = Group()
    group.set_limit(1)
    gate = threading.Event()
    group.go(lambda cancel: gate.wait(5))
    with pytest.raises(RuntimeError):
        group.set_limit(3)
    gate.set()
    assert group.wait() == []


def test_negative_limit_removes_limit():
    group = Group()
    group.set_limit(1)
    group.set_limit(-1)
    barrier = threading.Barrier(3, timeout=5)
    for _ in range(3):
        group.go(lambda cancel: barrier.wait())
    assert group.wait() == []