import threading

from staff_presence.common.keyed_lock import KeyedLocks


def test_lock_is_dropped_after_release():
    locks = KeyedLocks()

    with locks.hold(("T-001", "2024-05-01")):
        assert len(locks) == 1
    assert len(locks) == 0


def test_lock_survives_while_someone_waits():
    locks = KeyedLocks()
    entered = threading.Event()
    release = threading.Event()
    order = []

    def _first():
        with locks.hold("T-001"):
            entered.set()
            release.wait(timeout=5)
            order.append("first")

    def _second():
        with locks.hold("T-001"):
            order.append("second")

    t1 = threading.Thread(target=_first)
    t1.start()
    assert entered.wait(timeout=5)
    t2 = threading.Thread(target=_second)
    t2.start()
    release.set()
    t1.join(timeout=5)
    t2.join(timeout=5)

    assert order == ["first", "second"]
    assert len(locks) == 0


def test_registry_does_not_grow_with_keys():
    locks = KeyedLocks()
    for day in range(1, 31):
        with locks.hold(("E-010", day)):
            pass
    assert len(locks) == 0
