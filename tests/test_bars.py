import random

import pytest

from bars import BarArray, Role


def test_new_array_is_ascending_and_idle():
    bars = BarArray(7)
    assert bars.values() == [1, 2, 3, 4, 5, 6, 7]
    assert bars.roles() == [Role.IDLE] * 7


def test_rejects_empty_array():
    with pytest.raises(ValueError):
        BarArray(0)


@pytest.mark.parametrize("n", [1, 2, 5, 100])
def test_reinitialize_restores_order_and_roles(n, rng):
    bars = BarArray(n, rng=rng)
    bars.shuffle()
    bars.mark_all_sorted()
    bars.reinitialize()
    assert bars.values() == list(range(1, n + 1))
    assert all(role is Role.IDLE for role in bars.roles())


def test_shuffle_keeps_permutation_and_clears_roles(rng):
    bars = BarArray(50, rng=rng)
    bars.compare_mark(0, 1)
    bars.mark_all_sorted()
    bars.shuffle()
    assert bars.is_permutation()
    assert bars.roles() == [Role.IDLE] * 50


def test_shuffles_differ_across_calls(rng):
    bars = BarArray(30, rng=rng)
    seen = set()
    for _ in range(10):
        bars.shuffle()
        seen.add(tuple(bars.values()))
    assert len(seen) > 1


def test_swap_exchanges_values_only():
    bars = BarArray(4)
    bars.compare_mark(0)
    bars.swap(0, 3)
    assert bars.values() == [4, 2, 3, 1]
    assert bars[0].role is Role.COMPARE
    assert bars[3].role is Role.IDLE


def test_clear_marks_keeps_sorted():
    bars = BarArray(3)
    bars.compare_mark(0)
    bars.swap_mark(1)
    bars[2].role = Role.SORTED
    bars.clear_marks()
    assert bars.roles() == [Role.IDLE, Role.IDLE, Role.SORTED]


def test_is_permutation_detects_duplicates():
    bars = BarArray(4)
    bars.write(0, 2)
    assert not bars.is_permutation()


def test_observer_receives_events_and_failures_are_contained():
    events = []
    bars = BarArray(3, observer=lambda e, p: events.append((e, p)))
    bars.swap(0, 1)
    bars.write(2, 3)
    assert events == [("swap", {"i": 0, "j": 1}), ("write", {"index": 2, "value": 3})]

    def broken(event, payload):
        raise RuntimeError("boom")

    bars.set_observer(broken)
    bars.swap(0, 1)
    assert bars.values() == [1, 2, 3]


def test_default_rng_is_module_random():
    random.seed(7)
    a = BarArray(20)
    a.shuffle()
    random.seed(7)
    b = BarArray(20)
    b.shuffle()
    assert a.values() == b.values()
