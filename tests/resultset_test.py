from __future__ import annotations

import random

import pytest

from newest_of.resultset import BoundedResultSet
from newest_of.scanmodel import Candidate
from newest_of.scanmodel import Entry
from newest_of.scanmodel import Order


def _candidate(name: str, mtime: int) -> Candidate:
    return Candidate(Entry(name, False), mtime)


def _mtimes(results: BoundedResultSet) -> list[int]:
    return [candidate.mtime_ns for candidate in results.entries()]


def test_negative_capacity_raises() -> None:
    with pytest.raises(ValueError):
        BoundedResultSet(-1)


def test_zero_capacity_keeps_nothing() -> None:
    results = BoundedResultSet(0)

    accepted = [results.offer(_candidate(f"f{i}", i)) for i in range(5)]

    assert accepted == [False] * 5
    assert results.entries() == []
    assert results.worst is None


def test_newest_keeps_largest_least_interesting_first() -> None:
    results = BoundedResultSet(3, Order.NEWEST)

    for mtime in [5, 1, 9, 3, 7, 2]:
        results.offer(_candidate(f"f{mtime}", mtime))

    assert _mtimes(results) == [5, 7, 9]
    assert results.worst == _candidate("f5", 5)


def test_oldest_keeps_smallest_least_interesting_first() -> None:
    results = BoundedResultSet(3, Order.OLDEST)

    for mtime in [5, 1, 9, 3, 7, 2]:
        results.offer(_candidate(f"f{mtime}", mtime))

    assert _mtimes(results) == [3, 2, 1]


def test_offer_below_capacity_never_evicts() -> None:
    results = BoundedResultSet(4)

    results.offer(_candidate("a", 3))
    results.offer(_candidate("b", 1))

    assert len(results) == 2
    assert results.is_full is False
    assert _mtimes(results) == [1, 3]


def test_rejection_when_full_does_not_mutate() -> None:
    results = BoundedResultSet(2, Order.NEWEST)
    results.offer(_candidate("a", 10))
    results.offer(_candidate("b", 20))
    before = results.entries()

    assert results.offer(_candidate("older", 5)) is False
    assert results.offer(_candidate("equal", 10)) is False
    assert results.entries() == before


def test_equal_timestamps_first_offered_wins() -> None:
    results = BoundedResultSet(2, Order.NEWEST)

    results.offer(_candidate("first", 5))
    results.offer(_candidate("second", 5))
    results.offer(_candidate("newer", 6))

    assert [c.path for c in results.entries()] == ["first", "newer"]


def test_equal_timestamps_keep_offer_rank() -> None:
    results = BoundedResultSet(3, Order.OLDEST)

    for name in ["a", "b", "c"]:
        results.offer(_candidate(name, 1))

    # Earlier offers rank as more interesting, so they sit at the end
    assert [c.path for c in results.entries()] == ["c", "b", "a"]


@pytest.mark.parametrize("order", [Order.NEWEST, Order.OLDEST])
@pytest.mark.parametrize("capacity", [0, 1, 3, 10, 50])
def test_matches_full_sort(order: Order, capacity: int) -> None:
    rng = random.Random(capacity)
    stream = [_candidate(f"f{i}", rng.randint(0, 20)) for i in range(200)]
    results = BoundedResultSet(capacity, order)

    for candidate in stream:
        results.offer(candidate)
        kept = _mtimes(results)
        keys = [order.interest_key(mtime) for mtime in kept]
        assert len(kept) <= capacity
        assert keys == sorted(keys)

    # Most interesting first, ties by offer position
    ranked = sorted(
        enumerate(stream),
        key=lambda item: (-order.interest_key(item[1].mtime_ns), item[0]),
    )
    expected = [candidate for _, candidate in ranked[:capacity]][::-1]

    assert results.entries() == expected


def test_merge_matches_single_set() -> None:
    rng = random.Random(42)
    stream = [_candidate(f"f{i}", rng.randint(0, 1000)) for i in range(100)]
    single = BoundedResultSet(5)
    left = BoundedResultSet(5)
    right = BoundedResultSet(5)

    for candidate in stream:
        single.offer(candidate)
    for candidate in stream[:50]:
        left.offer(candidate)
    for candidate in stream[50:]:
        right.offer(candidate)
    left.merge(right)

    assert _mtimes(left) == _mtimes(single)


def test_merge_rejects_mixed_orders() -> None:
    with pytest.raises(ValueError):
        BoundedResultSet(1, Order.NEWEST).merge(BoundedResultSet(1, Order.OLDEST))
