from __future__ import annotations

import copy
import random

import pytest

from sortbench.runtime import sorters
from sortbench.runtime.sorters import SortResult, sort_concurrent, sort_sequential


SORTERS = [sort_sequential, sort_concurrent]


@pytest.mark.parametrize("sorter", SORTERS)
def test_example_batch(sorter) -> None:
    res = sorter([[5, 3, 1], [2, 2, 2], []])
    assert isinstance(res, SortResult)
    assert res.sorted_arrays == [[1, 3, 5], [2, 2, 2], []]
    assert isinstance(res.time_ns, int)
    assert res.time_ns >= 0


@pytest.mark.parametrize("sorter", SORTERS)
def test_empty_batch(sorter) -> None:
    res = sorter([])
    assert res.sorted_arrays == []
    assert res.time_ns >= 0


@pytest.mark.parametrize("sorter", SORTERS)
def test_duplicates_and_negatives(sorter) -> None:
    assert sorter([[3, 1, 2]]).sorted_arrays == [[1, 2, 3]]
    assert sorter([[0, -5, 3, -5, 10, 0]]).sorted_arrays == [[-5, -5, 0, 0, 3, 10]]


@pytest.mark.parametrize("sorter", SORTERS)
def test_already_sorted_is_unchanged(sorter) -> None:
    batch = [[-3, -1, 0, 0, 7], [1], []]
    assert sorter(batch).sorted_arrays == batch


@pytest.mark.parametrize("sorter", SORTERS)
def test_input_is_not_mutated(sorter) -> None:
    batch = [[9, 8, 7], [3, -1, 2]]
    before = copy.deepcopy(batch)
    res = sorter(batch)
    assert batch == before
    assert res.sorted_arrays[0] is not batch[0]


def test_sequential_and_concurrent_agree_on_random_batches() -> None:
    rng = random.Random(1234)
    for _ in range(5):
        batch = [
            [rng.randint(-1000, 1000) for _ in range(rng.randint(0, 200))]
            for _ in range(rng.randint(0, 40))
        ]
        seq = sort_sequential(batch)
        conc = sort_concurrent(batch)
        assert seq.sorted_arrays == conc.sorted_arrays
        assert seq.sorted_arrays == [sorted(a) for a in batch]


def test_concurrent_output_follows_input_order() -> None:
    # Longer arrays first so that later (shorter) tasks tend to finish earlier.
    batch = [list(range(50_000 - i * 10_000, 0, -1)) for i in range(5)] + [[2, 1]]
    res = sort_concurrent(batch)
    assert len(res.sorted_arrays) == len(batch)
    for src, out in zip(batch, res.sorted_arrays):
        assert out == sorted(src)


def test_accepts_tuples() -> None:
    res = sort_concurrent(((3, 2, 1), (5, 4)))
    assert res.sorted_arrays == [[1, 2, 3], [4, 5]]


def test_concurrent_starts_and_joins_one_thread_per_array(monkeypatch: pytest.MonkeyPatch) -> None:
    events: list[str] = []
    real_thread = sorters.threading.Thread
    real_clock = sorters.time.perf_counter_ns

    class CountingThread(real_thread):
        def start(self) -> None:
            events.append("start")
            super().start()

        def join(self, timeout: float | None = None) -> None:
            super().join(timeout)
            events.append("join")

    def clock() -> int:
        events.append("clock")
        return real_clock()

    monkeypatch.setattr(sorters.threading, "Thread", CountingThread)
    monkeypatch.setattr(sorters.time, "perf_counter_ns", clock)

    batch = [[3, 2, 1], [9, 8], [], [5]]
    res = sorters.sort_concurrent(batch)

    assert res.sorted_arrays == [[1, 2, 3], [8, 9], [], [5]]
    assert events.count("start") == len(batch)
    assert events.count("join") == len(batch)
    # Every join lands between the two clock reads.
    assert events[0] == "clock"
    assert events[-1] == "clock"
    assert events.count("clock") == 2


def test_sequential_spawns_no_threads(monkeypatch: pytest.MonkeyPatch) -> None:
    def _no_threads(*args, **kwargs):
        raise AssertionError("sequential sort must not start threads")

    monkeypatch.setattr(sorters.threading, "Thread", _no_threads)
    assert sorters.sort_sequential([[2, 1], [4, 3]]).sorted_arrays == [[1, 2], [3, 4]]
