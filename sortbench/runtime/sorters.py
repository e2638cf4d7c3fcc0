from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class SortResult:
    sorted_arrays: list[list[int]]
    time_ns: int


def sort_sequential(to_sort: Sequence[Sequence[int]]) -> SortResult:
    """Sort each sub-array in turn and time the whole pass."""
    start = time.perf_counter_ns()
    sorted_arrays = [sorted(arr) for arr in to_sort]
    elapsed = time.perf_counter_ns() - start
    return SortResult(sorted_arrays=sorted_arrays, time_ns=elapsed)


def sort_concurrent(to_sort: Sequence[Sequence[int]]) -> SortResult:
    """Sort each sub-array on its own thread, join all of them, then stop the clock.

    Every thread writes a distinct slot of a pre-sized output list, so results
    line up with the input by index regardless of completion order.

    One thread is started per sub-array with no upper bound.
    """
    start = time.perf_counter_ns()
    sorted_arrays: list[list[int]] = [[] for _ in range(len(to_sort))]

    def _work(index: int, arr: Sequence[int]) -> None:
        sorted_arrays[index] = sorted(arr)

    threads = [
        threading.Thread(target=_work, args=(i, arr), name=f"sortbench-sort-{i}", daemon=True)
        for i, arr in enumerate(to_sort)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    elapsed = time.perf_counter_ns() - start
    return SortResult(sorted_arrays=sorted_arrays, time_ns=elapsed)


SORTERS = {
    "single": sort_sequential,
    "concurrent": sort_concurrent,
}
