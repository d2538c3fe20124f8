"""
Tests for the heap-sort trace recorder.
"""

import random

from heapviz.heap_ops import ChangeActiveLength, Focus, Init
from heapviz.heap_replay import replay_to
from heapviz.heap_trace import EXAMPLE_OPERATIONS, example_log, record_heap_sort


def test_recorder_reproduces_bundled_example():
    assert record_heap_sort([1, 3, 4, 0, 2, 5]) == EXAMPLE_OPERATIONS


def test_recorded_trace_replays_to_sorted_values():
    rng = random.Random(7)
    for size in range(2, 12):
        values = [rng.randint(0, 50) for _ in range(size)]
        ops = record_heap_sort(values)
        final = replay_to(ops, len(ops) - 1)
        assert final.values() == sorted(values)
        assert final.active_length == 0


def test_recorder_does_not_touch_input():
    values = [3, 1, 2]
    record_heap_sort(values)
    assert values == [3, 1, 2]


def test_trivial_inputs():
    assert record_heap_sort([]) == [Init([])]
    assert record_heap_sort([9]) == [Init([9])]


def test_trace_shape():
    ops = record_heap_sort([2, 1])
    assert ops[0] == Init([2, 1])
    assert ops[1] == Focus(1, 2)
    assert ops[-1] == ChangeActiveLength(-2)


def test_example_log_wraps_operations():
    log = example_log()
    assert len(log) == len(EXAMPLE_OPERATIONS)
    assert log[0] == Init([1, 3, 4, 0, 2, 5])
