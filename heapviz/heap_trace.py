from typing import Any, List, Sequence

from heapviz.heap_ops import (
    ChangeActiveLength,
    Focus,
    Init,
    Operation,
    OperationLog,
    Swap,
    parse_operation,
)


class HeapSortRecorder:
    """
    Runs an in-place max-heap sort and records every comparison and swap as
    an operation, so the run can be replayed step by step.
    """

    def __init__(self, values: Sequence[Any]):
        self.data = list(values)
        self.operations: List[Operation] = [Init(self.data)]

    def run(self) -> List[Operation]:
        size = len(self.data)
        for start in range(size // 2 - 1, -1, -1):
            self._sift_down(start, size)

        for end in range(size - 1, 0, -1):
            self._swap(0, end)
            # the last remaining element is sorted with the one just moved
            self.operations.append(ChangeActiveLength(-2 if end == 1 else -1))
            self._sift_down(0, end)
        return self.operations

    def _sift_down(self, index: int, size: int):
        data = self.data
        while True:
            left, right = 2 * index + 1, 2 * index + 2
            if left >= size:
                return
            # right may sit past the heap; the focus still names it
            self.operations.append(Focus(left, right))
            larger = left
            if right < size and data[right] > data[left]:
                larger = right
            self.operations.append(Focus(index, larger))
            if data[larger] <= data[index]:
                return
            self._swap(index, larger)
            index = larger

    def _swap(self, first: int, second: int):
        data = self.data
        data[first], data[second] = data[second], data[first]
        self.operations.append(Swap(first, second))


def record_heap_sort(values: Sequence[Any]) -> List[Operation]:
    return HeapSortRecorder(values).run()


EXAMPLE_RECORDS = [
    {"type": "init", "data": [1, 3, 4, 0, 2, 5]},
    {"type": "focus", "first_index": 5, "second_index": 6},
    {"type": "focus", "first_index": 2, "second_index": 5},
    {"type": "swap", "first_index": 2, "second_index": 5},
    {"type": "focus", "first_index": 3, "second_index": 4},
    {"type": "focus", "first_index": 1, "second_index": 4},
    {"type": "focus", "first_index": 1, "second_index": 2},
    {"type": "focus", "first_index": 0, "second_index": 2},
    {"type": "swap", "first_index": 0, "second_index": 2},
    {"type": "focus", "first_index": 5, "second_index": 6},
    {"type": "focus", "first_index": 2, "second_index": 5},
    {"type": "swap", "first_index": 2, "second_index": 5},
    {"type": "swap", "first_index": 0, "second_index": 5},
    {"type": "change-active-length", "step": -1},
    {"type": "focus", "first_index": 1, "second_index": 2},
    {"type": "focus", "first_index": 0, "second_index": 2},
    {"type": "swap", "first_index": 0, "second_index": 2},
    {"type": "swap", "first_index": 0, "second_index": 4},
    {"type": "change-active-length", "step": -1},
    {"type": "focus", "first_index": 1, "second_index": 2},
    {"type": "focus", "first_index": 0, "second_index": 1},
    {"type": "swap", "first_index": 0, "second_index": 1},
    {"type": "focus", "first_index": 3, "second_index": 4},
    {"type": "focus", "first_index": 1, "second_index": 3},
    {"type": "swap", "first_index": 0, "second_index": 3},
    {"type": "change-active-length", "step": -1},
    {"type": "focus", "first_index": 1, "second_index": 2},
    {"type": "focus", "first_index": 0, "second_index": 1},
    {"type": "swap", "first_index": 0, "second_index": 1},
    {"type": "swap", "first_index": 0, "second_index": 2},
    {"type": "change-active-length", "step": -1},
    {"type": "focus", "first_index": 1, "second_index": 2},
    {"type": "focus", "first_index": 0, "second_index": 1},
    {"type": "swap", "first_index": 0, "second_index": 1},
    {"type": "change-active-length", "step": -2},
]

EXAMPLE_OPERATIONS = [parse_operation(record) for record in EXAMPLE_RECORDS]


def example_log() -> OperationLog:
    return OperationLog(EXAMPLE_OPERATIONS)
