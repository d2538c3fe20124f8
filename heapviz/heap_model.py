import itertools
import logging
from dataclasses import dataclass
from typing import Any, FrozenSet, Iterable, List, Set, Tuple

from core.errors import RangeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Element:
    value: Any
    key: int


@dataclass(frozen=True)
class HeapSnapshot:
    """
    Read-only copy of the heap state handed to the view. Elements keep their
    keys so the view can animate a value moving between slots.
    """

    elements: Tuple[Element, ...]
    active_length: int
    focused: FrozenSet[int]

    def values(self) -> List[Any]:
        return [el.value for el in self.elements]

    def keys(self) -> List[int]:
        return [el.key for el in self.elements]

    def is_focused(self, index: int) -> bool:
        return index in self.focused

    def is_active(self, index: int) -> bool:
        return 0 <= index < self.active_length

    def without_focus(self) -> "HeapSnapshot":
        return HeapSnapshot(self.elements, self.active_length, frozenset())


class HeapModel:
    """
    Mutable data state behind the replay: element sequence, active length
    and the focused index set.
    """

    def __init__(self):
        self._id_iter = itertools.count()
        self._items: List[Element] = []
        self._active_length = 0
        self._focused: Set[int] = set()

    @property
    def length(self) -> int:
        return len(self._items)

    @property
    def active_length(self) -> int:
        return self._active_length

    @property
    def focused(self) -> FrozenSet[int]:
        return frozenset(self._focused)

    def load(self, values: Iterable[Any]):
        # keys restart from 0 so they match the original positions
        self._id_iter = itertools.count()
        self._items = [Element(value, next(self._id_iter)) for value in values]
        self._active_length = len(self._items)
        self._focused.clear()

    def clear_focus(self):
        self._focused.clear()

    def focus(self, indexes: Iterable[int]):
        for index in indexes:
            if 0 <= index < self.length:
                self._focused.add(index)
            else:
                logger.debug("Ignoring focus on index %s outside %s elements", index, self.length)

    def swap(self, first: int, second: int):
        for index in (first, second):
            if index < 0 or index >= self.length:
                raise RangeError(f"Swap index {index} outside [0, {self.length})")
        items = self._items
        items[first], items[second] = items[second], items[first]

    def change_active_length(self, step: int):
        target = self._active_length + step
        if target < 0 or target > self.length:
            raise RangeError(
                f"Active length {self._active_length} {step:+d} leaves [0, {self.length}]"
            )
        self._active_length = target

    def snapshot(self) -> HeapSnapshot:
        return HeapSnapshot(tuple(self._items), self._active_length, frozenset(self._focused))
