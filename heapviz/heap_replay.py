"""
Replay engine: walks an operation log forward or backward so that the heap
state always equals the forward replay of ``log[0..position]``.
"""

import logging
from typing import FrozenSet, Iterable, Optional, Union

from core.errors import InvariantViolation, ReplayError
from heapviz.heap_model import HeapModel, HeapSnapshot
from heapviz.heap_ops import (
    ChangeActiveLength,
    Focus,
    Init,
    Operation,
    OperationLog,
    Swap,
)

logger = logging.getLogger(__name__)

FORWARD = "forward"
BACKWARD = "backward"


class ReplayEngine:
    """
    Owns the heap state for one operation log.

    Usage:
        engine = ReplayEngine(log)
        engine.seek(3)
        engine.snapshot().values()
    """

    def __init__(self, log: Union[OperationLog, Iterable[Operation]]):
        self._log = log if isinstance(log, OperationLog) else OperationLog(log)
        self._model = HeapModel()
        self._position = 0
        self.last_applied: Optional[Operation] = None
        self._apply(self._log[0], FORWARD)

    # ---------- Observables ----------

    @property
    def log(self) -> OperationLog:
        return self._log

    @property
    def position(self) -> int:
        return self._position

    @property
    def last_index(self) -> int:
        return self._log.last_index

    def operation_at(self, index: int) -> Operation:
        return self._log[index]

    def snapshot(self) -> HeapSnapshot:
        return self._model.snapshot()

    current_snapshot = snapshot

    def focused(self) -> FrozenSet[int]:
        return self._model.focused

    # ---------- Navigation ----------

    def clamp(self, target: int) -> int:
        return max(0, min(int(target), self.last_index))

    def seek(self, target: int) -> int:
        """
        Move to ``target`` (clamped into the log) and return how many
        operations were applied.

        The position is advanced after each applied operation, so an error
        leaves the engine consistent at the last operation that succeeded.
        """
        target = self.clamp(target)
        origin = self._position
        if target == origin:
            return 0

        applied = 0
        try:
            if target > origin:
                for index in range(origin + 1, target + 1):
                    self._apply(self._log[index], FORWARD)
                    self._position = index
                    applied += 1
            else:
                for index in range(origin, target, -1):
                    self._apply(self._log[index], BACKWARD)
                    self._position = index - 1
                    applied += 1
                landed = self._log[target]
                if isinstance(landed, Focus):
                    # landing on a focus step shows that focus
                    self._apply(landed, FORWARD)
        except ReplayError:
            logger.error(
                "Seek %s -> %s stopped at position %s", origin, target, self._position
            )
            raise

        logger.debug("Seek %s -> %s applied %s operation(s)", origin, target, applied)
        return applied

    def step_forward(self) -> int:
        return self.seek(self._position + 1)

    def step_backward(self) -> int:
        return self.seek(self._position - 1)

    def reset(self) -> int:
        return self.seek(0)

    # ---------- Operation semantics ----------

    def _apply(self, op: Operation, direction: str):
        model = self._model
        if isinstance(op, Init):
            if direction == BACKWARD:
                raise InvariantViolation("Cannot replay backward across an Init operation")
            model.load(op.values)
        elif isinstance(op, Focus):
            model.clear_focus()
            if direction == FORWARD:
                model.focus((op.a, op.b))
        elif isinstance(op, Swap):
            model.swap(op.a, op.b)
            model.clear_focus()
            if direction == FORWARD:
                model.focus((op.a, op.b))
        elif isinstance(op, ChangeActiveLength):
            step = op.step if direction == FORWARD else -op.step
            model.change_active_length(step)
            model.clear_focus()
        else:
            raise TypeError(f"Unsupported operation: {op!r}")
        self.last_applied = op


def initialize(log: Iterable[Operation]) -> ReplayEngine:
    return ReplayEngine(log)


def replay_to(log: Iterable[Operation], position: int) -> HeapSnapshot:
    """Snapshot produced by a fresh forward replay of ``log[0..position]``."""
    engine = ReplayEngine(log)
    engine.seek(position)
    return engine.snapshot()
