import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Mapping, Tuple, Union

from core.errors import EmptyLogError, OperationFormatError


@dataclass(frozen=True)
class Init:
    """Replace the whole sequence; element keys are re-derived from positions."""

    values: Tuple[Any, ...]

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))

    def describe(self) -> str:
        return f"init [{', '.join(str(v) for v in self.values)}]"


@dataclass(frozen=True)
class Focus:
    a: int
    b: int

    def describe(self) -> str:
        return f"select nodes {self.a}, {self.b}"


@dataclass(frozen=True)
class Swap:
    a: int
    b: int

    def describe(self) -> str:
        return f"swap nodes {self.a} <-> {self.b}"


@dataclass(frozen=True)
class ChangeActiveLength:
    step: int

    def describe(self) -> str:
        return "mark sorted" if self.step < 0 else f"grow active length by {self.step}"


Operation = Union[Init, Focus, Swap, ChangeActiveLength]
OPERATION_TYPES = (Init, Focus, Swap, ChangeActiveLength)


def parse_operation(record: Mapping[str, Any]) -> Operation:
    """
    Build an operation from its dict form, e.g.
    ``{"type": "swap", "first_index": 2, "second_index": 5}``.
    """
    if not isinstance(record, Mapping):
        raise OperationFormatError(f"Operation record must be a mapping, got {record!r}")

    kind = record.get("type")
    try:
        if kind == "init":
            return Init(record["data"])
        if kind == "focus":
            return Focus(int(record["first_index"]), int(record["second_index"]))
        if kind == "swap":
            return Swap(int(record["first_index"]), int(record["second_index"]))
        if kind == "change-active-length":
            return ChangeActiveLength(int(record["step"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise OperationFormatError(f"Malformed {kind!r} operation: {record!r}") from exc
    raise OperationFormatError(f"Unknown operation type: {kind!r}")


class OperationLog:
    """
    Immutable, ordered list of operations. Position 0 is always valid.
    """

    def __init__(self, operations: Iterable[Operation]):
        ops = tuple(operations)
        if not ops:
            raise EmptyLogError("Operation log needs at least one operation")
        for idx, op in enumerate(ops):
            if not isinstance(op, OPERATION_TYPES):
                raise TypeError(f"Entry {idx} is not an operation: {op!r}")
        self._ops = ops

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "OperationLog":
        return cls(parse_operation(record) for record in records)

    @property
    def last_index(self) -> int:
        return len(self._ops) - 1

    def __len__(self) -> int:
        return len(self._ops)

    def __getitem__(self, index: int) -> Operation:
        return self._ops[index]

    def __iter__(self) -> Iterator[Operation]:
        return iter(self._ops)

    def labels(self) -> List[str]:
        return [f"{idx}. {op.describe()}" for idx, op in enumerate(self._ops)]


def load_operations(path) -> OperationLog:
    with open(Path(path), "r", encoding="utf-8") as handle:
        records = json.load(handle)
    if not isinstance(records, list):
        raise OperationFormatError("Log file must contain a JSON list of operations")
    return OperationLog.from_records(records)
