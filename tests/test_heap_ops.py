"""
Tests for operation parsing and the operation log container.
"""

import json

import pytest

from core.errors import EmptyLogError, OperationFormatError
from heapviz.heap_ops import (
    ChangeActiveLength,
    Focus,
    Init,
    OperationLog,
    Swap,
    load_operations,
    parse_operation,
)
from heapviz.heap_trace import EXAMPLE_RECORDS


def _to_record(op):
    if isinstance(op, Init):
        return {"type": "init", "data": list(op.values)}
    if isinstance(op, ChangeActiveLength):
        return {"type": "change-active-length", "step": op.step}
    kind = "focus" if isinstance(op, Focus) else "swap"
    return {"type": kind, "first_index": op.a, "second_index": op.b}


def test_parse_each_operation_type():
    assert parse_operation({"type": "init", "data": [3, 1]}) == Init([3, 1])
    assert parse_operation({"type": "focus", "first_index": 1, "second_index": 2}) == Focus(1, 2)
    assert parse_operation({"type": "swap", "first_index": 0, "second_index": 4}) == Swap(0, 4)
    assert parse_operation({"type": "change-active-length", "step": -1}) == ChangeActiveLength(-1)


def test_init_values_are_frozen():
    values = [5, 6]
    op = Init(values)
    values.append(7)
    assert op.values == (5, 6)
    assert op == Init((5, 6))


def test_unknown_type_is_rejected():
    with pytest.raises(OperationFormatError):
        parse_operation({"type": "rotate", "first_index": 0})


def test_missing_field_is_rejected():
    with pytest.raises(ValueError):
        parse_operation({"type": "swap", "first_index": 0})


def test_record_must_be_mapping():
    with pytest.raises(OperationFormatError):
        parse_operation(["swap", 0, 1])


def test_records_survive_a_round_trip():
    log = OperationLog.from_records(EXAMPLE_RECORDS)
    assert [_to_record(op) for op in log] == EXAMPLE_RECORDS


def test_empty_log_raises():
    with pytest.raises(EmptyLogError):
        OperationLog([])


def test_log_rejects_non_operations():
    with pytest.raises(TypeError):
        OperationLog([Init([1]), {"type": "swap"}])


def test_log_is_read_only_sequence():
    log = OperationLog([Init([1, 2]), Swap(0, 1)])
    assert len(log) == 2
    assert log.last_index == 1
    assert log[1] == Swap(0, 1)
    assert list(log) == [Init([1, 2]), Swap(0, 1)]
    with pytest.raises(TypeError):
        log[0] = Swap(1, 0)


def test_labels_follow_operation_descriptions():
    log = OperationLog(
        [Init([1, 3]), Focus(0, 1), Swap(0, 1), ChangeActiveLength(-1), ChangeActiveLength(2)]
    )
    assert log.labels() == [
        "0. init [1, 3]",
        "1. select nodes 0, 1",
        "2. swap nodes 0 <-> 1",
        "3. mark sorted",
        "4. grow active length by 2",
    ]


def test_load_operations_from_json(tmp_path):
    path = tmp_path / "trace.json"
    path.write_text(json.dumps(EXAMPLE_RECORDS[:4]), encoding="utf-8")

    log = load_operations(path)
    assert len(log) == 4
    assert log[3] == Swap(2, 5)


def test_load_operations_requires_a_list(tmp_path):
    path = tmp_path / "trace.json"
    path.write_text(json.dumps({"type": "init", "data": []}), encoding="utf-8")

    with pytest.raises(OperationFormatError):
        load_operations(path)
