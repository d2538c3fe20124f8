"""
Tests for command-line handling.
"""

import json

import pytest

from heapviz.heap_trace import EXAMPLE_OPERATIONS, EXAMPLE_RECORDS
from main import build_arg_parser, load_log, main, parse_values


def test_parse_values():
    assert parse_values("5, 3，2.5,,") == [5, 3, 2.5]


def test_default_log_is_bundled_example():
    args = build_arg_parser().parse_args([])
    assert list(load_log(args)) == EXAMPLE_OPERATIONS
    assert args.duration_ms == 500


def test_values_are_recorded():
    args = build_arg_parser().parse_args(["--values", "1,3,4,0,2,5"])
    assert list(load_log(args)) == EXAMPLE_OPERATIONS


def test_log_file(tmp_path):
    path = tmp_path / "ops.json"
    path.write_text(json.dumps(EXAMPLE_RECORDS), encoding="utf-8")
    args = build_arg_parser().parse_args(["--log", str(path), "--duration-ms", "250"])
    assert len(load_log(args)) == len(EXAMPLE_RECORDS)
    assert args.duration_ms == 250


def test_log_and_values_are_exclusive():
    with pytest.raises(SystemExit):
        build_arg_parser().parse_args(["--log", "a.json", "--values", "1,2"])


def test_bad_value_is_reported_as_usage_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--values", "1,x"])
    assert excinfo.value.code == 2
    assert "not a number: 'x'" in capsys.readouterr().err


def test_non_positive_duration_is_reported_as_usage_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--duration-ms", "0"])
    assert excinfo.value.code == 2
    assert "must be positive" in capsys.readouterr().err


@pytest.mark.parametrize(
    "content",
    [None, "{not json", json.dumps({"type": "init"}), json.dumps([{"type": "rotate"}])],
)
def test_unreadable_log_is_reported_as_usage_error(tmp_path, capsys, content):
    path = tmp_path / "ops.json"
    if content is not None:
        path.write_text(content, encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main(["--log", str(path)])
    assert excinfo.value.code == 2
    assert "error:" in capsys.readouterr().err
