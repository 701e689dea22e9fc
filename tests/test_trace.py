# SPDX-License-Identifier: MIT
# Copyright (c) 2026 LlamaIndex Inc.
"""Tests for trace parsing and replay."""

from __future__ import annotations

import pytest
from recency_cache import NOT_FOUND, InvalidArgumentError, TraceParseError
from recency_cache.trace import TraceOp, parse_line, parse_trace, replay


def test_parse_skips_blank_lines_and_comments() -> None:
    assert parse_line("") is None
    assert parse_line("   ") is None
    assert parse_line("# put a 1") is None


def test_parse_put_decodes_json_values() -> None:
    assert parse_line("put a 1") == TraceOp(verb="put", key="a", value=1)
    assert parse_line("put a null") == TraceOp(verb="put", key="a", value=None)
    assert parse_line('put a {"x": 1}') == TraceOp(verb="put", key="a", value={"x": 1})


def test_parse_put_keeps_raw_strings() -> None:
    op = parse_line("put greeting hello world")
    assert op == TraceOp(verb="put", key="greeting", value="hello world")


@pytest.mark.parametrize("raw", ["NaN", "Infinity", "-Infinity"])
def test_parse_put_keeps_non_finite_constants_as_strings(raw: str) -> None:
    op = parse_line(f"put a {raw}")
    assert op == TraceOp(verb="put", key="a", value=raw)


def test_parse_verbs_are_case_insensitive() -> None:
    assert parse_line("GET a") == TraceOp(verb="get", key="a")
    assert parse_line("Clear") == TraceOp(verb="clear")


@pytest.mark.parametrize(
    "line",
    ["pop a", "get", "get a b", "put a", "put", "clear now", "size 1"],
)
def test_parse_rejects_malformed_lines(line: str) -> None:
    with pytest.raises(TraceParseError):
        parse_line(line, 3)


def test_parse_trace_tracks_line_numbers() -> None:
    ops = list(parse_trace(["# header", "put a 1", "", "get a"]))
    assert [op.line_number for op in ops] == [2, 4]


def test_parse_trace_reports_failing_line() -> None:
    with pytest.raises(TraceParseError) as exc_info:
        list(parse_trace(["put a 1", "bogus"]))
    assert exc_info.value.line_number == 2


def test_replay_records_results_and_evictions() -> None:
    lines = [
        "put a 1",
        "put b 2",
        "get a",
        "put c 3",
        "get b",
        "has a",
        "size",
        "keys",
    ]
    cache, results = replay(2, parse_trace(lines))

    assert [r.result for r in results] == [
        None,
        None,
        1,
        None,
        NOT_FOUND,
        True,
        2,
        ["a", "c"],
    ]
    assert results[3].evicted == ["b"]
    assert all(r.evicted == [] for i, r in enumerate(results) if i != 3)
    assert cache.size == 2


def test_replay_renders_results() -> None:
    _, results = replay(2, parse_trace(["put a null", "get a", "get b", "clear"]))
    assert [r.render() for r in results] == ["ok", "null", "NOT_FOUND", "ok"]


def test_replay_json_shape() -> None:
    _, results = replay(1, parse_trace(["put a 1", "put b 2", "get a"]))
    assert results[1].to_json() == {
        "line": 2,
        "op": "put",
        "key": "b",
        "found": True,
        "result": None,
        "evicted": ["a"],
    }
    assert results[2].to_json()["found"] is False


def test_replay_rejects_bad_capacity() -> None:
    with pytest.raises(InvalidArgumentError):
        replay(0, [])
