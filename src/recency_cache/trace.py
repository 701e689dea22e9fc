# SPDX-License-Identifier: MIT
# Copyright (c) 2026 LlamaIndex Inc.
"""Plain-text operation traces for exercising an ``LRUCache``.

A trace is one operation per line::

    # comments and blank lines are skipped
    put a 1
    put b {"x": 1}
    get a
    has b
    delete b
    size

Values are decoded as JSON when they parse, otherwise kept as raw strings.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, Literal

from ._lru_cache import NOT_FOUND, LRUCache
from .errors import TraceParseError

logger = logging.getLogger(__name__)

Verb = Literal[
    "put", "get", "has", "peek", "delete", "clear", "size", "keys", "values"
]

# verb -> number of whitespace-separated arguments after the verb
_ARITY: dict[str, int] = {
    "put": 2,
    "get": 1,
    "has": 1,
    "peek": 1,
    "delete": 1,
    "clear": 0,
    "size": 0,
    "keys": 0,
    "values": 0,
}


@dataclass(frozen=True)
class TraceOp:
    verb: Verb
    key: str | None = None
    value: Any = None
    line_number: int = 0


@dataclass
class TraceResult:
    op: TraceOp
    result: Any
    evicted: list[str] = field(default_factory=list)

    def render(self) -> str:
        if self.result is NOT_FOUND:
            return "NOT_FOUND"
        if self.op.verb in ("put", "clear"):
            return "ok"
        return json.dumps(self.result)

    def to_json(self) -> dict[str, Any]:
        return {
            "line": self.op.line_number,
            "op": self.op.verb,
            "key": self.op.key,
            "found": self.result is not NOT_FOUND,
            "result": None if self.result is NOT_FOUND else self.result,
            "evicted": list(self.evicted),
        }


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-finite JSON constant {name}")


def _parse_value(raw: str) -> Any:
    # NaN and Infinity stay raw strings so results always re-encode as valid JSON
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        return raw


def _split_first(text: str) -> tuple[str, str]:
    parts = text.split(None, 1)
    return (parts[0], parts[1]) if len(parts) == 2 else (text, "")


def parse_line(line: str, line_number: int = 0) -> TraceOp | None:
    """Parse a single trace line. Returns None for blank lines and comments."""
    line = line.rstrip("\r\n")
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    verb, rest = _split_first(stripped)
    verb = verb.lower()
    if verb not in _ARITY:
        raise TraceParseError(
            f"unknown operation {verb!r}", line_number=line_number, line=line
        )

    arity = _ARITY[verb]
    rest = rest.strip()
    if arity == 0:
        if rest:
            raise TraceParseError(
                f"{verb} takes no arguments", line_number=line_number, line=line
            )
        return TraceOp(verb=verb, line_number=line_number)  # type: ignore[arg-type]

    key, raw_value = _split_first(rest)
    raw_value = raw_value.strip()
    if not key:
        raise TraceParseError(
            f"{verb} requires a key", line_number=line_number, line=line
        )
    if arity == 1:
        if raw_value:
            raise TraceParseError(
                f"{verb} takes exactly one argument",
                line_number=line_number,
                line=line,
            )
        return TraceOp(verb=verb, key=key, line_number=line_number)  # type: ignore[arg-type]

    if not raw_value:
        raise TraceParseError(
            "put requires a key and a value", line_number=line_number, line=line
        )
    return TraceOp(
        verb="put", key=key, value=_parse_value(raw_value), line_number=line_number
    )


def parse_trace(lines: Iterable[str]) -> Iterator[TraceOp]:
    for line_number, line in enumerate(lines, start=1):
        op = parse_line(line, line_number)
        if op is not None:
            yield op


def replay(
    capacity: int, ops: Iterable[TraceOp]
) -> tuple[LRUCache[str, Any], list[TraceResult]]:
    """Apply ``ops`` to a fresh cache and collect one result per op.

    Evictions are recorded against the op that triggered them.
    """
    evicted: list[str] = []
    cache: LRUCache[str, Any] = LRUCache(
        capacity, on_evict=lambda key, _value: evicted.append(key)
    )
    results: list[TraceResult] = []
    for op in ops:
        evicted.clear()
        result = apply(cache, op)
        results.append(TraceResult(op=op, result=result, evicted=list(evicted)))
    logger.debug(
        "Replayed %d ops (capacity=%d, final size=%d)",
        len(results),
        capacity,
        cache.size,
    )
    return cache, results


def apply(cache: LRUCache[str, Any], op: TraceOp) -> Any:
    """Run a single op. Mutating ops return None."""
    if op.verb == "put":
        cache.put(op.key, op.value)  # type: ignore[arg-type]
        return None
    if op.verb == "get":
        return cache.get(op.key)  # type: ignore[arg-type]
    if op.verb == "peek":
        return cache.peek(op.key)  # type: ignore[arg-type]
    if op.verb == "has":
        return cache.has(op.key)  # type: ignore[arg-type]
    if op.verb == "delete":
        return cache.delete(op.key)  # type: ignore[arg-type]
    if op.verb == "clear":
        cache.clear()
        return None
    if op.verb == "size":
        return cache.size
    if op.verb == "keys":
        return cache.keys()
    if op.verb == "values":
        return cache.values()
    raise ValueError(f"Unsupported trace op: {op.verb!r}")
