# SPDX-License-Identifier: MIT
# Copyright (c) 2026 LlamaIndex Inc.
"""Exceptions raised by recency_cache."""

from __future__ import annotations


class RecencyCacheError(Exception):
    """Base class for all recency_cache errors."""


class InvalidArgumentError(RecencyCacheError, ValueError):
    """Raised when a cache or its configuration is given an unusable argument."""


class TraceParseError(RecencyCacheError, ValueError):
    """Raised when a trace line cannot be parsed into an operation."""

    def __init__(self, message: str, *, line_number: int, line: str) -> None:
        super().__init__(f"line {line_number}: {message}: {line!r}")
        self.line_number = line_number
        self.line = line
