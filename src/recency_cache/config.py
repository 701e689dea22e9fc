# SPDX-License-Identifier: MIT
# Copyright (c) 2026 LlamaIndex Inc.
from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidArgumentError

CONFIG_TABLE = "recency-cache"


class CacheConfig(BaseModel):
    """Construction parameters for an ``LRUCache``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # strict so that True/1.0/"3" are not coerced into a capacity
    capacity: int = Field(gt=0, strict=True)

    @classmethod
    def from_mapping(cls, data: Any) -> CacheConfig:
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise InvalidArgumentError(_describe(exc)) from exc


def validate_capacity(capacity: Any) -> int:
    """Return ``capacity`` if it is a positive int, else raise InvalidArgumentError."""
    return CacheConfig.from_mapping({"capacity": capacity}).capacity


def load_config(path: str | Path) -> CacheConfig:
    """Read a ``CacheConfig`` from a TOML file.

    Looks for ``[tool.recency-cache]`` first (so the settings can live in a
    pyproject.toml) and falls back to a top-level ``[recency-cache]`` table.
    """
    config_path = Path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise InvalidArgumentError(f"Config file not found: {config_path}") from exc
    except OSError as exc:
        raise InvalidArgumentError(f"Failed reading config file: {config_path}") from exc

    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise InvalidArgumentError(f"Invalid TOML in {config_path}: {exc}") from exc

    table = data.get("tool", {}).get(CONFIG_TABLE)
    if table is None:
        table = data.get(CONFIG_TABLE)
    if table is None:
        raise InvalidArgumentError(
            f"No [tool.{CONFIG_TABLE}] or [{CONFIG_TABLE}] table in {config_path}"
        )
    if not isinstance(table, dict):
        raise InvalidArgumentError(f"Expected [{CONFIG_TABLE}] to be a table.")
    return CacheConfig.from_mapping(table)


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error["loc"]) or "config"
        parts.append(f"{location}: {error['msg']} (got {error.get('input')!r})")
    return "; ".join(parts)
