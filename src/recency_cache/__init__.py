# SPDX-License-Identifier: MIT
# Copyright (c) 2026 LlamaIndex Inc.

from importlib.metadata import PackageNotFoundError, version

from ._lru_cache import NOT_FOUND, CacheStats, LRUCache
from .config import CacheConfig, load_config
from .errors import InvalidArgumentError, RecencyCacheError, TraceParseError

try:
    __version__ = version("recency-cache")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0"

__all__ = [
    "NOT_FOUND",
    "CacheConfig",
    "CacheStats",
    "InvalidArgumentError",
    "LRUCache",
    "RecencyCacheError",
    "TraceParseError",
    "load_config",
]


def main() -> None:
    """Console script entry point."""
    from .cli import cli

    cli()
