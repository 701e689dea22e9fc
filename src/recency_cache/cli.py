# SPDX-License-Identifier: MIT
# Copyright (c) 2026 LlamaIndex Inc.
from __future__ import annotations

import json
import logging
from typing import IO, Optional

import click

from . import trace
from .config import load_config
from .errors import InvalidArgumentError, TraceParseError


def _resolve_capacity(capacity: Optional[int], config_path: Optional[str]) -> int:
    if config_path is not None:
        if capacity is not None:
            raise click.UsageError("Pass either --capacity or --config, not both.")
        try:
            return load_config(config_path).capacity
        except InvalidArgumentError as exc:
            raise click.BadParameter(str(exc), param_hint="--config") from exc
    if capacity is None:
        raise click.UsageError("One of --capacity or --config is required.")
    return capacity


@click.group()
def cli() -> None:
    """Tools for exploring LRU cache behaviour."""


@cli.command("replay")
@click.argument("trace_file", type=click.File("r", encoding="utf-8"))
@click.option("--capacity", type=int, default=None, help="Cache capacity.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="TOML file with a [tool.recency-cache] or [recency-cache] table.",
)
@click.option("--json", "as_json", is_flag=True, help="Emit one JSON object per op.")
@click.option("--verbose", "-v", is_flag=True, help="Log evictions to stderr.")
def replay_cmd(
    trace_file: IO[str],
    capacity: Optional[int],
    config_path: Optional[str],
    as_json: bool,
    verbose: bool,
) -> None:
    """Replay a trace of cache operations and print each result."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    resolved = _resolve_capacity(capacity, config_path)
    try:
        cache, results = trace.replay(resolved, trace.parse_trace(trace_file))
    except InvalidArgumentError as exc:
        raise click.BadParameter(str(exc), param_hint="--capacity") from exc
    except TraceParseError as exc:
        raise click.ClickException(str(exc)) from exc

    for res in results:
        if as_json:
            click.echo(json.dumps(res.to_json()))
            continue
        target = f" {res.op.key}" if res.op.key is not None else ""
        line = f"{res.op.verb}{target} -> {res.render()}"
        if res.evicted:
            line += f" (evicted {', '.join(res.evicted)})"
        click.echo(line)

    stats = cache.stats
    summary = {
        "size": cache.size,
        "capacity": cache.capacity,
        "hits": stats.hits,
        "misses": stats.misses,
        "evictions": stats.evictions,
    }
    if as_json:
        click.echo(json.dumps({"summary": summary}))
    else:
        click.echo(" ".join(f"{k}={v}" for k, v in summary.items()))
