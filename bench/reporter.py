"""Rendering of workload results."""

from __future__ import annotations

import json
import logging
import sys
from typing import Iterable, Optional, TextIO

from common.models.metrics import WorkloadResult
from common.utils import format_size

logger = logging.getLogger(__name__)


def format_result(result: WorkloadResult) -> str:
    """One-line summary of a workload result."""
    return (
        f"{result.name:<12} : {result.micros_per_op:.3f} micros/op, "
        f"{result.ops_per_sec:.0f} ops/sec, {result.mb_per_sec:.1f} MB/sec, "
        f"total ops: {result.ops}"
    )


def report_results(
    results: Iterable[WorkloadResult],
    stream: Optional[TextIO] = None,
    as_json: bool = False,
) -> None:
    """Write results in workload order as a table or as JSON lines."""
    stream = stream or sys.stdout
    results = list(results)

    for result in results:
        logger.info(format_result(result))

    if as_json:
        for result in results:
            stream.write(json.dumps(result.to_jsonl()) + "\n")
        stream.flush()
        return

    header = (
        f"{'Workload':<12} {'Threads':>7} {'Ops':>10} {'Found':>10} {'Ops/sec':>12} "
        f"{'MB/sec':>8} {'Avg us':>10} {'P50 us':>10} {'P90 us':>10} {'P99 us':>10} {'Data':>10}"
    )
    stream.write(header + "\n")
    stream.write("-" * len(header) + "\n")
    for r in results:
        lat = r.latency_us
        stream.write(
            f"{r.name:<12} {r.threads:>7} {r.ops:>10} {r.found:>10} {r.ops_per_sec:>12.0f} "
            f"{r.mb_per_sec:>8.1f} {lat.avg:>10.2f} {lat.p50:>10.2f} {lat.p90:>10.2f} "
            f"{lat.p99:>10.2f} {format_size(r.bytes):>10}\n"
        )
    stream.flush()
