"""Per-worker statistics recording and per-workload aggregation."""

from __future__ import annotations

import math
import time
from enum import Enum
from typing import Sequence

from common.models.metrics import LatencyStats, WorkloadResult

BYTES_PER_MB = 1048576.0


def now_micros() -> float:
    """Monotonic clock in microseconds."""
    return time.perf_counter() * 1e6


class RecorderState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class StatsRecorder:
    """Counters and latency samples owned by a single worker thread.

    Each recorded operation's latency is the time since the previous
    recorded operation (or since ``start`` for the first one).
    """

    def __init__(self):
        self._state = RecorderState.IDLE
        self._reset()

    def _reset(self) -> None:
        self._start = 0.0
        self._last_op = 0.0
        self._finish = 0.0
        self._seconds = 0.0
        self._reads = 0
        self._writes = 0
        self._deletes = 0
        self._found = 0
        self._bytes = 0
        self._latencies: list[float] = []

    def start(self) -> None:
        """Begin (or restart) recording, discarding earlier samples."""
        self._reset()
        self._start = now_micros()
        self._last_op = self._start
        self._finish = self._start
        self._state = RecorderState.RUNNING

    def stop(self) -> None:
        """Stop recording and compute the elapsed time."""
        self._finish = now_micros()
        self._seconds = (self._finish - self._start) * 1e-6
        self._state = RecorderState.STOPPED

    def _record(self, op_bytes: int) -> None:
        if self._state is not RecorderState.RUNNING:
            raise RuntimeError(f"Cannot record operations while {self._state.value}")
        now = now_micros()
        self._latencies.append(now - self._last_op)
        self._last_op = now
        self._bytes += op_bytes

    def finished_read_op(self, op_bytes: int, found: bool) -> None:
        self._record(op_bytes)
        self._reads += 1
        if found:
            self._found += 1

    def finished_write_op(self, op_bytes: int) -> None:
        self._record(op_bytes)
        self._writes += 1

    def finished_delete_op(self, op_bytes: int) -> None:
        self._record(op_bytes)
        self._deletes += 1

    @property
    def state(self) -> RecorderState:
        return self._state

    @property
    def reads(self) -> int:
        return self._reads

    @property
    def writes(self) -> int:
        return self._writes

    @property
    def deletes(self) -> int:
        return self._deletes

    @property
    def found(self) -> int:
        return self._found

    @property
    def ops(self) -> int:
        return self._reads + self._writes + self._deletes

    @property
    def bytes(self) -> int:
        return self._bytes

    @property
    def seconds(self) -> float:
        return self._seconds

    @property
    def start_time(self) -> float:
        return self._start

    @property
    def finish_time(self) -> float:
        return self._finish

    @property
    def latencies(self) -> tuple[float, ...]:
        return tuple(self._latencies)


def calc_avg(data: Sequence[float]) -> float:
    if not data:
        return 0.0
    return math.fsum(data) / len(data)


def calc_stddev(data: Sequence[float], avg: float) -> float:
    if not data:
        return 0.0
    return math.sqrt(math.fsum((d - avg) ** 2 for d in data) / len(data))


def calc_percentile(sorted_data: Sequence[float], percentile: float) -> float:
    """Linearly interpolated percentile of ascending-sorted data."""
    if not sorted_data:
        return 0.0
    pos = percentile / 100 * (len(sorted_data) - 1)
    lower = math.floor(pos)
    upper = math.ceil(pos)
    if lower == upper:
        return float(sorted_data[lower])
    fraction = pos - lower
    return sorted_data[lower] + (sorted_data[upper] - sorted_data[lower]) * fraction


def calc_median(sorted_data: Sequence[float]) -> float:
    return calc_percentile(sorted_data, 50)


class StatsAggregator:
    """Merges the recorders of one workload phase.

    Throughput is the mean of per-worker rates, each computed over that
    worker's own elapsed time.
    """

    def __init__(self, name: str):
        self.name = name
        self._throughput_ops: list[float] = []
        self._throughput_mb: list[float] = []
        self._latencies: list[float] = []
        self._workers = 0
        self._reads = 0
        self._writes = 0
        self._deletes = 0
        self._found = 0
        self._bytes = 0
        self._result: WorkloadResult | None = None

    @property
    def finalized(self) -> bool:
        return self._result is not None

    @property
    def throughput_samples(self) -> tuple[float, ...]:
        return tuple(self._throughput_ops)

    @property
    def mb_samples(self) -> tuple[float, ...]:
        return tuple(self._throughput_mb)

    def add(self, recorder: StatsRecorder) -> None:
        if self.finalized:
            raise RuntimeError(f"Stats for {self.name} are already finalized")

        elapsed = recorder.seconds
        if elapsed <= 0.0:
            elapsed = 1.0
        self._throughput_ops.append(recorder.ops / elapsed)
        if recorder.bytes > 0:
            self._throughput_mb.append(recorder.bytes / BYTES_PER_MB / elapsed)
        self._latencies.extend(recorder.latencies)

        self._workers += 1
        self._reads += recorder.reads
        self._writes += recorder.writes
        self._deletes += recorder.deletes
        self._found += recorder.found
        self._bytes += recorder.bytes

    def latency_stats(self) -> LatencyStats:
        data = sorted(self._latencies)
        avg = calc_avg(data)
        return LatencyStats(
            avg=avg,
            min=data[0] if data else 0.0,
            max=data[-1] if data else 0.0,
            stddev=calc_stddev(data, avg),
            p50=calc_median(data),
            p90=calc_percentile(data, 90),
            p99=calc_percentile(data, 99),
        )

    def finalize(self) -> WorkloadResult:
        """Compute the summary; no further recorders may be added."""
        if self._result is None:
            self._result = WorkloadResult(
                name=self.name,
                threads=self._workers,
                ops=self._reads + self._writes + self._deletes,
                reads=self._reads,
                writes=self._writes,
                deletes=self._deletes,
                found=self._found,
                bytes=self._bytes,
                ops_per_sec=calc_avg(self._throughput_ops),
                mb_per_sec=calc_avg(self._throughput_mb),
                latency_us=self.latency_stats(),
            )
        return self._result
