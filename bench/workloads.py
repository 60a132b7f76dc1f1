"""Operation-mix functions executed by each worker thread.

Every worker runs the full ``num`` iterations of its mix, so the total
operation count of a phase is ``num * threads``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from adapters.base import KVStore
from bench.distributions import (
    DistributionSampler,
    LatestSampler,
    UniformSampler,
    ZipfianSampler,
    make_sampler,
)
from bench.stats import StatsRecorder
from bench.values import MIN_POOL_SIZE, ValueGenerator
from common.errors import ConfigurationError
from common.models.distribution import DistributionConfig
from common.models.workload import EngineConfig, WorkloadName
from common.utils import padded_key

logger = logging.getLogger(__name__)

SCAN_LENGTH_MIN = 1
SCAN_LENGTH_MAX = 100


@dataclass
class ThreadState:
    """A worker's identity and its exclusively owned recorder."""
    tid: int
    stats: StatsRecorder = field(default_factory=StatsRecorder)


@dataclass(frozen=True)
class WorkloadContext:
    """Read-only inputs shared by all workers of a phase."""
    store: KVStore
    config: EngineConfig
    value_pool_size: int = MIN_POOL_SIZE

    def key(self, index: int) -> str:
        return padded_key(index, self.config.key_size)

    def value_generator(self) -> ValueGenerator:
        """Build a worker-private value generator."""
        sampler: Optional[DistributionSampler] = None
        if self.config.distribution is not None:
            sampler = make_sampler(DistributionConfig(
                kind=self.config.distribution,
                min=1,
                max=self.config.value_size,
            ))
        return ValueGenerator(self.config.value_size, sampler, pool_size=self.value_pool_size)

    def zipfian_keys(self) -> ZipfianSampler:
        return ZipfianSampler(0, self.config.num - 1)

    def latest_keys(self) -> LatestSampler:
        return LatestSampler(0, self.config.num - 1)


WorkloadMethod = Callable[[WorkloadContext, ThreadState], None]


def _write(ctx: WorkloadContext, thread: ThreadState, values: ValueGenerator, index: int) -> None:
    key = ctx.key(index)
    value = values.generate()
    # Write failures still count as completed operations
    ctx.store.put(key, value)
    thread.stats.finished_write_op(len(key) + len(value))


def _read(ctx: WorkloadContext, thread: ThreadState, index: int) -> None:
    key = ctx.key(index)
    result = ctx.store.get(key)
    thread.stats.finished_read_op(len(key), result.ok)


def _scan(ctx: WorkloadContext, thread: ThreadState, index: int, length: int) -> None:
    start = ctx.key(index)
    end = ctx.key(index + length)
    result = ctx.store.scan(start, end)
    thread.stats.finished_read_op(len(start) + len(end), result.ok)


def _fill(ctx: WorkloadContext, thread: ThreadState, keys: Optional[DistributionSampler]) -> None:
    values = ctx.value_generator()

    thread.stats.start()
    for i in range(ctx.config.num):
        index = keys.generate() if keys else i
        _write(ctx, thread, values, index)
    thread.stats.stop()


def _mixed(
    ctx: WorkloadContext,
    thread: ThreadState,
    keys: DistributionSampler,
    read_percent: int,
    scan: bool = False,
) -> None:
    """Run ``num`` iterations, reading with probability ``read_percent``/100."""
    values = ctx.value_generator()
    dice = UniformSampler(0, 99)
    scan_lengths = UniformSampler(SCAN_LENGTH_MIN, SCAN_LENGTH_MAX) if scan else None

    thread.stats.start()
    for _ in range(ctx.config.num):
        index = keys.generate()
        if dice.generate() < read_percent:
            if scan_lengths:
                _scan(ctx, thread, index, scan_lengths.generate())
            else:
                _read(ctx, thread, index)
        else:
            _write(ctx, thread, values, index)
    thread.stats.stop()


def fill_seq(ctx: WorkloadContext, thread: ThreadState) -> None:
    """Write keys 0..num-1 in order."""
    _fill(ctx, thread, None)


def fill_random(ctx: WorkloadContext, thread: ThreadState) -> None:
    """Write uniformly random keys."""
    _fill(ctx, thread, UniformSampler(0, ctx.config.num - 1))


def ycsb_a(ctx: WorkloadContext, thread: ThreadState) -> None:
    """Update heavy: 50% reads, 50% writes over Zipfian keys."""
    _mixed(ctx, thread, ctx.zipfian_keys(), 50)


def ycsb_b(ctx: WorkloadContext, thread: ThreadState) -> None:
    """Read mostly: 95% reads, 5% writes over Zipfian keys."""
    _mixed(ctx, thread, ctx.zipfian_keys(), 95)


def ycsb_c(ctx: WorkloadContext, thread: ThreadState) -> None:
    """Read only over Zipfian keys."""
    _mixed(ctx, thread, ctx.zipfian_keys(), 100)


def ycsb_d(ctx: WorkloadContext, thread: ThreadState) -> None:
    """Read latest: 95% reads, 5% writes biased to the newest keys."""
    _mixed(ctx, thread, ctx.latest_keys(), 95)


def ycsb_e(ctx: WorkloadContext, thread: ThreadState) -> None:
    """Short ranges: 95% scans of 1-100 keys, 5% writes."""
    _mixed(ctx, thread, ctx.latest_keys(), 95, scan=True)


WORKLOADS: dict[WorkloadName, WorkloadMethod] = {
    WorkloadName.FILLSEQ: fill_seq,
    WorkloadName.FILLRANDOM: fill_random,
    WorkloadName.YCSBA: ycsb_a,
    WorkloadName.YCSBB: ycsb_b,
    WorkloadName.YCSBC: ycsb_c,
    WorkloadName.YCSBD: ycsb_d,
    WorkloadName.YCSBE: ycsb_e,
}


def get_workload(name: WorkloadName | str) -> WorkloadMethod:
    """Resolve a workload name to its operation mix."""
    try:
        return WORKLOADS[WorkloadName(name)]
    except (KeyError, ValueError):
        raise ConfigurationError(f"Unknown workload: {name}") from None
