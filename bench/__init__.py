"""Key-value store benchmark engine."""

from bench.engine import WorkloadEngine
from bench.options import Options
from bench.stats import StatsRecorder, StatsAggregator
from bench.values import ValueGenerator
from bench.distributions import (
    DistributionSampler,
    FixedSampler,
    UniformSampler,
    NormalSampler,
    ZipfianSampler,
    LatestSampler,
    make_sampler,
)

__all__ = [
    "WorkloadEngine",
    "Options",
    "StatsRecorder",
    "StatsAggregator",
    "ValueGenerator",
    "DistributionSampler",
    "FixedSampler",
    "UniformSampler",
    "NormalSampler",
    "ZipfianSampler",
    "LatestSampler",
    "make_sampler",
]
