"""Common data models for the key-value benchmark harness."""

from common.models.distribution import DistributionConfig, DistributionKind
from common.models.workload import (
    EngineConfig,
    WorkloadName,
    SUPPORTED_WORKLOADS,
    parse_workloads,
)
from common.models.metrics import LatencyStats, WorkloadResult

__all__ = [
    "DistributionConfig",
    "DistributionKind",
    "EngineConfig",
    "WorkloadName",
    "SUPPORTED_WORKLOADS",
    "parse_workloads",
    "LatencyStats",
    "WorkloadResult",
]
