"""Common utilities and models shared across the engine, adapters and CLI."""

from common.errors import BenchError, ConfigurationError, AdapterError, AdapterNotFoundError
from common.models.distribution import DistributionConfig, DistributionKind
from common.models.workload import EngineConfig, WorkloadName
from common.models.metrics import LatencyStats, WorkloadResult

__all__ = [
    "BenchError",
    "ConfigurationError",
    "AdapterError",
    "AdapterNotFoundError",
    "DistributionConfig",
    "DistributionKind",
    "EngineConfig",
    "WorkloadName",
    "LatencyStats",
    "WorkloadResult",
]
