"""Benchmark result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LatencyStats(BaseModel):
    """Latency statistics in microseconds."""

    model_config = ConfigDict(frozen=True)

    avg: float = Field(default=0, description="Average latency")
    min: float = Field(default=0, description="Minimum latency")
    max: float = Field(default=0, description="Maximum latency")
    stddev: float = Field(default=0, description="Population standard deviation")
    p50: float = Field(default=0, description="50th percentile (median)")
    p90: float = Field(default=0, description="90th percentile")
    p99: float = Field(default=0, description="99th percentile")


class WorkloadResult(BaseModel):
    """Aggregated outcome of one workload phase across all workers."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Workload name")
    threads: int = Field(default=0, description="Number of merged workers")

    # Operation counts
    ops: int = Field(default=0)
    reads: int = Field(default=0)
    writes: int = Field(default=0)
    deletes: int = Field(default=0)
    found: int = Field(default=0, description="Reads that reported success")
    bytes: int = Field(default=0)

    # Mean of the per-worker samples
    ops_per_sec: float = Field(default=0)
    mb_per_sec: float = Field(default=0)

    latency_us: LatencyStats = Field(default_factory=LatencyStats)

    @property
    def micros_per_op(self) -> float:
        """Mean latency per operation in microseconds."""
        return self.latency_us.avg

    @property
    def not_found(self) -> int:
        return self.reads - self.found

    def to_jsonl(self) -> dict:
        """Convert to JSON Lines format (compact)."""
        return {
            "workload": self.name,
            "threads": self.threads,
            "ops": {
                "t": self.ops,
                "r": self.reads,
                "w": self.writes,
                "d": self.deletes,
                "found": self.found,
            },
            "ops_sec": round(self.ops_per_sec, 2),
            "mb_sec": round(self.mb_per_sec, 3),
            "lat_us": {
                "avg": round(self.latency_us.avg, 2),
                "p50": round(self.latency_us.p50, 2),
                "p90": round(self.latency_us.p90, 2),
                "p99": round(self.latency_us.p99, 2),
                "max": round(self.latency_us.max, 2),
            },
        }
