"""Workload and engine configuration models."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from common.errors import ConfigurationError
from common.models.distribution import DistributionKind, VALUE_LENGTH_KINDS


class WorkloadName(str, Enum):
    """Supported operation mixes."""
    FILLSEQ = "fillseq"
    FILLRANDOM = "fillrandom"
    YCSBA = "ycsba"
    YCSBB = "ycsbb"
    YCSBC = "ycsbc"
    YCSBD = "ycsbd"
    YCSBE = "ycsbe"


SUPPORTED_WORKLOADS = tuple(w.value for w in WorkloadName)

# Global option keys understood by the engine
INT_OPTION_KEYS = ("num", "key_size", "value_size", "threads")
GLOBAL_OPTION_KEYS = INT_OPTION_KEYS + ("workload", "distribution")


def parse_workloads(value: str) -> list[WorkloadName]:
    """Parse a comma separated workload list, skipping empty tokens."""
    workloads = []
    for token in value.split(","):
        token = token.strip()
        if not token:
            continue
        if token not in SUPPORTED_WORKLOADS:
            raise ConfigurationError(f"Unsupported workload: {token}")
        workloads.append(WorkloadName(token))
    return workloads


def _parse_int(key: str, value: str) -> int:
    try:
        return int(str(value).strip())
    except ValueError:
        raise ConfigurationError(f"Invalid value for {key}: {value!r}") from None


class EngineConfig(BaseModel):
    """Benchmark engine configuration (immutable once built)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    num: int = Field(default=1000, ge=1, description="Iterations per worker")
    key_size: int = Field(default=16, ge=1, description="Key width in digits")
    value_size: int = Field(default=1000, ge=1, description="Maximum value length")
    threads: int = Field(default=1, ge=1, description="Parallel workers per workload")
    distribution: Optional[DistributionKind] = Field(
        default=None,
        description="Value length distribution (None for fixed-length values)",
    )
    workloads: list[WorkloadName] = Field(
        default_factory=lambda: [WorkloadName.FILLSEQ],
        description="Workloads in execution order",
    )

    @field_validator("distribution")
    @classmethod
    def validate_distribution(cls, v):
        if v is not None and v not in VALUE_LENGTH_KINDS:
            raise ValueError(f"unsupported value length distribution: {v.value}")
        return v

    @classmethod
    def from_options(cls, options: Mapping[str, str]) -> "EngineConfig":
        """Build a config from raw global options.

        Raises ConfigurationError for unknown keys, unparsable numbers,
        unsupported workloads or values outside their allowed range.
        """
        fields: dict = {}
        for key, value in options.items():
            if key not in GLOBAL_OPTION_KEYS:
                raise ConfigurationError(f"Unknown option: {key}")
            if key in INT_OPTION_KEYS:
                fields[key] = _parse_int(key, value)
            elif key == "workload":
                fields["workloads"] = parse_workloads(str(value))
            else:
                name = str(value).strip().lower()
                if name not in {k.value for k in VALUE_LENGTH_KINDS}:
                    raise ConfigurationError(f"Unsupported distribution: {value}")
                fields["distribution"] = DistributionKind(name)

        try:
            return cls(**fields)
        except ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigurationError(f"Invalid configuration: {details}") from e
