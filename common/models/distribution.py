"""Distribution configuration models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DistributionKind(str, Enum):
    """Statistical law used to draw integers from a range."""
    FIXED = "fixed"
    UNIFORM = "uniform"
    NORMAL = "normal"
    ZIPFIAN = "zipfian"
    LATEST = "latest"


# Laws accepted for the value-length "distribution" option
VALUE_LENGTH_KINDS = (
    DistributionKind.UNIFORM,
    DistributionKind.NORMAL,
    DistributionKind.ZIPFIAN,
)

DEFAULT_ZIPFIAN_EXPONENT = 1.2
DEFAULT_LATEST_LAMBDA = 1.0


class DistributionConfig(BaseModel):
    """Bounded integer distribution settings."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: DistributionKind = Field(default=DistributionKind.UNIFORM)
    min: int = Field(default=0, ge=0, description="Lower bound (inclusive)")
    max: int = Field(default=0, ge=0, description="Upper bound (inclusive)")
    exponent: Optional[float] = Field(
        default=None,
        gt=0,
        description="Zipfian skew exponent (s)",
    )
    lam: Optional[float] = Field(
        default=None,
        gt=0,
        alias="lambda",
        description="Rate of the exponential draw for the latest distribution",
    )

    @model_validator(mode="after")
    def check_bounds(self) -> "DistributionConfig":
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self

    @property
    def span(self) -> int:
        """Number of integers in the range."""
        return self.max - self.min + 1

    @property
    def zipfian_exponent(self) -> float:
        return self.exponent if self.exponent is not None else DEFAULT_ZIPFIAN_EXPONENT

    @property
    def latest_lambda(self) -> float:
        return self.lam if self.lam is not None else DEFAULT_LATEST_LAMBDA
