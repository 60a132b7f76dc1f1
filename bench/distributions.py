"""Bounded integer samplers for key selection and value sizing.

Every sampler owns a private ``random.Random`` so worker threads never
share a random source.
"""

from __future__ import annotations

import bisect
import math
import random
from abc import ABC, abstractmethod
from itertools import accumulate
from typing import Optional

from common.errors import ConfigurationError
from common.models.distribution import (
    DistributionConfig,
    DistributionKind,
    DEFAULT_ZIPFIAN_EXPONENT,
    DEFAULT_LATEST_LAMBDA,
)


class DistributionSampler(ABC):
    """Draws integers from ``[low, high]``."""

    def __init__(self, low: int, high: int, rng: Optional[random.Random] = None):
        if low > high:
            raise ConfigurationError(f"Invalid range: min {low} > max {high}")
        self.low = low
        self.high = high
        self._rng = rng or random.Random()

    @abstractmethod
    def generate(self) -> int:
        """Draw the next value."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.low}, {self.high})"


class FixedSampler(DistributionSampler):
    """Always returns the same value."""

    def __init__(self, value: int):
        super().__init__(value, value)
        self.value = value

    def generate(self) -> int:
        return self.value


class UniformSampler(DistributionSampler):

    def generate(self) -> int:
        return self._rng.randint(self.low, self.high)


class NormalSampler(DistributionSampler):
    """Gaussian centred on the range midpoint.

    The standard deviation is a sixth of the range, so about 99.7% of raw
    draws already fall inside it; the rest are clamped.
    """

    def __init__(self, low: int, high: int, rng: Optional[random.Random] = None):
        super().__init__(low, high, rng)
        self.mean = (low + high) / 2
        self.stddev = (high - low) / 6

    def generate(self) -> int:
        if self.stddev == 0:
            return self.low
        value = round(self._rng.gauss(self.mean, self.stddev))
        return min(max(value, self.low), self.high)


class ZipfianSampler(DistributionSampler):
    """Power-law sampler favouring the low end of the range.

    Rank ``i`` (1-based) has weight ``i ** -s``. The cumulative table is built
    once at construction (one float per integer in the range) and each draw
    is a binary search over it.
    """

    def __init__(
        self,
        low: int,
        high: int,
        exponent: float = DEFAULT_ZIPFIAN_EXPONENT,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(low, high, rng)
        if exponent <= 0:
            raise ConfigurationError(f"Zipfian exponent must be positive: {exponent}")
        self.exponent = exponent

        n = high - low + 1
        weights = [rank ** -exponent for rank in range(1, n + 1)]
        total = math.fsum(weights)
        self._cdf = [w / total for w in accumulate(weights)]
        # Guard against rounding leaving the tail just below 1.0
        self._cdf[-1] = 1.0

    def generate(self) -> int:
        u = self._rng.random()
        index = bisect.bisect_left(self._cdf, u)
        return self.low + min(index, len(self._cdf) - 1)


class LatestSampler(DistributionSampler):
    """Recency sampler anchored at the high end of the range.

    ``x ~ Exp(lambda)`` maps to ``u = e^-x`` in ``(0, 1]`` and the result is
    ``high - floor(u * (high - low))``. ``u`` has density ``lambda * u^(lambda-1)``:
    lambda below 1 pushes draws towards ``high``, lambda = 1 is uniform.
    """

    def __init__(
        self,
        low: int,
        high: int,
        lam: float = DEFAULT_LATEST_LAMBDA,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(low, high, rng)
        if lam <= 0:
            raise ConfigurationError(f"Latest lambda must be positive: {lam}")
        self.lam = lam

    def generate(self) -> int:
        x = self._rng.expovariate(self.lam)
        u = math.exp(-x)
        return self.high - math.floor(u * (self.high - self.low))


def make_sampler(config: DistributionConfig, rng: Optional[random.Random] = None) -> DistributionSampler:
    """Build a sampler from its configuration."""
    kind = config.kind
    if kind == DistributionKind.FIXED:
        return FixedSampler(config.max)
    if kind == DistributionKind.UNIFORM:
        return UniformSampler(config.min, config.max, rng)
    if kind == DistributionKind.NORMAL:
        return NormalSampler(config.min, config.max, rng)
    if kind == DistributionKind.ZIPFIAN:
        return ZipfianSampler(config.min, config.max, config.zipfian_exponent, rng)
    if kind == DistributionKind.LATEST:
        return LatestSampler(config.min, config.max, config.latest_lambda, rng)
    raise ConfigurationError(f"Unknown distribution: {kind}")
