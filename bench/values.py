"""Value payload generation from a pregenerated character pool."""

from __future__ import annotations

import random
from typing import Optional

from bench.distributions import DistributionSampler

# Printable ASCII, code points 32..126
PRINTABLE_CHARS = "".join(chr(c) for c in range(32, 127))

MIN_POOL_SIZE = 1024 * 1024


class ValueGenerator:
    """Hands out slices of a random printable buffer.

    The buffer is filled once at construction; ``generate`` walks a cursor
    through it and wraps to the start when a slice would overrun the end.
    Not thread-safe: each worker owns its own generator.
    """

    def __init__(
        self,
        max_length: int,
        sampler: Optional[DistributionSampler] = None,
        pool_size: int = MIN_POOL_SIZE,
        rng: Optional[random.Random] = None,
    ):
        self.max_length = max_length
        self.sampler = sampler
        self._rng = rng or random.Random()

        size = max(pool_size, max_length)
        self._buffer = "".join(self._rng.choices(PRINTABLE_CHARS, k=size))
        self._pos = 0

    @property
    def pool_size(self) -> int:
        return len(self._buffer)

    def generate(self, length: Optional[int] = None) -> str:
        """Return the next ``length`` characters.

        Without ``length`` the size is drawn from the sampler, or is
        ``max_length`` when no sampler was given.
        """
        if length is None:
            length = self.sampler.generate() if self.sampler else self.max_length

        if length < 0 or length > len(self._buffer):
            raise ValueError(
                f"Requested length {length} outside pool size {len(self._buffer)}"
            )

        if self._pos + length > len(self._buffer):
            self._pos = 0
        value = self._buffer[self._pos:self._pos + length]
        self._pos += length
        return value
