"""Deterministic 64-bit linear congruential random number generator."""

from __future__ import annotations

_MASK64 = (1 << 64) - 1
_MULTIPLIER = 6_364_136_223_846_793_005
_INCREMENT = 1_442_695_040_888_963_407
_MANTISSA_SCALE = float(1 << 23)


class Lcg:
    """64-bit LCG; the same seed always yields the same sequence."""

    def __init__(self, seed: int) -> None:
        if not isinstance(seed, int) or isinstance(seed, bool):
            raise TypeError(f"seed must be an int, got {seed!r}")
        if not 0 <= seed <= _MASK64:
            raise ValueError(f"seed must fit in 64 unsigned bits, got {seed}")
        self.state = seed

    def next_float(self) -> float:
        """A value in [0, 1) with 23 bits of precision."""
        self.state = (self.state * _MULTIPLIER + _INCREMENT) & _MASK64
        return (self.state >> 41) / _MANTISSA_SCALE

    def next_range(self, lo: float, hi: float) -> float:
        """A value in [lo, hi)."""
        return lo + self.next_float() * (hi - lo)