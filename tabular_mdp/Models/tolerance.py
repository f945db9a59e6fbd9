"""Single-precision ULP comparison used to check transition distributions."""

from dataclasses import dataclass
from typing import Iterable
import math

import numpy as np


def _ordered_bits(x) -> int:
    """
    Map a float32 onto a monotone integer line.

    Positive floats keep their bit pattern, negative floats are mirrored
    below zero so that +0.0 and -0.0 both land on 0.
    """
    bits = int(np.float32(x).view(np.int32))
    if bits < 0:
        return -(bits & 0x7FFFFFFF)
    return bits


def ulps_distance(a, b) -> int:
    """Number of representable float32 values between a and b."""
    if math.isnan(a) or math.isnan(b):
        raise ValueError(f"ULP distance undefined for NaN ({a!r}, {b!r})")
    return abs(_ordered_bits(a) - _ordered_bits(b))


def approx_eq_ulps(a, b, ulps: int) -> bool:
    """
    Compare a and b as float32 values with a tolerance of `ulps` units in the
    last place. Values of opposite sign are never equal unless they compare
    equal exactly (+0.0 / -0.0).
    """
    a32 = np.float32(a)
    b32 = np.float32(b)
    if a32 == b32:
        return True
    if math.isnan(a32) or math.isnan(b32):
        return False
    if math.copysign(1.0, a32) != math.copysign(1.0, b32):
        return False
    return ulps_distance(a32, b32) <= ulps


@dataclass(frozen=True)
class Tolerance:
    """
    Tolerance used when checking that a transition row sums to one.

    ulps : allowed distance from 1.0, in float32 units in the last place
    """
    ulps: int = 4

    def __post_init__(self):
        if isinstance(self.ulps, bool) or not isinstance(self.ulps, int) or self.ulps < 0:
            raise ValueError(f"ulps must be a non-negative integer, got {self.ulps!r}")

    @staticmethod
    def row_sum(row: Iterable[float]) -> np.float32:
        """Sequential float32 accumulation in index order."""
        total = np.float32(0.0)
        for p in row:
            total = np.float32(total + np.float32(p))
        return total

    def is_normalized(self, total) -> bool:
        return approx_eq_ulps(total, 1.0, self.ulps)


DEFAULT_TOLERANCE = Tolerance()
