# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Approximate 3D Euclidean distance on top of the Q16 reciprocal square root.

    sum  = x^2 + y^2 + z^2          (uint64, exact for int32 components)
    sum  = min(sum, 0xFFFFFFFF)     saturation, documented precision loss
    r    = reciprocal_sqrt_q16(sum) Q16
    dist = (uint32)((r * sum) >> 16)

sqrt(s) is computed as s * (1/sqrt(s)), so dist(0, 0, 0) is 0 even though
reciprocal_sqrt_q16(0) saturates.
"""

import logging
from dataclasses import dataclass

import numpy as np

from .constants import INT32_MAX, INT32_MIN, Q16_FRACTION_BITS, UINT32_MAX
from .rsqrt import reciprocal_sqrt_q16, reciprocal_sqrt_q16_batch
from ._checks import as_int32, as_int_array

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DistanceResult:
    """
    Tagged outcome of distance3_checked.

    Attributes:
        value: Approximate magnitude (raw integer, same as distance3)
        sum_of_squares: Exact x^2 + y^2 + z^2 before saturation
        saturated: True if sum_of_squares was clamped to 0xFFFFFFFF
    """
    value: int
    sum_of_squares: int
    saturated: bool


def _sum_of_squares(x: int, y: int, z: int) -> int:
    return x * x + y * y + z * z


def _magnitude_from_sum(sum_sq: int) -> int:
    inv_sqrt = reciprocal_sqrt_q16(sum_sq)
    return ((inv_sqrt * sum_sq) >> Q16_FRACTION_BITS) & UINT32_MAX


def distance3_checked(x: int, y: int, z: int) -> DistanceResult:
    """
    Approximate sqrt(x^2 + y^2 + z^2), reporting whether the sum saturated.

    Args:
        x, y, z: Raw int32 components

    Returns:
        DistanceResult with the uint32 magnitude and the saturation flag
    """
    x = as_int32(x, "x")
    y = as_int32(y, "y")
    z = as_int32(z, "z")

    sum_sq = _sum_of_squares(x, y, z)
    saturated = sum_sq > UINT32_MAX
    if saturated:
        logger.debug("distance3(%d, %d, %d): sum of squares %d saturated", x, y, z, sum_sq)
    value = _magnitude_from_sum(min(sum_sq, UINT32_MAX))
    return DistanceResult(value=value, sum_of_squares=sum_sq, saturated=saturated)


def distance3(x: int, y: int, z: int) -> int:
    """
    Approximate Euclidean magnitude of an int32 3-vector.

    Sums of squares above 0xFFFFFFFF are clamped silently; use
    distance3_checked to find out when that happened.

    Returns:
        Raw uint32 magnitude
    """
    return distance3_checked(x, y, z).value


def distance3_batch(x, y, z) -> np.ndarray:
    """
    Vectorised distance3 over broadcastable int32 arrays.

    Squares are summed in uint64 (at most 3 * 2^62, no wrap-around), then
    saturated and passed through reciprocal_sqrt_q16_batch.

    Returns:
        uint32 array with the broadcast shape of x, y, z
    """
    xs = as_int_array(x, "x", INT32_MIN, INT32_MAX)
    ys = as_int_array(y, "y", INT32_MIN, INT32_MAX)
    zs = as_int_array(z, "z", INT32_MIN, INT32_MAX)
    xs, ys, zs = np.broadcast_arrays(xs, ys, zs)

    # |v| <= 2^31 fits uint64, and so does its square
    sum_sq = sum(np.abs(v).astype(np.uint64) ** 2 for v in (xs, ys, zs))
    sum_sq = np.minimum(sum_sq, np.uint64(UINT32_MAX))

    inv_sqrt = reciprocal_sqrt_q16_batch(sum_sq).astype(np.uint64)
    dist = (inv_sqrt * sum_sq) >> np.uint64(Q16_FRACTION_BITS)
    return (dist & np.uint64(UINT32_MAX)).astype(np.uint32)


def distance3_float_reference(x, y, z) -> np.ndarray:
    """Float64 reference for sqrt(x^2 + y^2 + z^2)."""
    x, y, z = (np.asarray(v, dtype=np.float64) for v in (x, y, z))
    return np.sqrt(x * x + y * y + z * z)


def test_distance3_reference_values():
    """Self test: values produced by the C runtime."""
    print("=" * 60)
    print("Testing distance3")
    print("=" * 60)

    cases = [
        ((0, 0, 0), 0),
        ((3, 4, 0), 4),
        ((1, 2, 3), 3),
        ((-3, -4, 0), 4),
        ((100, 200, 300), 373),
        ((65536, 0, 0), 65535),
        ((INT32_MIN, INT32_MIN, INT32_MIN), 65535),
    ]
    for (x, y, z), want in cases:
        got = distance3(x, y, z)
        ref = float(distance3_float_reference(x, y, z))
        print(f"distance3({x}, {y}, {z}) = {got}  (float {ref:.3f})")
        assert got == want, f"distance3({x}, {y}, {z}) = {got}, expected {want}"
    print("[OK] distance3 matches reference values")


def test_distance3_saturation_flag():
    """Self test: saturation is flagged exactly when the sum exceeds uint32."""
    assert not distance3_checked(65535, 0, 0).saturated
    assert not distance3_checked(46340, 46340, 0).saturated
    result = distance3_checked(65536, 0, 0)
    assert result.saturated and result.sum_of_squares == 1 << 32
    assert result.value == distance3(65536, 0, 0)
    print("[OK] distance3_checked flags saturation")
