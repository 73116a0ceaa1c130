# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
One Newton-Raphson step for y = 1/sqrt(x) in Q16.

    y_new = y * (3 - x * y^2) / 2

Fixed-point layout (all uint64 in the C runtime, wrapping mod 2^64):
    y2   = y * y                 Q32
    term = 3 * 2^32 - x * y2     Q32, "3.0 - x*y^2"
    prod = y * term              Q48
    y    = (uint32)(prod >> 33)  back to Q16, halved
"""

from .constants import NEWTON_RESCALE_SHIFT, NEWTON_THREE_Q32, UINT32_MAX, UINT64_MASK
from ._checks import as_uint32


def newton_step_q16(y: int, x: int) -> int:
    """
    Refine a Q16 estimate of 1/sqrt(x).

    Args:
        y: Current Q16 estimate
        x: Raw integer the estimate belongs to

    Returns:
        Improved Q16 estimate
    """
    y = as_uint32(y, "y")
    x = as_uint32(x, "x")

    y2 = (y * y) & UINT64_MASK
    term = (NEWTON_THREE_Q32 - x * y2) & UINT64_MASK
    prod = (y * term) & UINT64_MASK
    return (prod >> NEWTON_RESCALE_SHIFT) & UINT32_MAX


def test_newton_fixed_points():
    """Self test: an exact estimate is a fixed point, a rough one converges."""
    print("=" * 60)
    print("Testing newton_step_q16")
    print("=" * 60)

    # 1/sqrt(4) = 0.5 -> 32768 in Q16 is exact
    assert newton_step_q16(32768, 4) == 32768
    assert newton_step_q16(65536, 1) == 65536

    # Seed from interpolation for x = 5 converges towards 29308 (0.4472 * 65536)
    y = newton_step_q16(30369, 5)
    assert y == 29250, f"first step gave {y}"
    y = newton_step_q16(y, 5)
    assert y == 29308, f"second step gave {y}"
    print("[OK] Newton step keeps exact values and converges from a seed")
