# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Initial 1/sqrt(x) estimate by linear interpolation inside an exponent bucket.

For x in [2^e, 2^(e+1)) the estimate blends table[e] and table[e+1] by the
Q16 fraction (x - 2^e) / 2^e. Masks reproduce the uint32 / uint64 widths of
the C runtime:

    base   = 2^e, or 0 for e == 31 (1u << 31 is avoided there)
    frac   = (uint32)(((uint64)(x - base) << 16) >> e)
    delta  = (uint32)(y_base - y_next)
    y      = (uint32)(y_base - (uint32)(((uint64)delta * frac) >> 16))

For e == 31, base is 0, so frac lands in [65536, 131072) instead of
[0, 65536); delta is 0 there (table[31] and the implicit table[32] are both
1), so the estimate is still exactly 1.
"""

from typing import Sequence

from .constants import Q16_FRACTION_BITS, TOP_EXPONENT, UINT32_MAX, UINT64_MASK
from .seed_table import RSQRT_SEED_TABLE
from ._checks import as_uint32, as_int


def interpolate_rsqrt_q16(x: int, e: int, table: Sequence[int] = RSQRT_SEED_TABLE) -> int:
    """
    Interpolated Q16 estimate of 1/sqrt(x).

    Args:
        x: Raw integer, x > 0
        e: Exponent bucket of x (2^e <= x < 2^(e+1))
        table: Q16 seed table indexed by exponent

    Returns:
        Q16 estimate of 1/sqrt(x)
    """
    x = as_uint32(x, "x")
    e = as_int(e, "e")
    if e < 0 or e > TOP_EXPONENT:
        raise ValueError(f"exponent must be in [0, {TOP_EXPONENT}], got {e}")
    if x == 0 or (x >> e) != 1:
        raise ValueError(f"x={x} is not in exponent bucket {e}")

    y_base = int(table[e])
    y_next = int(table[e + 1]) if e < TOP_EXPONENT else 1

    base = (1 << e) if e < TOP_EXPONENT else 0
    diff = x - base
    frac = (((diff << Q16_FRACTION_BITS) & UINT64_MASK) >> e) & UINT32_MAX

    delta = (y_base - y_next) & UINT32_MAX
    interp = (delta * frac) & UINT64_MASK
    return (y_base - (interp >> Q16_FRACTION_BITS)) & UINT32_MAX


def test_interpolate_bucket_edges():
    """Self test: estimate equals the table entry at every power of two."""
    print("=" * 60)
    print("Testing interpolate_rsqrt_q16")
    print("=" * 60)

    for e in range(TOP_EXPONENT + 1):
        y = interpolate_rsqrt_q16(1 << e, e)
        assert y == RSQRT_SEED_TABLE[e], f"bucket {e}: got {y}, expected {RSQRT_SEED_TABLE[e]}"

    # Midpoint of bucket 2 (x = 6): 32768 - ((32768 - 23170) * 32768 >> 16)
    assert interpolate_rsqrt_q16(6, 2) == 27969
    assert interpolate_rsqrt_q16(UINT32_MAX, TOP_EXPONENT) == 1
    print("[OK] bucket edges land on the table, interior points interpolate")
