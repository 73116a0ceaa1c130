# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Exponent finder: floor(log2(x)) of a uint32 via a software leading-zero count.

The count is a binary search over 16/8/4/2/1-bit halves, matching what a
core without a CLZ instruction executes. int.bit_length() is only used by
the self test below as an independent check.
"""

import numpy as np

from .constants import TOP_EXPONENT, UINT32_BITS, UINT32_MAX
from ._checks import as_uint32


def clz32(x: int) -> int:
    """
    Count leading zero bits of a 32-bit value.

    Args:
        x: Raw integer in [0, 2^32 - 1]

    Returns:
        Number of leading zeros in [0, 32]; 32 for x == 0
    """
    x = as_uint32(x, "x")
    if x == 0:
        return UINT32_BITS

    n = 0
    if (x >> 16) == 0:
        n += 16
        x = (x << 16) & UINT32_MAX
    if (x >> 24) == 0:
        n += 8
        x = (x << 8) & UINT32_MAX
    if (x >> 28) == 0:
        n += 4
        x = (x << 4) & UINT32_MAX
    if (x >> 30) == 0:
        n += 2
        x = (x << 2) & UINT32_MAX
    if (x >> 31) == 0:
        n += 1
    return n


def exponent_bucket(x: int) -> int:
    """
    Exponent bucket of a nonzero raw integer: e with 2^e <= x < 2^(e+1).

    Raises:
        ValueError: for x == 0, which has no bucket (clz32 gives 32, i.e. e = -1)
    """
    lz = clz32(x)
    if lz == UINT32_BITS:
        raise ValueError("exponent_bucket is undefined for 0")
    return TOP_EXPONENT - lz


def clz32_array(x: np.ndarray) -> np.ndarray:
    """
    Vectorised clz32 over a uint64 array holding uint32 values.

    Same 16/8/4/2/1 binary search, one np.where per step. Zero lanes give 32.
    """
    v = x.astype(np.uint64)
    n = np.zeros(v.shape, dtype=np.uint64)
    for top, shift in ((16, 16), (24, 8), (28, 4), (30, 2)):
        empty = (v >> np.uint64(top)) == 0
        n = np.where(empty, n + np.uint64(shift), n)
        v = np.where(empty, (v << np.uint64(shift)) & np.uint64(UINT32_MAX), v)
    n = n + ((v >> np.uint64(31)) == 0).astype(np.uint64)
    return np.where(x == 0, np.uint64(UINT32_BITS), n)


def test_clz32_array_matches_scalar():
    """Self test: vectorised count agrees with the scalar one."""
    samples = [0, 1, 2, 3, 255, 256, 65535, 65536, 1 << 31, UINT32_MAX]
    got = clz32_array(np.array(samples, dtype=np.uint64))
    assert [int(v) for v in got] == [clz32(s) for s in samples]
    print("[OK] clz32_array matches clz32")


def test_clz32():
    """Self test: clz32 against int.bit_length() on boundaries and neighbours."""
    print("=" * 60)
    print("Testing clz32 / exponent_bucket")
    print("=" * 60)

    assert clz32(0) == 32, "clz32(0) must be 32"
    for e in range(32):
        for x in (1 << e, (1 << e) | 1, (2 << e) - 1):
            expected = 32 - x.bit_length()
            assert clz32(x) == expected, f"clz32({x}) = {clz32(x)}, expected {expected}"
            assert exponent_bucket(x) == e, f"exponent_bucket({x}) != {e}"
    print("[OK] clz32 matches bit_length() on all bucket boundaries")
