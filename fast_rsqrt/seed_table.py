# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Seed table for the Q16 reciprocal square root.

Entry e is the initial 1/sqrt(2^e) estimate in Q16, i.e. ~2^16 / 2^(e/2).
Entry 0 is exactly 1.0 (65536) and the last entry is 1. The literal values
are the ones baked into the C runtime; they are neither a pure floor nor a
pure round-to-nearest of the float value (entry 19 is 90, nearest gives 91),
so the generator below is only used to compare and export, never to replace
the builtin table.
"""

from typing import Sequence, Tuple

import numpy as np

from .constants import Q16_ONE, SEED_TABLE_SIZE, UINT32_MAX

RSQRT_SEED_TABLE: Tuple[int, ...] = (
    65536, 46341, 32768, 23170, 16384, 11585, 8192, 5793,
    4096,  2896,  2048,  1448,  1024,  724,   512,  362,
    256,   181,   128,   90,    64,    45,    32,   23,
    16,    11,    8,     6,     4,     3,     2,     1,
)

ROUNDING_MODES = ("floor", "nearest")


def validate_seed_table(table: Sequence[int]) -> None:
    """
    Check the invariants the estimator relies on.

    Raises:
        ValueError: if the table is not 32 strictly decreasing uint32 entries
            running from 65536 down to 1
    """
    if len(table) != SEED_TABLE_SIZE:
        raise ValueError(f"seed table must have {SEED_TABLE_SIZE} entries, got {len(table)}")
    values = [int(v) for v in table]
    if values[0] != Q16_ONE:
        raise ValueError(f"seed table entry 0 must be {Q16_ONE}, got {values[0]}")
    if values[-1] != 1:
        raise ValueError(f"seed table last entry must be 1, got {values[-1]}")
    for e, v in enumerate(values):
        if v < 0 or v > UINT32_MAX:
            raise ValueError(f"seed table entry {e} out of uint32 range: {v}")
    for e in range(1, len(values)):
        if values[e] >= values[e - 1]:
            raise ValueError(
                f"seed table must be strictly decreasing: "
                f"table[{e - 1}]={values[e - 1]}, table[{e}]={values[e]}"
            )


def get_builtin_rsqrt_seed_table() -> Tuple[np.ndarray, dict]:
    """
    Return the builtin seed table as a read-only uint32 array.

    Returns:
        tuple: (table, metadata) where:
            - table: uint32 numpy array of the 32 Q16 seeds
            - metadata: dict with table parameters
    """
    table = np.array(RSQRT_SEED_TABLE, dtype=np.uint32)
    table.flags.writeable = False

    metadata = {
        'num_entries': SEED_TABLE_SIZE,
        'fraction_bits': 16,
        'output_scale': float(Q16_ONE),
    }

    return table, metadata


def generate_rsqrt_seed_table(rounding: str = "nearest") -> np.ndarray:
    """
    Compute 2^16 / sqrt(2^e) for e = 0..31 in float64.

    Entry 0 is pinned to 65536 and every entry is kept at least 1 so the
    result satisfies validate_seed_table().

    Args:
        rounding: "floor" or "nearest"

    Returns:
        uint32 numpy array of 32 entries
    """
    if rounding not in ROUNDING_MODES:
        raise ValueError(f"rounding must be one of {ROUNDING_MODES}, got {rounding!r}")

    exponents = np.arange(SEED_TABLE_SIZE, dtype=np.float64)
    values = Q16_ONE / np.sqrt(np.exp2(exponents))

    if rounding == "floor":
        table = np.floor(values)
    else:
        table = np.round(values)

    table = np.maximum(table, 1).astype(np.uint32)
    table[0] = Q16_ONE
    return table


def test_builtin_seed_table():
    """Self test: builtin table invariants and closeness to the float values."""
    print("=" * 60)
    print("Testing builtin seed table")
    print("=" * 60)

    validate_seed_table(RSQRT_SEED_TABLE)
    table, meta = get_builtin_rsqrt_seed_table()
    assert meta['num_entries'] == 32
    assert table.dtype == np.uint32 and not table.flags.writeable

    nearest = generate_rsqrt_seed_table("nearest").astype(np.int64)
    floor = generate_rsqrt_seed_table("floor").astype(np.int64)
    builtin = table.astype(np.int64)
    for e in range(SEED_TABLE_SIZE):
        assert floor[e] <= builtin[e] <= nearest[e] + 1, f"entry {e} drifted: {builtin[e]}"
    diffs = [e for e in range(SEED_TABLE_SIZE) if builtin[e] != nearest[e]]
    print(f"Entries differing from round-to-nearest: {diffs}")
    print("[OK] builtin seed table is valid")
