# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Shared numeric constants for the fixed-point reciprocal square root.

The reference routine runs on 32-bit unsigned registers with 64-bit
intermediates. Python integers never overflow, so every truncation the
reference performs is reproduced with one of the masks below.
"""

# Q16 fixed-point representation:
# - unsigned 32-bit integer storing value * 2^16
Q16_FRACTION_BITS = 16
Q16_ONE = 1 << Q16_FRACTION_BITS        # 65536 (1.0 in Q16)

# uint32 / uint64 register widths
UINT32_BITS = 32
UINT32_MAX = (1 << UINT32_BITS) - 1     # 0xFFFFFFFF
UINT64_MASK = (1 << 64) - 1

# int32 bounds for distance components
INT32_MIN = -(1 << 31)                  # -2147483648
INT32_MAX = (1 << 31) - 1               # 2147483647

# Seed table covers one bucket per possible exponent of a uint32.
SEED_TABLE_SIZE = UINT32_BITS           # 32
TOP_EXPONENT = SEED_TABLE_SIZE - 1      # 31

# Newton-Raphson: 3 * 2^32 is "3.0" against a Q32 y^2, and >> 33 rescales
# Q48 back to Q16 while halving.
NEWTON_THREE_Q32 = 3 << 32
NEWTON_RESCALE_SHIFT = 33
NEWTON_ITERATIONS = 2
