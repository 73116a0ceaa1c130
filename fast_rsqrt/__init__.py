# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Fixed-point (Q16) reciprocal square root and 3D distance, integer only.

Bit-exact Python reference of the bare-metal C routines: every uint32 /
uint64 truncation of the target is reproduced explicitly.

Available operations:
- Exponent finder: clz32, exponent_bucket
- Seed table: RSQRT_SEED_TABLE, get_builtin_rsqrt_seed_table, validate_seed_table
- Estimator: interpolate_rsqrt_q16 (linear interpolation inside a bucket)
- Refiner: newton_step_q16 (one Newton-Raphson step)
- Reciprocal sqrt: reciprocal_sqrt_q16 (+ _batch numpy variant)
- Distance: distance3, distance3_checked (+ _batch numpy variant)
- Output: OutputSink (emit_text / emit_uint), format_uint
"""

from .bitscan import clz32, exponent_bucket
from .distance import (
    DistanceResult,
    distance3,
    distance3_batch,
    distance3_checked,
    distance3_float_reference,
)
from .interpolate import interpolate_rsqrt_q16
from .newton import newton_step_q16
from .output import OutputSink, format_uint
from .rsqrt import reciprocal_sqrt_q16, reciprocal_sqrt_q16_batch, rsqrt_float_reference
from .seed_table import (
    RSQRT_SEED_TABLE,
    generate_rsqrt_seed_table,
    get_builtin_rsqrt_seed_table,
    validate_seed_table,
)

__all__ = [
    'clz32',
    'exponent_bucket',
    'RSQRT_SEED_TABLE',
    'get_builtin_rsqrt_seed_table',
    'generate_rsqrt_seed_table',
    'validate_seed_table',
    'interpolate_rsqrt_q16',
    'newton_step_q16',
    'reciprocal_sqrt_q16',
    'reciprocal_sqrt_q16_batch',
    'rsqrt_float_reference',
    'DistanceResult',
    'distance3',
    'distance3_checked',
    'distance3_batch',
    'distance3_float_reference',
    'OutputSink',
    'format_uint',
]
