#!/usr/bin/env python3
# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Seed Table Export Utility

Writes the reciprocal square root seed table for the C runtime and reports
how accurate the full Q16 pipeline is against a float64 reference.

Usage:
    # C header with the builtin table
    python -m fast_rsqrt.export_table --output build/rsqrt_table.h

    # Raw little-endian uint32 words of a regenerated table
    python -m fast_rsqrt.export_table --output build/rsqrt_table.bin --format bin --rounding nearest
"""

import argparse
import logging
import struct
from pathlib import Path

import numpy as np

from .constants import Q16_ONE, UINT32_MAX
from .rsqrt import reciprocal_sqrt_q16_batch, rsqrt_float_reference
from .seed_table import (
    ROUNDING_MODES,
    generate_rsqrt_seed_table,
    get_builtin_rsqrt_seed_table,
    validate_seed_table,
)

logger = logging.getLogger(__name__)


def save_table_binary(table, output_path):
    """
    Save the table as little-endian uint32 words, no header.

    Size: num_entries * 4 bytes (32 entries -> 128 bytes).
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'wb') as f:
        for value in table:
            f.write(struct.pack('<I', int(value)))

    logger.info("Saved table to %s (%d bytes)", output_path, output_path.stat().st_size)


def save_table_c_header(table, output_path):
    """Save the table as a C header (static const uint32_t rsqrt_table[])."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        f.write("// Reciprocal sqrt seed table (generated by fast_rsqrt.export_table)\n")
        f.write("// Entry e ~ 2^16 / sqrt(2^e) in Q16. DO NOT EDIT MANUALLY\n\n")
        f.write("#include <stdint.h>\n\n")
        f.write(f"#define RSQRT_TABLE_SIZE {len(table)}\n\n")

        f.write("static const uint32_t rsqrt_table[RSQRT_TABLE_SIZE] = {\n")
        for i in range(0, len(table), 8):
            chunk = table[i:i+8]
            values_str = ', '.join(f'{int(v):6d}' for v in chunk)
            f.write(f"    {values_str},\n")
        f.write("};\n")

    logger.info("Saved C header to %s", output_path)


def validate_table_accuracy(num_test_points=1000, max_input=1 << 20, seed=0):
    """
    Measure reciprocal_sqrt_q16 against 1/sqrt(x) in float64.

    Parameters
    ----------
    num_test_points : int
        Number of random inputs drawn from [1, max_input]
    max_input : int
        Largest input tested. Above ~2^20 the Q16 result keeps few
        significant bits, so relative errors there say little about the table.
    seed : int
        Seed for the input sampler

    Returns
    -------
    validation_results : dict
        - 'max_abs_error': Maximum absolute error (Q16 units)
        - 'mean_abs_error': Mean absolute error (Q16 units)
        - 'max_rel_error': Maximum relative error (%)
        - 'mean_rel_error': Mean relative error (%)
    """
    if not 1 <= max_input <= UINT32_MAX:
        raise ValueError(f"max_input must be in [1, {UINT32_MAX}], got {max_input}")

    rng = np.random.default_rng(seed)
    test_inputs = rng.integers(1, max_input, size=num_test_points, endpoint=True)

    rsqrt_true = rsqrt_float_reference(test_inputs) * Q16_ONE
    rsqrt_q16 = reciprocal_sqrt_q16_batch(test_inputs).astype(np.float64)

    abs_errors = np.abs(rsqrt_true - rsqrt_q16)
    rel_errors = abs_errors / rsqrt_true * 100  # %

    return {
        'max_abs_error': float(np.max(abs_errors)),
        'mean_abs_error': float(np.mean(abs_errors)),
        'max_rel_error': float(np.max(rel_errors)),
        'mean_rel_error': float(np.mean(rel_errors)),
    }


def print_validation_report(validation_results):
    """Print validation report in human-readable format."""
    print("\n" + "="*60)
    print("RSQRT Q16 VALIDATION REPORT")
    print("="*60)
    print(f"Max Absolute Error:  {validation_results['max_abs_error']:.3f} (Q16 units)")
    print(f"Mean Absolute Error: {validation_results['mean_abs_error']:.3f} (Q16 units)")
    print(f"Max Relative Error:  {validation_results['max_rel_error']:.3f}%")
    print(f"Mean Relative Error: {validation_results['mean_rel_error']:.3f}%")
    print("="*60)

    if validation_results['mean_rel_error'] < 0.1:
        print("[PASS] EXCELLENT: <0.1% mean error")
    elif validation_results['mean_rel_error'] < 1.0:
        print("[PASS] GOOD: <1% mean error")
    else:
        print("[WARN]  COARSE: >1% mean error (expected only for large inputs)")
    print()


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Export the Q16 reciprocal sqrt seed table for the C runtime"
    )
    parser.add_argument('--output', type=str, default='build/rsqrt_table.h',
                        help='Output path (default: build/rsqrt_table.h)')
    parser.add_argument('--format', choices=('header', 'bin'), default='header',
                        help='C header or raw little-endian uint32 words')
    parser.add_argument('--rounding', choices=('builtin',) + ROUNDING_MODES, default='builtin',
                        help='Export the builtin table or regenerate it with floor/nearest rounding')
    parser.add_argument('--validate', action='store_true',
                        help='Print accuracy of the Q16 pipeline against float64')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if args.rounding == 'builtin':
        table, _ = get_builtin_rsqrt_seed_table()
    else:
        table = generate_rsqrt_seed_table(args.rounding)
    try:
        validate_seed_table(table)
    except ValueError as exc:
        logger.error("Refusing to export %s table: %s", args.rounding, exc)
        return 1

    if args.format == 'bin':
        save_table_binary(table, args.output)
    else:
        save_table_c_header(table, args.output)

    if args.validate:
        print_validation_report(validate_table_accuracy())

    return 0


if __name__ == '__main__':
    raise SystemExit(main())
