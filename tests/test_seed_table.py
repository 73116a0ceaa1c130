# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for fast_rsqrt.seed_table."""

import unittest

import numpy as np

from fast_rsqrt.seed_table import (
    RSQRT_SEED_TABLE,
    generate_rsqrt_seed_table,
    get_builtin_rsqrt_seed_table,
    validate_seed_table,
)


class SeedTableTests(unittest.TestCase):
    def test_literal_values(self):
        self.assertEqual(len(RSQRT_SEED_TABLE), 32)
        self.assertEqual(RSQRT_SEED_TABLE[0], 65536)
        self.assertEqual(RSQRT_SEED_TABLE[1], 46341)
        self.assertEqual(RSQRT_SEED_TABLE[19], 90)
        self.assertEqual(RSQRT_SEED_TABLE[-1], 1)

    def test_each_entry_is_previous_over_sqrt2(self):
        for e in range(1, 32):
            ratio = RSQRT_SEED_TABLE[e - 1] / RSQRT_SEED_TABLE[e]
            with self.subTest(e=e):
                # Coarse entries (single digits) are far from sqrt(2) in ratio.
                if RSQRT_SEED_TABLE[e] >= 64:
                    self.assertAlmostEqual(ratio, 2 ** 0.5, delta=0.02)
                self.assertGreater(ratio, 1.0)

    def test_builtin_array_is_read_only_uint32(self):
        table, meta = get_builtin_rsqrt_seed_table()
        self.assertEqual(table.dtype, np.uint32)
        self.assertEqual(meta["num_entries"], 32)
        self.assertEqual(meta["output_scale"], 65536.0)
        with self.assertRaises(ValueError):
            table[0] = 1

    def test_generated_nearest_table_is_valid(self):
        table = generate_rsqrt_seed_table("nearest")
        validate_seed_table(table)
        self.assertEqual(int(table[2]), 32768)

    def test_generated_floor_table_has_a_tie(self):
        # floor(2.83) == floor(2.0): entries 29 and 30 collide
        table = generate_rsqrt_seed_table("floor")
        self.assertEqual(int(table[29]), int(table[30]))
        with self.assertRaises(ValueError):
            validate_seed_table(table)

    def test_generated_nearest_differs_only_at_entry_19(self):
        nearest = generate_rsqrt_seed_table("nearest")
        diffs = [e for e in range(32) if int(nearest[e]) != RSQRT_SEED_TABLE[e]]
        self.assertEqual(diffs, [19])

    def test_unknown_rounding_mode(self):
        with self.assertRaises(ValueError):
            generate_rsqrt_seed_table("ceil")

    def test_validation_rejects_non_decreasing_table(self):
        table = list(RSQRT_SEED_TABLE)
        table[10] = table[9]
        with self.assertRaises(ValueError):
            validate_seed_table(table)


if __name__ == "__main__":
    unittest.main()
