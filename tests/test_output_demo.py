# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the output sink and the demo transcript."""

import contextlib
import io
import unittest

from fast_rsqrt.demo import run_demo
from fast_rsqrt.output import OutputSink, format_uint

DEFAULT_TRANSCRIPT = (
    "===== Fast Reciprocal Square Root Demo =====\n"
    "fast_rsqrt(1) = 65536\n"
    "fast_rsqrt(5) = 29308\n"
    "fast_rsqrt(16) = 16384\n"
    "fast_rsqrt(1000000) = 65\n"
    "Distance of (1, 2, 3) = 3\n"
)


class FormatUintTests(unittest.TestCase):
    def test_zero(self):
        self.assertEqual(format_uint(0), "0")

    def test_matches_str(self):
        for n in (1, 9, 10, 65536, 1000000, 0xFFFFFFFF, 10 ** 30):
            with self.subTest(n=n):
                self.assertEqual(format_uint(n), str(n))

    def test_rejects_negative_and_non_integers(self):
        with self.assertRaises(ValueError):
            format_uint(-1)
        with self.assertRaises(TypeError):
            format_uint("12")


class OutputSinkTests(unittest.TestCase):
    def test_writes_to_given_stream(self):
        stream = io.StringIO()
        sink = OutputSink(stream)
        sink.emit_text("n = ")
        sink.emit_uint(42)
        sink.emit_text("")
        self.assertEqual(stream.getvalue(), "n = 42")

    def test_defaults_to_current_stdout(self):
        captured = io.StringIO()
        sink = OutputSink()
        with contextlib.redirect_stdout(captured):
            sink.emit_uint(0)
        self.assertEqual(captured.getvalue(), "0")


class DemoTests(unittest.TestCase):
    def test_default_transcript(self):
        stream = io.StringIO()
        run_demo(OutputSink(stream))
        self.assertEqual(stream.getvalue(), DEFAULT_TRANSCRIPT)

    def test_custom_values_and_vector(self):
        stream = io.StringIO()
        run_demo(OutputSink(stream), values=[0, 4], vector=[3, 4, 0], header="demo")
        self.assertEqual(
            stream.getvalue(),
            "demo\n"
            "fast_rsqrt(0) = 4294967295\n"
            "fast_rsqrt(4) = 32768\n"
            "Distance of (3, 4, 0) = 4\n",
        )

    def test_negative_components_print_as_uint32(self):
        stream = io.StringIO()
        run_demo(OutputSink(stream), values=[], vector=[-1, 0, 0], header="")
        self.assertEqual(stream.getvalue(), "\nDistance of (4294967295, 0, 0) = 1\n")

    def test_vector_must_have_three_components(self):
        with self.assertRaises(ValueError):
            run_demo(OutputSink(io.StringIO()), vector=[1, 2])


if __name__ == "__main__":
    unittest.main()
