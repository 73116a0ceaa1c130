# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Text sink used by the demo: raw strings and unsigned decimals."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from ._checks import as_int


def format_uint(n: int) -> str:
    """
    Decimal digits of an unsigned integer.

    No sign, no grouping, no leading zeros; zero is "0". Digits are peeled
    off least-significant first with divmod, the way the target's printer
    does it without a libc.
    """
    n = as_int(n, "n")
    if n < 0:
        raise ValueError(f"format_uint expects an unsigned value, got {n}")
    if n == 0:
        return "0"

    digits = []
    while n:
        n, d = divmod(n, 10)
        digits.append(chr(ord("0") + d))
    return "".join(reversed(digits))


class OutputSink:
    """Writes text and unsigned integers to a stream (stdout by default)."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so redirected stdout (e.g. in tests) is honoured.
        return self._stream if self._stream is not None else sys.stdout

    def emit_text(self, s: str) -> None:
        if s:
            self.stream.write(s)

    def emit_uint(self, n: int) -> None:
        self.stream.write(format_uint(n))
