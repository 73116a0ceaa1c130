# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Demonstration transcript of reciprocal_sqrt_q16 and distance3.

Reproduces the output of the bare-metal demo program through an OutputSink;
run_demo.py at the repository root wires it to a hydra config.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .constants import UINT32_MAX
from .distance import distance3
from .output import OutputSink
from .rsqrt import reciprocal_sqrt_q16

logger = logging.getLogger(__name__)

DEFAULT_HEADER = "===== Fast Reciprocal Square Root Demo ====="
DEFAULT_VALUES = (1, 5, 16, 1000000)
DEFAULT_VECTOR = (1, 2, 3)


def run_demo(
    sink: Optional[OutputSink] = None,
    values: Sequence[int] = DEFAULT_VALUES,
    vector: Sequence[int] = DEFAULT_VECTOR,
    header: str = DEFAULT_HEADER,
) -> None:
    """
    Emit the demo transcript.

    Args:
        sink: Output sink (stdout if None)
        values: Raw uint32 inputs for reciprocal_sqrt_q16
        vector: Three int32 components for distance3
        header: First line of the transcript
    """
    if len(vector) != 3:
        raise ValueError(f"vector must have 3 components, got {len(vector)}")
    sink = sink if sink is not None else OutputSink()

    sink.emit_text(header + "\n")

    for n in values:
        result = reciprocal_sqrt_q16(n)
        logger.debug("reciprocal_sqrt_q16(%d) = %d", n, result)
        sink.emit_text("fast_rsqrt(")
        sink.emit_uint(n)
        sink.emit_text(") = ")
        sink.emit_uint(result)
        sink.emit_text("\n")

    ax, ay, az = (int(v) for v in vector)
    dist = distance3(ax, ay, az)
    logger.debug("distance3(%d, %d, %d) = %d", ax, ay, az, dist)

    # Components are printed as uint32, like the target's print_uint does.
    sink.emit_text("Distance of (")
    sink.emit_uint(ax & UINT32_MAX)
    sink.emit_text(", ")
    sink.emit_uint(ay & UINT32_MAX)
    sink.emit_text(", ")
    sink.emit_uint(az & UINT32_MAX)
    sink.emit_text(") = ")
    sink.emit_uint(dist)
    sink.emit_text("\n")
