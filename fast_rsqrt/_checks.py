# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Argument checks shared by the scalar and batch entry points."""

from __future__ import annotations

import numpy as np

from .constants import INT32_MAX, INT32_MIN, UINT32_MAX


def as_int(value, name: str) -> int:
    """Return ``value`` as a Python int; accepts Python and numpy integers."""
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    return int(value)


def as_uint32(value, name: str) -> int:
    value = as_int(value, name)
    if value < 0 or value > UINT32_MAX:
        raise ValueError(f"{name} must be in [0, {UINT32_MAX}], got {value}")
    return value


def as_int32(value, name: str) -> int:
    value = as_int(value, name)
    if value < INT32_MIN or value > INT32_MAX:
        raise ValueError(f"{name} must be in [{INT32_MIN}, {INT32_MAX}], got {value}")
    return value


def as_int_array(values, name: str, low: int, high: int) -> np.ndarray:
    """
    Convert ``values`` to an int64 array and check every element is in [low, high].

    Float, bool and object arrays are rejected so that no value is rounded
    silently on the way in.
    """
    arr = np.asarray(values)
    if arr.dtype.kind not in ("i", "u"):
        raise TypeError(f"{name} must be an integer array, got dtype {arr.dtype}")
    if arr.size and (arr.min() < low or arr.max() > high):
        raise ValueError(
            f"{name} values must be in [{low}, {high}], got range "
            f"[{arr.min()}, {arr.max()}]"
        )
    return arr.astype(np.int64)
