"""Lookup tables for the procedural texture unit."""

from __future__ import annotations

from collections.abc import Iterable

LUT_SIZE = 128
COLOR_LUT_SIZE = 256


def _clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def proctex_lut_from_array(values: Iterable[float]) -> list[int]:
    """Build a 128-entry LUT from 129 samples in ``[0, 1]``.

    Each entry holds the 12-bit level in its low bits and the 12-bit
    difference to the next level above them.
    """
    samples = [float(v) for v in values]
    if len(samples) != LUT_SIZE + 1:
        raise ValueError(f"expected {LUT_SIZE + 1} samples, got {len(samples)}")
    levels = [int(0xFFF * _clamp(v)) for v in samples]
    return [cur | (((nxt - cur) & 0xFFF) << 12) for cur, nxt in zip(levels, levels[1:])]


def _channel_diff(cur: int, nxt: int, shift: int) -> int:
    a = (cur >> shift) & 0xFF
    b = (nxt >> shift) & 0xFF
    return (((b - a) >> 1) & 0xFF) << shift


def _color_diff(cur: int, nxt: int) -> int:
    result = 0
    for shift in (0, 8, 16, 24):
        result |= _channel_diff(cur, nxt, shift)
    return result


class ProcTexColorLut:
    """The 256-entry color table and its per-entry difference table."""

    def __init__(self) -> None:
        self.color = [0] * COLOR_LUT_SIZE
        self.diff = [0] * COLOR_LUT_SIZE

    def write(self, colors: Iterable[int], offset: int = 0) -> None:
        """Store ``colors`` starting at ``offset`` and compute their differences."""
        values = [int(c) for c in colors]
        if not values:
            raise ValueError("no colors to write")
        if any(not 0 <= c <= 0xFFFFFFFF for c in values):
            raise ValueError("colors must be 32-bit unsigned values")
        end = offset + len(values)
        if offset < 0 or end > COLOR_LUT_SIZE:
            raise ValueError("colors do not fit in the table")
        self.color[offset:end] = values
        diffs = [_color_diff(cur, nxt) for cur, nxt in zip(values, values[1:])]
        self.diff[offset:end] = diffs + [0]