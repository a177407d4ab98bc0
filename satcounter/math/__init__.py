# -*- coding: utf-8 -*-
"""
satcounter.math
===============

Integer-only saturating arithmetic over fixed-width signed ranges.

Conventions
-----------
- Python ints are unbounded, so every operation computes the exact result
  first and then clamps it into the target range. There is no intermediate
  overflow to detect.
- "sat" variants never raise because of range; they clamp.
- "_ex" variants return the clamped value together with a flag telling
  whether clamping happened. They are opt-in; the plain variants stay silent.

Examples
--------
    from satcounter.math import I32, saturating_add, saturating_sub

    saturating_add(I32.max, 1, I32)    # I32.max
    saturating_sub(-42, I32.min, I32)  # 2147483606
    saturating_sub(0, I32.min, I32)    # I32.max (no negation of MIN first)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Final, NamedTuple


# ---------------------------------------------------------------------------
# Numeric envelopes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IntBounds:
    """Inclusive range of a two's-complement signed integer of `bits` width."""

    bits: int
    min: int
    max: int

    @classmethod
    def signed(cls, bits: int) -> "IntBounds":
        if bits <= 0 or bits % 8 != 0:
            raise ValueError(f"bit width must be a positive multiple of 8, got {bits}")
        return cls(bits=bits, min=-(1 << (bits - 1)), max=(1 << (bits - 1)) - 1)

    @property
    def byte_width(self) -> int:
        return self.bits // 8

    @property
    def type_name(self) -> str:
        return f"i{self.bits}"

    def contains(self, x: int) -> bool:
        return self.min <= x <= self.max


I8: Final[IntBounds] = IntBounds.signed(8)
I16: Final[IntBounds] = IntBounds.signed(16)
I32: Final[IntBounds] = IntBounds.signed(32)
I64: Final[IntBounds] = IntBounds.signed(64)
I128: Final[IntBounds] = IntBounds.signed(128)

SUPPORTED_BITS: Final[Dict[int, IntBounds]] = {
    b.bits: b for b in (I8, I16, I32, I64, I128)
}


def bounds_for(bits: int) -> IntBounds:
    """Return the predefined envelope for `bits`; raise ValueError otherwise."""
    try:
        return SUPPORTED_BITS[bits]
    except KeyError:
        raise ValueError(
            f"unsupported integer width {bits}; expected one of {sorted(SUPPORTED_BITS)}"
        ) from None


# ---------------------------------------------------------------------------
# Clamp & saturating add/sub
# ---------------------------------------------------------------------------


class Saturated(NamedTuple):
    value: int
    clamped: bool


def clamp(x: int, lo: int, hi: int) -> int:
    """Return x clamped into [lo, hi]."""
    if lo > hi:
        raise ValueError(f"bad clamp range [{lo}, {hi}]")
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


def _clamp_ex(x: int, bounds: IntBounds) -> Saturated:
    if x > bounds.max:
        return Saturated(bounds.max, True)
    if x < bounds.min:
        return Saturated(bounds.min, True)
    return Saturated(x, False)


def saturating_add_ex(a: int, b: int, bounds: IntBounds = I32) -> Saturated:
    return _clamp_ex(a + b, bounds)


def saturating_sub_ex(a: int, b: int, bounds: IntBounds = I32) -> Saturated:
    # Subtract directly: -bounds.min is not representable in the range.
    return _clamp_ex(a - b, bounds)


def saturating_add(a: int, b: int, bounds: IntBounds = I32) -> int:
    """Saturating add in the signed `bounds` range."""
    return saturating_add_ex(a, b, bounds).value


def saturating_sub(a: int, b: int, bounds: IntBounds = I32) -> int:
    """Saturating subtract in the signed `bounds` range."""
    return saturating_sub_ex(a, b, bounds).value


__all__ = [
    "IntBounds",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    "SUPPORTED_BITS",
    "bounds_for",
    "Saturated",
    "clamp",
    "saturating_add",
    "saturating_sub",
    "saturating_add_ex",
    "saturating_sub_ex",
]
