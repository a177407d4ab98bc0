from __future__ import annotations

import pytest

from satcounter.math import (
    I8,
    I16,
    I32,
    I64,
    I128,
    IntBounds,
    Saturated,
    bounds_for,
    clamp,
    saturating_add,
    saturating_add_ex,
    saturating_sub,
    saturating_sub_ex,
)


def test_envelopes_match_twos_complement_ranges() -> None:
    assert (I8.min, I8.max) == (-128, 127)
    assert (I16.min, I16.max) == (-32768, 32767)
    assert (I32.min, I32.max) == (-2147483648, 2147483647)
    assert (I64.min, I64.max) == (-(2**63), 2**63 - 1)
    assert I128.byte_width == 16
    assert I32.type_name == "i32"


def test_bounds_for_known_and_unknown_widths() -> None:
    assert bounds_for(32) is I32
    with pytest.raises(ValueError, match="unsupported"):
        bounds_for(24)
    with pytest.raises(ValueError):
        IntBounds.signed(12)


def test_clamp() -> None:
    assert clamp(5, 0, 10) == 5
    assert clamp(-5, 0, 10) == 0
    assert clamp(50, 0, 10) == 10
    with pytest.raises(ValueError):
        clamp(1, 10, 0)


@pytest.mark.parametrize(
    "a,b,expected",
    [
        (1, 2, 3),
        (I32.max, 1, I32.max),
        (I32.max, I32.max, I32.max),
        (I32.min, -1, I32.min),
        (I32.min, I32.min, I32.min),
        (I32.min, I32.max, -1),
        (-42, I32.min, I32.min),
    ],
)
def test_saturating_add(a: int, b: int, expected: int) -> None:
    assert saturating_add(a, b, I32) == expected


@pytest.mark.parametrize(
    "a,b,expected",
    [
        (5, 3, 2),
        (I32.min, 1, I32.min),
        # subtracting MIN: -MIN is not an i32, the result must still clamp high
        (0, I32.min, I32.max),
        (-1, I32.min, I32.max),
        (-2, I32.min, I32.max - 1),
        (I32.min, I32.min, 0),
        (I32.max, I32.min, I32.max),
        (I32.min, I32.max, I32.min),
    ],
)
def test_saturating_sub(a: int, b: int, expected: int) -> None:
    assert saturating_sub(a, b, I32) == expected


def test_sub_of_min_differs_from_naive_negate_then_add() -> None:
    """
    Negating MIN first would wrap back to MIN in fixed width, and adding it
    would clamp low. Direct subtraction must clamp high.
    """
    wrapped_neg = I32.min  # -MIN in 32-bit two's complement
    assert saturating_add(0, wrapped_neg, I32) == I32.min
    assert saturating_sub(0, I32.min, I32) == I32.max


def test_ex_variants_report_clamping() -> None:
    assert saturating_add_ex(1, 1, I8) == Saturated(2, False)
    assert saturating_add_ex(100, 100, I8) == Saturated(127, True)
    assert saturating_sub_ex(-100, 100, I8) == Saturated(-128, True)
    assert saturating_sub_ex(-28, 100, I8) == Saturated(-128, False)


def test_default_bounds_are_i32() -> None:
    assert saturating_add(I32.max, 1) == I32.max
    assert saturating_sub(I32.min, 1) == I32.min
