from __future__ import annotations

import pytest

from satcounter.contract import Counter
from satcounter.math import I8, I32, I64

I32_MIN = -2147483648
I32_MAX = 2147483647


def test_default_works() -> None:
    counter = Counter.default()
    assert counter.get() == 0
    assert counter.bounds == I32


def test_default_delegates_to_new(monkeypatch: pytest.MonkeyPatch) -> None:
    """default() must go through new() rather than build the object itself."""
    seen = []
    orig = Counter.new.__func__  # type: ignore[attr-defined]

    def spy(cls, init_value, bounds=I32):
        seen.append(init_value)
        return orig(cls, init_value, bounds)

    monkeypatch.setattr(Counter, "new", classmethod(spy))
    assert Counter.default().get() == 0
    assert seen == [0]


@pytest.mark.parametrize("v", [I32_MIN, -1, 0, 1, 42, I32_MAX])
def test_new_keeps_value_exactly(v: int) -> None:
    assert Counter.new(v).get() == v


def test_increment_works() -> None:
    counter = Counter.new(42)
    counter.increment()
    assert counter.get() == 43


def test_increment_does_not_overflow() -> None:
    counter = Counter.new(I32_MAX)
    counter.increment()
    assert counter.get() == I32_MAX


def test_decrement_works() -> None:
    counter = Counter.new(42)
    counter.decrement()
    assert counter.get() == 41


def test_decrement_does_not_overflow() -> None:
    counter = Counter.new(I32_MIN)
    counter.decrement()
    assert counter.get() == I32_MIN


def test_modify_by_works() -> None:
    counter = Counter.new(42)
    counter.modify_by(10)
    assert counter.get() == 52


def test_modify_by_does_not_underflow() -> None:
    counter = Counter.new(-42)
    counter.modify_by(I32_MIN)
    assert counter.get() == I32_MIN


def test_modify_by_does_not_overflow() -> None:
    counter = Counter.new(42)
    counter.modify_by(I32_MAX)
    assert counter.get() == I32_MAX


def test_modify_by_negative_delta_within_range() -> None:
    counter = Counter.new(10)
    counter.modify_by(-25)
    assert counter.get() == -15


def test_repeated_saturation_is_sticky() -> None:
    counter = Counter.new(I32_MAX - 1)
    for _ in range(5):
        counter.increment()
    assert counter.get() == I32_MAX
    counter.decrement()
    assert counter.get() == I32_MAX - 1


def test_modify_by_reporting_flags_only_clamped_results() -> None:
    counter = Counter.new(0)
    assert counter.modify_by_reporting(5) is False
    assert counter.get() == 5

    assert counter.modify_by_reporting(I32_MAX) is True
    assert counter.get() == I32_MAX

    # Reaching the bound exactly is not clamping.
    counter = Counter.new(I32_MIN + 3)
    assert counter.modify_by_reporting(-3) is False
    assert counter.get() == I32_MIN


def test_reporting_matches_silent_variant() -> None:
    a = Counter.new(-42)
    b = Counter.new(-42)
    a.modify_by(I32_MIN)
    b.modify_by_reporting(I32_MIN)
    assert a == b


def test_other_widths_saturate_at_their_own_bounds() -> None:
    small = Counter.new(127, I8)
    small.increment()
    assert small.get() == 127
    small.modify_by(-1000)
    assert small.get() == -128

    wide = Counter.new(I32_MAX, I64)
    wide.increment()
    assert wide.get() == I32_MAX + 1


@pytest.mark.parametrize("bad", [I32_MAX + 1, I32_MIN - 1, 2**64])
def test_new_rejects_unrepresentable_values(bad: int) -> None:
    with pytest.raises(ValueError, match="i32"):
        Counter.new(bad)


@pytest.mark.parametrize("bad", [1.5, "3", None, True])
def test_modify_by_rejects_non_integer_deltas(bad) -> None:
    c = Counter.new(42)
    with pytest.raises(TypeError):
        c.modify_by(bad)
    with pytest.raises(TypeError):
        c.modify_by_reporting(bad)
    assert c.get() == 42


@pytest.mark.parametrize("bad", [1.5, "3", None, True])
def test_new_rejects_non_integers(bad) -> None:
    with pytest.raises(TypeError):
        Counter.new(bad)


def test_repr_and_equality() -> None:
    assert repr(Counter.new(7)) == "Counter(7, i32)"
    assert Counter.new(7) == Counter.new(7)
    assert Counter.new(7) != Counter.new(8)
    assert Counter.new(7) != Counter.new(7, I64)
