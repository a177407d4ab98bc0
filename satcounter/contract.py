"""
Saturating Counter contract.

A single signed fixed-width integer. Every mutation clamps to the
representable range instead of wrapping or failing.

Public ABI:

    new(init_value: iW) -> Counter
    default() -> Counter                  # new(0)
    get() -> iW
    increment() -> None
    decrement() -> None
    modify_by(by: iW) -> None

Persistence is not handled here: the host loads a Counter, calls one method
and stores it back (see satcounter.runtime.host).
"""

from __future__ import annotations

from .math import I32, IntBounds, saturating_add, saturating_add_ex, saturating_sub


def _require_int(value: object, what: str) -> None:
    # bool is an int subclass but never a valid counter value or delta
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{what} must be int, got {type(value).__name__}")


class Counter:
    """Stores a single bounded signed integer value."""

    __slots__ = ("_value", "bounds")

    def __init__(self, init_value: int, bounds: IntBounds = I32) -> None:
        _require_int(init_value, "counter value")
        if not bounds.contains(init_value):
            raise ValueError(
                f"{init_value} is not representable as {bounds.type_name}"
            )
        self._value = init_value
        self.bounds = bounds

    @classmethod
    def new(cls, init_value: int, bounds: IntBounds = I32) -> "Counter":
        """Constructor that initializes the value to the given `init_value`."""
        return cls(init_value, bounds)

    @classmethod
    def default(cls, bounds: IntBounds = I32) -> "Counter":
        """Constructor that initializes the value to 0."""
        return cls.new(0, bounds)

    def get(self) -> int:
        return self._value

    def increment(self) -> None:
        """Increment by one; stays at the maximum instead of overflowing."""
        self._value = saturating_add(self._value, 1, self.bounds)

    def decrement(self) -> None:
        """Decrement by one; stays at the minimum instead of underflowing."""
        self._value = saturating_sub(self._value, 1, self.bounds)

    def modify_by(self, by: int) -> None:
        """Add `by` (positive or negative), clamping to the range."""
        _require_int(by, "delta")
        self._value = saturating_add(self._value, by, self.bounds)

    def modify_by_reporting(self, by: int) -> bool:
        """Same transition as modify_by; returns True if the result was clamped."""
        _require_int(by, "delta")
        self._value, clamped = saturating_add_ex(self._value, by, self.bounds)
        return clamped

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Counter):
            return NotImplemented
        return self._value == other._value and self.bounds == other.bounds

    def __repr__(self) -> str:
        return f"Counter({self._value}, {self.bounds.type_name})"


__all__ = ["Counter"]
