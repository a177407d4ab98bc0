"""
Call surface of the Counter contract.

Every entrypoint the host can dispatch is listed in ENTRYPOINTS. Arguments
arriving from the outside (JSON, CLI text) are validated here, before the
Counter is touched: an `int` parameter must be a representable integer of
the configured width.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..errors import BAD_ARGUMENT, BAD_ARITY, UNKNOWN_CALL, HostError
from ..math import I32, IntBounds
from ..version import __version__

CONSTRUCTOR = "constructor"
MESSAGE = "message"


@dataclass(frozen=True)
class Entrypoint:
    name: str
    kind: str
    params: Tuple[str, ...] = ()
    returns: bool = False
    mutates: bool = False

    def describe(self, bounds: IntBounds) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": self.name,
            "inputs": [{"name": p, "type": bounds.type_name} for p in self.params],
        }
        if self.kind == MESSAGE:
            out["mutates"] = self.mutates
            out["returns"] = bounds.type_name if self.returns else None
        return out


ENTRYPOINTS: Dict[str, Entrypoint] = {
    e.name: e
    for e in (
        Entrypoint("new", CONSTRUCTOR, params=("init_value",)),
        Entrypoint("default", CONSTRUCTOR),
        Entrypoint("get", MESSAGE, returns=True),
        Entrypoint("increment", MESSAGE, mutates=True),
        Entrypoint("decrement", MESSAGE, mutates=True),
        Entrypoint("modify_by", MESSAGE, params=("by",), mutates=True),
    )
}


def lookup(name: str, kind: Optional[str] = None) -> Entrypoint:
    entry = ENTRYPOINTS.get(name)
    if entry is None or (kind is not None and entry.kind != kind):
        expected = sorted(n for n, e in ENTRYPOINTS.items() if kind is None or e.kind == kind)
        raise HostError(
            f"unknown {kind or 'call'}: {name!r}",
            code=UNKNOWN_CALL,
            context={"call": name, "expected": expected},
        )
    return entry


def _coerce_int(value: Any, param: str, bounds: IntBounds) -> int:
    if isinstance(value, bool):
        value = None
    elif isinstance(value, str):
        try:
            value = int(value.strip(), 0)
        except ValueError:
            value = None
    if not isinstance(value, int):
        raise HostError(
            f"argument {param!r} must be an integer",
            code=BAD_ARGUMENT,
            context={"param": param},
        )
    if not bounds.contains(value):
        raise HostError(
            f"argument {param!r}={value} is out of range for {bounds.type_name}",
            code=BAD_ARGUMENT,
            context={"param": param, "min": bounds.min, "max": bounds.max},
        )
    return value


def coerce_args(entry: Entrypoint, args: Sequence[Any], bounds: IntBounds = I32) -> List[int]:
    """Validate arity and types of `args` for `entry`; return them as ints."""
    if len(args) != len(entry.params):
        raise HostError(
            f"{entry.name} takes {len(entry.params)} argument(s), got {len(args)}",
            code=BAD_ARITY,
            context={"call": entry.name, "expected": len(entry.params), "got": len(args)},
        )
    return [_coerce_int(v, p, bounds) for v, p in zip(args, entry.params)]


def manifest(bounds: IntBounds = I32) -> Dict[str, Any]:
    """JSON-ready description of the contract's entrypoints."""
    return {
        "name": "Counter",
        "version": __version__,
        "intBits": bounds.bits,
        "constructors": [e.describe(bounds) for e in ENTRYPOINTS.values() if e.kind == CONSTRUCTOR],
        "messages": [e.describe(bounds) for e in ENTRYPOINTS.values() if e.kind == MESSAGE],
    }


__all__ = ["Entrypoint", "ENTRYPOINTS", "CONSTRUCTOR", "MESSAGE", "lookup", "coerce_args", "manifest"]
