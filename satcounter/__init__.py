"""
satcounter - a persistent signed counter with saturating arithmetic.

Public entrypoints:

- Counter: the contract state object (new/default/get/increment/decrement/modify_by)
- run_call(call, args=(), *, state_path=None) -> dict
    Deploy or invoke the counter held in a store and return a result envelope.
- manifest(bits=None) -> dict
    Description of the contract's constructors and messages.

The host runtime is imported lazily so `from satcounter import Counter`
stays dependency-free.
"""

from __future__ import annotations

import importlib
from typing import Any, Dict, Optional, Sequence

from .contract import Counter
from .math import I32, IntBounds, saturating_add, saturating_sub
from .version import __version__


def version() -> str:
    """Return the satcounter version string."""
    return __version__


def run_call(call: str, args: Sequence[Any] = (), *, state_path: Optional[str] = None) -> Dict[str, Any]:
    host = importlib.import_module(".runtime.host", __name__)
    return host.run_call(call, args, state_path=state_path)


def manifest(bits: Optional[int] = None) -> Dict[str, Any]:
    from .config import load_config
    from .math import bounds_for
    from .runtime import abi

    bounds = bounds_for(bits) if bits is not None else load_config().bounds
    return abi.manifest(bounds)


__all__ = [
    "__version__",
    "version",
    "Counter",
    "IntBounds",
    "I32",
    "saturating_add",
    "saturating_sub",
    "run_call",
    "manifest",
]
