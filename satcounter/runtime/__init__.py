"""
satcounter runtime - the host side of the Counter contract.

Convenience re-exports so callers can do:

    from satcounter.runtime import Host, MemoryBackend, JsonFileBackend
    from satcounter.runtime import abi, storage  # module namespaces

Nothing in here is needed to use `satcounter.contract.Counter` directly.
"""

from __future__ import annotations

from . import abi as abi
from . import codec as codec
from . import storage_api as storage
from .host import CallResult, Host, run_call
from .storage_api import JsonFileBackend, MemoryBackend, StorageBackend, open_backend

__all__ = [
    "Host",
    "CallResult",
    "run_call",
    "StorageBackend",
    "MemoryBackend",
    "JsonFileBackend",
    "open_backend",
    "abi",
    "codec",
    "storage",
]
