"""
satcounter.runtime.storage_api - key/value stores the host persists into.

- MemoryBackend: thread-safe in-process dict for tests and one-shot runs.
- JsonFileBackend: a single JSON file ({hex key: hex value}) written
  atomically, so state survives across separate CLI invocations.

Both satisfy the StorageBackend protocol; the host accepts any object that
does (e.g. an adapter over a real state DB).
"""

from __future__ import annotations

import binascii
import json
import logging
import os
import threading
from pathlib import Path
from typing import Dict, Optional, Protocol, Union, runtime_checkable

from ..config import load_config
from ..errors import STORAGE, HostError

log = logging.getLogger(__name__)


# ---------------------------- Backend API ---------------------------- #


@runtime_checkable
class StorageBackend(Protocol):
    """Minimal backend interface for contract storage."""

    def get(self, key: bytes) -> Optional[bytes]: ...
    def set(self, key: bytes, value: bytes) -> None: ...
    def delete(self, key: bytes) -> None: ...
    def exists(self, key: bytes) -> bool: ...


def check_key(key: bytes) -> None:
    if not isinstance(key, (bytes, bytearray)):
        raise HostError("storage key must be bytes", code=STORAGE)
    if len(key) == 0:
        raise HostError("storage key must be non-empty", code=STORAGE)
    max_len = load_config().max_storage_key_bytes
    if len(key) > max_len:
        raise HostError(
            f"storage key too long (>{max_len} bytes)",
            code=STORAGE,
            context={"len": len(key)},
        )


def check_value(value: bytes) -> None:
    if not isinstance(value, (bytes, bytearray)):
        raise HostError("storage value must be bytes", code=STORAGE)


class MemoryBackend:
    """Thread-safe in-memory backend for local runs and tests."""

    def __init__(self, initial: Optional[Dict[bytes, bytes]] = None) -> None:
        self._store: Dict[bytes, bytes] = dict(initial or {})
        self._lock = threading.RLock()

    def get(self, key: bytes) -> Optional[bytes]:
        check_key(key)
        with self._lock:
            return self._store.get(bytes(key))

    def set(self, key: bytes, value: bytes) -> None:
        check_key(key)
        check_value(value)
        with self._lock:
            self._store[bytes(key)] = bytes(value)

    def delete(self, key: bytes) -> None:
        check_key(key)
        with self._lock:
            self._store.pop(bytes(key), None)

    def exists(self, key: bytes) -> bool:
        check_key(key)
        with self._lock:
            return bytes(key) in self._store

    def snapshot(self) -> Dict[bytes, bytes]:
        with self._lock:
            return dict(self._store)


# ------------------------------ File-backed ------------------------------ #


def _atomic_write(path: Path, data: bytes) -> None:
    tmp = path.with_name("." + path.name + ".tmp")
    with open(tmp, "wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp, path)  # atomic on POSIX


class JsonFileBackend(MemoryBackend):
    """
    Persist the whole key space in one JSON file.

    The file is read once on construction and rewritten after every
    mutation. A missing file means an empty store.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path).expanduser().resolve()
        super().__init__(self._read())

    def _read(self) -> Dict[bytes, bytes]:
        try:
            payload = self.path.read_bytes()
        except FileNotFoundError:
            log.debug("state file %s not found; starting empty", self.path)
            return {}
        except OSError as e:
            raise HostError(
                f"cannot read state file: {e.strerror or e}",
                code=STORAGE,
                context={"path": str(self.path)},
            ) from e
        try:
            raw = json.loads(payload.decode("utf-8"))
            if not isinstance(raw, dict):
                raise ValueError("top-level JSON value must be an object")
            return {bytes.fromhex(k): bytes.fromhex(v) for k, v in raw.items()}
        except (ValueError, TypeError, binascii.Error) as e:
            raise HostError(
                f"unreadable state file: {e}",
                code=STORAGE,
                context={"path": str(self.path)},
            ) from e

    def _flush(self) -> None:
        doc = {k.hex(): v.hex() for k, v in sorted(self.snapshot().items())}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            _atomic_write(self.path, json.dumps(doc, indent=2, sort_keys=True).encode("utf-8"))
        except OSError as e:
            raise HostError(
                f"cannot write state file: {e.strerror or e}",
                code=STORAGE,
                context={"path": str(self.path)},
            ) from e

    def _restore(self, key: bytes, previous: Optional[bytes]) -> None:
        if previous is None:
            self._store.pop(bytes(key), None)
        else:
            self._store[bytes(key)] = previous

    def set(self, key: bytes, value: bytes) -> None:
        with self._lock:
            previous = super().get(key)
            super().set(key, value)
            try:
                self._flush()
            except HostError:
                # keep the map in step with what is on disk
                self._restore(key, previous)
                raise

    def delete(self, key: bytes) -> None:
        with self._lock:
            previous = super().get(key)
            super().delete(key)
            try:
                self._flush()
            except HostError:
                self._restore(key, previous)
                raise


def open_backend(path: Optional[Union[str, Path]] = None) -> StorageBackend:
    """JsonFileBackend for `path` (or SATCOUNTER_STATE), else a fresh MemoryBackend."""
    target = path if path is not None else load_config().state_path
    if target is None:
        return MemoryBackend()
    return JsonFileBackend(target)


__all__ = [
    "StorageBackend",
    "MemoryBackend",
    "JsonFileBackend",
    "open_backend",
    "check_key",
    "check_value",
]
