"""
satcounter.runtime.host - deploy/call/persist loop around the Counter.

The host owns load/save timing; the Counter only defines the transitions.
One call is: load the Counter from the store → run exactly one entrypoint →
store it back if the entrypoint mutates. Calls into one Host are serialized
with a lock, so a load/mutate/save never interleaves with another.

Usage
-----
    from satcounter.runtime.host import Host
    from satcounter.runtime.storage_api import MemoryBackend

    host = Host(MemoryBackend())
    host.deploy("new", [42])
    host.call("increment")
    host.call("get").result   # 43

    # One-shot helper used by the CLI (file store if SATCOUNTER_STATE is set)
    run_call("modify_by", ["10"], state_path="counter.json")
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from ..config import CounterConfig, load_config
from ..contract import Counter
from ..errors import ALREADY_DEPLOYED, NOT_DEPLOYED, HostError
from ..math import I32, IntBounds
from . import abi
from .codec import decode_value, encode_value
from .storage_api import StorageBackend, open_backend

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallResult:
    call: str
    result: Optional[int] = None
    mutated: bool = False
    # None unless saturation reporting is enabled
    saturated: Optional[bool] = None

    def envelope(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"ok": True, "call": self.call, "result": self.result}
        if self.saturated is not None:
            out["saturated"] = self.saturated
        return out


class Host:
    """Instantiates, invokes and persists one Counter held in `backend`."""

    def __init__(
        self,
        backend: StorageBackend,
        *,
        bounds: IntBounds = I32,
        key: bytes = b"counter:value",
        report_saturation: bool = False,
    ) -> None:
        self.backend = backend
        self.bounds = bounds
        self.key = key
        self.report_saturation = report_saturation
        self._lock = threading.RLock()

    @classmethod
    def from_config(
        cls, backend: Optional[StorageBackend] = None, config: Optional[CounterConfig] = None
    ) -> "Host":
        cfg = config or load_config()
        return cls(
            backend if backend is not None else open_backend(cfg.state_path),
            bounds=cfg.bounds,
            key=cfg.storage_key,
            report_saturation=cfg.report_saturation,
        )

    # ------------------------------ state ------------------------------ #

    def deployed(self) -> bool:
        return self.backend.exists(self.key)

    def load(self) -> Counter:
        raw = self.backend.get(self.key)
        if raw is None:
            raise HostError(
                "counter not deployed; run a constructor first",
                code=NOT_DEPLOYED,
                context={"key": self.key.hex()},
            )
        return Counter.new(decode_value(raw, self.bounds), self.bounds)

    def _save(self, counter: Counter) -> None:
        self.backend.set(self.key, encode_value(counter.get(), self.bounds))

    # ------------------------------ calls ------------------------------ #

    def deploy(self, constructor: str = "default", args: Sequence[Any] = ()) -> CallResult:
        with self._lock:
            try:
                entry = abi.lookup(constructor, abi.CONSTRUCTOR)
                values = abi.coerce_args(entry, args, self.bounds)
                if self.deployed():
                    raise HostError(
                        "counter already deployed in this store",
                        code=ALREADY_DEPLOYED,
                        context={"key": self.key.hex()},
                    )
            except HostError as e:
                log.warning("deploy %s rejected: %s (%s)", constructor, e.message, e.code)
                raise

            if entry.name == "new":
                counter = Counter.new(values[0], self.bounds)
            else:
                counter = Counter.default(self.bounds)
            self._save(counter)
            log.debug("deployed %r via %s%s", counter, entry.name, tuple(values))
            return CallResult(call=entry.name, result=counter.get(), mutated=True)

    def call(self, message: str, args: Sequence[Any] = ()) -> CallResult:
        with self._lock:
            try:
                entry = abi.lookup(message, abi.MESSAGE)
                values = abi.coerce_args(entry, args, self.bounds)
                counter = self.load()
            except HostError as e:
                log.warning("call %s rejected: %s (%s)", message, e.message, e.code)
                raise

            if not entry.mutates:
                return CallResult(call=entry.name, result=counter.get())

            saturated = self._apply(counter, entry.name, values)
            self._save(counter)
            log.debug(
                "%s%s -> %d%s",
                entry.name,
                tuple(values),
                counter.get(),
                " (saturated)" if saturated else "",
            )
            return CallResult(call=entry.name, mutated=True, saturated=saturated)

    def _apply(self, counter: Counter, name: str, values: Sequence[int]) -> Optional[bool]:
        if not self.report_saturation:
            getattr(counter, name)(*values)
            return None
        if name == "modify_by":
            return counter.modify_by_reporting(values[0])
        # a ±1 step leaves the value unchanged only when it is pinned at a bound
        before = counter.get()
        getattr(counter, name)()
        return counter.get() == before


def run_call(
    call: str,
    args: Sequence[Any] = (),
    *,
    state_path: Optional[Union[str, Path]] = None,
    config: Optional[CounterConfig] = None,
    backend: Optional[StorageBackend] = None,
) -> Dict[str, Any]:
    """
    Execute one constructor or message against a store and return an envelope:

        {"ok": True, "call": "get", "result": 43}
        {"ok": False, "call": "get", "error": {"code": "not_deployed", ...}}
    """
    cfg = config or load_config()
    try:
        if backend is None:
            backend = open_backend(state_path if state_path is not None else cfg.state_path)
        host = Host.from_config(backend, cfg)
        entry = abi.lookup(call)
        if entry.kind == abi.CONSTRUCTOR:
            res = host.deploy(entry.name, args)
        else:
            res = host.call(entry.name, args)
    except HostError as e:
        return {"ok": False, "call": call, "error": e.to_dict()}
    return res.envelope()


__all__ = ["Host", "CallResult", "run_call"]
