"""
satcounter.config - integer width, storage layout and host feature flags.

NO third-party deps; safe to import very early.

Configuration precedence:
  1) Environment variables (SATCOUNTER_*)
  2) Hardcoded safe defaults below

Key env vars (case-insensitive where boolean):
  - SATCOUNTER_INT_BITS               (int)    default: 32   (8/16/32/64/128)
  - SATCOUNTER_STORAGE_KEY            (str)    default: counter:value
  - SATCOUNTER_STATE                  (path)   default: unset → in-memory store
  - SATCOUNTER_REPORT_SATURATION      (bool)   default: false
  - SATCOUNTER_LOG_LEVEL              (str)    default: WARNING
  - SATCOUNTER_MAX_STORAGE_KEY_BYTES  (int)    default: 64

Usage:
    from satcounter.config import load_config
    CFG = load_config()
    bounds = CFG.bounds
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from .math import SUPPORTED_BITS, IntBounds, bounds_for

DEFAULT_INT_BITS = 32
DEFAULT_STORAGE_KEY = "counter:value"
DEFAULT_LOG_LEVEL = "WARNING"


# ----------------------------- helpers ---------------------------------------


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "t", "yes", "y", "on")


def _env_int(name: str, default: int, *, min_v: int, max_v: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = int(raw, 0)
    except ValueError:
        return default
    if v < min_v:
        return min_v
    if v > max_v:
        return max_v
    return v


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if not raw:
        return None
    return Path(raw).expanduser().resolve()


def _env_log_level(name: str, default: str) -> str:
    raw = (os.getenv(name) or "").strip().upper()
    if raw and isinstance(logging.getLevelName(raw), int):
        return raw
    return default


# ------------------------------- config --------------------------------------


@dataclass(frozen=True)
class CounterConfig:
    int_bits: int
    storage_key: bytes
    state_path: Optional[Path]
    report_saturation: bool
    log_level: str
    max_storage_key_bytes: int

    @property
    def bounds(self) -> IntBounds:
        return bounds_for(self.int_bits)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "int_bits": self.int_bits,
            "min": self.bounds.min,
            "max": self.bounds.max,
            "storage_key": self.storage_key.decode("utf-8", errors="replace"),
            "state_path": str(self.state_path) if self.state_path else None,
            "report_saturation": self.report_saturation,
            "log_level": self.log_level,
            "max_storage_key_bytes": self.max_storage_key_bytes,
        }


@lru_cache(maxsize=1)
def load_config() -> CounterConfig:
    """
    Build and cache a CounterConfig from environment + safe defaults.
    Call load_config.cache_clear() after changing the environment.
    """
    bits = _env_int("SATCOUNTER_INT_BITS", DEFAULT_INT_BITS, min_v=0, max_v=1024)
    if bits not in SUPPORTED_BITS:
        bits = DEFAULT_INT_BITS

    key = os.getenv("SATCOUNTER_STORAGE_KEY") or DEFAULT_STORAGE_KEY

    return CounterConfig(
        int_bits=bits,
        storage_key=key.encode("utf-8"),
        state_path=_env_path("SATCOUNTER_STATE"),
        report_saturation=_env_bool("SATCOUNTER_REPORT_SATURATION", False),
        log_level=_env_log_level("SATCOUNTER_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        max_storage_key_bytes=_env_int("SATCOUNTER_MAX_STORAGE_KEY_BYTES", 64, min_v=1, max_v=256),
    )


# Snapshot at import time; call load_config() where env changes must be seen.
CFG: CounterConfig = load_config()

__all__ = ["CounterConfig", "load_config", "CFG", "DEFAULT_INT_BITS", "DEFAULT_STORAGE_KEY"]
