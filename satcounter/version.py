"""satcounter.version - semantic version & optional git-describe suffix.

Resolution order (first match wins):
- SATCOUNTER_VERSION env var (exact value)
- installed package metadata for 'satcounter'
- BASE_VERSION + PEP 440 local part from `git describe` (or GIT_DESCRIBE)
- BASE_VERSION + '+dev'
"""

from __future__ import annotations

import os
import re
import subprocess
from functools import lru_cache
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Optional

# Bump when the stored encoding or the call surface changes.
BASE_VERSION = "0.1.0"


def _pep440_local(s: str) -> str:
    """
    Turn a git-describe string into a PEP 440 local version segment.
    Example: 'v0.1.0-3-gabc1234-dirty' -> '0.1.0.3.gabc1234.dirty'
    """
    s = s.strip()
    s = s[1:] if s.startswith("v") else s
    s = re.sub(r"[^A-Za-z0-9_.]+", ".", s.replace("-", "."))
    return re.sub(r"\.+", ".", s).strip(".")


@lru_cache(maxsize=1)
def git_describe(cwd: Optional[Path] = None) -> Optional[str]:
    """Return `git describe --tags --dirty --always` output, or None on failure."""
    try:
        out = subprocess.run(
            ["git", "describe", "--tags", "--dirty", "--always"],
            cwd=cwd or Path(__file__).resolve().parent,
            capture_output=True,
            text=True,
            check=False,
            timeout=1.5,
            env={**os.environ, "LANG": "C", "LC_ALL": "C"},
        )
    except (OSError, subprocess.SubprocessError):
        return None
    if out.returncode != 0:
        return None
    return out.stdout.strip() or None


def _pkg_metadata_version(dist_name: str = "satcounter") -> Optional[str]:
    try:
        v = importlib_metadata.version(dist_name)
    except importlib_metadata.PackageNotFoundError:
        return None
    return v if v and v != "0.0.0" else None


@lru_cache(maxsize=1)
def compute_version() -> str:
    env = os.getenv("SATCOUNTER_VERSION")
    if env:
        return env

    meta_v = _pkg_metadata_version()
    if meta_v:
        return meta_v

    desc = os.getenv("GIT_DESCRIBE") or git_describe()
    if desc:
        return f"{BASE_VERSION}+{_pep440_local(desc)}"

    return f"{BASE_VERSION}+dev"


__version__ = compute_version()

__all__ = ["__version__", "BASE_VERSION", "git_describe", "compute_version"]
