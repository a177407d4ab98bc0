# -*- coding: utf-8 -*-
"""
satcounter.tests.conftest
=========================

Fixtures shared by the satcounter test-suite:
- a clean SATCOUNTER_* environment and a fresh cached config per test;
- a Host over an in-memory store, and a path for a file-backed one.
"""
from __future__ import annotations

import os
from pathlib import Path

import pytest

from satcounter.config import load_config
from satcounter.runtime.host import Host
from satcounter.runtime.storage_api import MemoryBackend


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in list(os.environ):
        if name.startswith("SATCOUNTER_"):
            monkeypatch.delenv(name, raising=False)
    load_config.cache_clear()
    yield
    load_config.cache_clear()


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def host(backend: MemoryBackend) -> Host:
    return Host(backend)


@pytest.fixture
def state_file(tmp_path: Path) -> Path:
    return tmp_path / "state" / "counter.json"
