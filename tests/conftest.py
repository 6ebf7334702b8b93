"""
conftest.py — Shared fixtures for the unit tests.

What this provides:
  - `settings`: a Settings instance that ignores the developer's environment.
  - `http_client`: builds an httpx.Client over httpx.MockTransport.

Common examples:
  pytest -q
  pytest -m "not integration"
"""
from __future__ import annotations

import os
from typing import Callable, List

import httpx
import pytest

from openapi_suite.core.settings import Settings, get_settings


@pytest.fixture
def clean_env(tmp_path, monkeypatch):
    # keep a stray .env or MPOA_* variables from leaking into unit tests
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.upper().startswith("MPOA_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings(clean_env) -> Settings:
    return Settings(reload_timeout_seconds=5)


@pytest.fixture
def http_client():
    clients: List[httpx.Client] = []

    def make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        c = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(c)
        return c

    yield make
    for c in clients:
        c.close()
