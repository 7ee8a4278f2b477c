# tests/conftest.py
from __future__ import annotations

from pathlib import Path

import pytest

from secure_now.schemas.models import CertPolicy
from tests.utils import FakeRouter


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("DEV", "PREVIEW", "PREFIX", "CACHE_DIR", "TIMEOUT"):
        monkeypatch.delenv(f"SECURE_NOW_{var}", raising=False)
    yield


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache" / "traefik.me"


@pytest.fixture
def policy(cache_dir: Path) -> CertPolicy:
    return CertPolicy(cache_dir=cache_dir, timeout_s=5.0, user_agent="secure-now-tests/1.0")


@pytest.fixture
def router(monkeypatch) -> FakeRouter:
    """Install a FakeRouter in place of requests.get for the fetcher."""
    r = FakeRouter()
    monkeypatch.setattr("secure_now.core.certs.fetcher.requests.get", r)
    return r
