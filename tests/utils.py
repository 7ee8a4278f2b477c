# tests/utils.py
"""
Shared fakes and factories for the secure-now test-suite.
"""

from __future__ import annotations

import os
import time
from collections.abc import Iterable, Iterator
from pathlib import Path

import requests

from secure_now.schemas.models import AssetDescriptor

FOUR_ASSETS: tuple[AssetDescriptor, ...] = (
    AssetDescriptor(name="cert", url="https://certs.test/cert.pem"),
    AssetDescriptor(name="key", url="https://certs.test/privkey.pem"),
    AssetDescriptor(name="chain", url="https://certs.test/chain.pem"),
    AssetDescriptor(name="fullchain", url="https://certs.test/fullchain.pem"),
)


class FakeResp:
    """Just enough of requests.Response for the streaming fetcher."""

    def __init__(self, status: int, body: bytes = b"", *, chunk: int = 4, fail_after: int | None = None):
        self.status_code = status
        self.headers: dict[str, str] = {"Content-Type": "application/x-pem-file"}
        self._body = body
        self._chunk = chunk
        self._fail_after = fail_after
        self.closed = False

    def iter_content(self, chunk_size: int = 1024) -> Iterator[bytes]:
        sent = 0
        for i in range(0, len(self._body), self._chunk):
            if self._fail_after is not None and sent >= self._fail_after:
                raise requests.ConnectionError("connection reset by peer")
            piece = self._body[i : i + self._chunk]
            sent += len(piece)
            yield piece

    def close(self) -> None:
        self.closed = True


class FakeRouter:
    """
    Callable stand-in for requests.get that serves canned responses per URL
    and records every call.
    """

    def __init__(self, routes: dict[str, tuple[int, bytes]] | None = None):
        self.routes: dict[str, tuple[int, bytes]] = dict(routes or {})
        self.calls: list[str] = []
        self.last_headers: dict[str, str] | None = None

    def __call__(self, url: str, *, headers: dict[str, str], timeout: float | None, stream: bool) -> FakeResp:
        assert stream is True
        self.calls.append(url)
        self.last_headers = dict(headers)
        status, body = self.routes.get(url, (404, b"not found"))
        return FakeResp(status, body)


def serve_all(descriptors: Iterable[AssetDescriptor], status: int = 200) -> dict[str, tuple[int, bytes]]:
    return {d.url: (status, f"PEM:{d.name}".encode()) for d in descriptors}


def age_file(path: Path, seconds: float) -> None:
    """Backdate ``path`` so it looks ``seconds`` old."""
    ts = time.time() - seconds
    os.utime(path, (ts, ts))
