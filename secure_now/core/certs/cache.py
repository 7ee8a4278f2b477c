# secure_now/core/certs/cache.py
"""
Deterministic on-disk cache layout for fetched certificate files.

Layout (under cache_dir/):
  - <name>-<sha256(url)>   one opaque PEM blob per asset, no extension
"""

from __future__ import annotations

import os
import stat
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from hashlib import sha256 as _sha256lib
from pathlib import Path

from secure_now.schemas.models import AssetDescriptor, CacheEntry

from .errors import FilesystemError

EXPIRY_THRESHOLD = timedelta(hours=24)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_dir(path: Path) -> Path:
    """Create ``path`` (and parents) if missing; raise FilesystemError if that is impossible."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"Cannot create cache directory {path}: {e}") from e
    if not path.is_dir():
        raise FilesystemError(f"Cache path {path} exists but is not a directory")
    return path


def derive_key(seed: str) -> str:
    """Hex-encoded sha256 of ``seed``; 64 chars, safe to use as a file name."""
    return _sha256lib(seed.encode("utf-8")).hexdigest()


def cache_path(descriptor: AssetDescriptor, cache_dir: Path) -> Path:
    return cache_dir / f"{descriptor.name}-{derive_key(descriptor.url)}"


def read_entry(path: Path) -> CacheEntry | None:
    """
    Return the CacheEntry at ``path``, or None when no regular file is cached there.

    The entry timestamp is the file's modification time. Cached files are
    written once and never touched again, so it is also their creation time.
    """
    try:
        st = path.stat()
    except FileNotFoundError:
        return None
    if not stat.S_ISREG(st.st_mode):
        return None
    return CacheEntry(path=path, created_at=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc))


def is_stale(entry: CacheEntry, *, now: Clock | None = None, threshold: timedelta = EXPIRY_THRESHOLD) -> bool:
    """True iff the entry is strictly older than ``threshold``; exactly at the threshold is fresh."""
    current = (now or _utcnow)()
    return current - entry.created_at > threshold


def evict(entry: CacheEntry) -> None:
    try:
        os.unlink(entry.path)
    except FileNotFoundError:
        pass


__all__ = [
    "EXPIRY_THRESHOLD",
    "Clock",
    "ensure_dir",
    "derive_key",
    "cache_path",
    "read_entry",
    "is_stale",
    "evict",
]
