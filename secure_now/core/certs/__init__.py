# secure_now/core/certs/__init__.py
from .cache import EXPIRY_THRESHOLD, cache_path, derive_key, ensure_dir, is_stale, read_entry
from .errors import (
    CERT_ERRORS,
    CertCacheError,
    FetchError,
    FilesystemError,
    classify_fetch_error,
    fetch_error_guard,
)
from .fetcher import fetch_to_path
from .resolver import TRAEFIK_ME_ASSETS, resolve_assets

__all__ = [
    "CertCacheError",
    "FilesystemError",
    "FetchError",
    "CERT_ERRORS",
    "classify_fetch_error",
    "fetch_error_guard",
    "EXPIRY_THRESHOLD",
    "ensure_dir",
    "derive_key",
    "cache_path",
    "read_entry",
    "is_stale",
    "fetch_to_path",
    "TRAEFIK_ME_ASSETS",
    "resolve_assets",
]
