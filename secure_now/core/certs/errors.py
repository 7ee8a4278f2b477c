# secure_now/core/certs/errors.py
"""
Typed errors for the certificate cache.

Exports
-------
- CertCacheError, FilesystemError, FetchError
- CERT_ERRORS
- classify_fetch_error(exc, url)
- fetch_error_guard(url)

FilesystemError is fatal to a resolution run; FetchError is per-asset and
recoverable.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import requests

# =========================
# Exception types
# =========================


class CertCacheError(RuntimeError):
    """Base class for certificate cache failures."""


class FilesystemError(CertCacheError):
    """The cache directory could not be created or written."""


class FetchError(CertCacheError):
    """HTTP status or transport failure while fetching one asset."""

    def __init__(self, url: str, status: int | None = None, cause: str | None = None) -> None:
        self.url = url
        self.status = status
        self.cause = cause
        if status is not None:
            msg = f"Failed to download {url}. Status Code: {status}"
        else:
            msg = f"Failed to download {url}: {cause or 'unknown error'}"
        super().__init__(msg)


CERT_ERRORS = (FilesystemError, FetchError)


# =========================
# Classification helpers
# =========================


def classify_fetch_error(exc: Exception, url: str) -> CertCacheError:
    """
    Map an arbitrary exception raised while fetching ``url`` to a typed error.

      - CertCacheError subclasses → passed through
      - requests.HTTPError with a response → FetchError carrying the status
      - other requests / OSError failures → FetchError carrying the cause
    """
    if isinstance(exc, CertCacheError):
        return exc

    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        return FetchError(url, status=exc.response.status_code)

    return FetchError(url, cause=f"{type(exc).__name__}: {exc}")


@contextmanager
def fetch_error_guard(url: str) -> Iterator[None]:
    """Normalize unexpected exceptions from fetch internals into FetchError."""
    try:
        yield
    except CERT_ERRORS:
        raise
    except (requests.RequestException, OSError) as exc:
        raise classify_fetch_error(exc, url) from exc


__all__ = [
    "CertCacheError",
    "FilesystemError",
    "FetchError",
    "CERT_ERRORS",
    "classify_fetch_error",
    "fetch_error_guard",
]
