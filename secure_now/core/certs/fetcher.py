# secure_now/core/certs/fetcher.py
"""
Stream one remote asset to disk.

The body is written to a ``.part`` temp file next to the destination and
renamed into place only once complete. On any failure the temp file is
removed before the error propagates, so the destination is either the
complete body or untouched.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import requests

from .errors import FetchError, fetch_error_guard

_STREAM_CHUNK = 64 * 1024


def _discard(path: Path | None) -> None:
    if path is not None:
        path.unlink(missing_ok=True)


def fetch_to_path(
    url: str,
    dest: Path,
    *,
    timeout_s: float | None = None,
    user_agent: str | None = None,
) -> Path:
    """
    GET ``url`` and store the body at ``dest``.

    Preconditions:
      - dest.parent exists (see cache.ensure_dir)

    Raises:
      FetchError on status >= 400 or any transport / write failure.
    """
    headers = {"Accept": "*/*"}
    if user_agent:
        headers["User-Agent"] = user_agent

    tmp_path: Path | None = None
    try:
        with fetch_error_guard(url):
            resp = requests.get(url, headers=headers, timeout=timeout_s, stream=True)
            try:
                if resp.status_code >= 400:
                    raise FetchError(url, status=resp.status_code)

                with tempfile.NamedTemporaryFile(
                    prefix=f".{dest.name}-", suffix=".part", delete=False, dir=str(dest.parent)
                ) as tf:
                    tmp_path = Path(tf.name)
                    for chunk in resp.iter_content(chunk_size=_STREAM_CHUNK):
                        if chunk:
                            tf.write(chunk)
            finally:
                resp.close()

            tmp_path.replace(dest)
            tmp_path = None
    finally:
        _discard(tmp_path)

    return dest


__all__ = ["fetch_to_path"]
