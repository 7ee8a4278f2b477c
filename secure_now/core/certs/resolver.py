# secure_now/core/certs/resolver.py
"""
Cache-first resolution of the certificate file set.

For each asset: derive the cache path from its URL, evict the cached copy if
it is older than a day, reuse it if still present, otherwise fetch it. One
failing asset is logged and left out of the result; only an unusable cache
directory aborts the whole run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from secure_now.schemas.models import AssetDescriptor, CertPolicy

from .cache import Clock, cache_path, ensure_dir, evict, is_stale, read_entry
from .errors import FetchError
from .fetcher import fetch_to_path

logger = logging.getLogger(__name__)

TRAEFIK_ME_ASSETS: tuple[AssetDescriptor, ...] = (
    AssetDescriptor(name="cert", url="https://traefik.me/cert.pem"),
    AssetDescriptor(name="key", url="https://traefik.me/privkey.pem"),
    AssetDescriptor(name="chain", url="https://traefik.me/chain.pem"),
    AssetDescriptor(name="fullchain", url="https://traefik.me/fullchain.pem"),
)


def _resolve_one(descriptor: AssetDescriptor, policy: CertPolicy, now: Clock | None) -> Path | None:
    path = cache_path(descriptor, policy.cache_dir)

    try:
        entry = read_entry(path)
    except OSError as e:
        logger.error("Cannot read cache entry %s: %s", path, e)
        return None
    if entry is not None and is_stale(entry, now=now):
        logger.info("Removing outdated cache: %s", path)
        try:
            evict(entry)
        except OSError as e:
            logger.error("Failed to remove outdated cache %s: %s", path, e)
            return None
        entry = None

    if entry is not None:
        return path

    logger.info("Fetching: %s...", descriptor.url)
    try:
        return fetch_to_path(
            descriptor.url,
            path,
            timeout_s=policy.timeout_s,
            user_agent=policy.user_agent,
        )
    except FetchError as e:
        logger.error("%s", e)
        return None


def resolve_assets(
    descriptors: Iterable[AssetDescriptor] = TRAEFIK_ME_ASSETS,
    *,
    policy: CertPolicy | None = None,
    now: Clock | None = None,
) -> dict[str, Path]:
    """
    Return {asset name: local path} for every asset that is cached or fetchable.

    The map may be partial; callers must treat missing names as unavailable.

    Raises:
      FilesystemError if the cache directory cannot be created. No fetch is
      attempted in that case.
    """
    pol = policy or CertPolicy()
    ensure_dir(pol.cache_dir)

    resolved: dict[str, Path] = {}
    for descriptor in descriptors:
        path = _resolve_one(descriptor, pol, now)
        if path is not None:
            resolved[descriptor.name] = path
    return resolved


__all__ = ["TRAEFIK_ME_ASSETS", "resolve_assets"]
