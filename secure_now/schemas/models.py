# secure_now/schemas/models.py

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =========================
# Certificate assets
# =========================


class AssetDescriptor(BaseModel):
    """One certificate-related file to cache: a logical name and where to get it."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Logical asset name, e.g. 'cert' or 'key'.")
    url: str = Field(..., description="HTTPS URL serving the raw PEM content.")

    @field_validator("name")
    @classmethod
    def _name_is_plain_label(cls, v: str) -> str:
        if "/" in v or "\\" in v or v in {".", ".."}:
            raise ValueError(f"asset name must be a plain label, got {v!r}")
        return v


class CacheEntry(BaseModel):
    """A locally stored copy of a fetched asset."""

    model_config = ConfigDict(frozen=True)

    path: Path
    created_at: datetime = Field(..., description="Filesystem timestamp of the cached file (UTC-aware).")


class CertPolicy(BaseModel):
    """
    Cache and network knobs for certificate resolution.

    The expiry threshold is fixed (see ``secure_now.core.certs.cache.EXPIRY_THRESHOLD``)
    and deliberately not part of the policy.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    cache_dir: Path = Field(
        default=Path(".cache/secure-now/traefik.me"),
        description="Directory where fetched PEM files are cached.",
    )
    timeout_s: float | None = Field(
        30.0,
        gt=0,
        description="HTTP timeout in seconds; None waits indefinitely.",
    )
    user_agent: str = Field(
        "secure-now/0.1 (+cert-cache)",
        description="User-Agent string used in HTTP requests.",
    )


# =========================
# Plugin options
# =========================


class PluginOptions(BaseModel):
    """User-facing options for the secure-now plugin."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    dev: bool = Field(True, description="Enable HTTPS on the development server.")
    preview: bool = Field(True, description="Enable HTTPS on the preview server.")
    prefix: str = Field("secure", min_length=1, description="Subdomain label for the serving hostname.")
    base_domain: str = Field("traefik.me", description="Domain of the wildcard-certificate issuer.")
    policy: CertPolicy = Field(default_factory=CertPolicy)

    @property
    def serving_domain(self) -> str:
        return f"{self.prefix}.{self.base_domain}"


# =========================
# Host configuration
# =========================


class ServerOptions(BaseModel):
    """
    The slice of a host server's configuration the plugin reads and mutates.

    ``https`` follows the host convention:
      - None  -> not configured (plugin may enable it)
      - False -> explicitly disabled (plugin leaves it alone)
      - True / dict -> enabled; a dict carries TLS options such as cert/key paths
    """

    model_config = ConfigDict(extra="allow")

    https: bool | dict[str, Any] | None = None
    host: str | None = None
    port: int | None = None

    @property
    def https_enabled(self) -> bool:
        return self.https is not None and self.https is not False


class HostConfig(BaseModel):
    """Resolved host configuration handed to the ``config_resolved`` hook."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    server: ServerOptions = Field(default_factory=ServerOptions)
    preview: ServerOptions = Field(default_factory=ServerOptions)
    logger: logging.Logger = Field(default_factory=lambda: logging.getLogger("secure_now.host"))
