# secure_now/plugin/secure_now.py
"""
secure-now host plugin

Purpose
-------
Give a development / preview server a publicly resolvable HTTPS address
(``<prefix>.traefik.me``) backed by the issuer's wildcard certificate.

Hooks
-----
- config_resolved(config)           resolve cert/key, merge them into the
                                    host's ``https`` options, bind 0.0.0.0
- configure_server(server)          add the secure URL to ``print_urls``
- configure_preview_server(server)  same, for the preview server

Failures never stop the host: a missing cert or key just leaves the host's
TLS configuration as it was.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol

from secure_now.core.certs import CertCacheError, resolve_assets
from secure_now.schemas.models import CertPolicy, HostConfig, PluginOptions, ServerOptions

logger = logging.getLogger(__name__)

PLUGIN_NAME = "secure-now"
ALL_INTERFACES = "0.0.0.0"

Resolver = Callable[..., dict[str, Path]]


class HostServer(Protocol):
    """What the plugin needs from a started dev or preview server."""

    config: HostConfig
    http_server: Any  # exposes ``server_address`` once bound; None in middleware mode

    def print_urls(self) -> Any: ...


def _tls_enabled_or_unset(opts: ServerOptions) -> bool:
    return opts.https is not False


def _merge_https(opts: ServerOptions, cert: Path, key: Path) -> None:
    base = dict(opts.https) if isinstance(opts.https, dict) else {}
    base.update({"cert": str(cert), "key": str(key)})
    opts.https = base
    opts.host = ALL_INTERFACES


class SecureNowPlugin:
    name = PLUGIN_NAME

    def __init__(self, options: PluginOptions | None = None, *, resolver: Resolver = resolve_assets) -> None:
        self.options = options or PluginOptions()
        self.serving_domain: str | None = None
        self._resolve = resolver

    def hooks(self) -> dict[str, Callable[..., None]]:
        return {
            "config_resolved": self.config_resolved,
            "configure_server": self.configure_server,
            "configure_preview_server": self.configure_preview_server,
        }

    # ---------- Hooks ----------

    def config_resolved(self, config: HostConfig) -> None:
        opts = self.options
        try:
            paths = self._resolve(policy=opts.policy)
        except CertCacheError as e:
            logger.error("Certificate cache unavailable, keeping host TLS settings: %s", e)
            return

        cert, key = paths.get("cert"), paths.get("key")
        if cert is None or key is None:
            logger.error("Certificate or private key unavailable, keeping host TLS settings")
            return

        set_https = False
        if opts.dev and _tls_enabled_or_unset(config.server):
            _merge_https(config.server, cert, key)
            set_https = True
        if opts.preview and _tls_enabled_or_unset(config.preview):
            _merge_https(config.preview, cert, key)
            set_https = True

        if set_https:
            self.serving_domain = opts.serving_domain

    def configure_server(self, server: HostServer) -> None:
        self._wrap_print_urls(server)

    def configure_preview_server(self, server: HostServer) -> None:
        self._wrap_print_urls(server)

    # ---------- Internals ----------

    def _wrap_print_urls(self, server: HostServer) -> None:
        if not self.serving_domain or server.http_server is None:
            return

        domain = self.serving_domain
        original = server.print_urls

        @functools.wraps(original)
        def print_urls(*args: Any, **kwargs: Any) -> Any:
            result = original(*args, **kwargs)
            _print_secure_url(server, domain)
            return result

        server.print_urls = print_urls  # type: ignore[method-assign]


def _print_secure_url(server: HostServer, domain: str) -> None:
    address = getattr(server.http_server, "server_address", None)
    if not address:
        return
    port = address[1]
    config = server.config
    scheme = "https" if (config.server.https_enabled or config.preview.https_enabled) else "http"
    config.logger.info("  ➜  Secure: https://%s:%d -> %s://localhost:%d", domain, port, scheme, port)


def secure_now(
    *,
    dev: bool = True,
    preview: bool = True,
    prefix: str = "secure",
    policy: CertPolicy | None = None,
) -> SecureNowPlugin:
    """Convenience factory mirroring the keyword options."""
    opts = PluginOptions(dev=dev, preview=preview, prefix=prefix, policy=policy or CertPolicy())
    return SecureNowPlugin(opts)


__all__ = ["PLUGIN_NAME", "HostServer", "SecureNowPlugin", "secure_now"]
