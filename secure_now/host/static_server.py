# secure_now/host/static_server.py
"""
Minimal static-file host that drives plugins through the same extension
points a JS dev server exposes:

  1) config_resolved(config)                       before anything binds
  2) configure_server / configure_preview_server   after binding, before serving
  3) print_urls()                                  once listening

Used by ``secure-now serve`` and by the integration tests.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterable
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any, Literal

from secure_now.plugin.tls import ssl_context_for
from secure_now.schemas.models import HostConfig, ServerOptions

Mode = Literal["dev", "preview"]

_DEFAULT_PORTS: dict[Mode, int] = {"dev": 5173, "preview": 4173}


def run_hook(plugins: Iterable[Any], hook: str, arg: Any) -> None:
    for plugin in plugins:
        fn = plugin.hooks().get(hook) if hasattr(plugin, "hooks") else getattr(plugin, hook, None)
        if fn is not None:
            fn(arg)


class StaticServer:
    """Serve ``directory`` over HTTP(S) with plugin hooks applied."""

    def __init__(
        self,
        directory: Path,
        *,
        mode: Mode = "preview",
        config: HostConfig | None = None,
        plugins: Iterable[Any] = (),
    ) -> None:
        self.directory = Path(directory)
        self.mode = mode
        self.config = config or HostConfig()
        self.plugins = list(plugins)
        self.http_server: ThreadingHTTPServer | None = None

    @property
    def options(self) -> ServerOptions:
        return self.config.server if self.mode == "dev" else self.config.preview

    @property
    def log(self) -> logging.Logger:
        return self.config.logger

    def listen(self) -> StaticServer:
        run_hook(self.plugins, "config_resolved", self.config)

        opts = self.options
        host = opts.host or "localhost"
        port = _DEFAULT_PORTS[self.mode] if opts.port is None else opts.port
        handler = functools.partial(SimpleHTTPRequestHandler, directory=str(self.directory))
        httpd = ThreadingHTTPServer((host, port), handler)

        ctx = ssl_context_for(opts)
        if ctx is not None:
            httpd.socket = ctx.wrap_socket(httpd.socket, server_side=True)
        self.http_server = httpd

        hook = "configure_server" if self.mode == "dev" else "configure_preview_server"
        run_hook(self.plugins, hook, self)
        return self

    @property
    def scheme(self) -> str:
        return "https" if self.options.https_enabled else "http"

    def print_urls(self) -> None:
        if self.http_server is None:
            return
        port = self.http_server.server_address[1]
        self.log.info("  ➜  Local:   %s://localhost:%d/", self.scheme, port)
        if self.options.host == "0.0.0.0":
            self.log.info("  ➜  Network: %s://0.0.0.0:%d/", self.scheme, port)

    def serve_forever(self) -> None:
        if self.http_server is None:
            raise RuntimeError("listen() must be called before serve_forever()")
        self.http_server.serve_forever()

    def close(self) -> None:
        if self.http_server is not None:
            self.http_server.server_close()
            self.http_server = None
