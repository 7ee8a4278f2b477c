# tests/integration/test_static_server_plugin.py
"""
Drive SecureNowPlugin through the reference static host:
config_resolved → bind → configure_*_server → print_urls.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

import requests

from secure_now.host.static_server import StaticServer
from secure_now.plugin.secure_now import SecureNowPlugin
from secure_now.schemas.models import HostConfig, PluginOptions, ServerOptions


def _plugin(**opts) -> SecureNowPlugin:
    paths = {"cert": Path("/cache/cert-x"), "key": Path("/cache/key-y")}
    return SecureNowPlugin(PluginOptions(**opts), resolver=lambda **_: dict(paths))


def test_preview_server_gets_tls_and_secure_url(tmp_path: Path, monkeypatch, caplog) -> None:
    seen: list[ServerOptions] = []

    def fake_ctx(opts: ServerOptions):
        seen.append(opts)
        return None  # fake cert paths cannot be loaded

    monkeypatch.setattr("secure_now.host.static_server.ssl_context_for", fake_ctx)

    config = HostConfig(preview=ServerOptions(port=0))
    server = StaticServer(tmp_path, mode="preview", config=config, plugins=[_plugin(prefix="booom")])
    try:
        server.listen()
        port = server.http_server.server_address[1]

        assert config.preview.host == "0.0.0.0"
        assert config.preview.https == {"cert": "/cache/cert-x", "key": "/cache/key-y"}
        assert seen and seen[0] is config.preview

        with caplog.at_level(logging.INFO, logger="secure_now.host"):
            server.print_urls()
        lines = [r.getMessage() for r in caplog.records]
        assert lines[0] == f"  ➜  Local:   https://localhost:{port}/"
        assert lines[-1] == f"  ➜  Secure: https://booom.traefik.me:{port} -> https://localhost:{port}"
    finally:
        server.close()


def test_disabled_tls_serves_plain_http_without_secure_line(tmp_path: Path, caplog) -> None:
    (tmp_path / "index.html").write_text("<h1>hi</h1>")
    config = HostConfig(preview=ServerOptions(https=False, port=0))
    # dev server untouched too, so no serving domain is recorded
    server = StaticServer(tmp_path, mode="preview", config=config, plugins=[_plugin(dev=False)])
    server.listen()
    t = threading.Thread(target=server.serve_forever, daemon=True)
    t.start()
    try:
        port = server.http_server.server_address[1]
        resp = requests.get(f"http://localhost:{port}/index.html", timeout=5)
        assert resp.status_code == 200
        assert resp.text == "<h1>hi</h1>"

        with caplog.at_level(logging.INFO, logger="secure_now.host"):
            server.print_urls()
        assert not any("Secure:" in r.getMessage() for r in caplog.records)
    finally:
        server.http_server.shutdown()
        server.close()
        t.join(timeout=5)
