# tests/unit/test_tls_context.py
from __future__ import annotations

import pytest

from secure_now.plugin.tls import ssl_context_for
from secure_now.schemas.models import ServerOptions


@pytest.mark.parametrize("https", [None, False])
def test_no_context_when_https_off(https) -> None:
    assert ssl_context_for(ServerOptions(https=https)) is None


@pytest.mark.parametrize("https", [True, {}, {"cert": "/c"}, {"key": "/k"}])
def test_enabled_without_paths_is_an_error(https) -> None:
    with pytest.raises(ValueError):
        ssl_context_for(ServerOptions(https=https))


def test_loads_cert_chain(monkeypatch) -> None:
    loaded: list[tuple[str, str]] = []

    class _Ctx:
        def load_cert_chain(self, certfile: str, keyfile: str) -> None:
            loaded.append((certfile, keyfile))

    monkeypatch.setattr("secure_now.plugin.tls.ssl.create_default_context", lambda purpose: _Ctx())

    ctx = ssl_context_for(ServerOptions(https={"cert": "/cache/cert-1", "key": "/cache/key-2"}))

    assert isinstance(ctx, _Ctx)
    assert loaded == [("/cache/cert-1", "/cache/key-2")]
