# secure_now/plugin/tls.py
"""
Turn a host's ``https`` option into an ``ssl.SSLContext`` for Python servers.
"""

from __future__ import annotations

import ssl

from secure_now.schemas.models import ServerOptions


def ssl_context_for(options: ServerOptions) -> ssl.SSLContext | None:
    """
    Build a server-side context from ``options.https``.

    Returns None when HTTPS is not configured or disabled. ``https=True``
    without cert/key paths is a configuration error.
    """
    https = options.https
    if not options.https_enabled:
        return None
    if not isinstance(https, dict) or "cert" not in https or "key" not in https:
        raise ValueError("https is enabled but no cert/key paths are configured")

    ctx = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
    ctx.load_cert_chain(str(https["cert"]), str(https["key"]))
    return ctx
