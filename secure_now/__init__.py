# secure_now/__init__.py
"""
secure-now: locally trusted HTTPS for development and preview servers.

Fetches the public wildcard certificate for ``*.traefik.me``, caches it on
disk for a day and injects it into the host server's TLS configuration.
"""

from secure_now.plugin.secure_now import SecureNowPlugin, secure_now

__all__ = ["SecureNowPlugin", "secure_now"]
__version__ = "0.1.0"
