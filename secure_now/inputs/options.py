# secure_now/inputs/options.py
"""
Options loader for the secure-now plugin.

Goals
-----
- File-first options with validation via Pydantic.
- Light environment-variable overrides for CI/CLI convenience.

Supported JSON shape
--------------------
    {
      "dev": true,
      "preview": true,
      "prefix": "booom",
      "policy": {"cache_dir": ".cache/secure-now/traefik.me", "timeout_s": 30}
    }

Environment overrides (optional)
--------------------------------
- SECURE_NOW_DEV        -> PluginOptions.dev (1/0, true/false, yes/no, on/off)
- SECURE_NOW_PREVIEW    -> PluginOptions.preview
- SECURE_NOW_PREFIX     -> PluginOptions.prefix
- SECURE_NOW_CACHE_DIR  -> PluginOptions.policy.cache_dir
- SECURE_NOW_TIMEOUT    -> PluginOptions.policy.timeout_s (float)

Unparseable environment values are ignored; the validated value stays.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from secure_now.schemas.models import PluginOptions

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(val: str) -> bool | None:
    v = val.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    return None


@dataclass(frozen=True)
class OptionsLoader:
    """
    Responsibilities:
        - Read JSON from a file or string
        - Validate with Pydantic
        - Apply environment overrides

    Default search (when path=None):
        1) ./secure-now.json
        2) built-in defaults
    """

    env_prefix: str = "SECURE_NOW_"

    # ---------- Public API ----------

    def load(self, path: str | Path | None = None) -> PluginOptions:
        raw = self._read_json_file(self._resolve_path(path))
        return self._apply_env_overrides(self._parse_root(raw))

    def load_json(self, text: str) -> PluginOptions:
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        return self._apply_env_overrides(self._parse_root(raw))

    # ---------- Internals ----------

    def _resolve_path(self, path: str | Path | None) -> Path | None:
        if path is not None:
            p = Path(path)
            if not p.exists():
                raise FileNotFoundError(f"Options file not found: {p}")
            return p
        default = Path("secure-now.json")
        return default if default.exists() else None

    def _read_json_file(self, p: Path | None) -> dict[str, Any]:
        if p is None:
            return {}
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Options in {p} must be a JSON object")
        return data

    def _parse_root(self, data: Any) -> PluginOptions:
        try:
            return PluginOptions.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Options validation failed:\n{e}") from e

    def _apply_env_overrides(self, opts: PluginOptions) -> PluginOptions:
        prefix = self.env_prefix
        updates: dict[str, Any] = {}
        policy_updates: dict[str, Any] = {}

        for field in ("dev", "preview"):
            val = os.getenv(f"{prefix}{field.upper()}")
            if val:
                parsed = _parse_bool(val)
                if parsed is not None:
                    updates[field] = parsed

        prefix_val = os.getenv(f"{prefix}PREFIX")
        if prefix_val and prefix_val.strip():
            updates["prefix"] = prefix_val.strip()

        cache_dir = os.getenv(f"{prefix}CACHE_DIR")
        if cache_dir:
            policy_updates["cache_dir"] = Path(cache_dir)

        timeout = os.getenv(f"{prefix}TIMEOUT")
        if timeout:
            try:
                t = float(timeout)
                if t > 0:
                    policy_updates["timeout_s"] = t
            except ValueError:
                pass

        if policy_updates:
            updates["policy"] = opts.policy.model_copy(update=policy_updates)
        if not updates:
            return opts
        return opts.model_copy(update=updates)


def load_options(path: str | Path | None = None) -> PluginOptions:
    """Convenience wrapper around OptionsLoader().load()."""
    return OptionsLoader().load(path)


__all__ = ["OptionsLoader", "load_options"]
