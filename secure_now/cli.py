# secure_now/cli.py

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from secure_now.core.certs import CertCacheError, resolve_assets
from secure_now.host.static_server import StaticServer
from secure_now.inputs.options import load_options
from secure_now.plugin.secure_now import SecureNowPlugin
from secure_now.schemas.models import HostConfig, PluginOptions, ServerOptions


def _load(args: argparse.Namespace) -> PluginOptions:
    opts = load_options(args.config)
    updates = {}
    if args.prefix:
        updates["prefix"] = args.prefix
    if args.cache_dir:
        updates["policy"] = opts.policy.model_copy(update={"cache_dir": Path(args.cache_dir)})
    return opts.model_copy(update=updates) if updates else opts


def _cmd_certs(args: argparse.Namespace) -> int:
    opts = _load(args)
    try:
        paths = resolve_assets(policy=opts.policy)
    except CertCacheError as e:
        logging.getLogger("secure_now").error("%s", e)
        return 2
    for name, path in paths.items():
        print(f"{name}\t{path}")
    return 0 if {"cert", "key"} <= paths.keys() else 1


def _cmd_serve(args: argparse.Namespace) -> int:
    opts = _load(args)
    server_opts = ServerOptions(port=args.port)
    config = HostConfig(server=server_opts) if args.mode == "dev" else HostConfig(preview=server_opts)

    server = StaticServer(Path(args.dir), mode=args.mode, config=config, plugins=[SecureNowPlugin(opts)])
    server.listen()
    server.print_urls()
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\n▸ Server shut down.")
    finally:
        server.close()
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Locally trusted HTTPS for dev/preview servers via traefik.me")
    p.add_argument("--config", type=str, default=None, help="Path to a secure-now JSON options file")
    p.add_argument("--prefix", type=str, default=None, help="Subdomain label (<prefix>.traefik.me)")
    p.add_argument("--cache-dir", type=str, default=None)
    p.add_argument("--verbose", "-v", action="store_true")
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("certs", help="Resolve the certificate set and print local paths")

    serve = sub.add_parser("serve", help="Serve a directory with the plugin applied")
    serve.add_argument("--dir", type=str, default="dist")
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--mode", choices=("dev", "preview"), default="preview")

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    if args.command == "certs":
        return _cmd_certs(args)
    return _cmd_serve(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
