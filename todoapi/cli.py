"""
Todo API CLI — Command-Line Interface
======================================
Entry point for running and inspecting the Todo API.

Usage:
    # Start the HTTP server
    python -m todoapi.cli start
    python -m todoapi.cli start --port 8080 --log-level debug --no-seed

    # Show the route table
    python -m todoapi.cli routes

    # List registered stores
    python -m todoapi.cli stores
"""

from __future__ import annotations

import argparse

from todoapi.config import ServerConfig, configure_logging
from todoapi.store import list_stores

ROUTES = [
    ("GET", "/api/todo", "list-all", "200"),
    ("GET", "/api/todo/{id}", "get-by-id", "200 | 404"),
    ("POST", "/api/todo", "create", "201 + Location | 400"),
    ("PUT", "/api/todo/{id}", "replace", "204 | 400 | 404"),
    ("DELETE", "/api/todo/{id}", "delete", "204 | 404"),
    ("GET", "/api/health", "health", "200"),
]


# ─────────────────────────────────────────────────────────────
#  Helpers
# ─────────────────────────────────────────────────────────────

def build_config(args) -> ServerConfig:
    """Environment first, then any flags given on the command line."""
    config = ServerConfig.from_env()
    if getattr(args, "host", None):
        config.host = args.host
    if getattr(args, "port", None) is not None:
        config.port = args.port
    if getattr(args, "log_level", None):
        config.log_level = args.log_level
    if getattr(args, "store", None):
        config.store = args.store
    if getattr(args, "no_seed", False):
        config.seed = False
    return config


# ─────────────────────────────────────────────────────────────
#  Commands
# ─────────────────────────────────────────────────────────────

def cmd_start(args):
    """Launch the HTTP server."""
    from todoapi.server import run_server

    config = build_config(args)
    configure_logging(config.log_level)
    run_server(config)


def cmd_routes(args):
    """Print the HTTP route table."""
    print(f"\n  {'VERB':<8}{'PATH':<18}{'OPERATION':<12}STATUS")
    for verb, path, operation, status in ROUTES:
        print(f"  {verb:<8}{path:<18}{operation:<12}{status}")
    print()


def cmd_stores(args):
    """List registered stores."""
    for name in list_stores():
        print(f"  {name}")


# ─────────────────────────────────────────────────────────────
#  Main
# ─────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todoapi",
        description="Todo API — CRUD service for todo items",
    )
    subparsers = parser.add_subparsers(dest="command")

    # start
    p_start = subparsers.add_parser("start", help="Start the HTTP server")
    p_start.add_argument("--host", help="Bind address (default: 127.0.0.1)")
    p_start.add_argument("--port", type=int, help="Port number (default: 5000)")
    p_start.add_argument("--log-level", choices=["debug", "info", "warning", "error"],
                         help="Logging level (default: info)")
    p_start.add_argument("--store", help="Registered store name (default: memory)")
    p_start.add_argument("--no-seed", action="store_true",
                         help="Don't seed the default item into an empty store")

    # routes
    subparsers.add_parser("routes", help="Show the HTTP route table")

    # stores
    subparsers.add_parser("stores", help="List registered stores")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "start": cmd_start,
        "routes": cmd_routes,
        "stores": cmd_stores,
    }

    if args.command in commands:
        commands[args.command](args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
