"""
Task Tracker CLI — Command-line interface for the task service
===============================================================
Usage:
    # Serve /tasks over HTTP
    python -m tasktracker.cli serve --port 8080 --store sqlite --db tasks.db

    # Create a task without going through HTTP
    python -m tasktracker.cli add "Write the report" --store sqlite --db tasks.db

    # Look a task up by id
    python -m tasktracker.cli show 1 --store sqlite --db tasks.db

    # List available stores
    python -m tasktracker.cli stores
"""

from __future__ import annotations

import argparse
import sys

from tasktracker.config import ServiceConfig, configure_logging
from tasktracker.handler import HandlerResponse
from tasktracker.stores.registry import list_stores


# ─────────────────────────────────────────────────────────────
#  Helpers
# ─────────────────────────────────────────────────────────────

def load_config(args) -> ServiceConfig:
    """Environment first, then any flags given on the command line."""
    config = ServiceConfig.from_env()
    for attr, flag in (("host", "host"), ("port", "port"), ("store", "store"),
                       ("db_path", "db"), ("log_level", "log_level")):
        value = getattr(args, flag, None)
        if value not in (None, ""):
            setattr(config, attr, value)
    return config


def print_result(result: HandlerResponse):
    mark = "✔" if result.status < 400 else "✘"
    print(f"{mark} {result.status}")
    if result.body:
        print(f"  {result.text}")


# ─────────────────────────────────────────────────────────────
#  Commands
# ─────────────────────────────────────────────────────────────

def cmd_serve(args):
    """Launch the HTTP service."""
    from tasktracker.server import run_server
    run_server(load_config(args))


def cmd_add(args) -> int:
    """Create a task through the handler."""
    from tasktracker.server import build_handler

    config = load_config(args)
    configure_logging(config.log_level)
    result = build_handler(config).do_post({"description": args.description})
    print_result(result)
    return 0 if result.status == 201 else 1


def cmd_show(args) -> int:
    """Look a task up by id through the handler."""
    from tasktracker.server import build_handler

    config = load_config(args)
    configure_logging(config.log_level)
    try:
        result = build_handler(config).do_get({"id": args.id})
    except ValueError:
        print(f"✘ Invalid id: {args.id!r}")
        return 2
    print_result(result)
    return 0 if result.status == 200 else 1


def cmd_stores(args) -> int:
    """List available task stores."""
    print("\n─── Available Stores ───")
    for name in list_stores():
        print(f"  • {name}")
    return 0


# ─────────────────────────────────────────────────────────────
#  Main
# ─────────────────────────────────────────────────────────────

def _add_store_flags(parser: argparse.ArgumentParser):
    parser.add_argument("--store", default=None, help="Task store (memory/sqlite)")
    parser.add_argument("--db", default=None, help="SQLite database file")
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tasktracker",
        description="Task Tracker — a minimal /tasks HTTP endpoint",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  tasktracker serve --port 8080 --store sqlite --db tasks.db\n"
            "  tasktracker add \"Write the report\" --store sqlite --db tasks.db\n"
            "  tasktracker show 1 --store sqlite --db tasks.db\n"
            "  tasktracker stores\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # serve
    p_serve = subparsers.add_parser("serve", help="Serve /tasks over HTTP")
    p_serve.add_argument("--host", default=None, help="Bind address (default: 127.0.0.1)")
    p_serve.add_argument("--port", default=None, type=int, help="Port number (default: 8080)")
    _add_store_flags(p_serve)

    # add
    p_add = subparsers.add_parser("add", help="Create a task")
    p_add.add_argument("description", help="Task description (3-120 characters)")
    _add_store_flags(p_add)

    # show
    p_show = subparsers.add_parser("show", help="Show a task by id")
    p_show.add_argument("id", help="Task id")
    _add_store_flags(p_show)

    # stores
    subparsers.add_parser("stores", help="List available task stores")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "serve": cmd_serve,
        "add": cmd_add,
        "show": cmd_show,
        "stores": cmd_stores,
    }

    if args.command in commands:
        return commands[args.command](args) or 0
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
