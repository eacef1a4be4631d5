"""
Command-line interface for Tunebox.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .core.config import ensure_directories, load_config, write_default_config
from .core.output import setup_logging_from_config


def run_serve(args: argparse.Namespace) -> int:
    """Load config, set up logging and run the API server.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    from .web_launcher import check_server_prerequisites, run_server

    if args.config:
        # The app factory runs inside uvicorn and re-reads config from here
        os.environ["TUNEBOX_CONFIG"] = str(Path(args.config).expanduser())

    try:
        config = load_config()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    if args.host:
        config.server.host = args.host
    if args.port:
        config.server.port = args.port
    if args.reload:
        config.server.reload = True

    log_path = setup_logging_from_config(config.logging)
    ensure_directories(config)

    ok, error = check_server_prerequisites(config.server)
    if not ok:
        logger.error(error)
        print(error, file=sys.stderr)
        return 1

    print(f"Tunebox API on http://{config.server.host}:{config.server.port} (logs: {log_path})")
    run_server(config.server)
    return 0


def run_init_config(args: argparse.Namespace) -> int:
    path = write_default_config(Path(args.path).expanduser() if args.path else None)
    print(f"Configuration file: {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tunebox",
        description="Tunebox - upload audio and stream it to the browser",
    )
    subparsers = parser.add_subparsers(dest="subcommand", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Run the web API")
    serve_parser.add_argument("--host", help="Interface to bind")
    serve_parser.add_argument("--port", type=int, help="Port to listen on")
    serve_parser.add_argument(
        "--reload", action="store_true", help="Reload on source changes"
    )
    serve_parser.add_argument("--config", help="Path to config.toml")
    serve_parser.set_defaults(func=run_serve)

    init_parser = subparsers.add_parser(
        "init-config", help="Write the default config.toml"
    )
    init_parser.add_argument("path", nargs="?", help="Where to write it")
    init_parser.set_defaults(func=run_init_config)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.subcommand:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
