"""Tern CLI — serve a content tree, inspect its routes.

Entry point registered as ``tern`` in ``pyproject.toml``::

    [project.scripts]
    tern = "tern.cli:main"
"""

import argparse
import sys

from tern.config import ENVIRONMENTS


def _add_content_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=None,
        help="Content directory (default: $TERN_ROOT or ./public)",
    )
    parser.add_argument(
        "--set",
        dest="settings",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Value for a configuration marker (repeatable)",
    )
    parser.add_argument(
        "--env",
        choices=sorted(ENVIRONMENTS),
        default=None,
        help="Environment (default: $TERN_ENV or development)",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: info)")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``tern`` command."""
    parser = argparse.ArgumentParser(
        prog="tern",
        description="Tern — serve a pre-built single-page app with precomputed responses.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- tern serve -------------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Start the dev or production server")
    _add_content_arguments(serve_parser)
    serve_parser.add_argument("--host", default=None, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    serve_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker count (0=auto-detect, production only)",
    )
    serve_parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Don't rebuild routes when the content root changes (development)",
    )

    # -- tern routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the routes a content tree produces")
    _add_content_arguments(routes_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from tern.cli._serve import run_serve

        run_serve(args)
    elif args.command == "routes":
        from tern.cli._routes import run_routes

        run_routes(args)
