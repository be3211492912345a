"""``tern routes`` — list the routes a content tree produces.

Builds the table exactly as the server would (rewriting included) and
prints one row per route with its content type, cache policy, and size.
"""

import argparse
import sys

from tern.cli._config import configure_logging, resolve_config
from tern.errors import TernError
from tern.routing.builder import build_route_table


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of PATH, CONTENT-TYPE, CACHE-CONTROL, and BYTES."""
    try:
        config = resolve_config(args)
        configure_logging(config.log_level if args.log_level else "warning")
        table = build_route_table(config.root, settings=config.settings, max_age=config.max_age)
    except TernError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows: list[tuple[str, str, str, str]] = []
    for path in sorted(table):
        response = table[path]
        rows.append(
            (
                path,
                response.header("Content-Type") or "",
                response.header("Cache-Control") or "",
                response.header("Content-Length") or "0",
            )
        )

    headings = ("PATH", "CONTENT-TYPE", "CACHE-CONTROL", "BYTES")
    widths = [max(len(h), *(len(r[i]) for r in rows)) for i, h in enumerate(headings)]
    fmt = "  ".join(f"{{:<{w}}}" for w in widths[:-1]) + "  {:>" + str(widths[-1]) + "}"

    print(f"version {table.version}, {len(table)} routes")
    print(fmt.format(*headings))
    print("-" * min(sum(widths) + 2 * (len(widths) - 1), 100))
    for row in rows:
        print(fmt.format(*row))
