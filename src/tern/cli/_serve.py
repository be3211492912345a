"""``tern serve`` — development or production server command.

Builds the route table up front so a broken content tree is reported
as a one-line error instead of a server that never comes up.
"""

import argparse
import sys

from tern.app import App
from tern.cli._config import configure_logging, resolve_config
from tern.errors import TernError


def run_serve(args: argparse.Namespace) -> None:
    """Resolve configuration, build the app, and start serving.

    Production environments get the multi-worker production server;
    anything else gets the single-worker development server.
    """
    try:
        config = resolve_config(args)
        configure_logging(config.log_level)
        app = App(config)
        # Build now so content errors surface here, not in the server
        app.table  # noqa: B018
    except TernError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    app.run()
