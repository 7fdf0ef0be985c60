"""``vanity run`` — serve the configured vanity imports.

Command-line flags override ``PORT`` and the defaults in ``ServerConfig``.
"""

import argparse
import logging
from typing import Any

from vanity.cli._load import load_app
from vanity.errors import ListenError

logger = logging.getLogger("vanity.cli")


def run_server(args: argparse.Namespace) -> None:
    """Load the config, then block serving it until shutdown."""
    overrides: dict[str, Any] = {"log_level": args.log_level}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.workers is not None:
        overrides["workers"] = args.workers
    if args.reload:
        overrides["debug"] = True

    app = load_app(args, **overrides)
    try:
        app.run()
    except ListenError as exc:
        logger.critical("%s", exc)
        raise SystemExit(1) from exc
