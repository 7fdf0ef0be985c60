"""Vanity CLI — serve, validate, and inspect a vanity config.

Entry point registered as ``vanity`` in ``pyproject.toml``::

    [project.scripts]
    vanity = "vanity.cli:main"
"""

import argparse
import logging
import sys

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def _add_config_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to the vanity YAML file (default: $VANITY_CONFIG or vanity.yml)",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``vanity`` command."""
    parser = argparse.ArgumentParser(
        prog="vanity",
        description="Vanity — serve vanity import pages from a YAML config.",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="info",
        help="Logging level (default: info)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- vanity run -------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the vanity server")
    _add_config_argument(run_parser)
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Bind port number (default: $PORT or 3000)",
    )
    run_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker count (0=auto-detect)",
    )
    run_parser.add_argument(
        "--reload",
        action="store_true",
        help="Development mode: single worker, restart on changes",
    )

    # -- vanity check -----------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate the config and exit")
    _add_config_argument(check_parser)

    # -- vanity routes ----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List compiled routes")
    _add_config_argument(routes_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "run":
        from vanity.cli._run import run_server

        run_server(args)
    elif args.command == "check":
        from vanity.cli._check import run_check

        run_check(args)
    elif args.command == "routes":
        from vanity.cli._routes import run_routes

        run_routes(args)
