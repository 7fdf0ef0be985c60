"""Builds a frozen App from CLI arguments.

Shared by ``vanity run``, ``vanity check`` and ``vanity routes``. Any
configuration failure is logged and ends the process with status 1.
"""

import argparse
import logging
from typing import Any

from vanity.app import App
from vanity.config import ServerConfig, config_path
from vanity.errors import ConfigurationError

logger = logging.getLogger("vanity.cli")


def load_app(args: argparse.Namespace, **server_overrides: Any) -> App:
    """Load the config named by ``args.config`` and freeze an App from it.

    Raises:
        SystemExit: With status 1 if the config cannot be read, parsed,
            or resolved.
    """
    path = config_path(args.config)
    try:
        server_config = ServerConfig.from_env(**server_overrides)
        app = App.from_file(path, server_config)
        app._ensure_frozen()
    except ConfigurationError as exc:
        logger.critical("%s: %s", path, exc)
        raise SystemExit(1) from exc
    return app
