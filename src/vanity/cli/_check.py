"""``vanity check`` — validate a vanity config without serving it.

Loads and resolves every path entry, prints a one-line summary, and
exits with status 1 on the first error.
"""

import argparse

from vanity.cli._load import load_app


def run_check(args: argparse.Namespace) -> None:
    app = load_app(args)
    resolved = app.resolved
    print(f"OK: {len(resolved.paths)} path(s) for {resolved.host}, {resolved.cache_control}")
