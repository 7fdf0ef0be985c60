"""``vanity routes`` — list compiled routes in match order.

Prints a table of PREFIX, VCS and REPO so the longest-prefix ordering
can be checked by eye.
"""

import argparse

from vanity.cli._load import load_app


def run_routes(args: argparse.Namespace) -> None:
    """Print the compiled route table for the configured app."""
    app = load_app(args)
    entries = {entry.prefix: entry for entry in app.resolved.paths}

    rows: list[tuple[str, str, str]] = []
    for route in app.router.routes:
        entry = entries.get(route.prefix)
        if route.exact or entry is None:
            rows.append((route.prefix, "-", "(index)"))
        else:
            rows.append((route.prefix, entry.vcs, entry.repo))

    max_prefix = max(max(len(r[0]) for r in rows), 6)  # "PREFIX" header
    max_vcs = 3  # "VCS" header; vcs names are at most 3 chars

    fmt = f"{{:<{max_prefix}}}  {{:<{max_vcs}}}  {{}}"
    print(fmt.format("PREFIX", "VCS", "REPO"))
    sep_len = max_prefix + max_vcs + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for prefix, vcs, repo in rows:
        print(fmt.format(prefix, vcs, repo))
