"""Routing — longest-prefix route table.

Routes are registered during setup and compiled into an immutable,
ordered table when the app freezes.
"""

from vanity.routing.route import Route, RouteMatch
from vanity.routing.router import Router

__all__ = ["Route", "RouteMatch", "Router"]
