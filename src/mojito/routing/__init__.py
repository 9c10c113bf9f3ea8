"""Routing: placeholder paths compiled to regular expressions.

Routes are tried in registration order; the first match wins. A route
created with ``under`` owns a nested table and matches by prefix, so a
request walks down the tree and collects a stack of routes to call.
"""

from mojito.routing.route import Match, Route
from mojito.routing.routes import Routes

__all__ = ["Match", "Route", "Routes"]
