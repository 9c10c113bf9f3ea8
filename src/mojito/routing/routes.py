"""Ordered route table: registration, matching and dispatch.

Routes are tried in registration order and the first match wins. Nested
tables (created by ``under``) are searched with the remainder of the
path the parent left unconsumed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from mojito.routing.route import Match, Route, RouteBuilder
from mojito.stash import Stash

if TYPE_CHECKING:
    from mojito.context import Context

logger = logging.getLogger("mojito.routes")


class Routes(RouteBuilder):
    """An ordered list of routes."""

    __slots__ = ("_routes",)

    def __init__(self) -> None:
        self._routes: list[Route] = []

    def _table(self) -> Routes:
        return self

    def add(self, route: Route) -> Route:
        self._routes.append(route)
        return route

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def lookup(self, name: str) -> Route | None:
        """Find a route by name, searching nested tables depth first."""
        for route in self._routes:
            if route.name == name:
                return route
            if route.children is not None:
                found = route.children.lookup(name)
                if found is not None:
                    return found
        return None

    def find_route(self, method: str, path: str) -> tuple[Route, Stash, str] | None:
        """First route in this table accepting *method* and *path*.

        Returns the route, its defaults overlaid with the non-empty
        captures, and the unconsumed rest of *path*.
        """
        for route in self._routes:
            if method not in route.methods:
                continue
            m = route.search(path)
            if m is None:
                continue
            stash = Stash(route.defaults)
            stash.merge({key: value for key, value in m.groupdict().items() if value})
            return route, stash, path[m.end() :]
        return None

    def find(self, method: str, path: str) -> tuple[Match, Stash] | None:
        """Resolve the full route chain for *method* and *path*.

        Does not touch any context. ``None`` when the top level or any
        nested level fails to match.
        """
        found = self.find_route(method, path)
        if found is None:
            return None
        route, stash, rest = found
        match = Match([route])
        while route.has_children:
            assert route.children is not None
            found = route.children.find_route(method, rest)
            if found is None:
                logger.debug("Nested routes under %r do not match %r", route.path, rest)
                return None
            route, nested, rest = found
            match.append(route)
            stash.merge(nested)
        return match, stash

    def match(self, c: Context) -> Match | None:
        """Set ``c.match`` for the request and merge captures into the stash.

        The path comes from ``stash["path"]`` so hooks can rewrite it.
        On failure ``c.match`` is ``None`` and the stash is untouched.
        """
        path = c.stash.get("path")
        if not isinstance(path, str):
            path = c.req.path
        resolved = self.find(c.req.method, path)
        if resolved is None:
            c.match = None
            return None
        c.match, stash = resolved
        c.stash.merge(stash)
        return c.match

    def dispatch(self, c: Context) -> None:
        """Match, then run the matched handlers outermost first.

        Without a match the response becomes 404 "Not Found". An under
        handler returning false stops the chain.
        """
        match = self.match(c)
        if match is None:
            logger.debug("No route for %s %s", c.req.method, c.stash.get("path", c.req.path))
            c.res.code = 404
            c.res.status = "Not Found"
            return
        for position, route in enumerate(match.stack):
            match.position = position
            c._continue_dispatch = False
            if route.handler is not None:
                route.handler(c)
            if not c._continue_dispatch:
                break
