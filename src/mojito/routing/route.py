"""Route, Match and the registration surface shared by Routes and Route."""

from __future__ import annotations

import functools
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from mojito._internal.types import Handler, UnderHandler
from mojito.errors import ConfigurationError
from mojito.routing.pattern import compile_pattern
from mojito.stash import Stash

if TYPE_CHECKING:
    from mojito.context import Context
    from mojito.routing.routes import Routes

UNDER_METHODS = ("GET", "POST", "PATCH", "PUT", "DELETE")


class RouteBuilder:
    """Registration methods. ``Routes`` registers into itself; an under
    ``Route`` registers into its nested table.
    """

    __slots__ = ()

    def _table(self) -> Routes:
        raise NotImplementedError

    def any(
        self,
        methods: Iterable[str],
        path: str,
        defaults: Mapping[str, Any] | None = None,
        *,
        name: str | None = None,
    ) -> Route:
        """Register a route for any of *methods*.

        Placeholders in *path* fill the stash. Names present in
        *defaults* become optional placeholders.
        """
        route = Route(path, methods, defaults, name=name)
        self._table().add(route)
        return route

    def get(self, path: str, defaults: Mapping[str, Any] | None = None, *, name: str | None = None) -> Route:
        return self.any(("GET",), path, defaults, name=name)

    def post(self, path: str, defaults: Mapping[str, Any] | None = None, *, name: str | None = None) -> Route:
        return self.any(("POST",), path, defaults, name=name)

    def put(self, path: str, defaults: Mapping[str, Any] | None = None, *, name: str | None = None) -> Route:
        return self.any(("PUT",), path, defaults, name=name)

    def patch(self, path: str, defaults: Mapping[str, Any] | None = None, *, name: str | None = None) -> Route:
        return self.any(("PATCH",), path, defaults, name=name)

    def delete(self, path: str, defaults: Mapping[str, Any] | None = None, *, name: str | None = None) -> Route:
        return self.any(("DELETE",), path, defaults, name=name)

    def under(
        self,
        path: str,
        handler: UnderHandler,
        defaults: Mapping[str, Any] | None = None,
        *,
        name: str | None = None,
    ) -> Route:
        """Register an intermediate route that guards nested routes.

        *handler* returns ``True`` to continue into the nested route and
        ``False`` to stop after itself. Register children on the returned
        route::

            auth = app.routes.under("/admin", check_login)
            auth.get("/users").to(list_users)
        """
        table = self._table()
        route = Route(path, UNDER_METHODS, defaults, name=name, children=type(table)())
        route.to(handler)
        table.add(route)
        return route


def _continue_if(handler: UnderHandler) -> Handler:
    @functools.wraps(handler)
    def under_handler(c: Context) -> None:
        c._continue_dispatch = bool(handler(c))

    return under_handler


class Route(RouteBuilder):
    """A single endpoint: methods, compiled path pattern, defaults, handler.

    Only ``handler`` (via ``to``) and the nested table change after
    registration. A route with nested routes matches a path prefix; a
    leaf route must match the whole remaining path.
    """

    __slots__ = ("children", "defaults", "handler", "methods", "name", "path", "pattern")

    def __init__(
        self,
        path: str,
        methods: Iterable[str],
        defaults: Mapping[str, Any] | None = None,
        *,
        name: str | None = None,
        handler: Handler | None = None,
        children: Routes | None = None,
    ) -> None:
        self.path = path
        self.methods = frozenset(methods)
        self.defaults = Stash(defaults or {})
        self.pattern: re.Pattern[str] = compile_pattern(path, self.defaults)
        self.name = name
        self.handler = handler
        self.children = children

    def _table(self) -> Routes:
        if self.children is None:
            msg = f"Route {self.path!r} cannot hold nested routes; create it with under()"
            raise ConfigurationError(msg)
        return self.children

    @property
    def has_children(self) -> bool:
        return self.children is not None and len(self.children) > 0

    def to(self, handler: Handler | UnderHandler) -> Route:
        """Set the handler and return the route.

        On a route created by ``under`` the handler's return value
        decides whether dispatch continues into the nested routes.
        """
        self.handler = _continue_if(handler) if self.children is not None else handler
        return self

    def __call__(self, handler: Handler) -> Handler:
        """Decorator form of ``to``: returns *handler* unchanged."""
        self.to(handler)
        return handler

    def search(self, path: str) -> re.Match[str] | None:
        """Match *path*: by prefix if this route has children, else in full."""
        if self.has_children:
            return self.pattern.match(path)
        return self.pattern.fullmatch(path)

    def __repr__(self) -> str:
        methods = ",".join(sorted(self.methods))
        return f"<Route {methods} {self.path!r}{f' name={self.name!r}' if self.name else ''}>"


@dataclass(slots=True)
class Match:
    """The routes selected for one request, outermost first."""

    stack: list[Route] = field(default_factory=list)
    position: int = 0

    def append(self, route: Route) -> None:
        self.stack.append(route)

    @property
    def endpoint(self) -> Route:
        """The innermost (last) route."""
        return self.stack[-1]

    def __iter__(self) -> Iterator[Route]:
        return iter(self.stack)

    def __len__(self) -> int:
        return len(self.stack)
