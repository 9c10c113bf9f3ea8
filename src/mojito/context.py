"""Per-request context — the object every handler and hook receives.

Owns the request, the response, the stash and the route match for one
request. Never shared across requests or threads.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mojito.errors import ConfigurationError
from mojito.stash import Stash

if TYPE_CHECKING:
    from mojito.app import Application
    from mojito.http.request import Request
    from mojito.http.response import Response
    from mojito.routing.route import Match

_UNSET: Any = object()


class Context:
    """Request, response, stash and match for a single request.

    Usage::

        @app.routes.get("/hello/:name")
        def hello(c: Context) -> None:
            c.render(text=f"Hello, {c.param('name')}!")
    """

    __slots__ = ("_continue_dispatch", "app", "match", "rendered", "req", "res", "stash")

    def __init__(
        self,
        app: Application | None,
        req: Request,
        res: Response,
        stash: Stash | None = None,
    ) -> None:
        self.app = app
        self.req = req
        self.res = res
        self.stash = stash if stash is not None else Stash()
        self.match: Match | None = None
        self.rendered = False
        self._continue_dispatch = False

    # -- Parameters --

    def param(self, name: str) -> str:
        """Stash value for *name* if present, else the request parameter.

        Raises ``StashTypeMismatch`` when the stash holds a non-string.
        """
        if name in self.stash:
            return self.stash.string(name)
        return self.req.param(name)

    def every_param(self, name: str) -> list[str]:
        if name in self.stash:
            return [self.stash.string(name)]
        return self.req.every_param(name)

    # -- Rendering --

    def render(
        self,
        template: str | None = None,
        *,
        text: str | None = None,
        json: Any = _UNSET,
        status: int | None = None,
    ) -> None:
        """Finish the response.

        The status comes from *status* or the stash ``status`` key. Content
        comes from *text*, *json*, or the template named by *template* or
        the stash ``template`` key; with none of those the existing content
        is kept.
        """
        code = status if status is not None else self.stash.integer("status")
        if code is not None:
            self.res.code = code

        if text is not None:
            self.res.text(text)
        elif json is not _UNSET:
            self.res.json(json)
        else:
            name = template or self.stash.get("template")
            if name:
                self.res.html(self.render_string(name))
        self.rendered = True

    def render_string(self, name: str) -> str:
        """Render template *name* with this context and return the text."""
        if self.app is None:
            msg = "Context has no application to render templates with"
            raise ConfigurationError(msg)
        return self.app.renderer.render(name, self)

    def __repr__(self) -> str:
        return f"<Context {self.req.method} {self.req.path}>"
