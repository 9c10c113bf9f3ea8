"""Application — the central object a mojito program builds.

Owns the route table, the hooks, the renderer, the static dispatcher and
the command registry. Registration happens at startup; serving only
reads these structures.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from enum import StrEnum

from mojito._internal.asgi import Receive, Scope, Send
from mojito._internal.types import HookHandler
from mojito.commands import Command, default_commands
from mojito.config import AppConfig
from mojito.context import Context
from mojito.http.request import Request
from mojito.http.response import Response
from mojito.routing.routes import Routes
from mojito.server.handler import handle_request
from mojito.stash import Stash
from mojito.static import Static, StaticServer
from mojito.templating.renderer import KidaRenderer, Renderer

logger = logging.getLogger("mojito.app")


class Hook(StrEnum):
    """Extension points fired around dispatch."""

    BEFORE_DISPATCH = "BeforeDispatch"
    AFTER_DISPATCH = "AfterDispatch"
    AFTER_STATIC = "AfterStatic"


class Application:
    """The application.

    Usage::

        app = Application()

        @app.routes.get("/hello/:name")
        def hello(c: Context) -> None:
            c.render(text=f"Hello, {c.param('name')}!")

        if __name__ == "__main__":
            app.start()

    Every request runs: ``BeforeDispatch`` hooks, the static dispatcher
    (then ``AfterStatic`` hooks) or the routes, ``AfterDispatch`` hooks,
    an implicit ``render()`` if nothing rendered, and the write.
    """

    __slots__ = ("commands", "config", "hooks", "renderer", "routes", "static")

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        renderer: Renderer | None = None,
        static: StaticServer | None = None,
    ) -> None:
        self.config = config or AppConfig()
        self.routes = Routes()
        self.hooks: dict[str, list[HookHandler]] = {}
        self.renderer: Renderer = (
            renderer if renderer is not None else KidaRenderer.from_config(self.config)
        )
        self.static: StaticServer = (
            static
            if static is not None
            else Static(self.config.static_dirs, cache_control=self.config.static_cache_control)
        )
        self.commands: dict[str, Command] = default_commands(self)

    # -- Registration --

    def hook(
        self, name: str, handler: HookHandler | None = None
    ) -> HookHandler | Callable[[HookHandler], HookHandler]:
        """Append *handler* to the hook *name*.

        Without *handler*, returns a decorator::

            @app.hook(Hook.BEFORE_DISPATCH)
            def who(c: Context) -> None:
                c.stash["who"] = "Mojolicious"
        """
        if handler is None:

            def decorator(func: HookHandler) -> HookHandler:
                self.hook(name, func)
                return func

            return decorator

        self.hooks.setdefault(str(name), []).append(handler)
        return handler

    def add_command(self, name: str, command: Command) -> None:
        self.commands[name] = command

    # -- Request lifecycle --

    def emit(self, name: str, c: Context) -> None:
        """Call every handler registered for *name*, in order. Unknown names do nothing."""
        for handler in self.hooks.get(str(name), ()):
            handler(c)

    def build_context(self, req: Request, res: Response | None = None) -> Context:
        """A fresh context for *req* with ``stash["path"]`` set to the request path."""
        return Context(self, req, res if res is not None else Response(), Stash(path=req.path))

    def handler(self, c: Context) -> None:
        """Run the full request lifecycle for *c*.

        Exceptions from hooks and handlers propagate; the server boundary
        (``mojito.server.handler.run_handler``) turns them into responses.
        """
        self.emit(Hook.BEFORE_DISPATCH, c)
        if self.static.dispatch(c):
            logger.debug("Served static file for %s", c.req.path)
            self.emit(Hook.AFTER_STATIC, c)
        else:
            self.routes.dispatch(c)
        self.emit(Hook.AFTER_DISPATCH, c)

        if not c.rendered:
            c.render()
        if c.res.code == 0:
            c.res.code = 200

        if c.res.writer is not None:
            c.res.write()

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        await handle_request(self, scope, receive, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Running --

    def start(self, argv: list[str] | None = None) -> None:
        """Run the command named by ``argv[0]`` (default ``help``).

        *argv* defaults to ``sys.argv[1:]``.
        """
        args = list(sys.argv[1:] if argv is None else argv)
        name = args.pop(0) if args else "help"
        command = self.commands.get(name)
        if command is None:
            print(f"Command not found: {name}", file=sys.stderr)
            raise SystemExit(1)
        command.run(args)

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the application with pounce."""
        from mojito.server.dev import run_server

        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.debug,
        )

    def __repr__(self) -> str:
        return f"<Application routes={len(self.routes)} hooks={sorted(self.hooks)}>"


App = Application
