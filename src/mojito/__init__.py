"""Mojito — a small Mojolicious-style web framework.

Placeholder routes, nested under-routes, hooks around dispatch, static
files and kida templates.

Basic usage::

    from mojito import Application, Context

    app = Application()

    @app.routes.get("/hello/:name", {"name": "World"})
    def hello(c: Context) -> None:
        c.render(text=f"Hello, {c.param('name')}!")

    if __name__ == "__main__":
        app.start()

Serving (``pip install mojito[server]``)::

    python hello.py daemon -l http://*:3000
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "App",
    "AppConfig",
    "Application",
    "ConfigurationError",
    "Context",
    "HTTPError",
    "Hook",
    "MojitoError",
    "NotFound",
    "Request",
    "Response",
    "Route",
    "Routes",
    "Stash",
    "Static",
    "__version__",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import mojito`` fast while providing a clean top-level API.
    """
    if name in ("App", "Application", "Hook"):
        from mojito import app as _app

        return getattr(_app, name)

    if name == "AppConfig":
        from mojito.config import AppConfig

        return AppConfig

    if name == "Context":
        from mojito.context import Context

        return Context

    if name == "Request":
        from mojito.http.request import Request

        return Request

    if name == "Response":
        from mojito.http.response import Response

        return Response

    if name in ("Route", "Routes"):
        from mojito import routing as _routing

        return getattr(_routing, name)

    if name == "Stash":
        from mojito.stash import Stash

        return Stash

    if name == "Static":
        from mojito.static import Static

        return Static

    if name in ("ConfigurationError", "HTTPError", "MojitoError", "NotFound"):
        from mojito import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
