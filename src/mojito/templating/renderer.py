"""Renderer capability and the kida-backed implementation.

Templates registered in memory are looked up first, then template
directories, most recently added first. Helpers become template globals.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from kida import ChoiceLoader, DictLoader, Environment, FileSystemLoader
from kida.environment.exceptions import TemplateNotFoundError

from mojito.errors import TemplateNotFound

if TYPE_CHECKING:
    from mojito.config import AppConfig
    from mojito.context import Context


class Renderer(Protocol):
    """What the application needs from a template renderer."""

    def add_template(self, name: str, content: str) -> None: ...
    def add_helper(self, name: str, func: Callable[..., Any]) -> None: ...
    def add_path(self, path: str | Path) -> None: ...
    def render(self, name: str, c: Context) -> str: ...


class KidaRenderer:
    """Render kida templates with the stash as variables.

    Besides every stash key, templates see ``c`` (the context) and
    ``stash``::

        renderer.add_template("hello.html", "Hello, {{ name }}!")

    The kida ``Environment`` is built on first render and rebuilt after
    any later registration.
    """

    __slots__ = ("_autoescape", "_env", "_helpers", "_lock", "_paths", "_templates")

    def __init__(self, paths: Iterable[str | Path] = (), *, autoescape: bool = True) -> None:
        self._autoescape = autoescape
        self._paths: list[Path] = [Path(p) for p in paths]
        self._templates: dict[str, str] = {}
        self._helpers: dict[str, Callable[..., Any]] = {}
        self._env: Environment | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: AppConfig) -> KidaRenderer:
        """Search ``template_dir`` then ``component_dirs``, skipping missing ones."""
        candidates = [config.template_dir, *config.component_dirs]
        paths = [Path(p) for p in candidates if p is not None and Path(p).is_dir()]
        return cls(paths, autoescape=config.autoescape)

    # -- Registration --

    def add_template(self, name: str, content: str) -> None:
        self._templates[name] = content
        self._env = None

    def add_helper(self, name: str, func: Callable[..., Any]) -> None:
        self._helpers[name] = func
        self._env = None

    def add_path(self, path: str | Path) -> None:
        """Search *path* before every directory added earlier."""
        self._paths.insert(0, Path(path))
        self._env = None

    # -- Rendering --

    def render(self, name: str, c: Context) -> str:
        """Render template *name*. Raises ``TemplateNotFound`` if no source has it."""
        env = self._environment()
        try:
            template = env.get_template(name)
        except TemplateNotFoundError as exc:
            raise TemplateNotFound(name) from exc
        variables: dict[str, Any] = dict(c.stash)
        variables["c"] = c
        variables["stash"] = c.stash
        return template.render(variables)

    def _environment(self) -> Environment:
        env = self._env
        if env is None:
            with self._lock:
                env = self._env
                if env is None:
                    env = self._env = self._build()
        return env

    def _build(self) -> Environment:
        loaders: list[Any] = [DictLoader(dict(self._templates))]
        loaders.extend(FileSystemLoader(str(path)) for path in self._paths)
        env = Environment(loader=ChoiceLoader(loaders), autoescape=self._autoescape)
        for name, func in self._helpers.items():
            env.add_global(name, func)
        return env
