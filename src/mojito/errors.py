"""Mojito exception hierarchy.

Shared across Routes, Application, Context, the renderer and the server
boundary so every module raises and catches the same types.
"""

from dataclasses import dataclass


class MojitoError(Exception):
    """Base for all mojito-specific errors."""


class ConfigurationError(MojitoError):
    """Raised when the application is set up incorrectly.

    These are programmer errors: fix the registration, don't catch them.
    """


class TemplateNotFound(ConfigurationError):  # noqa: N818
    """The renderer was asked for a template it does not know."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Template not found: {name!r}")
        self.name = name


class StashTypeMismatch(MojitoError, TypeError):  # noqa: N818
    """A stash value was read as a type it does not hold.

    Raised instead of silently converting, e.g. ``c.param("id")`` when
    the stash holds ``{"id": 42}``.
    """

    def __init__(self, key: str, expected: type, value: object) -> None:
        super().__init__(
            f"Stash value {key!r} is {type(value).__name__}, not {expected.__name__}"
        )
        self.key = key
        self.expected = expected
        self.value = value


@dataclass(frozen=True, slots=True)
class HTTPError(MojitoError):
    """An error that maps directly to an HTTP status code.

    Handlers may raise these. The request boundary catches them and
    turns them into a response with the same status.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — raised by handlers that cannot find what was asked for."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
