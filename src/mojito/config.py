"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, no string-key
dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have defaults. Override what you need::

        config = AppConfig(debug=True, port=8080, static_dirs=("public", "assets"))
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False
    log_level: str = "info"

    # Templates
    template_dir: str | Path | None = "templates"
    component_dirs: tuple[str | Path, ...] = ()  # Searched after template_dir
    autoescape: bool = True

    # Static files
    static_dirs: tuple[str | Path, ...] = ("public",)
    static_cache_control: str = "public, max-age=3600"

    # Responses
    default_content_type: str = "text/html; charset=utf-8"
