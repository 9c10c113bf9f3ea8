"""Template rendering through kida."""

from mojito.templating.renderer import KidaRenderer, Renderer

__all__ = ["KidaRenderer", "Renderer"]
