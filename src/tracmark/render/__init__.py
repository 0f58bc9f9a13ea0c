"""Renderers that serialise presentation trees."""

from tracmark.render.base import Renderer
from tracmark.render.html_renderer import HTMLRenderer
from tracmark.render.text_renderer import TextRenderer

__all__ = [
    "Renderer",
    "HTMLRenderer",
    "TextRenderer",
    "RENDERER_MAP",
    "SUPPORTED_FORMATS",
    "get_renderer",
]

# Map output format names to renderers
RENDERER_MAP: dict[str, type[Renderer]] = {
    "html": HTMLRenderer,
    "text": TextRenderer,
}

SUPPORTED_FORMATS = tuple(RENDERER_MAP.keys())


def get_renderer(name: str) -> type[Renderer]:
    """Get the renderer class for an output format name."""
    key = name.lower()
    if key not in RENDERER_MAP:
        raise ValueError(
            f"Unsupported output format: {key}. "
            f"Supported formats: {', '.join(SUPPORTED_FORMATS)}"
        )
    return RENDERER_MAP[key]
