"""tracmark: format parsed Trac markup into presentation trees."""

from tracmark.formatting import (
    PARAGRAPH_MARKER,
    RenderContext,
    TreeLoader,
    TreeLoadError,
    format_node,
    format_tree,
)

__version__ = "0.1.0"

__all__ = [
    "PARAGRAPH_MARKER",
    "RenderContext",
    "TreeLoader",
    "TreeLoadError",
    "format_node",
    "format_tree",
    "__version__",
]
