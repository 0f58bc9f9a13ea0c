"""Formatting engine for parsed Trac markup."""

from tracmark.formatting.context import RenderContext, TRAC_URL
from tracmark.formatting.formatter import format_node, format_tree, group_paragraphs
from tracmark.formatting.ir import (
    PARAGRAPH_MARKER,
    CodeBlock,
    Element,
    Marker,
    UserLink,
    plain_text,
)
from tracmark.formatting.loader import TreeLoader, TreeLoadError

__all__ = [
    "RenderContext",
    "TRAC_URL",
    "format_node",
    "format_tree",
    "group_paragraphs",
    "PARAGRAPH_MARKER",
    "CodeBlock",
    "Element",
    "Marker",
    "UserLink",
    "plain_text",
    "TreeLoader",
    "TreeLoadError",
]
