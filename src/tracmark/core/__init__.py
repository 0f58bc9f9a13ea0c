"""Rendering pipeline for tracmark."""

from tracmark.core.transformer import MarkupTransformer, TransformationError

__all__ = [
    "MarkupTransformer",
    "TransformationError",
]
