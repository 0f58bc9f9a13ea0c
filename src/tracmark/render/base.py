"""Abstract base class for presentation tree renderers."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from tracmark.formatting.ir import PresentationNode


class Renderer(ABC):
    """Abstract base class for presentation tree renderers.

    Each renderer serialises the output of ``format_tree`` into one
    display format and can write the result to a file.
    """

    @property
    @abstractmethod
    def extension(self) -> str:
        """Return the file extension for this format (e.g., '.html')."""
        ...

    @abstractmethod
    def render(self, nodes: Sequence[PresentationNode]) -> str:
        """Serialise presentation nodes.

        Args:
            nodes: Top-level presentation nodes, usually paragraphs

        Returns:
            The rendered document as a string
        """
        ...

    def write(self, nodes: Sequence[PresentationNode], path: Path) -> None:
        """Render nodes and write them to a file.

        Args:
            nodes: Top-level presentation nodes
            path: Path to write the output to
        """
        path.write_text(self.render(nodes), encoding="utf-8")
