"""Rendering pipeline from parser output files to display formats."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from tracmark.config import get_settings
from tracmark.formatting.context import RenderContext
from tracmark.formatting.formatter import format_tree
from tracmark.formatting.ir import PresentationNode
from tracmark.formatting.loader import TreeLoader, TreeLoadError
from tracmark.formatting.nodes import TicketId
from tracmark.render import get_renderer
from tracmark.render.html_renderer import HTMLRenderer

logger = logging.getLogger(__name__)

INPUT_EXTENSIONS = (".json",)


class TransformationError(Exception):
    """Error while rendering a markup tree."""

    pass


class MarkupTransformer:
    """Orchestrates the rendering pipeline.

    Pipeline:
    1. Read the parser's JSON output
    2. Load it into typed source nodes
    3. Format the nodes into a presentation tree
    4. Serialise the tree with the selected renderer
    """

    def __init__(
        self,
        output_format: Optional[str] = None,
        trac_url: Optional[str] = None,
        profile_url: Optional[str] = None,
        ticket: Optional[TicketId] = None,
        max_depth: Optional[int] = None,
    ) -> None:
        """Initialize the transformer.

        Args:
            output_format: Renderer name ("html" or "text")
            trac_url: Base URL for ticket, changeset and attachment links
            profile_url: Base URL for user profile links (HTML only)
            ticket: Ticket the rendered text belongs to; overrides any
                ticket stored in the input document
            max_depth: Deepest tree nesting accepted from input files
        """
        settings = get_settings()
        self.output_format = output_format or settings.output_format
        self.trac_url = trac_url or settings.trac_url
        self.profile_url = profile_url or settings.profile_url
        self.ticket = ticket

        renderer_class = get_renderer(self.output_format)
        if renderer_class is HTMLRenderer:
            self.renderer = HTMLRenderer(profile_url=self.profile_url)
        else:
            self.renderer = renderer_class()

        self.loader = TreeLoader(max_depth=max_depth or settings.max_depth)

    def transform(self, data: Any) -> list[PresentationNode]:
        """Load parser output and format it.

        Args:
            data: A node list, or a ``{"ticket": ..., "nodes": [...]}`` object

        Returns:
            Paragraph-grouped presentation nodes

        Raises:
            TreeLoadError: If the data is not shaped like parser output
        """
        nodes, document_ticket = self.loader.load_document(data)
        ticket = self.ticket if self.ticket is not None else document_ticket
        context = RenderContext(ticket=ticket, trac_url=self.trac_url)

        logger.debug("Formatting %d node(s) with ticket %s", len(nodes), ticket)
        return format_tree(nodes, context)

    def render(self, data: Any) -> str:
        """Load, format and serialise parser output without file I/O."""
        return self.renderer.render(self.transform(data))

    def transform_file(
        self,
        input_path: Path,
        output_path: Path,
    ) -> list[PresentationNode]:
        """Render a parser output file.

        Args:
            input_path: Path to the JSON tree
            output_path: Path for the rendered output

        Returns:
            The presentation nodes that were written

        Raises:
            TransformationError: If the file cannot be read or decoded
        """
        if not input_path.exists():
            raise TransformationError(f"Input file not found: {input_path}")

        ext = input_path.suffix.lower()
        if ext not in INPUT_EXTENSIONS:
            raise TransformationError(
                f"Unsupported input format: {ext}. "
                f"Supported: {', '.join(INPUT_EXTENSIONS)}"
            )

        raw = input_path.read_text(encoding="utf-8")
        if not raw.strip():
            raise TransformationError("Input file contains no tree")

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise TransformationError(f"Invalid JSON in {input_path.name}: {exc}") from exc

        try:
            nodes = self.transform(data)
        except TreeLoadError as exc:
            raise TransformationError(f"Malformed tree in {input_path.name}: {exc}") from exc

        self.renderer.write(nodes, output_path)
        logger.debug("Wrote %s", output_path)
        return nodes
