"""Plain text renderer with Markdown-style markup."""

from typing import Sequence

from tracmark.formatting.ir import CodeBlock, Element, PresentationNode, UserLink
from tracmark.render.base import Renderer

BLOCK_TAGS = frozenset({"p", "h1", "h2", "h3", "h4", "h5", "h6", "ul", "ol", "blockquote", "hr"})

INLINE_WRAPPERS = {
    "strong": "**",
    "em": "*",
    "strike": "~~",
    "code": "`",
}


class TextRenderer(Renderer):
    """Render presentation trees as Markdown-flavoured plain text.

    The output can be read in any text editor or fed to a Markdown viewer:
    - **bold**, *italic*, ~~strike~~ and `code` spans
    - ``#`` headings, ``-`` and numbered list items, ``>`` quotes
    - fenced code blocks and ``---`` rules
    """

    @property
    def extension(self) -> str:
        return ".txt"

    def render(self, nodes: Sequence[PresentationNode]) -> str:
        """Render top-level nodes, separated by blank lines."""
        blocks = [self._render_block(node) for node in nodes]
        return "\n\n".join(block for block in blocks if block)

    def _render_block(self, node: PresentationNode) -> str:
        if isinstance(node, CodeBlock):
            return f"```{node.language or ''}\n{node.text}\n```"
        if not isinstance(node, Element) or node.tag not in BLOCK_TAGS:
            return self._render_inline(node).strip()

        if node.tag == "p":
            return self._render_paragraph(node.children)
        if node.tag == "hr":
            return "---"
        if node.tag == "blockquote":
            body = self.render(node.children)
            return "\n".join(f"> {line}" if line else ">" for line in body.split("\n"))
        if node.tag in ("ul", "ol"):
            return self._render_list(node)

        level = int(node.tag[1])
        return f"{'#' * level} {self._render_children(node)}"

    def _render_paragraph(self, children: Sequence[PresentationNode]) -> str:
        # Paragraphs may hold block nodes (lists, headings, code) between runs
        # of inline content; each becomes a block of its own.
        parts: list[str] = []
        pending: list[str] = []

        for child in children:
            if isinstance(child, CodeBlock) or (
                isinstance(child, Element) and child.tag in BLOCK_TAGS
            ):
                text = "".join(pending).strip()
                if text:
                    parts.append(text)
                pending = []
                parts.append(self._render_block(child))
            else:
                pending.append(self._render_inline(child))

        text = "".join(pending).strip()
        if text:
            parts.append(text)

        return "\n\n".join(part for part in parts if part)

    def _render_list(self, node: Element) -> str:
        lines: list[str] = []
        number = int(node.get("start", "1"))

        for item in node.children:
            if node.tag == "ol":
                bullet = f"{number}. "
                number += 1
            else:
                bullet = "- "
            children = item.children if isinstance(item, Element) else (item,)
            body = self.render(children) or ""
            indent = " " * len(bullet)
            item_lines = body.split("\n")
            lines.append(bullet + item_lines[0])
            lines.extend(indent + line if line else "" for line in item_lines[1:])

        return "\n".join(lines)

    def _render_children(self, node: Element) -> str:
        return "".join(self._render_inline(child) for child in node.children)

    def _render_inline(self, node: PresentationNode) -> str:
        if isinstance(node, str):
            return node
        if isinstance(node, UserLink):
            return f"@{node.user}"
        if isinstance(node, CodeBlock):
            return f"\n```{node.language or ''}\n{node.text}\n```\n"

        if node.tag in INLINE_WRAPPERS:
            marker = INLINE_WRAPPERS[node.tag]
            return f"{marker}{self._render_children(node)}{marker}"
        if node.tag == "a":
            return f"[{self._render_children(node)}]({node.get('href', '')})"
        if node.tag == "img":
            return f"![{node.get('alt', '')}]({node.get('src', '')})"
        if node.tag == "br":
            return "\n"
        if node.tag in BLOCK_TAGS:
            return self._render_block(node)
        return self._render_children(node)
