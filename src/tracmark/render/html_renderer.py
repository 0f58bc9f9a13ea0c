"""HTML renderer."""

from typing import Sequence

from tracmark.formatting.ir import CodeBlock, Element, PresentationNode, UserLink
from tracmark.render.base import Renderer

DEFAULT_PROFILE_URL = "https://profiles.wordpress.org/"

# Elements that never have content or a closing tag.
VOID_ELEMENTS = frozenset({"br", "hr", "img"})


class HTMLRenderer(Renderer):
    """Render presentation trees as an HTML fragment.

    Text and attribute values are escaped. Code blocks become
    ``<pre><code>`` with a ``language-*`` class, and user mentions link to
    the user's profile page.
    """

    def __init__(self, profile_url: str = DEFAULT_PROFILE_URL) -> None:
        self.profile_url = profile_url

    @property
    def extension(self) -> str:
        return ".html"

    def render(self, nodes: Sequence[PresentationNode]) -> str:
        """Render top-level nodes, one per line."""
        return "\n".join(self.render_node(node) for node in nodes)

    def render_node(self, node: PresentationNode) -> str:
        """Render a single presentation node and its descendants."""
        if isinstance(node, str):
            return self._escape_html(node)
        if isinstance(node, CodeBlock):
            return self._render_code_block(node)
        if isinstance(node, UserLink):
            return self._render_user_link(node)
        return self._render_element(node)

    def _render_element(self, node: Element) -> str:
        attrs = "".join(
            f' {name}="{self._escape_html(value, quote=True)}"'
            for name, value in node.attrs
        )
        if node.tag in VOID_ELEMENTS:
            return f"<{node.tag}{attrs} />"
        inner = "".join(self.render_node(child) for child in node.children)
        return f"<{node.tag}{attrs}>{inner}</{node.tag}>"

    def _render_code_block(self, node: CodeBlock) -> str:
        css = f' class="language-{self._escape_html(node.language, quote=True)}"' if node.language else ""
        return f"<pre><code{css}>{self._escape_html(node.text)}</code></pre>"

    def _render_user_link(self, node: UserLink) -> str:
        href = self._escape_html(f"{self.profile_url}{node.user}", quote=True)
        return f'<a class="user-link" href="{href}">@{self._escape_html(node.user)}</a>'

    def _escape_html(self, text: str, quote: bool = False) -> str:
        """Escape HTML special characters."""
        text = (
            text.replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
        )
        if quote:
            text = text.replace('"', "&quot;")
        return text
