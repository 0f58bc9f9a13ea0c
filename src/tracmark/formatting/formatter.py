"""Formatting engine: source nodes in, presentation nodes out.

``format_tree`` is the entry point. It formats each node with
``format_node`` and, outside inline mode, groups the results into paragraphs
at the paragraph markers. Container nodes call back into ``format_tree``
with the same context.
"""

import logging
from typing import Callable, Sequence, Union

from tracmark.formatting.context import ContextLike, RenderContext, as_context
from tracmark.formatting.ir import (
    PARAGRAPH_MARKER,
    CodeBlock,
    Element,
    Marker,
    PresentationNode,
    UserLink,
    element,
)
from tracmark.formatting.nodes import (
    Attachment,
    Bold,
    Break,
    Citation,
    Code,
    Comment,
    Commit,
    Heading,
    HorizontalLine,
    Image,
    Italic,
    Link,
    Mention,
    OrderedList,
    Para,
    Preformatted,
    SourceNode,
    Strike,
    Text,
    Ticket,
    UnorderedList,
)

logger = logging.getLogger(__name__)

FormattedNode = Union[PresentationNode, Marker]


def format_tree(
    nodes: Union[Sequence[SourceNode], str],
    context: ContextLike = None,
    inline: bool = False,
) -> Union[list, str]:
    """Format a sequence of sibling nodes.

    Args:
        nodes: Sibling source nodes, or a raw string
        context: Render context, mapping of options, or None
        inline: Return the flat list of formatted nodes instead of
            grouping them into paragraphs

    Returns:
        The raw string unchanged, a flat list of presentation nodes in
        inline mode, or a list of ``p`` elements otherwise
    """
    if isinstance(nodes, str):
        return nodes

    ctx = as_context(context)
    leaves = [format_node(node, ctx) for node in nodes]

    if inline:
        return _strip_markers(leaves)

    return [element("p", *group) for group in group_paragraphs(leaves)]


def format_node(node: SourceNode, context: ContextLike = None) -> FormattedNode:
    """Format a single source node.

    Raw strings pass through unchanged. Paragraph breaks come back as
    PARAGRAPH_MARKER. Unknown kinds become a visible placeholder rather than
    an error.
    """
    if isinstance(node, str):
        return node

    ctx = as_context(context)
    formatter = _FORMATTERS.get(type(node))
    if formatter is None:
        return _format_unknown(node)
    return formatter(node, ctx)


def group_paragraphs(leaves: Sequence[FormattedNode]) -> list[list[PresentationNode]]:
    """Split a flat sequence into paragraph groups at PARAGRAPH_MARKER.

    Markers are consumed. Empty groups are never produced, so leading,
    trailing and repeated markers have no effect of their own. This is
    deliberately stricter than emitting an empty group for a marker that
    follows content: a lone marker must yield no paragraphs, and an empty
    ``<p>`` has nothing to display.
    """
    groups: list[list[PresentationNode]] = []
    current: list[PresentationNode] = []

    for leaf in leaves:
        if leaf is PARAGRAPH_MARKER:
            if current:
                groups.append(current)
                current = []
            continue
        current.append(leaf)

    if current:
        groups.append(current)

    return groups


def _strip_markers(leaves: list[FormattedNode]) -> list[PresentationNode]:
    kept = [leaf for leaf in leaves if leaf is not PARAGRAPH_MARKER]
    if len(kept) != len(leaves):
        logger.debug("Dropped %d paragraph marker(s) in inline content", len(leaves) - len(kept))
    return kept


def _block(nodes: Union[Sequence[SourceNode], str], ctx: RenderContext) -> tuple:
    return _as_children(format_tree(nodes, ctx))


def _inline(nodes: Union[Sequence[SourceNode], str], ctx: RenderContext) -> tuple:
    return _as_children(format_tree(nodes, ctx, inline=True))


def _as_children(rendered: Union[list, str]) -> tuple:
    # A raw string is a single child, not a sequence of characters.
    if isinstance(rendered, str):
        return (rendered,)
    return tuple(rendered)


def _trac_link(ctx: RenderContext, path: str, text: str) -> Element:
    return element("a", text, href=f"{ctx.trac_url}/{path}")


# =============================================================================
# Per-kind formatters
# =============================================================================

def _format_heading(node: Heading, ctx: RenderContext) -> Element:
    level = max(1, min(6, node.level))
    return element(f"h{level}", node.text)


def _format_unordered_list(node: UnorderedList, ctx: RenderContext) -> Element:
    items = [Element("li", children=_block(item, ctx)) for item in node.children]
    return element("ul", *items)


def _format_ordered_list(node: OrderedList, ctx: RenderContext) -> Element:
    items = [Element("li", children=_block(item, ctx)) for item in node.children]
    return element("ol", *items, start=node.number)


def _format_citation(node: Citation, ctx: RenderContext) -> Element:
    return Element("blockquote", children=_block(node.children, ctx))


def _format_preformatted(node: Preformatted, ctx: RenderContext) -> CodeBlock:
    return CodeBlock(text=node.text, language=node.language)


def _format_bold(node: Bold, ctx: RenderContext) -> Element:
    return Element("strong", children=_inline(node.children, ctx))


def _format_italic(node: Italic, ctx: RenderContext) -> Element:
    return Element("em", children=_inline(node.children, ctx))


def _format_strike(node: Strike, ctx: RenderContext) -> Element:
    return Element("strike", children=_inline(node.children, ctx))


def _format_code(node: Code, ctx: RenderContext) -> Element:
    return element("code", node.text)


def _format_horizontal_line(node: HorizontalLine, ctx: RenderContext) -> Element:
    return element("hr")


def _format_break(node: Break, ctx: RenderContext) -> Element:
    return element("br")


def _format_link(node: Link, ctx: RenderContext) -> Element:
    content = node.children if node.children is not None else node.text
    return Element("a", attrs=(("href", node.url),), children=_inline(content, ctx))


def _format_comment(node: Comment, ctx: RenderContext) -> Element:
    return _trac_link(ctx, f"ticket/{node.ticket}#comment-{node.comment}", node.text)


def _format_ticket(node: Ticket, ctx: RenderContext) -> Element:
    return _trac_link(ctx, f"ticket/{node.id}", node.text)


def _format_mention(node: Mention, ctx: RenderContext) -> UserLink:
    return UserLink(user=node.text)


def _format_commit(node: Commit, ctx: RenderContext) -> Element:
    return _trac_link(ctx, f"changeset/{node.id}", node.text)


def _format_attachment(node: Attachment, ctx: RenderContext) -> Element:
    ticket = node.ticket
    if ticket is None:
        ticket = ctx.ticket if ctx.ticket is not None else 0
    return _trac_link(ctx, f"attachment/ticket/{ticket}/{node.id}", node.text)


def _format_image(node: Image, ctx: RenderContext) -> Element:
    return element("img", alt="", src=node.url)


def _format_para(node: Para, ctx: RenderContext) -> Marker:
    return PARAGRAPH_MARKER


def _format_text(node: Text, ctx: RenderContext) -> str:
    return node.text


def _format_unknown(node: object) -> Element:
    tag = getattr(node, "type", type(node).__name__)
    logger.warning("Unknown node type %r", tag)
    return element("span", f"Unknown type {tag}", class_="unknown-node")


_FORMATTERS: dict[type, Callable[..., FormattedNode]] = {
    Heading: _format_heading,
    UnorderedList: _format_unordered_list,
    OrderedList: _format_ordered_list,
    Citation: _format_citation,
    Preformatted: _format_preformatted,
    Bold: _format_bold,
    Italic: _format_italic,
    Strike: _format_strike,
    Code: _format_code,
    HorizontalLine: _format_horizontal_line,
    Break: _format_break,
    Link: _format_link,
    Comment: _format_comment,
    Ticket: _format_ticket,
    Mention: _format_mention,
    Commit: _format_commit,
    Attachment: _format_attachment,
    Image: _format_image,
    Para: _format_para,
    Text: _format_text,
}
