"""Presentation tree handed to the display layer.

The formatter turns source nodes into these structures. Renderers in
``tracmark.render`` serialise them; a display layer may also walk them
directly.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Marker(Enum):
    """Sentinels that can appear in a formatter's flat output."""

    PARAGRAPH = "para"


# Returned for a paragraph break; consumed by paragraph grouping.
PARAGRAPH_MARKER = Marker.PARAGRAPH


@dataclass(frozen=True)
class Element:
    """A display element such as ``p``, ``a`` or ``strong``.

    Attributes:
        tag: Element name
        attrs: Attribute ``(name, value)`` pairs, in output order
        children: Nested presentation nodes
    """

    tag: str
    attrs: tuple[tuple[str, str], ...] = ()
    children: tuple["PresentationNode", ...] = ()

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Look up an attribute value."""
        for key, value in self.attrs:
            if key == name:
                return value
        return default

    @property
    def plain_text(self) -> str:
        """Concatenated text of all descendants."""
        return "".join(plain_text(child) for child in self.children)


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code block, displayed by the code block renderer."""

    text: str
    language: Optional[str] = None

    @property
    def plain_text(self) -> str:
        return self.text


@dataclass(frozen=True)
class UserLink:
    """A link to a user's profile, resolved by the display layer."""

    user: str

    @property
    def plain_text(self) -> str:
        return f"@{self.user}"


PresentationNode = Union[str, Element, CodeBlock, UserLink]


def element(tag: str, *children: PresentationNode, **attrs: object) -> Element:
    """Build an Element, stringifying attribute values.

    Attribute names ending in an underscore lose it, so ``class_`` becomes
    ``class``.
    """
    pairs = tuple((name.rstrip("_"), str(value)) for name, value in attrs.items())
    return Element(tag=tag, attrs=pairs, children=tuple(children))


def plain_text(node: Union[PresentationNode, Marker]) -> str:
    """Get the text content of a presentation node without markup."""
    if isinstance(node, str):
        return node
    if isinstance(node, Marker):
        return ""
    return node.plain_text
