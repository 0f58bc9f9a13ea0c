"""Source node types produced by the upstream markup parser.

Every markup kind is a frozen dataclass carrying a class-level ``type`` tag
that matches the tag name used in the parser's JSON output. Plain inline text
is represented by a bare ``str``.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional, Sequence, Union

# Trac ids arrive as numbers, but some parsers hand them over as strings.
TicketId = Union[int, str]


@dataclass(frozen=True)
class Heading:
    """A heading line.

    Attributes:
        level: Heading depth, 1 through 6
        text: Heading text, rendered verbatim
    """

    type: ClassVar[str] = "heading"

    level: int
    text: str


@dataclass(frozen=True)
class UnorderedList:
    """A bulleted list; each entry in ``children`` is one item's nodes."""

    type: ClassVar[str] = "unordered-list"

    children: Sequence[Sequence["SourceNode"]] = ()


@dataclass(frozen=True)
class OrderedList:
    """A numbered list starting at ``number``."""

    type: ClassVar[str] = "ordered-list"

    children: Sequence[Sequence["SourceNode"]] = ()
    number: int = 1


@dataclass(frozen=True)
class Citation:
    """A block quote."""

    type: ClassVar[str] = "citation"

    children: Sequence["SourceNode"] = ()


@dataclass(frozen=True)
class Preformatted:
    """A fenced code block with an optional language tag."""

    type: ClassVar[str] = "preformatted"

    text: str
    language: Optional[str] = None


@dataclass(frozen=True)
class Bold:
    type: ClassVar[str] = "bold"

    children: Sequence["SourceNode"] = ()


@dataclass(frozen=True)
class Italic:
    type: ClassVar[str] = "italic"

    children: Sequence["SourceNode"] = ()


@dataclass(frozen=True)
class Strike:
    type: ClassVar[str] = "strike"

    children: Sequence["SourceNode"] = ()


@dataclass(frozen=True)
class Code:
    """Inline code; ``text`` is never parsed further."""

    type: ClassVar[str] = "code"

    text: str


@dataclass(frozen=True)
class HorizontalLine:
    type: ClassVar[str] = "horizontal-line"


@dataclass(frozen=True)
class Break:
    type: ClassVar[str] = "break"


@dataclass(frozen=True)
class Link:
    """A hyperlink.

    Attributes:
        url: Link target
        children: Nested link text nodes, if the parser produced any
        text: Plain link text, used when ``children`` is None
    """

    type: ClassVar[str] = "link"

    url: str
    children: Optional[Sequence["SourceNode"]] = None
    text: str = ""


@dataclass(frozen=True)
class Comment:
    """Reference to a comment on a ticket (``comment:3:ticket:1234``)."""

    type: ClassVar[str] = "comment"

    ticket: TicketId
    comment: TicketId
    text: str


@dataclass(frozen=True)
class Ticket:
    """Reference to a ticket (``#1234``)."""

    type: ClassVar[str] = "ticket"

    id: TicketId
    text: str


@dataclass(frozen=True)
class Mention:
    """An ``@username`` mention; ``text`` holds the user identifier."""

    type: ClassVar[str] = "mention"

    text: str


@dataclass(frozen=True)
class Commit:
    """Reference to a changeset (``r12345``)."""

    type: ClassVar[str] = "commit"

    id: TicketId
    text: str


@dataclass(frozen=True)
class Attachment:
    """Reference to a ticket attachment.

    When ``ticket`` is None the enclosing ticket from the render context is
    used instead.
    """

    type: ClassVar[str] = "attachment"

    id: TicketId
    text: str
    ticket: Optional[TicketId] = None


@dataclass(frozen=True)
class Image:
    type: ClassVar[str] = "image"

    url: str


@dataclass(frozen=True)
class Para:
    """Paragraph break between siblings. Never rendered itself."""

    type: ClassVar[str] = "para"


@dataclass(frozen=True)
class Text:
    type: ClassVar[str] = "text"

    text: str


@dataclass(frozen=True)
class UnknownNode:
    """A node whose tag is not part of the markup dialect.

    Attributes:
        type: The unrecognised tag name
        fields: Remaining fields of the node, kept for inspection
    """

    type: str
    fields: dict[str, Any] = field(default_factory=dict)


SourceNode = Union[
    str,
    Heading,
    UnorderedList,
    OrderedList,
    Citation,
    Preformatted,
    Bold,
    Italic,
    Strike,
    Code,
    HorizontalLine,
    Break,
    Link,
    Comment,
    Ticket,
    Mention,
    Commit,
    Attachment,
    Image,
    Para,
    Text,
    UnknownNode,
]

# Every known kind, keyed by its markup tag.
NODE_TYPES: dict[str, type] = {
    cls.type: cls
    for cls in (
        Heading,
        UnorderedList,
        OrderedList,
        Citation,
        Preformatted,
        Bold,
        Italic,
        Strike,
        Code,
        HorizontalLine,
        Break,
        Link,
        Comment,
        Ticket,
        Mention,
        Commit,
        Attachment,
        Image,
        Para,
        Text,
    )
}
