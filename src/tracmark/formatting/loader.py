"""Loader for the markup parser's JSON output.

The parser emits plain data: strings for inline text, and objects with a
``type`` key for everything else. ``TreeLoader`` turns that into the typed
source nodes the formatter works on.
"""

import logging
from typing import Any, Callable, Optional

from tracmark.formatting.nodes import (
    NODE_TYPES,
    OrderedList,
    SourceNode,
    TicketId,
    UnknownNode,
    UnorderedList,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 200


class TreeLoadError(ValueError):
    """Parser output could not be decoded into source nodes."""

    pass


class TreeLoader:
    """Convert parser output to and from typed source nodes."""

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        """Initialize the loader.

        Args:
            max_depth: Deepest nesting accepted before giving up, guarding
                the recursive formatter against hostile input
        """
        self.max_depth = max_depth

    def load(self, data: Any) -> list[SourceNode]:
        """Load a list of sibling nodes.

        Args:
            data: List of strings and node objects, as emitted by the parser

        Returns:
            List of source nodes

        Raises:
            TreeLoadError: If the data is not shaped like parser output or a
                field has the wrong type
        """
        return self._load_sequence(data, depth=0, where="$")

    def load_document(self, data: Any) -> tuple[list[SourceNode], Optional[TicketId]]:
        """Load a whole document.

        A document is either a bare node list or an object of the form
        ``{"ticket": 1234, "nodes": [...]}``.

        Returns:
            Tuple of (nodes, ticket the document belongs to or None)
        """
        if isinstance(data, dict):
            if "nodes" not in data:
                raise TreeLoadError("Document object has no 'nodes' key")
            nodes = self._load_sequence(data["nodes"], depth=0, where="$.nodes")
            return nodes, data.get("ticket")
        return self.load(data), None

    def _load_sequence(self, data: Any, depth: int, where: str) -> list[SourceNode]:
        if not isinstance(data, list):
            raise TreeLoadError(
                f"Expected a list of nodes at {where}, got {type(data).__name__}"
            )
        if depth > self.max_depth:
            raise TreeLoadError(f"Tree nested deeper than {self.max_depth} at {where}")
        return [
            self._load_node(item, depth, f"{where}[{index}]")
            for index, item in enumerate(data)
        ]

    def _load_items(self, data: Any, depth: int, where: str) -> tuple:
        # List items are node sequences of their own.
        if not isinstance(data, list):
            raise TreeLoadError(
                f"Expected a list of list items at {where}, got {type(data).__name__}"
            )
        return tuple(
            tuple(self._load_sequence(item, depth + 1, f"{where}[{index}]"))
            for index, item in enumerate(data)
        )

    def _load_children(self, fields: dict, depth: int, where: str) -> tuple:
        return tuple(
            self._load_sequence(fields.get("children", []), depth + 1, f"{where}.children")
        )

    def _load_node(self, data: Any, depth: int, where: str) -> SourceNode:
        if isinstance(data, str):
            return data
        if not isinstance(data, dict):
            raise TreeLoadError(
                f"Expected a string or node object at {where}, got {type(data).__name__}"
            )

        kind = data.get("type")
        if not isinstance(kind, str):
            raise TreeLoadError(f"Node at {where} has no 'type'")

        node_class = NODE_TYPES.get(kind)
        if node_class is None:
            logger.debug("Loading unknown node type %r at %s", kind, where)
            fields = {key: value for key, value in data.items() if key != "type"}
            return UnknownNode(type=kind, fields=fields)

        read_fields = _FIELD_READERS.get(kind)
        if read_fields is None:
            return node_class()
        return node_class(**read_fields(self, data, depth, where))

    def to_data(self, nodes: list[SourceNode]) -> list:
        """Convert source nodes back into parser-style plain data."""
        return [self._node_to_data(node) for node in nodes]

    def _node_to_data(self, node: SourceNode) -> Any:
        if isinstance(node, str):
            return node
        if isinstance(node, UnknownNode):
            return {"type": node.type, **node.fields}

        data: dict[str, Any] = {"type": node.type}
        if isinstance(node, (UnorderedList, OrderedList)):
            data["children"] = [self.to_data(list(item)) for item in node.children]
            if isinstance(node, OrderedList):
                data["number"] = node.number
            return data

        for name, value in vars(node).items():
            if value is None:
                continue
            if name == "children":
                value = self.to_data(list(value))
            data[name] = value
        return data


# =============================================================================
# Field readers
# =============================================================================

def _string(data: dict, name: str, where: str, optional: bool = False) -> Optional[str]:
    """Read a string field. Missing means "" (or None when optional)."""
    if name not in data or (optional and data[name] is None):
        return None if optional else ""
    value = data[name]
    if not isinstance(value, str):
        raise TreeLoadError(
            f"Expected a string for '{name}' at {where}, got {type(value).__name__}"
        )
    return value


def _integer(data: dict, name: str, where: str, default: int, optional: bool = False) -> int:
    """Read an integer field, accepting numeric strings."""
    if name not in data or (optional and data[name] is None):
        return default
    value = data[name]
    if isinstance(value, bool):
        raise TreeLoadError(f"Expected an integer for '{name}' at {where}, got bool")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise TreeLoadError(
            f"Expected an integer for '{name}' at {where}, got {value!r}"
        ) from exc


def _read_heading(loader: TreeLoader, data: dict, depth: int, where: str) -> dict:
    return {
        "level": _integer(data, "level", where, default=1),
        "text": _string(data, "text", where),
    }


def _read_list(loader: TreeLoader, data: dict, depth: int, where: str) -> dict:
    return {"children": loader._load_items(data.get("children", []), depth, f"{where}.children")}


def _read_ordered_list(loader: TreeLoader, data: dict, depth: int, where: str) -> dict:
    fields = _read_list(loader, data, depth, where)
    fields["number"] = _integer(data, "number", where, default=1, optional=True)
    return fields


def _read_children(loader: TreeLoader, data: dict, depth: int, where: str) -> dict:
    return {"children": loader._load_children(data, depth, where)}


def _read_text(loader: TreeLoader, data: dict, depth: int, where: str) -> dict:
    return {"text": _string(data, "text", where)}


def _read_preformatted(loader: TreeLoader, data: dict, depth: int, where: str) -> dict:
    return {
        "text": _string(data, "text", where),
        "language": _string(data, "language", where, optional=True),
    }


def _read_link(loader: TreeLoader, data: dict, depth: int, where: str) -> dict:
    children = None
    if data.get("children") is not None:
        children = loader._load_children(data, depth, where)
    return {
        "url": _string(data, "url", where),
        "children": children,
        "text": _string(data, "text", where),
    }


def _read_comment(loader: TreeLoader, data: dict, depth: int, where: str) -> dict:
    return {
        "ticket": data.get("ticket"),
        "comment": data.get("comment"),
        "text": _string(data, "text", where),
    }


def _read_reference(loader: TreeLoader, data: dict, depth: int, where: str) -> dict:
    return {"id": data.get("id"), "text": _string(data, "text", where)}


def _read_attachment(loader: TreeLoader, data: dict, depth: int, where: str) -> dict:
    fields = _read_reference(loader, data, depth, where)
    fields["ticket"] = data.get("ticket")
    return fields


def _read_image(loader: TreeLoader, data: dict, depth: int, where: str) -> dict:
    return {"url": _string(data, "url", where)}


# Kinds without an entry (rules, breaks, paragraph markers) have no fields.
_FIELD_READERS: dict[str, Callable[[TreeLoader, dict, int, str], dict]] = {
    "heading": _read_heading,
    "unordered-list": _read_list,
    "ordered-list": _read_ordered_list,
    "citation": _read_children,
    "preformatted": _read_preformatted,
    "bold": _read_children,
    "italic": _read_children,
    "strike": _read_children,
    "code": _read_text,
    "link": _read_link,
    "comment": _read_comment,
    "ticket": _read_reference,
    "mention": _read_text,
    "commit": _read_reference,
    "attachment": _read_attachment,
    "image": _read_image,
    "text": _read_text,
}
