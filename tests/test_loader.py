"""Tests for loading parser output into source nodes."""

import pytest

from tracmark.formatting.loader import TreeLoader, TreeLoadError
from tracmark.formatting.nodes import (
    NODE_TYPES,
    Attachment,
    Bold,
    Break,
    Heading,
    HorizontalLine,
    Image,
    Link,
    OrderedList,
    Para,
    Preformatted,
    Ticket,
    UnknownNode,
    UnorderedList,
)


class TestTreeLoader:
    """Tests for the TreeLoader class."""

    @pytest.fixture
    def loader(self) -> TreeLoader:
        """Create a loader instance."""
        return TreeLoader()

    def test_load_strings(self, loader: TreeLoader):
        """Test that raw strings are kept as strings."""
        assert loader.load(["a", "b"]) == ["a", "b"]

    def test_load_heading(self, loader: TreeLoader):
        """Test loading a heading node."""
        nodes = loader.load([{"type": "heading", "level": 3, "text": "Title"}])

        assert nodes == [Heading(level=3, text="Title")]

    def test_load_nested_children(self, loader: TreeLoader):
        """Test loading emphasis with nested nodes."""
        nodes = loader.load([{"type": "bold", "children": ["a", {"type": "para"}]}])

        assert nodes == [Bold(children=("a", Para()))]

    def test_load_lists(self, loader: TreeLoader):
        """Test loading list items as nested sequences."""
        nodes = loader.load([
            {"type": "unordered-list", "children": [["a"], ["b", {"type": "break"}]]},
            {"type": "ordered-list", "number": 5, "children": [["c"]]},
        ])

        assert isinstance(nodes[0], UnorderedList)
        assert len(nodes[0].children) == 2
        assert nodes[0].children[0] == ("a",)
        assert nodes[1] == OrderedList(number=5, children=(("c",),))

    def test_ordered_list_number_defaults_to_one(self, loader: TreeLoader):
        """Test the default starting number of ordered lists."""
        nodes = loader.load([{"type": "ordered-list", "children": []}])

        assert nodes[0].number == 1

    def test_load_link_with_and_without_children(self, loader: TreeLoader):
        """Test that link children stay None unless the parser gave some."""
        nodes = loader.load([
            {"type": "link", "url": "https://a", "text": "A"},
            {"type": "link", "url": "https://b", "children": ["B"]},
        ])

        assert nodes[0] == Link(url="https://a", text="A")
        assert nodes[0].children is None
        assert nodes[1].children == ("B",)

    def test_load_attachment_ticket_optional(self, loader: TreeLoader):
        """Test that attachment tickets default to None."""
        nodes = loader.load([
            {"type": "attachment", "id": 7, "text": "x"},
            {"type": "attachment", "id": 7, "text": "x", "ticket": 99},
        ])

        assert nodes[0] == Attachment(id=7, text="x")
        assert nodes[0].ticket is None
        assert nodes[1].ticket == 99

    def test_load_preformatted(self, loader: TreeLoader):
        """Test loading a code block."""
        nodes = loader.load([{"type": "preformatted", "language": "js", "text": "x()"}])

        assert nodes == [Preformatted(text="x()", language="js")]

    def test_unknown_type_is_not_an_error(self, loader: TreeLoader):
        """Test that unknown tags load as UnknownNode."""
        nodes = loader.load([{"type": "frobnicate", "level": 9}])

        assert nodes == [UnknownNode(type="frobnicate", fields={"level": 9})]

    def test_missing_type_raises(self, loader: TreeLoader):
        """Test that objects without a type are rejected."""
        with pytest.raises(TreeLoadError, match="no 'type'"):
            loader.load([{"text": "x"}])

    def test_non_list_raises(self, loader: TreeLoader):
        """Test that the top level must be a list."""
        with pytest.raises(TreeLoadError, match="Expected a list"):
            loader.load({"type": "text", "text": "x"})

    def test_invalid_node_raises(self, loader: TreeLoader):
        """Test that numbers are not valid nodes."""
        with pytest.raises(TreeLoadError, match=r"\$\[1\]"):
            loader.load(["ok", 42])

    def test_list_item_must_be_list(self, loader: TreeLoader):
        """Test that list items must be node sequences."""
        with pytest.raises(TreeLoadError):
            loader.load([{"type": "unordered-list", "children": ["not a list"]}])

    @pytest.mark.parametrize(
        "data, field",
        [
            ([{"type": "heading", "level": None, "text": "T"}], "level"),
            ([{"type": "heading", "level": "two", "text": "T"}], "level"),
            ([{"type": "ordered-list", "number": "five", "children": []}], "number"),
            ([{"type": "ordered-list", "number": [1], "children": []}], "number"),
            ([{"type": "text", "text": None}], "text"),
            ([{"type": "code", "text": 12}], "text"),
            ([{"type": "link", "url": None, "text": "x"}], "url"),
            ([{"type": "image", "url": {"src": "a.png"}}], "url"),
            ([{"type": "preformatted", "text": "x", "language": 3}], "language"),
        ],
    )
    def test_badly_typed_field_raises(self, loader: TreeLoader, data: list, field: str):
        """Test that fields of the wrong type are rejected with their path."""
        with pytest.raises(TreeLoadError, match=rf"'{field}' at \$\[0\]"):
            loader.load(data)

    def test_numeric_strings_are_accepted(self, loader: TreeLoader):
        """Test that integer fields accept numeric strings."""
        nodes = loader.load([
            {"type": "heading", "level": "3", "text": "T"},
            {"type": "ordered-list", "number": "5", "children": []},
        ])

        assert nodes[0].level == 3
        assert nodes[1].number == 5

    def test_null_optional_fields_use_defaults(self, loader: TreeLoader):
        """Test that null counts as missing for optional fields."""
        nodes = loader.load([
            {"type": "ordered-list", "number": None, "children": []},
            {"type": "preformatted", "text": "x", "language": None},
        ])

        assert nodes[0].number == 1
        assert nodes[1] == Preformatted(text="x")

    def test_missing_fields_use_defaults(self, loader: TreeLoader):
        """Test the defaults for absent fields."""
        nodes = loader.load([{"type": "heading"}, {"type": "image"}])

        assert nodes == [Heading(level=1, text=""), Image(url="")]

    def test_field_less_kinds(self, loader: TreeLoader):
        """Test that rules, breaks and paragraph markers ignore extra fields."""
        nodes = loader.load([
            {"type": "horizontal-line", "text": "ignored"},
            {"type": "break"},
            {"type": "para", "level": None},
        ])

        assert nodes == [HorizontalLine(), Break(), Para()]

    @pytest.mark.parametrize("kind", sorted(NODE_TYPES))
    def test_every_kind_loads_from_bare_tag(self, loader: TreeLoader, kind: str):
        """Test that each registered kind loads with only its type tag."""
        nodes = loader.load([{"type": kind}])

        assert isinstance(nodes[0], NODE_TYPES[kind])

    def test_max_depth(self):
        """Test that overly deep trees are rejected."""
        data: list = ["leaf"]
        for _ in range(10):
            data = [{"type": "bold", "children": data}]

        TreeLoader(max_depth=10).load(data)
        with pytest.raises(TreeLoadError, match="deeper than 5"):
            TreeLoader(max_depth=5).load(data)

    def test_load_document_with_ticket(self, loader: TreeLoader, sample_document: dict):
        """Test loading a document object that names its ticket."""
        nodes, ticket = loader.load_document(sample_document)

        assert ticket == 42
        assert nodes[0] == Heading(level=2, text="Steps")

    def test_load_document_bare_list(self, loader: TreeLoader, sample_tree: list):
        """Test loading a bare node list as a document."""
        nodes, ticket = loader.load_document(sample_tree)

        assert ticket is None
        assert len(nodes) == len(sample_tree)

    def test_load_document_without_nodes(self, loader: TreeLoader):
        """Test that document objects must have nodes."""
        with pytest.raises(TreeLoadError, match="nodes"):
            loader.load_document({"ticket": 1})

    def test_to_data(self, loader: TreeLoader, sample_tree: list):
        """Test converting nodes back to parser output."""
        nodes = loader.load(sample_tree)

        assert loader.to_data(nodes) == sample_tree

    def test_to_data_skips_none_fields(self, loader: TreeLoader):
        """Test that unset optional fields are left out."""
        data = loader.to_data([Attachment(id=1, text="a"), Ticket(id=2, text="#2")])

        assert data == [
            {"type": "attachment", "id": 1, "text": "a"},
            {"type": "ticket", "id": 2, "text": "#2"},
        ]
