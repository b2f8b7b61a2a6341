#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for markup tree nodes and visitors."""

import pytest

from bbtree.ast import (
    Document,
    Element,
    Text,
    ValidationVisitor,
    coerce_nodes,
    extract_text,
    get_node_children,
    merge_adjacent_text,
)


@pytest.mark.unit
class TestElement:
    """Tests for Element construction and equality."""

    def test_empty_tag_rejected(self) -> None:
        """An element must have a tag name."""
        with pytest.raises(ValueError, match="non-empty"):
            Element("")

    def test_structural_equality(self) -> None:
        """Elements with the same tag, attributes and children compare equal."""
        a = Element("span", {"class": "bbcode-b"}, [Text("x")])
        b = Element("span", {"class": "bbcode-b"}, [Text("x")])
        assert a == b
        assert a != Element("span", {"class": "bbcode-i"}, [Text("x")])

    def test_defaults_are_not_shared(self) -> None:
        """Default attribute and children containers are per instance."""
        first = Element("ul")
        second = Element("ul")
        first.append(Element("li"))
        first.attributes["type"] = "a"
        assert second.children == []
        assert second.attributes == {}

    def test_append_keeps_order(self) -> None:
        """Children are appended left to right."""
        node = Element("ol")
        node.append(Text("a"))
        node.append(Text("b"))
        assert [child.content for child in node.children] == ["a", "b"]


@pytest.mark.unit
class TestNodeHelpers:
    """Tests for node list helpers."""

    def test_merge_adjacent_text(self) -> None:
        """Neighbouring text leaves merge and empty leaves disappear."""
        span = Element("span")
        merged = merge_adjacent_text([Text("a"), Text(""), Text("b"), span, Text("c"), Text("d")])
        assert merged == [Text("ab"), span, Text("cd")]

    def test_coerce_none_means_declined(self) -> None:
        """None passes through so callers can detect a declined match."""
        assert coerce_nodes(None) is None

    def test_coerce_string_and_sequences(self) -> None:
        """Strings become text leaves; empty strings become nothing."""
        assert coerce_nodes("x") == [Text("x")]
        assert coerce_nodes("") == []
        assert coerce_nodes([Element("br"), "y", ""]) == [Element("br"), Text("y")]

    def test_coerce_rejects_foreign_items(self) -> None:
        """Anything that is not a node or string is a programming error."""
        with pytest.raises(TypeError):
            coerce_nodes([42])  # type: ignore[list-item]

    def test_get_node_children(self) -> None:
        """Leaves have no children."""
        assert get_node_children(Text("x")) == []
        assert get_node_children(Document(children=[Text("x")])) == [Text("x")]


@pytest.mark.unit
class TestVisitors:
    """Tests for the text extractor and validation visitor."""

    def test_extract_text(self) -> None:
        """Text leaves are concatenated in document order."""
        doc = Document(children=[Text("a "), Element("span", {}, [Text("b"), Element("i", {}, [Text("c")])])])
        assert extract_text(doc) == "a bc"

    def test_validation_accepts_well_formed_tree(self) -> None:
        """A tree built from nodes and string attributes is valid."""
        doc = Document(children=[Element("a", {"href": "x"}, [Text("y")])])
        doc.accept(ValidationVisitor())

    def test_validation_reports_bad_attribute_value(self) -> None:
        """Non-string attribute values are reported."""
        doc = Document(children=[Element("a", {"href": 1})])  # type: ignore[dict-item]
        visitor = ValidationVisitor(strict=False)
        doc.accept(visitor)
        assert len(visitor.errors) == 1
        assert "href" in visitor.errors[0]

    def test_validation_strict_raises(self) -> None:
        """Strict mode raises on the first problem."""
        doc = Document(children=[Element("p", {}, ["raw string"])])  # type: ignore[list-item]
        with pytest.raises(ValueError, match="not a Node"):
            doc.accept(ValidationVisitor())
