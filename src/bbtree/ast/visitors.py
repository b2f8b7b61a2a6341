#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/ast/visitors.py
"""Visitor pattern implementation for tree traversal.

Visitors keep algorithms (serialization, text extraction, validation) out of
the node classes themselves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from bbtree.ast.nodes import Document, Element, Node, Text


class NodeVisitor(ABC):
    """Abstract base class for tree visitors.

    Subclasses implement one ``visit_*`` method per node type.

    Examples
    --------
        >>> class TagCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...     def visit_document(self, node):
        ...         for child in node.children:
        ...             child.accept(self)
        ...     def visit_element(self, node):
        ...         self.count += 1
        ...         for child in node.children:
        ...             child.accept(self)
        ...     def visit_text(self, node):
        ...         pass

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node."""
        pass

    @abstractmethod
    def visit_element(self, node: Element) -> Any:
        """Visit an Element node."""
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""
        pass


class TextExtractor(NodeVisitor):
    """Collect the text leaves of a tree in document order."""

    def __init__(self) -> None:
        self.parts: list[str] = []

    def visit_document(self, node: Document) -> None:
        for child in node.children:
            child.accept(self)

    def visit_element(self, node: Element) -> None:
        for child in node.children:
            child.accept(self)

    def visit_text(self, node: Text) -> None:
        self.parts.append(node.content)


class ValidationVisitor(NodeVisitor):
    """Check the structural invariants of a tree.

    Emitters are user code, so a custom rule can build an element with a
    non-string attribute value or put a non-node in a children list. This
    visitor reports such problems.

    Parameters
    ----------
    strict : bool, default = True
        Raise ``ValueError`` on the first problem instead of collecting it

    Attributes
    ----------
    errors : list of str
        Problems found (non-strict mode)

    """

    def __init__(self, strict: bool = True) -> None:
        self.strict = strict
        self.errors: list[str] = []

    def _report(self, message: str) -> None:
        if self.strict:
            raise ValueError(message)
        self.errors.append(message)

    def _visit_children(self, children: list[Any]) -> None:
        for child in children:
            if not isinstance(child, Node):
                self._report(f"Child of type {type(child).__name__} is not a Node")
                continue
            child.accept(self)

    def visit_document(self, node: Document) -> None:
        self._visit_children(node.children)

    def visit_element(self, node: Element) -> None:
        if not node.tag:
            self._report("Element tag must be a non-empty string")
        for key, value in node.attributes.items():
            if not isinstance(key, str) or not key:
                self._report(f"<{node.tag}> has an invalid attribute name {key!r}")
            if not isinstance(value, str):
                self._report(f"<{node.tag}> attribute {key!r} has non-string value {value!r}")
        self._visit_children(node.children)

    def visit_text(self, node: Text) -> None:
        if not isinstance(node.content, str):
            self._report(f"Text content must be a string, got {type(node.content).__name__}")


def extract_text(node: Node) -> str:
    """Return the concatenated text of every leaf under ``node``.

    Examples
    --------
        >>> extract_text(Element("span", children=[Text("a"), Element("b", children=[Text("c")])]))
        'ac'

    """
    extractor = TextExtractor()
    node.accept(extractor)
    return "".join(extractor.parts)
