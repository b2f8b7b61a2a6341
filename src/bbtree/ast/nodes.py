#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/ast/nodes.py
"""Markup tree nodes produced by the BBCode rule engine.

The tree is deliberately small: an ``Element`` carries a tag name, an ordered
attribute mapping and ordered children; a ``Text`` leaf carries a string; a
``Document`` is the root returned for one applied input. Tag and attribute
vocabulary (``span``, ``class``, ``href``...) is plain string data chosen by
the emitters, not by the engine.

Node Hierarchy
--------------
    - Document (root)
    - Element (tag, attributes, children)
    - Text (leaf)

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence


class Node(ABC):
    """Base class for all tree nodes.

    All nodes support the visitor pattern via ``accept``.
    """

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


NodeList = list[Node]


@dataclass
class Document(Node):
    """Root node holding the output of one applied document.

    Parameters
    ----------
    children : list of Node, default = empty list
        Top-level nodes in textual order
    metadata : dict, default = empty dict
        Document-level metadata (e.g., source name)

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_document``."""
        return visitor.visit_document(self)


@dataclass
class Element(Node):
    """Markup element with a tag, attributes and children.

    Parameters
    ----------
    tag : str
        Element tag name (e.g., ``"span"``). Must not be empty.
    attributes : dict of str to str, default = empty dict
        Attribute mapping; insertion order is preserved
    children : list of Node, default = empty list
        Child nodes in rendering order

    Raises
    ------
    ValueError
        If ``tag`` is empty

    Examples
    --------
        >>> Element("span", {"class": "bbcode-b"}, [Text("x")])
        Element(tag='span', attributes={'class': 'bbcode-b'}, children=[Text(content='x')])

    """

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate the tag name."""
        if not self.tag:
            raise ValueError("Element tag must be a non-empty string")

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_element``."""
        return visitor.visit_element(self)

    def append(self, node: Node) -> None:
        """Append a child after the existing children."""
        self.children.append(node)


@dataclass
class Text(Node):
    """Plain text leaf.

    Parameters
    ----------
    content : str
        The literal text

    """

    content: str

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_text``."""
        return visitor.visit_text(self)


def get_node_children(node: Node) -> list[Node]:
    """Return the children of a node, or an empty list for leaves."""
    if isinstance(node, (Document, Element)):
        return node.children
    return []


def merge_adjacent_text(nodes: Iterable[Node]) -> list[Node]:
    """Fold neighbouring ``Text`` leaves into one and drop empty leaves.

    Emitters and the literal passthrough both produce text leaves, so two of
    them can end up side by side; merging keeps a run of plain text as a
    single leaf.

    Parameters
    ----------
    nodes : iterable of Node
        Nodes in textual order

    Returns
    -------
    list of Node
        New list with merged text leaves. Elements are kept as-is.

    """
    merged: list[Node] = []
    for node in nodes:
        if isinstance(node, Text):
            if not node.content:
                continue
            if merged and isinstance(merged[-1], Text):
                merged[-1] = Text(content=merged[-1].content + node.content)
                continue
        merged.append(node)
    return merged


def coerce_nodes(value: Node | str | Sequence[Node | str] | None) -> list[Node] | None:
    """Normalise an emitter result into a node list.

    Parameters
    ----------
    value : Node, str, sequence of Node/str, or None
        Value returned by an emitter

    Returns
    -------
    list of Node or None
        ``None`` when the emitter declined, otherwise the nodes to splice in.
        Strings become ``Text`` leaves.

    Raises
    ------
    TypeError
        If the value contains something that is neither a node nor a string

    """
    if value is None:
        return None
    if isinstance(value, Node):
        return [value]
    if isinstance(value, str):
        return [Text(content=value)] if value else []

    nodes: list[Node] = []
    for item in value:
        if isinstance(item, Node):
            nodes.append(item)
        elif isinstance(item, str):
            if item:
                nodes.append(Text(content=item))
        else:
            raise TypeError(f"Emitter returned unsupported item of type {type(item).__name__}")
    return nodes
