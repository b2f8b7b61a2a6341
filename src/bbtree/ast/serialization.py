#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/ast/serialization.py
"""JSON and JsonML serialization for markup trees.

Two wire shapes are supported:

- A versioned JSON object form (``ast_to_json`` / ``json_to_ast``) where every
  node is a dict with a ``node_type`` key.
- JsonML (``ast_to_jsonml`` / ``jsonml_to_ast``), the compact list form
  ``["tag", {attributes}, child, ...]`` where text leaves are bare strings.
  A ``Document`` becomes the list of its children.

Examples
--------
    >>> from bbtree.ast import Element, Text
    >>> ast_to_jsonml(Element("span", {"class": "bbcode-b"}, [Text("x")]))
    ['span', {'class': 'bbcode-b'}, 'x']

"""

from __future__ import annotations

import json
import logging
from typing import Any

from bbtree.ast.nodes import Document, Element, Node, Text
from bbtree.ast.visitors import NodeVisitor

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class _DictBuilder(NodeVisitor):
    def visit_document(self, node: Document) -> dict[str, Any]:
        return {
            "node_type": "Document",
            "children": [child.accept(self) for child in node.children],
            "metadata": node.metadata,
        }

    def visit_element(self, node: Element) -> dict[str, Any]:
        return {
            "node_type": "Element",
            "tag": node.tag,
            "attributes": dict(node.attributes),
            "children": [child.accept(self) for child in node.children],
        }

    def visit_text(self, node: Text) -> dict[str, Any]:
        return {"node_type": "Text", "content": node.content}


class _JsonMLBuilder(NodeVisitor):
    def visit_document(self, node: Document) -> list[Any]:
        return [child.accept(self) for child in node.children]

    def visit_element(self, node: Element) -> list[Any]:
        result: list[Any] = [node.tag]
        if node.attributes:
            result.append(dict(node.attributes))
        result.extend(child.accept(self) for child in node.children)
        return result

    def visit_text(self, node: Text) -> str:
        return node.content


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert a node to its dictionary representation.

    Examples
    --------
        >>> ast_to_dict(Text(content="Hello"))
        {'node_type': 'Text', 'content': 'Hello'}

    """
    return node.accept(_DictBuilder())


def dict_to_ast(data: dict[str, Any], strict_mode: bool = True) -> Node:
    """Rebuild a node from its dictionary representation.

    Parameters
    ----------
    data : dict
        Dictionary with a ``node_type`` key
    strict_mode : bool, default True
        If True, raise ``ValueError`` on unknown node types. If False, log a
        warning and drop them from their parent.

    Returns
    -------
    Node
        Reconstructed node

    Raises
    ------
    ValueError
        If the node type is unknown (strict mode) or required keys are missing

    """
    node_type = data.get("node_type")

    def children() -> list[Node]:
        rebuilt: list[Node] = []
        for child in data.get("children", []):
            try:
                rebuilt.append(dict_to_ast(child, strict_mode=strict_mode))
            except ValueError:
                if strict_mode:
                    raise
                logger.warning(f"Skipping unknown child node: {child!r}")
        return rebuilt

    if node_type == "Document":
        return Document(children=children(), metadata=data.get("metadata", {}))
    if node_type == "Element":
        if "tag" not in data:
            raise ValueError("Element node is missing its 'tag'")
        return Element(tag=data["tag"], attributes=dict(data.get("attributes", {})), children=children())
    if node_type == "Text":
        return Text(content=data.get("content", ""))

    raise ValueError(f"Unknown node type for deserialization: {node_type!r}")


def ast_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize a node to a JSON string with a schema version.

    Parameters
    ----------
    node : Node
        The node to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON text of the form ``{"schema_version": 1, "node_type": ...}``

    """
    versioned = {"schema_version": SCHEMA_VERSION, **ast_to_dict(node)}
    return json.dumps(versioned, indent=indent, ensure_ascii=False)


def json_to_ast(json_str: str, strict_mode: bool = True) -> Node:
    """Deserialize a JSON string produced by ``ast_to_json``.

    A missing ``schema_version`` is read as version 1.

    Raises
    ------
    ValueError
        On an unsupported schema version or unknown node type
    json.JSONDecodeError
        If the JSON text is malformed

    """
    data = json.loads(json_str)
    schema_version = data.pop("schema_version", SCHEMA_VERSION)
    if schema_version != SCHEMA_VERSION:
        raise ValueError(
            f"Unsupported schema version: {schema_version}. "
            f"This version of bbtree supports schema version {SCHEMA_VERSION} only."
        )
    return dict_to_ast(data, strict_mode=strict_mode)


def ast_to_jsonml(node: Node) -> Any:
    """Convert a node to JsonML.

    Returns a list for elements and documents and a string for text leaves.
    The attribute object is omitted when an element has no attributes.
    """
    return node.accept(_JsonMLBuilder())


def jsonml_to_ast(data: Any) -> Node:
    """Rebuild a node from JsonML.

    A string becomes a ``Text`` leaf and a list whose first item is a string
    becomes an ``Element``. Use ``jsonml_to_document`` for the list form of a
    ``Document``, whose first child may itself be a string.

    Raises
    ------
    ValueError
        If the data is not valid JsonML

    """
    if isinstance(data, str):
        return Text(content=data)
    if not isinstance(data, list):
        raise ValueError(f"Invalid JsonML value of type {type(data).__name__}")

    if not data or not isinstance(data[0], str):
        raise ValueError("JsonML element must start with a tag name")

    tag, rest = data[0], data[1:]
    attributes: dict[str, str] = {}
    if rest and isinstance(rest[0], dict):
        attributes = {str(key): str(value) for key, value in rest[0].items()}
        rest = rest[1:]
    return Element(tag=tag, attributes=attributes, children=[jsonml_to_ast(item) for item in rest])


def jsonml_to_document(items: list[Any], metadata: dict[str, Any] | None = None) -> Document:
    """Rebuild a ``Document`` from the list produced by ``ast_to_jsonml``."""
    if not isinstance(items, list):
        raise ValueError(f"JsonML document must be a list, got {type(items).__name__}")
    return Document(children=[jsonml_to_ast(item) for item in items], metadata=metadata or {})
