#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/ast/__init__.py
"""Markup tree produced by the BBCode rule engine.

Examples
--------
    >>> from bbtree.ast import Element, Text
    >>> node = Element("span", {"class": "bbcode-b"}, [Text("bold")])

"""

from bbtree.ast.nodes import (
    Document,
    Element,
    Node,
    NodeList,
    Text,
    coerce_nodes,
    get_node_children,
    merge_adjacent_text,
)
from bbtree.ast.serialization import (
    ast_to_dict,
    ast_to_json,
    ast_to_jsonml,
    dict_to_ast,
    json_to_ast,
    jsonml_to_ast,
    jsonml_to_document,
)
from bbtree.ast.visitors import NodeVisitor, TextExtractor, ValidationVisitor, extract_text

__all__ = [
    # Nodes
    "Node",
    "NodeList",
    "Document",
    "Element",
    "Text",
    # Node helpers
    "coerce_nodes",
    "get_node_children",
    "merge_adjacent_text",
    # Visitors
    "NodeVisitor",
    "TextExtractor",
    "ValidationVisitor",
    "extract_text",
    # Serialization
    "ast_to_dict",
    "ast_to_json",
    "ast_to_jsonml",
    "dict_to_ast",
    "json_to_ast",
    "jsonml_to_ast",
    "jsonml_to_document",
]
