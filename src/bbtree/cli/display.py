#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Terminal rendering of markup trees for ``bbtree --format tree``."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Any

from bbtree.ast import Document, Element, Node, Text, get_node_children

if TYPE_CHECKING:
    from rich.tree import Tree


def _label(node: Node) -> Any:
    from rich.text import Text as RichText

    if isinstance(node, Element):
        label = RichText(node.tag, style="bold cyan")
        for key, value in node.attributes.items():
            label.append(f" {key}=", style="dim")
            label.append(repr(value), style="green")
        return label
    if isinstance(node, Text):
        return RichText(repr(node.content), style="white")
    return RichText("document", style="bold magenta")


def build_rich_tree(doc: Document) -> Tree:
    """Build a ``rich.tree.Tree`` mirroring ``doc``."""
    from rich.tree import Tree

    root = Tree(_label(doc))
    pending: list[tuple[Node, Tree]] = [(child, root) for child in reversed(doc.children)]
    while pending:
        node, parent = pending.pop()
        branch = parent.add(_label(node))
        pending.extend((child, branch) for child in reversed(get_node_children(node)))
    return root


def render_tree_text(doc: Document, width: int = 100) -> str:
    """Render ``doc`` as an indented outline string.

    Parameters
    ----------
    doc : Document
        Tree to render
    width : int, default 100
        Console width used for wrapping

    Returns
    -------
    str
        Plain text outline (no ANSI escapes)

    """
    from rich.console import Console

    console = Console(width=width, record=True, color_system=None, file=io.StringIO())
    console.print(build_rich_tree(doc))
    return console.export_text().rstrip("\n")

