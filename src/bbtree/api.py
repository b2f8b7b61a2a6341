#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/api.py
"""High-level conversion functions."""

from __future__ import annotations

import logging
from typing import Any, Optional

from bbtree.ast import Document, ast_to_jsonml
from bbtree.options.bbcode import BBCodeParserOptions
from bbtree.parsers.base import InputData
from bbtree.parsers.bbcode import BBCodeParser
from bbtree.progress import ProgressCallback
from bbtree.rules.registry import RuleSet

logger = logging.getLogger(__name__)


def to_ast(
    source: InputData,
    *,
    parser_options: Optional[BBCodeParserOptions] = None,
    rules: Optional[RuleSet] = None,
    progress_callback: Optional[ProgressCallback] = None,
    **kwargs: Any,
) -> Document:
    """Convert BBCode to a markup tree.

    Parameters
    ----------
    source : str, Path, IO[bytes], IO[str], or bytes
        BBCode text, or a file path, stream or bytes holding it
    parser_options : BBCodeParserOptions, optional
        Pre-configured parser options
    rules : RuleSet, optional
        Rules to apply instead of the built-in catalog
    progress_callback : ProgressCallback, optional
        Callback receiving ``ProgressEvent`` updates
    kwargs : Any
        Individual options overriding ``parser_options``
        (e.g., ``max_nesting_depth=16``)

    Returns
    -------
    Document
        Root of the converted tree

    Examples
    --------
        >>> doc = to_ast("[b]hi[/b]")
        >>> doc.children[0].attributes
        {'class': 'bbcode-b'}

        >>> doc = to_ast("[B]hi[/B]", case_insensitive=False)

    """
    options = parser_options or BBCodeParserOptions()
    if kwargs:
        logger.debug(f"Overriding parser options: {sorted(kwargs)}")
        options = options.create_updated(**kwargs)

    parser = BBCodeParser(options, rules=rules, progress_callback=progress_callback)
    return parser.parse(source)


def to_jsonml(source: InputData, **kwargs: Any) -> list[Any]:
    """Convert BBCode to JsonML: a list of top-level nodes.

    Accepts the same arguments as ``to_ast``.

    Examples
    --------
        >>> to_jsonml("[b]x[/b] y")
        [['span', {'class': 'bbcode-b'}, 'x'], ' y']

    """
    return ast_to_jsonml(to_ast(source, **kwargs))
