#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/parsers/bbcode.py
"""BBCode to markup tree converter.

The parser runs two passes over a document:

1. The block pass splits the text into lines and replaces every run of lines
   between a block rule's start and stop markers (``[code]``, ``[list]``)
   with the node its emitter returns.
2. The inline pass scans each remaining run of plain lines for start/stop
   token pairs (``[b]...[/b]``, ``[url=...]...[/url]``) and replaces them with
   emitted nodes, re-entering itself on tag contents so tags can nest.

Nothing here raises on malformed markup. Unknown brackets, unterminated tags
and malformed parameters stay in the tree as literal text.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from bbtree.ast import Document, Node, Text, merge_adjacent_text
from bbtree.options.bbcode import BBCodeParserOptions
from bbtree.parsers.base import BaseParser, InputData
from bbtree.parsers.block import BlockItem, BlockMatcher
from bbtree.parsers.inline import InlineMatcher
from bbtree.progress import ProgressCallback
from bbtree.rules.builtin import build_default_rules
from bbtree.rules.registry import RuleSet
from bbtree.rules.types import MatchContext

logger = logging.getLogger(__name__)


class BBCodeParser(BaseParser):
    """Convert BBCode markup to a tree of ``Element`` and ``Text`` nodes.

    Parameters
    ----------
    options : BBCodeParserOptions or None, default = None
        Parser configuration options
    rules : RuleSet or None, default = None
        Rules to apply. Defaults to the built-in catalog built from
        ``options``. The rule set is frozen when the parser is created.
    progress_callback : ProgressCallback or None, default = None
        Optional callback for progress updates

    Examples
    --------
    Basic parsing:

        >>> parser = BBCodeParser()
        >>> doc = parser.apply("[b]Bold[/b] and [i]italic[/i] text")

    With a custom rule set:

        >>> rules = RuleSet()
        >>> replace_bbcode(rules, "b", lambda contents, ctx: Element("strong", {}, contents))
        >>> parser = BBCodeParser(rules=rules)

    """

    def __init__(
        self,
        options: BBCodeParserOptions | None = None,
        rules: Optional[RuleSet] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        BaseParser._validate_options_type(options, BBCodeParserOptions, "bbcode")
        options = options or BBCodeParserOptions()
        super().__init__(options, progress_callback)
        self.options: BBCodeParserOptions = options

        self.rules: RuleSet = (rules if rules is not None else build_default_rules(options)).freeze()
        self._inline = InlineMatcher(self.rules.inline_rules)
        self._block = BlockMatcher(self.rules.block_rules)

    def parse(self, input_data: InputData) -> Document:
        """Load BBCode from a file, stream, bytes or string and convert it.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], IO[str], or bytes
            BBCode input. A string naming an existing file is read from disk;
            any other string is treated as markup.

        Returns
        -------
        Document
            Tree for the whole input

        Notes
        -----
        A short single-line string such as ``"notes"`` is read from disk if a
        file of that name exists in the working directory. Use ``apply`` for
        markup already held in memory.

        """
        self._emit_progress("started", "Parsing BBCode", current=0, total=3)
        try:
            content = self._load_text_content(input_data)
        except Exception as e:
            self._emit_progress("error", f"Could not load input: {e}", error=str(e))
            raise
        self._emit_progress("item_done", "Loaded BBCode content", current=1, total=3, item_type="loading")

        doc = self._convert(content)
        if isinstance(input_data, Path):
            doc.metadata["source"] = str(input_data)

        self._emit_progress("finished", "Parsing complete", current=3, total=3)
        return doc

    def apply(self, document: str) -> Document:
        """Convert one BBCode document held in memory.

        Parameters
        ----------
        document : str
            BBCode text. Lines are split on ``"\\n"`` only.

        Returns
        -------
        Document
            Root node whose children are the converted top-level nodes

        """
        return self._convert(document)

    def _convert(self, document: str) -> Document:
        context = MatchContext(parser=self)

        items = self._block.apply(document.split("\n"), context)
        self._emit_progress("item_done", "Block pass complete", current=2, total=3, item_type="blocks")

        children: list[Node] = []
        for item in self._join_plain_lines(items):
            if isinstance(item, str):
                children.extend(self.process_inline(item))
            else:
                children.append(item)

        self._emit_progress("item_done", "Inline pass complete", current=3, total=3, item_type="inline")
        return Document(children=merge_adjacent_text(children))

    @staticmethod
    def _join_plain_lines(items: list[BlockItem]) -> list[BlockItem]:
        """Rejoin consecutive plain lines with ``"\\n"``."""
        joined: list[BlockItem] = []
        run: list[str] = []
        for item in items:
            if isinstance(item, str):
                run.append(item)
                continue
            if run:
                joined.append("\n".join(run))
                run = []
            joined.append(item)
        if run:
            joined.append("\n".join(run))
        return joined

    def process_inline(self, text: str, depth: int = 0) -> list[Node]:
        """Run the inline rules over ``text``.

        This is the re-entry hook emitters reach through
        ``MatchContext.process_inline``.

        Parameters
        ----------
        text : str
            Text span to convert
        depth : int, default 0
            Current nesting depth. Past ``options.max_nesting_depth`` the
            span is returned as one literal text leaf.

        Returns
        -------
        list of Node
            Converted nodes in textual order, with adjacent text merged

        """
        if depth > self.options.max_nesting_depth:
            logger.warning(
                f"Nesting depth {depth} exceeds max_nesting_depth={self.options.max_nesting_depth}; "
                f"keeping {len(text)} characters as literal text"
            )
            return [Text(content=text)] if text else []

        context = MatchContext(parser=self, depth=depth)
        return merge_adjacent_text(self._inline.scan(text, context))
