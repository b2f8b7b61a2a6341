#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/parsers/block.py
"""Line-oriented matching of block rules.

A block opens on the first line where a rule's start pattern is found and
closes on the first later line (or the rest of the start line) where its stop
pattern is found. Everything in between is collected as a list of line
strings and handed to the rule's emitter together with the start pattern's
capture groups. A block that never closes runs to the end of the input.

Text before the start marker stays in the output as a plain line, and text
after the stop marker is scanned again as if it were the next line.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from bbtree.ast.nodes import Node, coerce_nodes
from bbtree.rules.types import BlockRule, MatchContext

logger = logging.getLogger(__name__)

BlockItem = Union[Node, str]


@dataclass
class _CollectedBlock:
    lines: list[str]
    next_index: int
    tail: Optional[str]
    closed: bool


def _collect(rule: BlockRule, opener: re.Match[str], lines: Sequence[str], index: int) -> _CollectedBlock:
    """Accumulate lines from the start match at ``lines[index]`` to the stop marker."""
    buffer: list[str] = []
    segment = lines[index][opener.end() :]
    position = index + 1
    first = True

    while True:
        stop = rule.stop_pattern.search(segment)
        if stop is not None:
            if segment[: stop.start()]:
                buffer.append(segment[: stop.start()])
            tail = segment[stop.end() :]
            return _CollectedBlock(buffer, position, tail or None, True)

        if segment or not first:
            buffer.append(segment)
        if position >= len(lines):
            return _CollectedBlock(buffer, position, None, False)

        segment = lines[position]
        position += 1
        first = False


class BlockMatcher:
    """Apply block rules over a sequence of lines.

    Parameters
    ----------
    rules : sequence of BlockRule
        Rules in registration order; the first whose start pattern is found
        on a line opens the block

    """

    def __init__(self, rules: Sequence[BlockRule]) -> None:
        self.rules: tuple[BlockRule, ...] = tuple(rules)

    def _open(self, line: str) -> Optional[tuple[BlockRule, re.Match[str]]]:
        for rule in self.rules:
            opener = rule.start_pattern.search(line)
            if opener is not None:
                return rule, opener
        return None

    def apply(self, lines: Sequence[str], context: MatchContext) -> list[BlockItem]:
        """Replace every block in ``lines`` with its emitted node.

        Parameters
        ----------
        lines : sequence of str
            Document lines without their line terminators
        context : MatchContext
            Context of the current pass

        Returns
        -------
        list of Node or str
            Emitted block nodes in place of the consumed lines; lines outside
            any block are returned unchanged as strings

        """
        pending = list(lines)
        output: list[BlockItem] = []
        index = 0

        while index < len(pending):
            line = pending[index]
            opened = self._open(line) if self.rules else None
            if opened is None:
                output.append(line)
                index += 1
                continue

            rule, opener = opened
            block = _collect(rule, opener, pending, index)
            if not block.closed:
                logger.debug(f"Block '{rule.label}' not closed; closing at end of input")

            block_context = context.for_rule(rule, captures=opener.groups())
            nodes = coerce_nodes(rule.emitter(block.lines, block_context))
            if nodes is None:
                logger.debug(f"Block emitter '{rule.emitter.name}' declined '{rule.label}'")
                output.append(line)
                index += 1
                continue

            leading = line[: opener.start()]
            if leading:
                output.append(leading)
            output.extend(nodes)

            index = block.next_index
            if block.tail is not None:
                pending.insert(index, block.tail)

        return output
