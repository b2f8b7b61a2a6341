#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/parsers/inline.py
"""Inline matching of start/stop token pairs inside one text span.

The matcher looks for the leftmost start token of any rule. When several rules
start at the same offset they are tried in registration order; the first one
that yields a well-formed match wins. A candidate is skipped (and scanning
continues past it) when:

- a boundary flag rejects the character before the start token,
- no stop token follows the start token, or
- the emitter declines by returning ``None``.

Only the first stop token after a start is considered, so a tag cannot contain
another occurrence of itself.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from bbtree.ast.nodes import Node, Text, coerce_nodes
from bbtree.rules.types import InlineRule, MatchContext

logger = logging.getLogger(__name__)

_WORD_CHAR = re.compile(r"\w")


@dataclass
class InlineMatch:
    """A successful match of one inline rule.

    Parameters
    ----------
    start : int
        Offset of the start token
    end : int
        Offset just past the stop token
    nodes : list of Node
        Emitter output replacing ``text[start:end]``
    rule : InlineRule
        The rule that matched

    """

    start: int
    end: int
    nodes: list[Node]
    rule: InlineRule


@dataclass
class InlineResult:
    """Outcome of one ``InlineMatcher.apply`` step.

    Parameters
    ----------
    nodes : list of Node
        Literal text before the match followed by the emitted nodes. When
        nothing matched this is the whole text as one leaf.
    span : tuple of (int, int) or None
        Consumed ``(start, end)`` offsets, or None when nothing matched
    remainder : str
        Text after the consumed span, still to be scanned

    """

    nodes: list[Node]
    span: Optional[tuple[int, int]]
    remainder: str

    @property
    def matched(self) -> bool:
        return self.span is not None


def passes_boundary(rule: InlineRule, text: str, start: int, origin: int = 0) -> bool:
    """Check the rule's boundary flags against the character before ``start``.

    ``origin`` is where the current scan began; a start token there counts as
    being at the start of text and always passes.
    """
    if start <= origin:
        return True

    previous = text[start - 1]
    if rule.word_boundary and _WORD_CHAR.match(previous):
        return False
    if rule.space_boundary and not previous.isspace():
        return False
    return True


class InlineMatcher:
    """Find and apply inline rule matches in a text span.

    Parameters
    ----------
    rules : sequence of InlineRule
        Rules in registration order

    """

    def __init__(self, rules: Sequence[InlineRule]) -> None:
        self.rules: tuple[InlineRule, ...] = tuple(rules)

    def _candidates(self, text: str, pos: int) -> list[Optional[re.Match[str]]]:
        return [rule.find_start(text, pos) for rule in self.rules]

    def _try_rule(
        self, rule: InlineRule, text: str, found: re.Match[str], context: MatchContext, origin: int
    ) -> Optional[InlineMatch]:
        start = found.start()
        if not passes_boundary(rule, text, start, origin):
            return None

        stop = rule.find_stop(text, found.end())
        if stop is None:
            logger.debug(f"Unterminated '{rule.label}' at offset {start}; leaving as text")
            return None

        raw = text[found.end() : stop.start()]
        rule_context = context.for_rule(rule)
        contents = raw if rule.raw_contents else rule_context.process_inline(raw)

        nodes = coerce_nodes(rule.emitter(contents, rule_context))
        if nodes is None:
            logger.debug(f"Emitter '{rule.emitter.name}' declined '{rule.label}' at offset {start}")
            return None
        return InlineMatch(start=start, end=stop.end(), nodes=nodes, rule=rule)

    def match(
        self,
        text: str,
        context: MatchContext,
        pos: int = 0,
        candidates: Optional[list[Optional[re.Match[str]]]] = None,
    ) -> Optional[InlineMatch]:
        """Return the leftmost successful match in ``text[pos:]``, or None.

        Parameters
        ----------
        text : str
            Span to scan
        context : MatchContext
            Context of the current pass; each emitter receives a copy bound
            to its rule
        pos : int, default 0
            Offset to scan from. The text before it is ignored, so a start
            token at ``pos`` passes any boundary check.
        candidates : list, optional
            Next start token of each rule at or after ``pos``, in rule order.
            Updated in place as candidates are rejected.

        Returns
        -------
        InlineMatch or None
            The match, or None when no rule fires anywhere after ``pos``

        """
        if candidates is None:
            candidates = self._candidates(text, pos)

        while True:
            offsets = [found.start() for found in candidates if found is not None]
            if not offsets:
                return None
            offset = min(offsets)

            for index, rule in enumerate(self.rules):
                found = candidates[index]
                if found is None or found.start() != offset:
                    continue
                result = self._try_rule(rule, text, found, context, pos)
                if result is not None:
                    return result
                candidates[index] = rule.find_start(text, offset + 1)

    def apply(self, text: str, context: MatchContext) -> InlineResult:
        """Consume the first match in ``text``.

        Parameters
        ----------
        text : str
            Span to scan
        context : MatchContext
            Context of the current pass

        Returns
        -------
        InlineResult
            Nodes for ``text`` up to the end of the match, plus the unscanned
            remainder

        """
        found = self.match(text, context)
        if found is None:
            return InlineResult(nodes=[Text(content=text)] if text else [], span=None, remainder="")

        nodes: list[Node] = []
        if found.start > 0:
            nodes.append(Text(content=text[: found.start]))
        nodes.extend(found.nodes)
        return InlineResult(nodes=nodes, span=(found.start, found.end), remainder=text[found.end :])

    def scan(self, text: str, context: MatchContext) -> list[Node]:
        """Convert all of ``text``, consuming matches left to right.

        Equivalent to calling ``apply`` on each remainder in turn. Each rule's
        next start token is kept between matches and only searched again once
        a match has consumed it, so a span with many tags is scanned in one
        pass per rule.

        Returns
        -------
        list of Node
            Literal text and emitted nodes in textual order

        """
        nodes: list[Node] = []
        pos = 0
        candidates = self._candidates(text, pos)

        while pos < len(text):
            found = self.match(text, context, pos, candidates)
            if found is None:
                nodes.append(Text(content=text[pos:]))
                break

            if found.start > pos:
                nodes.append(Text(content=text[pos : found.start]))
            nodes.extend(found.nodes)
            pos = found.end

            for index, candidate in enumerate(candidates):
                if candidate is not None and candidate.start() < pos:
                    candidates[index] = self.rules[index].find_start(text, pos)
        return nodes
