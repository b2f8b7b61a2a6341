#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/rules/registry.py
"""Ordered registry of inline and block tag rules.

A ``RuleSet`` is built once during setup and then frozen; matching passes only
ever read it. Registration is purely additive: there is no removal API and no
uniqueness check, so registering overlapping tokens simply grows the list and
the earlier registration wins at a given offset.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional, Union

from bbtree.exceptions import RegistryFrozenError
from bbtree.rules.types import BlockRule, EmitResult, Emitter, InlineRule

logger = logging.getLogger(__name__)


class RuleSet:
    """Ordered collection of ``InlineRule`` and ``BlockRule`` declarations.

    Parameters
    ----------
    inline_rules : iterable of InlineRule, optional
        Inline rules to register up front, in order
    block_rules : iterable of BlockRule, optional
        Block rules to register up front, in order

    Examples
    --------
        >>> rules = RuleSet()
        >>> rules.inline_between("[b]", "[/b]", lambda contents, ctx: Element("b", {}, contents))
        >>> rules.freeze()
        >>> len(rules)
        1

    """

    def __init__(
        self,
        inline_rules: Optional[list[InlineRule]] = None,
        block_rules: Optional[list[BlockRule]] = None,
    ) -> None:
        self._inline: list[InlineRule] = []
        self._block: list[BlockRule] = []
        self._frozen = False

        for rule in inline_rules or []:
            self.register_inline(rule)
        for block in block_rules or []:
            self.register_block(block)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"RuleSet(inline={len(self._inline)}, block={len(self._block)}, {state})"

    def __len__(self) -> int:
        return len(self._inline) + len(self._block)

    def __iter__(self) -> Iterator[Union[InlineRule, BlockRule]]:
        yield from self._block
        yield from self._inline

    @property
    def frozen(self) -> bool:
        """Whether the rule set still accepts registrations."""
        return self._frozen

    @property
    def inline_rules(self) -> tuple[InlineRule, ...]:
        """Inline rules in registration order."""
        return tuple(self._inline)

    @property
    def block_rules(self) -> tuple[BlockRule, ...]:
        """Block rules in registration order."""
        return tuple(self._block)

    def freeze(self) -> RuleSet:
        """Stop accepting registrations and return ``self``.

        Freezing an already frozen set is a no-op.
        """
        if not self._frozen:
            self._frozen = True
            logger.debug(f"Rule set frozen with {len(self._inline)} inline and {len(self._block)} block rules")
        return self

    def _check_open(self, rule: Union[InlineRule, BlockRule]) -> None:
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register rule '{rule.label}': rule set is frozen")

    def register_inline(self, rule: InlineRule) -> InlineRule:
        """Append an inline rule.

        Parameters
        ----------
        rule : InlineRule
            Rule to append after every rule already registered

        Returns
        -------
        InlineRule
            The registered rule

        Raises
        ------
        RegistryFrozenError
            If the rule set has been frozen

        """
        self._check_open(rule)
        self._inline.append(rule)
        return rule

    def register_block(self, rule: BlockRule) -> BlockRule:
        """Append a block rule.

        Raises
        ------
        RegistryFrozenError
            If the rule set has been frozen

        """
        self._check_open(rule)
        self._block.append(rule)
        return rule

    def inline_between(
        self,
        start: str,
        stop: str,
        emitter: Union[Emitter, Callable[..., EmitResult]],
        *,
        raw_contents: bool = False,
        word_boundary: bool = False,
        space_boundary: bool = False,
        ignore_case: bool = True,
        name: Optional[str] = None,
    ) -> InlineRule:
        """Declare and register an inline rule in one call.

        Parameters
        ----------
        start : str
            Literal opening token
        stop : str
            Literal closing token
        emitter : Emitter or callable
            Turns the contents into nodes
        raw_contents : bool, default False
            Hand the contents to the emitter without inline processing
        word_boundary : bool, default False
            Reject a start token preceded by a word character
        space_boundary : bool, default False
            Reject a start token not preceded by whitespace or start of text
        ignore_case : bool, default True
            Match the tokens in any letter case
        name : str, optional
            Label used in log messages

        Returns
        -------
        InlineRule
            The registered rule

        """
        return self.register_inline(
            InlineRule(
                start=start,
                stop=stop,
                emitter=emitter,
                raw_contents=raw_contents,
                word_boundary=word_boundary,
                space_boundary=space_boundary,
                ignore_case=ignore_case,
                name=name,
            )
        )

    def replace_block(
        self,
        start: str,
        stop: str,
        emitter: Union[Emitter, Callable[..., EmitResult]],
        *,
        name: Optional[str] = None,
    ) -> BlockRule:
        """Declare and register a block rule in one call.

        Parameters
        ----------
        start : str
            Regular expression marking the opening line; capture groups reach
            the emitter
        stop : str
            Regular expression marking the closing line
        emitter : Emitter or callable
            Receives the accumulated lines and returns the block node
        name : str, optional
            Label used in log messages

        Returns
        -------
        BlockRule
            The registered rule

        """
        return self.register_block(BlockRule(start=start, stop=stop, emitter=emitter, name=name))
