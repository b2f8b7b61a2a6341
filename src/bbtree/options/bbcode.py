#  Copyright (c) 2025 Tom Villani, Ph.D.

# bbtree/options/bbcode.py
"""Configuration options for BBCode parsing."""

from __future__ import annotations

from dataclasses import dataclass, field

from bbtree.constants import DEFAULT_CASE_INSENSITIVE, DEFAULT_MAX_NESTING_DEPTH
from bbtree.options.base import BaseParserOptions


@dataclass(frozen=True)
class BBCodeParserOptions(BaseParserOptions):
    """Configuration options for BBCode-to-tree parsing.

    Parameters
    ----------
    max_nesting_depth : int, default 64
        Maximum number of nested re-entries into inline processing. Deeper
        content is emitted as literal text instead of being matched, so an
        adversarial input cannot exhaust the call stack.
    case_insensitive : bool, default True
        How the built-in catalog registers its tags. When True, one rule per
        tag matches any spelling (``[b]``, ``[B]``, ``[/B]``). When False, every
        tag is registered twice, once lowercase and once uppercase, and each
        rule only matches its exact spelling.

    Examples
    --------
        >>> from bbtree.parsers.bbcode import BBCodeParser
        >>> options = BBCodeParserOptions(max_nesting_depth=8)
        >>> parser = BBCodeParser(options)
        >>> doc = parser.apply("[b]Bold text[/b]")

    """

    max_nesting_depth: int = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={"help": "Maximum nesting depth before content is kept as literal text", "type": int},
    )
    case_insensitive: bool = field(
        default=DEFAULT_CASE_INSENSITIVE,
        metadata={
            "help": "Match tags in any letter case (otherwise only all-lowercase or all-uppercase)",
            "cli_name": "case-sensitive",
        },
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If ``max_nesting_depth`` is not a positive integer.

        """
        super().__post_init__()
        if isinstance(self.max_nesting_depth, bool) or not isinstance(self.max_nesting_depth, int):
            raise ValueError(f"max_nesting_depth must be an integer, got {self.max_nesting_depth!r}")
        if self.max_nesting_depth <= 0:
            raise ValueError(f"max_nesting_depth must be positive, got {self.max_nesting_depth}")
