#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/rules/__init__.py
"""Tag rule declarations and the rule registry.

Only the rule types and the registry are re-exported here. The tag helpers
live in ``bbtree.rules.builders`` and the built-in catalog in
``bbtree.rules.builtin``.
"""

from bbtree.rules.registry import RuleSet
from bbtree.rules.types import BlockRule, EmitResult, Emitter, InlineProcessor, InlineRule, MatchContext

__all__ = [
    "BlockRule",
    "EmitResult",
    "Emitter",
    "InlineProcessor",
    "InlineRule",
    "MatchContext",
    "RuleSet",
]
