"""Option classes for bbtree parsers."""

from bbtree.options.base import BaseParserOptions, CloneFrozenMixin
from bbtree.options.bbcode import BBCodeParserOptions

__all__ = [
    "BaseParserOptions",
    "BBCodeParserOptions",
    "CloneFrozenMixin",
]
