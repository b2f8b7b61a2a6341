"""bbtree - convert BBCode markup into a structured markup tree.

BBCode (``[b]bold[/b]``, ``[url=...]link[/url]``, ``[list][*]item[/list]``)
is matched by a registry of declarative tag rules and turned into a tree of
``Element`` and ``Text`` nodes. Malformed markup never fails a document:
unterminated tags, malformed parameters and unknown brackets stay as literal
text.

Examples
--------
Convert a string:

    >>> from bbtree import to_ast
    >>> doc = to_ast("[b]Bold[/b] and [i]italic[/i]")

Add a tag to the built-in catalog:

    >>> from bbtree import BBCodeParser, Element, build_default_rules, replace_bbcode
    >>> rules = build_default_rules()
    >>> replace_bbcode(rules, "sup", lambda contents, ctx: Element("sup", {}, contents))
    >>> doc = BBCodeParser(rules=rules).apply("x[sup]2[/sup]")

Serialize:

    >>> from bbtree.ast import ast_to_json
    >>> print(ast_to_json(doc, indent=2))

"""

from bbtree.api import to_ast, to_jsonml
from bbtree.ast import Document, Element, Node, Text
from bbtree.exceptions import (
    BBTreeError,
    FileError,
    InvalidOptionsError,
    InvalidRuleError,
    RegistryFrozenError,
    ValidationError,
)
from bbtree.options import BBCodeParserOptions
from bbtree.parsers.bbcode import BBCodeParser
from bbtree.progress import ProgressCallback, ProgressEvent
from bbtree.rules import BlockRule, Emitter, InlineRule, MatchContext, RuleSet
from bbtree.rules.builders import raw_bbcode, replace_bbcode, replace_bbcode_params, replace_bbcode_params_raw
from bbtree.rules.builtin import build_default_rules

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Conversion
    "to_ast",
    "to_jsonml",
    "BBCodeParser",
    "BBCodeParserOptions",
    # Tree
    "Node",
    "Document",
    "Element",
    "Text",
    # Rules
    "RuleSet",
    "InlineRule",
    "BlockRule",
    "Emitter",
    "MatchContext",
    "build_default_rules",
    "replace_bbcode",
    "raw_bbcode",
    "replace_bbcode_params",
    "replace_bbcode_params_raw",
    # Progress
    "ProgressEvent",
    "ProgressCallback",
    # Exceptions
    "BBTreeError",
    "ValidationError",
    "InvalidOptionsError",
    "InvalidRuleError",
    "RegistryFrozenError",
    "FileError",
]
