#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the bbtree library.

Constants are organized by category:
1. Type Definitions
2. Parser Defaults
3. Built-in Tag Vocabulary
4. Configuration and CLI
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

OutputFormat = Literal["json", "jsonml"]

# =============================================================================
# Parser Defaults
# =============================================================================

DEFAULT_MAX_NESTING_DEPTH = 64
DEFAULT_CASE_INSENSITIVE = True

# Marker that opens one item inside a [list] block
LIST_ITEM_MARKER = "[*]"

# Matches the leading `=param]` of a parameterized tag span
PARAM_PATTERN = r"""^(?P<param>[^\]]+)\](?P<contents>.*)\Z"""
PARAM_QUOTE_CHARS = "\"'"

# =============================================================================
# Built-in Tag Vocabulary
# =============================================================================

BBCODE_CLASS_PREFIX = "bbcode-"
BBCODE_DATA_ATTRIBUTE = "data-bbcode"
BBCODE_DATA_VALUE = "true"

ALIGNMENT_DIRECTIONS = ("left", "center", "right")

PHP_LOOKUP_URL = "http://www.php.net/manual-lookup.php?function="
GOOGLE_SEARCH_URL = "http://www.google.com/search?q="

RULE_STYLE_TEMPLATE = "margin: 6px 0; height: 0; border-top: 1px solid {color}; margin: auto; width: {width}"

# =============================================================================
# Configuration and CLI
# =============================================================================

CONFIG_ENV_VAR = "BBTREE_CONFIG"
CONFIG_FILENAMES = [".bbtree.toml", ".bbtree.yaml", ".bbtree.yml", ".bbtree.json"]
PYPROJECT_TOOL_SECTION = "bbtree"

DEFAULT_OUTPUT_FORMAT: OutputFormat = "json"
DEFAULT_JSON_INDENT = 2

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
