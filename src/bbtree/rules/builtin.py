#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/rules/builtin.py
"""Built-in BBCode tag catalog.

The catalog is pure declaration: every tag is one call to a helper from
``bbtree.rules.builders`` (or ``RuleSet.replace_block``) with an emitter
defined below. Registration order matters, since the earlier rule wins when
two start tokens are found at the same offset.

Tags
----
- Formatting: [b], [i], [u], [s], [small], [highlight]
- Structure: [ul], [ol], [li], [list], [list=x], [indent], [edit], [ot]
- Links: [url], [url=...], [email], [email=...], [aname=...], [jumpto=...],
  [fphp], [fphp=...], [google]
- Media: [img], [spoiler]
- Styling: [size=...], [color=...], [font=...], [left], [center], [right],
  [rule=...]
- Raw: [code], [noparse]
"""

from __future__ import annotations

import re
from typing import Any, Optional, Sequence

from bbtree.ast.nodes import Element, Node, Text
from bbtree.constants import (
    ALIGNMENT_DIRECTIONS,
    BBCODE_CLASS_PREFIX,
    BBCODE_DATA_ATTRIBUTE,
    BBCODE_DATA_VALUE,
    GOOGLE_SEARCH_URL,
    LIST_ITEM_MARKER,
    PHP_LOOKUP_URL,
    RULE_STYLE_TEMPLATE,
)
from bbtree.options.bbcode import BBCodeParserOptions
from bbtree.rules.builders import raw_bbcode, replace_bbcode, replace_bbcode_params, replace_bbcode_params_raw
from bbtree.rules.registry import RuleSet
from bbtree.rules.types import Emitter, MatchContext

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_SPOILER_IMAGE = re.compile(r"<img", re.IGNORECASE)


def _text_children(value: str) -> list[Node]:
    return [Text(content=value)] if value else []


def _leading_int(value: str) -> int:
    """Parse the leading integer of ``value``; 0 when there is none."""
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else 0


# -----------------------------------------------------------------------------
# Emitters
# -----------------------------------------------------------------------------


def wrap(contents: Sequence[Node], context: MatchContext, tag: str, attributes: Optional[dict[str, str]] = None) -> Element:
    """Wrap processed contents in a ``tag`` element."""
    return Element(tag, dict(attributes or {}), list(contents))


def class_span(contents: Sequence[Node], context: MatchContext, name: str) -> Element:
    return Element("span", {"class": f"{BBCODE_CLASS_PREFIX}{name}"}, list(contents))


def aligned(contents: Sequence[Node], context: MatchContext, direction: str) -> Element:
    return Element("div", {"style": f"text-align:{direction}"}, list(contents))


def image(contents: str, context: MatchContext) -> Element:
    return Element("img", {"href": contents})


def raw_link(contents: str, context: MatchContext, prefix: str = "") -> Element:
    """Link whose target and label are both the raw contents."""
    return Element("a", {"href": prefix + contents, BBCODE_DATA_ATTRIBUTE: BBCODE_DATA_VALUE}, _text_children(contents))


def param_link(contents: Any, context: MatchContext, prefix: str = "") -> Element:
    """Link whose target is the tag parameter.

    ``contents`` is a node list for the recursive variant and a raw string for
    the raw one (``[fphp=...]``).
    """
    children = _text_children(contents) if isinstance(contents, str) else list(contents)
    href = prefix + (context.param or "")
    return Element("a", {"href": href, BBCODE_DATA_ATTRIBUTE: BBCODE_DATA_VALUE}, children)


def anchor(contents: Sequence[Node], context: MatchContext) -> Element:
    return Element("a", {"name": context.param or "", BBCODE_DATA_ATTRIBUTE: BBCODE_DATA_VALUE}, list(contents))


def spoiler(contents: str, context: MatchContext) -> Element:
    """Spoilers holding an HTML ``<img`` are blocks, anything else stays inline."""
    tag = "div" if _SPOILER_IMAGE.search(contents) else "span"
    return Element(tag, {"class": "spoiler"}, _text_children(contents))


def sized(contents: Sequence[Node], context: MatchContext) -> Element:
    size = _leading_int(context.param or "") or 1
    return Element("span", {"class": f"{BBCODE_CLASS_PREFIX}size-{size}"}, list(contents))


def font(contents: Sequence[Node], context: MatchContext, attribute: str) -> Element:
    return Element("font", {attribute: context.param or ""}, list(contents))


def literal(contents: str, context: MatchContext) -> str:
    return contents


def sepquote(contents: Sequence[Node], context: MatchContext, label: str) -> Element:
    header: list[Node] = [Element("span", {"class": "smallfont"}, [Text(content=label)]), Element("br"), Element("br")]
    return Element("div", {"class": "sepquote"}, header + list(contents))


def indent(contents: Sequence[Node], context: MatchContext) -> Element:
    return Element("blockquote", {}, [Element("div", {}, list(contents))])


def horizontal_rule(contents: str, context: MatchContext) -> Element:
    """``[rule=width]color[/rule]`` becomes an empty div with a border style."""
    return Element("div", {"style": RULE_STYLE_TEMPLATE.format(color=contents, width=context.param or "")})


def code_block(lines: list[str], context: MatchContext) -> Element:
    return Element("p", {}, [Element("pre", {}, _text_children("\n".join(lines)))])


def list_block(lines: list[str], context: MatchContext) -> Element:
    """Build ``ul`` (or ``ol`` with a ``type``) from ``[*]`` lines.

    Lines that do not start with ``[*]`` are dropped.
    """
    list_type = context.captures[0] if context.captures else None
    block = Element("ol", {"type": list_type}) if list_type else Element("ul")

    for chunk in lines:
        for line in chunk.split("\n"):
            if not line.startswith(LIST_ITEM_MARKER):
                continue
            item = context.process_inline(line[len(LIST_ITEM_MARKER) :])
            if item:
                block.append(Element("li", {}, item))
    return block


# -----------------------------------------------------------------------------
# Catalog
# -----------------------------------------------------------------------------


def register_default_rules(rules: RuleSet, case_insensitive: bool = True) -> RuleSet:
    """Register the built-in catalog into ``rules``.

    Parameters
    ----------
    rules : RuleSet
        Open rule set; the catalog is appended after any rules already present
    case_insensitive : bool, default True
        Passed through to every inline helper

    Returns
    -------
    RuleSet
        ``rules``, for chaining

    """
    ci = {"case_insensitive": case_insensitive}

    for name in ("b", "i", "u", "s"):
        replace_bbcode(rules, name, Emitter(class_span, {"name": name}), **ci)
    for tag in ("ul", "ol", "li"):
        replace_bbcode(rules, tag, Emitter(wrap, {"tag": tag}), **ci)

    raw_bbcode(rules, "img", image, **ci)
    raw_bbcode(rules, "email", Emitter(raw_link, {"prefix": "mailto:"}), **ci)
    raw_bbcode(rules, "url", raw_link, **ci)
    raw_bbcode(rules, "spoiler", spoiler, **ci)

    replace_bbcode_params(rules, "url", param_link, **ci)
    replace_bbcode_params(rules, "email", Emitter(param_link, {"prefix": "mailto:"}), **ci)
    replace_bbcode_params(rules, "size", sized, **ci)

    rules.replace_block(r"\[code\]", r"\[/code\]", code_block, name="code")

    replace_bbcode_params(rules, "color", Emitter(font, {"attribute": "color"}), **ci)
    replace_bbcode_params(rules, "font", Emitter(font, {"attribute": "face"}), **ci)

    replace_bbcode(rules, "small", Emitter(wrap, {"tag": "span", "attributes": {"style": "font-size:x-small"}}), **ci)
    replace_bbcode(rules, "highlight", Emitter(wrap, {"tag": "span", "attributes": {"class": "highlight"}}), **ci)
    for direction in ALIGNMENT_DIRECTIONS:
        replace_bbcode(rules, direction, Emitter(aligned, {"direction": direction}), **ci)

    raw_bbcode(rules, "noparse", literal, **ci)

    replace_bbcode_params(rules, "aname", anchor, **ci)
    raw_bbcode(rules, "fphp", Emitter(raw_link, {"prefix": PHP_LOOKUP_URL}), **ci)
    replace_bbcode_params_raw(rules, "fphp", Emitter(param_link, {"prefix": PHP_LOOKUP_URL}), **ci)
    raw_bbcode(rules, "google", Emitter(raw_link, {"prefix": GOOGLE_SEARCH_URL}), **ci)
    replace_bbcode_params(rules, "jumpto", Emitter(param_link, {"prefix": "#"}), **ci)

    replace_bbcode(rules, "edit", Emitter(sepquote, {"label": "Edit:"}), **ci)
    replace_bbcode(rules, "ot", Emitter(sepquote, {"label": "Off Topic:"}), **ci)
    replace_bbcode(rules, "indent", indent, **ci)
    replace_bbcode_params_raw(rules, "rule", horizontal_rule, **ci)

    rules.replace_block(r"\[list=?(\w)?\]", r"\[/list\]", list_block, name="list")
    return rules


def build_default_rules(options: Optional[BBCodeParserOptions] = None) -> RuleSet:
    """Create a new, unfrozen rule set holding the built-in catalog.

    Examples
    --------
        >>> rules = build_default_rules()
        >>> rules.inline_between("[sup]", "[/sup]", lambda contents, ctx: Element("sup", {}, contents))
        >>> parser = BBCodeParser(rules=rules)

    """
    options = options or BBCodeParserOptions()
    return register_default_rules(RuleSet(), case_insensitive=options.case_insensitive)
