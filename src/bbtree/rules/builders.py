#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/rules/builders.py
"""Shortcuts for declaring ``[tag]...[/tag]`` rules against a ``RuleSet``.

Each helper derives the start and stop tokens from a bare tag name. With
``case_insensitive=True`` (the default) one rule per tag matches any spelling.
With ``case_insensitive=False`` the tag is registered twice, once lowercase and
once uppercase, and each rule only matches its own spelling.
"""

from __future__ import annotations

from typing import Callable, Union

from bbtree.parsers.params import emit_with_param
from bbtree.rules.registry import RuleSet
from bbtree.rules.types import EmitResult, Emitter, InlineRule

EmitterLike = Union[Emitter, Callable[..., EmitResult]]


def _spellings(tag: str, case_insensitive: bool) -> list[tuple[str, bool]]:
    if case_insensitive:
        return [(tag, True)]
    return [(tag.lower(), False), (tag.upper(), False)]


def replace_bbcode(
    rules: RuleSet,
    tag: str,
    emitter: EmitterLike,
    *,
    raw_contents: bool = False,
    word_boundary: bool = False,
    space_boundary: bool = False,
    case_insensitive: bool = True,
) -> list[InlineRule]:
    """Register ``[tag]contents[/tag]``.

    Parameters
    ----------
    rules : RuleSet
        Rule set to register into
    tag : str
        Bare tag name, e.g. ``"b"``
    emitter : Emitter or callable
        Receives the processed node list (or the raw string when
        ``raw_contents`` is set)
    raw_contents : bool, default False
        Pass the contents unprocessed
    word_boundary : bool, default False
        Reject a start token preceded by a word character
    space_boundary : bool, default False
        Reject a start token not preceded by whitespace
    case_insensitive : bool, default True
        Register one case-insensitive rule instead of a lowercase and an
        uppercase one

    Returns
    -------
    list of InlineRule
        The rules registered, in order

    """
    return [
        rules.inline_between(
            f"[{spelling}]",
            f"[/{spelling}]",
            emitter,
            raw_contents=raw_contents,
            word_boundary=word_boundary,
            space_boundary=space_boundary,
            ignore_case=ignore_case,
            name=tag,
        )
        for spelling, ignore_case in _spellings(tag, case_insensitive)
    ]


def raw_bbcode(rules: RuleSet, tag: str, emitter: EmitterLike, *, case_insensitive: bool = True) -> list[InlineRule]:
    """Register ``[tag]contents[/tag]`` with the contents passed as a raw string."""
    return replace_bbcode(rules, tag, emitter, raw_contents=True, case_insensitive=case_insensitive)


def _register_params(
    rules: RuleSet, tag: str, emitter: EmitterLike, recursive: bool, case_insensitive: bool
) -> list[InlineRule]:
    synthetic = Emitter(emit_with_param, {"target": Emitter.wrap(emitter), "recursive": recursive})
    return [
        rules.inline_between(
            f"[{spelling}=",
            f"[/{spelling}]",
            synthetic,
            raw_contents=True,
            ignore_case=ignore_case,
            name=f"{tag}=",
        )
        for spelling, ignore_case in _spellings(tag, case_insensitive)
    ]


def replace_bbcode_params_raw(
    rules: RuleSet, tag: str, emitter: EmitterLike, *, case_insensitive: bool = True
) -> list[InlineRule]:
    """Register ``[tag=param]contents[/tag]`` with raw string contents.

    The emitter receives the contents as a string and the parameter as
    ``context.param``. A span without a closing ``]`` after the parameter is
    left as literal text.
    """
    return _register_params(rules, tag, emitter, recursive=False, case_insensitive=case_insensitive)


def replace_bbcode_params(
    rules: RuleSet, tag: str, emitter: EmitterLike, *, case_insensitive: bool = True
) -> list[InlineRule]:
    """Register ``[tag=param]contents[/tag]`` with inline-processed contents.

    Same as ``replace_bbcode_params_raw`` except the contents are run through
    inline processing first, so tags nest inside parameterized tags.

    Examples
    --------
        >>> def link(contents, context):
        ...     return Element("a", {"href": context.param}, contents)
        >>> replace_bbcode_params(rules, "url", link)

    """
    return _register_params(rules, tag, emitter, recursive=True, case_insensitive=case_insensitive)
