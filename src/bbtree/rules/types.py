#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/rules/types.py
"""Declarative rule types for the BBCode matching engine.

A rule pairs a way of recognising a span of input with an ``Emitter`` that
turns the matched contents into tree nodes:

- ``InlineRule``: literal start/stop tokens inside one contiguous text
  (``[b]`` ... ``[/b]``).
- ``BlockRule``: regular-expression start/stop markers over whole lines
  (``[list]`` ... ``[/list]``).

Emitters are data values (a function plus the parameters it needs) rather
than closures, so a rule can be inspected, compared and tested on its own.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol, Sequence, Union

from bbtree.exceptions import InvalidRuleError

if TYPE_CHECKING:
    from bbtree.ast.nodes import Node

EmitResult = Union["Node", str, Sequence[Union["Node", str]], None]
"""Value returned by an emitter.

A node, a sequence of nodes (spliced in place of the match), a string (a text
leaf) or ``None`` to decline the match and leave the text untouched.
"""


class InlineProcessor(Protocol):
    """Anything that can run the inline pass over a text span."""

    def process_inline(self, text: str, depth: int = 0) -> list[Node]:
        """Match inline rules in ``text`` and return the resulting nodes."""
        ...


@dataclass(frozen=True)
class Emitter:
    """A function reference plus the parameters it is called with.

    Calling the emitter invokes ``func(contents, context, **params)``.

    Parameters
    ----------
    func : callable
        ``func(contents, context, **params) -> EmitResult``
    params : dict, default = empty dict
        Keyword arguments captured at declaration time (e.g., the alignment
        direction of ``[left]``/``[center]``/``[right]``)

    Examples
    --------
        >>> def aligned(contents, context, direction):
        ...     return Element("div", {"style": f"text-align:{direction}"}, list(contents))
        >>> center = Emitter(aligned, {"direction": "center"})

    """

    func: Callable[..., EmitResult]
    params: dict[str, Any] = field(default_factory=dict, hash=False)

    def __call__(self, contents: Any, context: MatchContext) -> EmitResult:
        return self.func(contents, context, **self.params)

    @property
    def name(self) -> str:
        return getattr(self.func, "__name__", repr(self.func))

    @classmethod
    def wrap(cls, value: Emitter | Callable[..., EmitResult]) -> Emitter:
        """Return ``value`` as an ``Emitter``, wrapping bare callables.

        Raises
        ------
        InvalidRuleError
            If ``value`` is neither an ``Emitter`` nor callable

        """
        if isinstance(value, Emitter):
            return value
        if callable(value):
            return cls(func=value)
        raise InvalidRuleError(
            f"Emitter must be callable, got {type(value).__name__}",
            parameter_name="emitter",
            parameter_value=value,
        )


@dataclass(frozen=True)
class MatchContext:
    """Information handed to an emitter alongside the matched contents.

    Parameters
    ----------
    parser : InlineProcessor
        Host providing the inline re-entry hook
    depth : int, default 0
        Nesting depth of the pass that found this match
    rule : InlineRule, BlockRule or None
        The rule being applied
    captures : tuple of str or None
        Capture groups of a block rule's start pattern
    param : str or None
        Parameter extracted from ``[tag=param]``

    """

    parser: InlineProcessor
    depth: int = 0
    rule: Optional[Union[InlineRule, BlockRule]] = None
    captures: tuple[Optional[str], ...] = ()
    param: Optional[str] = None

    def process_inline(self, text: str) -> list[Node]:
        """Re-enter inline processing one level deeper."""
        return self.parser.process_inline(text, depth=self.depth + 1)

    def for_rule(self, rule: Union[InlineRule, BlockRule], **changes: Any) -> MatchContext:
        return replace(self, rule=rule, **changes)


def _require_token(value: Any, field_name: str) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidRuleError(
            f"Rule '{field_name}' token must be a non-empty string, got {value!r}",
            parameter_name=field_name,
            parameter_value=value,
        )


@dataclass(frozen=True)
class InlineRule:
    """Rule matching a literal start token, contents, and a literal stop token.

    Parameters
    ----------
    start : str
        Opening token, e.g. ``"[b]"`` or ``"[url="``
    stop : str
        Closing token, e.g. ``"[/b]"``
    emitter : Emitter or callable
        Turns the contents into nodes
    raw_contents : bool, default False
        Pass the text between the tokens to the emitter unprocessed. When
        False the contents are run through inline processing first and the
        emitter receives a node list.
    word_boundary : bool, default False
        Reject a start token directly preceded by a word character
    space_boundary : bool, default False
        Reject a start token not preceded by whitespace or start of text
    ignore_case : bool, default True
        Compare the tokens case-insensitively. When False the tokens only
        match their exact spelling.
    name : str, optional
        Label used in log messages

    Raises
    ------
    InvalidRuleError
        If ``start`` or ``stop`` is empty, or ``emitter`` is not callable

    """

    start: str
    stop: str
    emitter: Emitter
    raw_contents: bool = False
    word_boundary: bool = False
    space_boundary: bool = False
    ignore_case: bool = True
    name: Optional[str] = None
    _start_re: re.Pattern[str] = field(init=False, repr=False, compare=False)
    _stop_re: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _require_token(self.start, "start")
        _require_token(self.stop, "stop")
        object.__setattr__(self, "emitter", Emitter.wrap(self.emitter))

        flags = re.IGNORECASE if self.ignore_case else 0
        object.__setattr__(self, "_start_re", re.compile(re.escape(self.start), flags))
        object.__setattr__(self, "_stop_re", re.compile(re.escape(self.stop), flags))

    @property
    def label(self) -> str:
        return self.name or self.start

    def find_start(self, text: str, pos: int = 0) -> Optional[re.Match[str]]:
        """Find the next start token at or after ``pos``."""
        return self._start_re.search(text, pos)

    def find_stop(self, text: str, pos: int = 0) -> Optional[re.Match[str]]:
        """Find the next stop token at or after ``pos``."""
        return self._stop_re.search(text, pos)


def _compile_marker(value: Union[str, re.Pattern[str]], field_name: str) -> re.Pattern[str]:
    if isinstance(value, re.Pattern):
        return value
    _require_token(value, field_name)
    try:
        return re.compile(value, re.IGNORECASE)
    except re.error as e:
        raise InvalidRuleError(
            f"Block rule '{field_name}' pattern does not compile: {e}",
            parameter_name=field_name,
            parameter_value=value,
            original_error=e,
        ) from e


@dataclass(frozen=True)
class BlockRule:
    """Rule matching a run of lines between a start and a stop marker.

    Parameters
    ----------
    start : str or re.Pattern
        Pattern searched for in each line. String patterns are compiled
        case-insensitively. Capture groups reach the emitter as
        ``context.captures``.
    stop : str or re.Pattern
        Pattern closing the block
    emitter : Emitter or callable
        Receives the list of accumulated lines and returns the block node
    name : str, optional
        Label used in log messages

    """

    start: Union[str, re.Pattern[str]]
    stop: Union[str, re.Pattern[str]]
    emitter: Emitter
    name: Optional[str] = None
    start_pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)
    stop_pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "start_pattern", _compile_marker(self.start, "start"))
        object.__setattr__(self, "stop_pattern", _compile_marker(self.stop, "stop"))
        object.__setattr__(self, "emitter", Emitter.wrap(self.emitter))

    @property
    def label(self) -> str:
        return self.name or self.start_pattern.pattern
