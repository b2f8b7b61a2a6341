#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for rule declarations and emitters."""

import re

import pytest

from bbtree.ast import Element, Text
from bbtree.exceptions import InvalidRuleError
from bbtree.rules.types import BlockRule, Emitter, InlineRule, MatchContext


class _EchoParser:
    """Stand-in host that records re-entry depth."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, int]] = []

    def process_inline(self, text: str, depth: int = 0) -> list:
        self.calls.append((text, depth))
        return [Text(text)]


def _aligned(contents, context, direction):
    return Element("div", {"style": f"text-align:{direction}"}, list(contents))


@pytest.mark.unit
class TestEmitter:
    """Tests for emitter data values."""

    def test_params_are_passed_as_keywords(self) -> None:
        """Calling an emitter forwards its captured parameters."""
        emitter = Emitter(_aligned, {"direction": "center"})
        node = emitter([Text("x")], MatchContext(parser=_EchoParser()))
        assert node == Element("div", {"style": "text-align:center"}, [Text("x")])

    def test_emitters_compare_by_value(self) -> None:
        """Two emitters with the same function and parameters are equal."""
        assert Emitter(_aligned, {"direction": "left"}) == Emitter(_aligned, {"direction": "left"})
        assert Emitter(_aligned, {"direction": "left"}) != Emitter(_aligned, {"direction": "right"})

    def test_wrap_bare_callable(self) -> None:
        """Bare callables are wrapped with no parameters."""
        emitter = Emitter.wrap(_aligned)
        assert emitter.func is _aligned
        assert emitter.params == {}
        assert emitter.name == "_aligned"

    def test_wrap_rejects_non_callable(self) -> None:
        """A non-callable emitter is a declaration error."""
        with pytest.raises(InvalidRuleError) as exc_info:
            Emitter.wrap("span")  # type: ignore[arg-type]
        assert exc_info.value.parameter_name == "emitter"


@pytest.mark.unit
class TestMatchContext:
    """Tests for the context handed to emitters."""

    def test_process_inline_goes_one_level_deeper(self) -> None:
        """Re-entry increments the depth."""
        host = _EchoParser()
        context = MatchContext(parser=host, depth=3)
        assert context.process_inline("abc") == [Text("abc")]
        assert host.calls == [("abc", 4)]

    def test_for_rule_copies(self) -> None:
        """Binding a rule returns a new context and leaves the original alone."""
        rule = InlineRule("[b]", "[/b]", _aligned)
        context = MatchContext(parser=_EchoParser())
        bound = context.for_rule(rule, param="x")
        assert bound.rule is rule
        assert bound.param == "x"
        assert context.rule is None


@pytest.mark.unit
class TestInlineRule:
    """Tests for inline rule declarations."""

    @pytest.mark.parametrize("start,stop", [("", "[/b]"), ("[b]", ""), (None, "[/b]")])
    def test_empty_tokens_rejected(self, start, stop) -> None:
        """Start and stop tokens must be non-empty strings."""
        with pytest.raises(InvalidRuleError):
            InlineRule(start, stop, _aligned)

    def test_callable_is_wrapped(self) -> None:
        """A plain function becomes an Emitter."""
        rule = InlineRule("[b]", "[/b]", _aligned)
        assert isinstance(rule.emitter, Emitter)

    def test_tokens_are_literal(self) -> None:
        """Regex metacharacters in tokens are matched literally."""
        rule = InlineRule("[*]", "(.)", _aligned)
        assert rule.find_start("a[*]b").start() == 1
        assert rule.find_stop("xx(.)").start() == 2
        assert rule.find_stop("xxab") is None

    def test_ignore_case(self) -> None:
        """Case-insensitive rules match any spelling; others only the exact one."""
        loose = InlineRule("[b]", "[/b]", _aligned)
        strict = InlineRule("[b]", "[/b]", _aligned, ignore_case=False)
        assert loose.find_start("[B]") is not None
        assert strict.find_start("[B]") is None

    def test_label(self) -> None:
        """The label falls back to the start token."""
        assert InlineRule("[b]", "[/b]", _aligned).label == "[b]"
        assert InlineRule("[b]", "[/b]", _aligned, name="bold").label == "bold"


@pytest.mark.unit
class TestBlockRule:
    """Tests for block rule declarations."""

    def test_string_patterns_compile_case_insensitively(self) -> None:
        """String patterns ignore case."""
        rule = BlockRule(r"\[list=?(\w)?\]", r"\[/list\]", _aligned)
        match = rule.start_pattern.search("[LIST=a]")
        assert match is not None
        assert match.groups() == ("a",)

    def test_precompiled_pattern_used_as_is(self) -> None:
        """Compiled patterns keep their own flags."""
        pattern = re.compile(r"\[code\]")
        rule = BlockRule(pattern, r"\[/code\]", _aligned)
        assert rule.start_pattern is pattern
        assert rule.start_pattern.search("[CODE]") is None

    def test_bad_pattern(self) -> None:
        """A pattern that does not compile is reported with the regex error."""
        with pytest.raises(InvalidRuleError) as exc_info:
            BlockRule(r"\[list(", r"\[/list\]", _aligned)
        assert isinstance(exc_info.value.original_error, re.error)
