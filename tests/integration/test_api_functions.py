#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_api_functions.py
"""Integration tests for the public API functions ``to_ast`` and ``to_jsonml``.

Tests cover the supported input types, option overrides, custom rule sets and
progress callbacks.
"""

from io import BytesIO, StringIO

import pytest

import bbtree
from bbtree import BBCodeParserOptions, Element, RuleSet, Text, replace_bbcode, to_ast, to_jsonml
from bbtree.ast import ValidationVisitor, ast_to_json, json_to_ast


@pytest.mark.integration
class TestToAst:
    """Tests for ``to_ast``."""

    def test_string(self) -> None:
        doc = to_ast("[b]hi[/b]")
        assert doc.children == [Element("span", {"class": "bbcode-b"}, [Text("hi")])]

    def test_path_and_stream_agree(self, tmp_path, sample_post) -> None:
        """The same markup gives the same tree from every input type."""
        path = tmp_path / "post.bbcode"
        path.write_text(sample_post, encoding="utf-8")

        from_text = to_ast(sample_post)
        assert to_ast(BytesIO(sample_post.encode("utf-8"))).children == from_text.children
        assert to_ast(StringIO(sample_post)).children == from_text.children
        assert to_ast(path).children == from_text.children

    def test_keyword_overrides(self) -> None:
        """Keyword arguments override individual options."""
        assert to_ast("[B]x[/b]", case_insensitive=False).children == [Text("[B]x[/b]")]

    def test_keywords_override_parser_options(self) -> None:
        """Keywords win over a supplied options object."""
        options = BBCodeParserOptions(max_nesting_depth=1)
        doc = to_ast("[b][i][u]x[/u][/i][/b]", parser_options=options, max_nesting_depth=8)
        assert doc.children[0].children[0].children[0].tag == "span"

    def test_unknown_keyword(self) -> None:
        """Unknown option names are an error."""
        with pytest.raises(TypeError):
            to_ast("x", colour="red")

    def test_custom_rules(self) -> None:
        """A caller-supplied rule set replaces the catalog."""
        rules = RuleSet()
        replace_bbcode(rules, "sup", lambda contents, ctx: Element("sup", {}, list(contents)))
        assert to_ast("x[sup]2[/sup] [b]y[/b]", rules=rules).children == [
            Text("x"),
            Element("sup", {}, [Text("2")]),
            Text(" [b]y[/b]"),
        ]

    def test_progress_callback(self) -> None:
        events = []
        to_ast("[b]x[/b]", progress_callback=events.append)
        assert events[0].event_type == "started"
        assert events[-1].event_type == "finished"

    def test_json_round_trip(self, sample_post) -> None:
        """A converted post survives JSON serialization."""
        doc = to_ast(sample_post)
        ValidationVisitor().visit_document(doc)
        assert json_to_ast(ast_to_json(doc)) == doc


@pytest.mark.integration
class TestToJsonML:
    """Tests for ``to_jsonml``."""

    def test_basic(self) -> None:
        assert to_jsonml("[b]x[/b] y") == [["span", {"class": "bbcode-b"}, "x"], " y"]

    def test_sample_post(self, sample_post) -> None:
        result = to_jsonml(sample_post)
        assert result[0] == "Hello "
        assert result[5] == ["p", ["pre", "print('[b]not bold[/b]')"]]
        assert result[6] == ["ol", {"type": "1"}, ["li", "first ", ["span", {"class": "bbcode-i"}, "item"]], ["li", "second"]]
        assert result[-1] == "Bye."

    def test_passes_options(self) -> None:
        assert to_jsonml("[B]x[/b]", case_insensitive=False) == ["[B]x[/b]"]


@pytest.mark.integration
def test_package_exports() -> None:
    """The top-level package exposes the main entry points."""
    for name in bbtree.__all__:
        assert hasattr(bbtree, name), name
