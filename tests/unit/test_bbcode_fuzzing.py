"""Property-based fuzzing tests for the BBCode rule engine.

Hypothesis generates plain text and bracket-heavy pseudo-markup to check that
conversion never fails and produces well-formed trees.

Test Coverage:
- Property: text without brackets is returned untouched
- Property: arbitrary tag soup never raises
- Property: output trees pass structural validation
- Property: no two text leaves are adjacent
"""

import pytest
from hypothesis import given, strategies as st

from bbtree.ast import Text, ValidationVisitor
from bbtree.options.bbcode import BBCodeParserOptions
from bbtree.parsers.bbcode import BBCodeParser

TAG_NAMES = ["b", "i", "u", "s", "url", "email", "img", "code", "list", "noparse", "size", "color", "rule", "*"]

tag_tokens = st.builds(
    lambda closing, name, param: f"[{'/' if closing else ''}{name}{'=' + param if param is not None else ''}]",
    st.booleans(),
    st.sampled_from(TAG_NAMES),
    st.one_of(st.none(), st.text(alphabet="ab1'\"= ", max_size=6)),
)
tag_soup = st.lists(st.one_of(tag_tokens, st.text(alphabet="xy []=\n", max_size=5)), max_size=25).map("".join)

_PARSER = BBCodeParser()
_SHALLOW_PARSER = BBCodeParser(BBCodeParserOptions(max_nesting_depth=2))


@pytest.mark.unit
@pytest.mark.fuzzing
class TestBBCodeFuzzing:
    """Property-based tests for ``BBCodeParser.apply``."""

    @given(st.text(max_size=300).filter(lambda s: "[" not in s))
    def test_text_without_brackets_is_unchanged(self, text):
        """Property: without a start token the input is one text leaf."""
        doc = _PARSER.apply(text)
        assert doc.children == ([Text(text)] if text else [])

    @given(tag_soup)
    def test_tag_soup_never_raises(self, text):
        """Property: malformed markup always converts to a valid tree."""
        doc = _PARSER.apply(text)
        ValidationVisitor(strict=True).visit_document(doc)

    @given(tag_soup)
    def test_no_adjacent_text_leaves(self, text):
        """Property: neighbouring text is merged at the top level."""
        children = _PARSER.apply(text).children
        for left, right in zip(children, children[1:]):
            assert not (isinstance(left, Text) and isinstance(right, Text))

    @given(tag_soup)
    def test_shallow_limit_never_raises(self, text):
        """Property: a low nesting limit still yields a valid tree."""
        ValidationVisitor(strict=True).visit_document(_SHALLOW_PARSER.apply(text))
