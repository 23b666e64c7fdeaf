#!/usr/bin/env python3
"""
Tests for the structural parser.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfcore import Token, UnterminatedLoopError, emit, parse_tree
from bfcore.parser import count_nodes, format_tree, max_depth
from bfcore.tokens import is_code_char


@pytest.mark.parametrize("code", ["[", "[[]", "++[--"])
def test_unterminated_loops_fail(code):
    with pytest.raises(UnterminatedLoopError) as info:
        parse_tree(code)
    assert str(info.value) == "unterminated loop"


@pytest.mark.parametrize("code", ["[]", "[[][]]"])
def test_balanced_loops_parse(code):
    parse_tree(code)


def test_flat_code_is_all_leaves():
    assert parse_tree("+-<>.,") == ['+', '-', '<', '>', '.', ',']


def test_empty_loop_is_empty_sequence():
    assert parse_tree("[]") == [[]]
    assert parse_tree("") == []


def test_nested_structure():
    assert parse_tree("+[>[-]<]") == ['+', ['>', ['-'], '<']]
    assert parse_tree("[[][]]") == [[[], []]]


def test_comments_are_kept_as_leaves():
    assert parse_tree("a[b]") == ['a', ['b']]


def test_stray_loop_stop_is_a_leaf():
    """Only unterminated '[' is an error; a lone ']' is kept as-is."""
    assert parse_tree("]") == [']']
    assert parse_tree("+]-[]") == ['+', ']', '-', []]


def test_error_position_points_at_opening_bracket():
    with pytest.raises(UnterminatedLoopError) as info:
        parse_tree("++\n-[--")
    err = info.value
    assert err.position == 4
    assert (err.line, err.column) == (2, 2)
    assert "> " in err.context


def test_inner_unterminated_reports_outer_bracket():
    # the outer '[' never closes, so it is the one reported
    with pytest.raises(UnterminatedLoopError) as info:
        parse_tree("+[[]")
    assert info.value.position == 1


def test_balance_counts():
    """Top-level leaves plus one sequence per top-level loop."""
    code = "+>[-<+>]<.[[]]"
    tree = parse_tree(code)
    top_leaves = sum(1 for n in tree if not isinstance(n, list))
    top_loops = sum(1 for n in tree if isinstance(n, list))
    assert len(tree) == top_leaves + top_loops
    assert (top_leaves, top_loops) == (4, 2)
    assert count_nodes(tree) == (8, 3)
    assert max_depth(tree) == 2


@pytest.mark.parametrize("code", ["", "+[->+<]", "a]b[c[d]e]f", "[[][[]]]."])
def test_emit_restores_source(code):
    assert emit(parse_tree(code)) == code


def test_token_classification():
    assert Token.classify('[') is Token.LOOP_START
    assert Token.classify('.') is Token.PRINT
    assert Token.classify('x') is Token.OTHER
    assert Token.classify('') is Token.OTHER
    assert all(is_code_char(c) for c in "+-<>[],.")
    assert not is_code_char(' ')


def test_multi_character_input_is_not_a_token():
    assert Token.classify('+-') is Token.OTHER
    assert not is_code_char('[]')


DEEP = 1200


def test_deep_nesting_parses():
    """Nesting deeper than the interpreter recursion limit."""
    code = "[" * DEEP + "+" + "]" * DEEP
    tree = parse_tree(code)
    assert count_nodes(tree) == (1, DEEP)
    assert max_depth(tree) == DEEP
    assert emit(tree) == code


def test_deep_unterminated_reports_outer_bracket():
    with pytest.raises(UnterminatedLoopError) as info:
        parse_tree("+" + "[" * DEEP + "]" * (DEEP - 1))
    assert info.value.position == 1


def test_format_tree_matches_repr():
    for code in ["", "[]", "+[>[-]<]", "a[b]]", "[[][[]]]."]:
        tree = parse_tree(code)
        assert format_tree(tree) == repr(tree)
