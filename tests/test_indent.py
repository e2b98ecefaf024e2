"""Tests for per-line indentation helpers."""

from indentnav.indent import indent_width, is_blank, first_non_whitespace_column


def test_indent_width_counts_leading_spaces():
    assert indent_width("    x = 1") == 4
    assert indent_width("x") == 0
    assert indent_width("") == 0


def test_indent_width_expands_tabs_to_next_stop():
    assert indent_width("\tx", tab_width=4) == 4
    assert indent_width("  \tx", tab_width=4) == 4
    assert indent_width("\t\tx", tab_width=8) == 16
    assert indent_width("     \tx", tab_width=4) == 8


def test_indent_width_of_whitespace_only_line_is_its_width():
    assert indent_width("   ") == 3


def test_is_blank():
    assert is_blank("")
    assert is_blank("   ")
    assert is_blank("\t \t")
    assert not is_blank("  a")


def test_first_non_whitespace_column_is_one_based():
    assert first_non_whitespace_column("abc") == 1
    assert first_non_whitespace_column("  abc") == 3
    assert first_non_whitespace_column("\tabc") == 2


def test_first_non_whitespace_column_falls_back_to_one():
    assert first_non_whitespace_column("") == 1
    assert first_non_whitespace_column("    ") == 1
