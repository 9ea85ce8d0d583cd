import re

from factori.highlighter import (
    DIRECTIVE_COLOR,
    FUNCTION_COLOR,
    KEYWORD_COLOR,
    LINE_COLOR,
    NUMBER_COLOR,
    STRING_COLOR,
    CodeHighlighter,
    HighlightRule,
)


def test_keyword_span():
    spans = CodeHighlighter().highlight_block("def foo(): pass")
    assert (0, 3, KEYWORD_COLOR) in spans


def test_function_name_span():
    spans = CodeHighlighter().highlight_block("def foo(): pass")
    assert (4, 3, FUNCTION_COLOR) in spans


def test_keyword_not_inside_word():
    spans = CodeHighlighter().highlight_block("print(x)")
    assert [color for _, _, color in spans].count(KEYWORD_COLOR) == 0
    assert (0, 5, FUNCTION_COLOR) in spans


def test_number_and_string_spans():
    hl = CodeHighlighter()
    assert (4, 2, NUMBER_COLOR) in hl.highlight_block("x = 42")
    assert (4, 4, STRING_COLOR) in hl.highlight_block('a = "hi"')


def test_directive_line_is_red():
    text = "#!run"
    assert CodeHighlighter().colors(text) == [DIRECTIVE_COLOR] * len(text)


def test_catch_all_rule_wins_for_plain_lines():
    text = "x = 1"
    assert CodeHighlighter().colors(text) == [LINE_COLOR] * len(text)


def test_empty_text():
    hl = CodeHighlighter()
    assert hl.highlight_block("") == []
    assert hl.colors("") == []


def test_custom_rules_order_overwrites():
    rules = [
        HighlightRule(re.compile("ab"), (1, 1, 1)),
        HighlightRule(re.compile("b"), (2, 2, 2)),
    ]
    assert CodeHighlighter(rules).colors("abc") == [(1, 1, 1), (2, 2, 2), None]