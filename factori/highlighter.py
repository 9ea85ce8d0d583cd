"""Regex-driven syntax colouring for Python source lines."""

from __future__ import annotations

import re
from dataclasses import dataclass

Color = tuple[int, int, int]

KEYWORD_COLOR: Color = (235, 149, 45)
FUNCTION_COLOR: Color = (202, 179, 255)
NUMBER_COLOR: Color = (77, 201, 255)
STRING_COLOR: Color = (0, 255, 0)
COMMENT_COLOR: Color = (160, 160, 164)
LINE_COLOR: Color = (91, 91, 252)
DIRECTIVE_COLOR: Color = (252, 91, 91)

KEYWORDS = (
    "def", "return", "class", "if", "else", "elif", "for", "while",
    "import", "from", "as", "with", "try", "except", "finally",
    "True", "False", "None", "break", "continue", "pass", "in",
)


@dataclass(frozen=True)
class HighlightRule:
    """A pattern and the colour given to its matches."""

    pattern: re.Pattern
    color: Color


def _default_rules() -> list[HighlightRule]:
    rules = [HighlightRule(re.compile(rf"\b{kw}\b"), KEYWORD_COLOR) for kw in KEYWORDS]
    rules += [
        HighlightRule(re.compile(r"(?<=\bdef\s)\b[A-Za-z_][A-Za-z0-9_]*\b"), FUNCTION_COLOR),
        HighlightRule(re.compile(r"\b[A-Za-z_][A-Za-z0-9_]*\s*(?=\()"), FUNCTION_COLOR),
        HighlightRule(re.compile(r"(\d+)"), NUMBER_COLOR),
        HighlightRule(re.compile(r'".*?"'), STRING_COLOR),
        HighlightRule(re.compile(r"'.*?'"), STRING_COLOR),
        HighlightRule(re.compile(r"#[^\n]*"), COMMENT_COLOR),
        HighlightRule(re.compile(r"#?[^\n]*"), LINE_COLOR),
        HighlightRule(re.compile(r"#![^\n]*"), DIRECTIVE_COLOR),
    ]
    return rules


class CodeHighlighter:
    """Applies highlight rules in order; later rules overwrite earlier ones."""

    def __init__(self, rules: list[HighlightRule] | None = None) -> None:
        self.rules = list(rules) if rules is not None else _default_rules()

    def highlight_block(self, text: str) -> list[tuple[int, int, Color]]:
        """Return (start, length, colour) spans in the order they are applied."""
        return [
            (match.start(), match.end() - match.start(), rule.color)
            for rule in self.rules
            for match in rule.pattern.finditer(text)
            if match.end() > match.start()
        ]

    def colors(self, text: str) -> list[Color | None]:
        """Return the final colour of each character of ``text``."""
        result: list[Color | None] = [None] * len(text)
        for start, length, color in self.highlight_block(text):
            result[start:start + length] = [color] * length
        return result