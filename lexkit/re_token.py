"""Tokens produced while tokenising a regular expression.

The parser uses the precedence relations between token types to
decide whether to shift or reduce.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .partition import CharRanges


class TokenType(enum.IntEnum):
    """Kinds of regex token. Types after END never reach the parser."""

    BEGIN = 0
    REGEX = 1
    OREXP = 2
    SEQUENCE = 3
    SUB = 4
    EXPRESSION = 5
    REPEAT = 6
    DUP = 7
    OR = 8
    CHARSET = 9
    BOL = 10
    EOL = 11
    MACRO = 12
    OPENPAREN = 13
    CLOSEPAREN = 14
    OPT = 15
    AOPT = 16
    ZEROORMORE = 17
    AZEROORMORE = 18
    ONEORMORE = 19
    AONEORMORE = 20
    REPEATN = 21
    AREPEATN = 22
    END = 23
    DIFF = 24


_EXPRESSION_ROW = " " * 8 + ">" * 7 + " " * 8 + ">"
_REPEAT_OP_ROW = " " * 8 + ">" * 7 + "<" + " " * 7 + ">"
_TERMINAL_ROW = " " * 8 + ">" * 16

# Rows and columns are both indexed by TokenType, BEGIN..END.
_PRECEDENCE = (
    " " + "<" * 6 + "  " + "<" * 5 + " " * 9 + ">",           # BEGIN
    " " * 14 + "=" + " " * 8 + ">",                           # REGEX
    " " * 8 + "=" + ">" * 4 + " " + ">" + " " * 8 + ">",      # OREXP
    " " * 8 + ">" * 5 + " " + ">" + " " * 8 + ">",            # SEQUENCE
    " " * 5 + "=<" + " " + ">" + "<" * 5 + ">" + " " * 8 + ">",  # SUB
    _EXPRESSION_ROW,                                          # EXPRESSION
    " " * 7 + "=" + ">" * 7 + "<" * 8 + ">",                  # REPEAT
    _EXPRESSION_ROW,                                          # DUP
    " " * 3 + "=" + "<" * 3 + "  " + "<" * 5 + " " * 10,      # OR
    _TERMINAL_ROW,                                            # CHARSET
    _TERMINAL_ROW,                                            # BOL
    _TERMINAL_ROW,                                            # EOL
    _TERMINAL_ROW,                                            # MACRO
    " =" + "<" * 5 + "  " + "<" * 5 + " " * 10,               # OPENPAREN
    _TERMINAL_ROW,                                            # CLOSEPAREN
    _REPEAT_OP_ROW,                                           # OPT
    _EXPRESSION_ROW,                                          # AOPT
    _REPEAT_OP_ROW,                                           # ZEROORMORE
    _EXPRESSION_ROW,                                          # AZEROORMORE
    _REPEAT_OP_ROW,                                           # ONEORMORE
    _EXPRESSION_ROW,                                          # AONEORMORE
    _REPEAT_OP_ROW,                                           # REPEATN
    _EXPRESSION_ROW,                                          # AREPEATN
    " " * 24,                                                 # END
)

_PRECEDENCE_STRINGS = (
    "BEGIN", "REGEX", "OREXP", "SEQUENCE", "SUB", "EXPRESSION",
    "REPEAT", "DUPLICATE", "|", "CHARSET", "^", "$", "MACRO", "(", ")",
    "?", "??", "*", "*?", "+", "+?", "{n[,[m]]}", "{n[,[m]]}?", "END",
)


def _check_parser_type(token_type: TokenType) -> int:
    index = int(token_type)
    if not 0 <= index <= TokenType.END:
        raise ValueError(f"{TokenType(index).name} has no precedence")
    return index


@dataclass
class ReToken:
    """A regex token: its type, extra text and the characters it matches."""

    type: TokenType = TokenType.BEGIN
    extra: str = ""
    chars: CharRanges = field(default_factory=CharRanges)

    def clear(self) -> None:
        """Reset to an empty BEGIN token."""
        self.type = TokenType.BEGIN
        self.extra = ""
        self.chars = CharRanges()

    def precedence(self, token_type: TokenType) -> str:
        """Return '<', '=', '>' or ' ' relating this token to *token_type*."""
        row = _check_parser_type(self.type)
        column = _check_parser_type(token_type)
        return _PRECEDENCE[row][column]

    @property
    def precedence_string(self) -> str:
        """The display name of this token's type."""
        return _PRECEDENCE_STRINGS[_check_parser_type(self.type)]