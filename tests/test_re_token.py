import pytest

from lexkit.partition import CharRanges
from lexkit.re_token import ReToken, TokenType

RELATIONS = {" ", "<", "=", ">"}
PARSER_TYPES = [t for t in TokenType if t <= TokenType.END]


def test_every_pair_has_a_relation():
    for row in PARSER_TYPES:
        token = ReToken(row)
        for column in PARSER_TYPES:
            assert token.precedence(column) in RELATIONS


def test_begin_reduces_at_end():
    assert ReToken(TokenType.BEGIN).precedence(TokenType.END) == ">"
    assert ReToken(TokenType.BEGIN).precedence(TokenType.CHARSET) == "<"


def test_paren_pairs_with_regex_and_close():
    assert ReToken(TokenType.OPENPAREN).precedence(TokenType.REGEX) == "="
    assert ReToken(TokenType.REGEX).precedence(TokenType.CLOSEPAREN) == "="


def test_or_and_sequence_relation():
    assert ReToken(TokenType.OR).precedence(TokenType.SEQUENCE) == "="
    assert ReToken(TokenType.OREXP).precedence(TokenType.OR) == "="
    assert ReToken(TokenType.SEQUENCE).precedence(TokenType.OR) == ">"


def test_repeat_shifts_repeat_operators():
    token = ReToken(TokenType.REPEAT)
    for op in (TokenType.OPT, TokenType.AOPT, TokenType.ZEROORMORE,
               TokenType.AREPEATN):
        assert token.precedence(op) == "<"
    assert token.precedence(TokenType.DUP) == "="


def test_end_row_is_blank():
    token = ReToken(TokenType.END)
    assert {token.precedence(t) for t in PARSER_TYPES} == {" "}


def test_diff_has_no_precedence():
    with pytest.raises(ValueError):
        ReToken(TokenType.DIFF).precedence(TokenType.END)
    with pytest.raises(ValueError):
        ReToken(TokenType.BEGIN).precedence(TokenType.DIFF)


def test_precedence_strings():
    assert ReToken(TokenType.OR).precedence_string == "|"
    assert ReToken(TokenType.DUP).precedence_string == "DUPLICATE"
    assert ReToken(TokenType.AREPEATN).precedence_string == "{n[,[m]]}?"
    assert ReToken(TokenType.BOL).precedence_string == "^"


def test_clear_resets_token():
    token = ReToken(TokenType.MACRO, "name", CharRanges([(97, 98)]))
    token.clear()
    assert token.type is TokenType.BEGIN
    assert token.extra == ""
    assert not token.chars
    assert token == ReToken()