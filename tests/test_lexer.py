#!/usr/bin/env python3
"""
Lexer Unit Tests

Tests for token recognition, numeric literals and lexer errors.
"""

import sys
import os
from decimal import Decimal

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

import pytest

from calculator.lexer import (Lexer, TokenType, tokenize, LexError,
                              InvalidCharacterError, MalformedNumberError)


def types_of(source):
    return [t.type for t in tokenize(source)]


def test_lexer_operators():
    """Test single-character token recognition."""
    assert types_of("+-*/()") == [
        TokenType.PLUS, TokenType.MINUS, TokenType.STAR, TokenType.SLASH,
        TokenType.LPAREN, TokenType.RPAREN, TokenType.EOF,
    ]


def test_lexer_numbers():
    """Test decimal literal tokenization."""
    tokens = tokenize("0 1337 133.7 0.25")
    numbers = [t.value for t in tokens if t.type == TokenType.NUMBER]
    assert numbers == [Decimal("0"), Decimal("1337"), Decimal("133.7"),
                       Decimal("0.25")]


def test_lexer_hexadecimal():
    """Test 0x/0X literals in either case."""
    tokens = tokenize("0x0 0x539 0XfF 0xAbC")
    numbers = [t.value for t in tokens if t.type == TokenType.NUMBER]
    assert numbers == [Decimal(0), Decimal(1337), Decimal(255), Decimal(2748)]


def test_lexer_longest_match():
    """A literal consumes every character that can belong to it."""
    tokens = tokenize("12.50+0x1f")
    assert [t.text for t in tokens] == ["12.50", "+", "0x1f", ""]
    assert tokens[0].value == Decimal("12.5")
    assert tokens[2].value == Decimal(31)


def test_lexer_columns():
    """Columns are 1-based and end columns exclusive."""
    tokens = tokenize("  (42 )")
    lparen, number, rparen, eof = tokens
    assert lparen.column == 3
    assert (number.column, number.end_column) == (4, 6)
    assert rparen.column == 7
    assert eof.type == TokenType.EOF
    assert eof.column == 8


def test_insignificant_whitespace():
    """Whitespace between tokens does not change the stream."""
    assert types_of("1+1") == types_of(" 1 \t+  1 ")
    assert [t.value for t in tokenize("1+1")] == [t.value for t in tokenize("1 + 1")]


def test_lexer_empty():
    """Empty and blank lines yield only EOF."""
    assert types_of("") == [TokenType.EOF]
    assert types_of("   ") == [TokenType.EOF]


def test_lexer_is_lazy():
    """Tokens are produced on demand; an error past the first token waits."""
    stream = iter(Lexer("1 + $"))
    assert next(stream).value == Decimal(1)
    assert next(stream).type == TokenType.PLUS
    with pytest.raises(InvalidCharacterError):
        next(stream)


def test_lexer_restartable():
    """Iterating the same lexer twice gives the same tokens."""
    lexer = Lexer("(0 + 0) - 0 * 0 / 0")
    first = list(lexer)
    second = list(lexer)
    assert first == second
    assert len(first) == 12


def test_invalid_character():
    """Unknown characters report the character and its column."""
    with pytest.raises(InvalidCharacterError) as exc:
        tokenize("1 + x")
    assert exc.value.char == "x"
    assert exc.value.column == 5
    assert "column 5" in str(exc.value)
    assert isinstance(exc.value, LexError)


def test_hex_digits_need_prefix():
    """Hex letters after a decimal literal are not part of it."""
    with pytest.raises(InvalidCharacterError) as exc:
        tokenize("12ab")
    assert exc.value.char == "a"
    assert exc.value.column == 3


def test_hex_without_digits():
    """0x must be followed by at least one hex digit."""
    for source in ("0x", "0X", "1 + 0x", "0xg"):
        with pytest.raises(MalformedNumberError):
            tokenize(source)

    with pytest.raises(MalformedNumberError) as exc:
        tokenize("2 * 0x")
    assert exc.value.column == 5


def test_dangling_decimal_point():
    """A '.' must have digits on both sides."""
    for source in ("1.", ".5", "1..2", "1.2.3", "3 + ."):
        with pytest.raises(MalformedNumberError):
            tokenize(source)


def run_all_tests():
    """Run all lexer unit tests."""
    tests = [
        test_lexer_operators,
        test_lexer_numbers,
        test_lexer_hexadecimal,
        test_lexer_longest_match,
        test_lexer_columns,
        test_insignificant_whitespace,
        test_lexer_empty,
        test_lexer_is_lazy,
        test_lexer_restartable,
        test_invalid_character,
        test_hex_digits_need_prefix,
        test_hex_without_digits,
        test_dangling_decimal_point,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            print(f"PASS: {test.__name__}")
            passed += 1
        except Exception as e:
            print(f"FAIL: {test.__name__}: {e}")
            failed += 1

    print(f"Results: {passed} passed, {failed} failed")
    return failed == 0


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
