"""
Calculator - decimal and hexadecimal arithmetic on one line of text.
"""

from .config import CalcConfig
from .engine import DivisionByZeroError, NumericOverflowError, calculate, evaluate
from .lexer import InvalidCharacterError, LexError, MalformedNumberError, tokenize
from .parser import (NestingTooDeepError, ParseError, TrailingInputError,
                     UnexpectedEndError, UnexpectedTokenError,
                     UnmatchedParenthesisError, parse)

__version__ = "0.1.0"

__all__ = [
    "CalcConfig",
    "calculate",
    "evaluate",
    "parse",
    "tokenize",
    "LexError",
    "InvalidCharacterError",
    "MalformedNumberError",
    "ParseError",
    "UnexpectedTokenError",
    "UnexpectedEndError",
    "UnmatchedParenthesisError",
    "TrailingInputError",
    "NestingTooDeepError",
    "DivisionByZeroError",
    "NumericOverflowError",
]
