"""
Calculator Lexer - Tokenizes a single line of arithmetic.

Recognizes decimal and 0x-prefixed hexadecimal literals, the four
arithmetic operators and parentheses.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto
from typing import Iterator, Optional


class TokenType(Enum):
    """All token types recognized by the lexer."""

    # Literals
    NUMBER = auto()

    # Operators
    PLUS = auto()           # +
    MINUS = auto()          # -
    STAR = auto()           # *
    SLASH = auto()          # /

    # Delimiters
    LPAREN = auto()         # (
    RPAREN = auto()         # )

    # Special
    EOF = auto()


# Single-character token lookup table
SYMBOLS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

DIGITS = "0123456789"
HEX_DIGITS = "0123456789abcdefABCDEF"


@dataclass
class Token:
    """A single token from the input line."""
    type: TokenType
    value: Optional[Decimal]
    text: str
    column: int
    end_column: int = 0

    def __post_init__(self):
        if self.end_column == 0:
            self.end_column = self.column + len(self.text)

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r}, {self.column})"
        return f"Token({self.type.name}, {self.column})"


class LexError(Exception):
    """Error during lexing."""
    def __init__(self, message: str, column: int):
        self.column = column
        super().__init__(f"{message} at column {column}")


class InvalidCharacterError(LexError):
    """A character that cannot start or continue any token."""
    def __init__(self, char: str, column: int):
        self.char = char
        super().__init__(f"Invalid character {char!r}", column)


class MalformedNumberError(LexError):
    """A numeric literal that stops before it is complete."""
    def __init__(self, column: int, reason: str = "Malformed number"):
        super().__init__(reason, column)


class Lexer:
    """Tokenizes one line of calculator input.

    Iterating a Lexer yields tokens lazily and always restarts from the
    first character, so the same Lexer can be scanned more than once.
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0

    @property
    def column(self) -> int:
        return self.pos + 1

    def current_char(self) -> str:
        """Return current character or empty string at end of input."""
        if self.pos >= len(self.source):
            return ""
        return self.source[self.pos]

    def peek_char(self, offset: int = 1) -> str:
        """Peek ahead by offset characters."""
        pos = self.pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def advance(self) -> str:
        """Advance position and return the character we passed."""
        ch = self.current_char()
        self.pos += 1
        return ch

    def skip_whitespace(self) -> None:
        while self.current_char() and self.current_char().isspace():
            self.advance()

    def read_digits(self, allowed: str) -> str:
        """Consume the longest run of characters from allowed."""
        start = self.pos
        while self.current_char() and self.current_char() in allowed:
            self.advance()
        return self.source[start:self.pos]

    def read_number(self) -> Token:
        """Read a numeric literal (decimal integer/fraction or hex integer)."""
        start = self.pos
        start_col = self.column

        # Hex: 0x / 0X
        if self.current_char() == '0' and self.peek_char() in ('x', 'X'):
            self.advance()
            self.advance()
            digits = self.read_digits(HEX_DIGITS)
            if not digits:
                raise MalformedNumberError(start_col, "Missing hex digits after 0x")
            return Token(TokenType.NUMBER, Decimal(int(digits, 16)),
                         self.source[start:self.pos], start_col)

        if self.current_char() == '.':
            raise MalformedNumberError(start_col, "Missing digits before '.'")

        self.read_digits(DIGITS)

        # Fractional part
        if self.current_char() == '.':
            self.advance()
            if not self.read_digits(DIGITS):
                raise MalformedNumberError(start_col, "Missing digits after '.'")

        text = self.source[start:self.pos]
        return Token(TokenType.NUMBER, Decimal(text), text, start_col)

    def _scan(self) -> Iterator[Token]:
        while True:
            self.skip_whitespace()
            ch = self.current_char()

            if not ch:
                break

            if ch in DIGITS or ch == '.':
                yield self.read_number()
                continue

            token_type = SYMBOLS.get(ch)
            if token_type is None:
                raise InvalidCharacterError(ch, self.column)

            col = self.column
            self.advance()
            yield Token(token_type, None, ch, col)

        yield Token(TokenType.EOF, None, "", self.column)

    def __iter__(self) -> Iterator[Token]:
        self.pos = 0
        return self._scan()

    def tokenize(self) -> list[Token]:
        """Tokenize the whole line, ending with an EOF token."""
        return list(self)


def tokenize(source: str) -> list[Token]:
    """Convenience function to tokenize a line."""
    lexer = Lexer(source)
    return lexer.tokenize()
