"""
Calculator Parser - Recursive descent parser for arithmetic expressions.

Grammar:
    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/') factor)*
    factor     := NUMBER | '(' expression ')' | '-' factor

There is no implicit multiplication: "2(3+4)" leaves "(3+4)" unparsed
and is rejected as trailing input.
"""

from typing import Iterable, Optional

from .lexer import Token, TokenType, tokenize
from .ast_nodes import BinOp, BinaryExpr, Expr, Number, UnaryExpr, UnaryOp


class ParseError(Exception):
    """Error during parsing or evaluation."""
    def __init__(self, message: str, column: Optional[int] = None,
                 token: Optional[Token] = None):
        self.token = token
        self.column = column
        if column is not None:
            message = f"{message} at column {column}"
        super().__init__(message)


class UnexpectedTokenError(ParseError):
    """A token that cannot appear where it was found."""
    def __init__(self, token: Token):
        super().__init__(f"Unexpected token {token.text!r}", token.column, token)


class UnexpectedEndError(ParseError):
    """Input ended where an operand was required."""
    def __init__(self, token: Optional[Token] = None):
        column = token.column if token is not None else None
        super().__init__("Unexpected end of input", column, token)


class UnmatchedParenthesisError(ParseError):
    """An opening parenthesis that is never closed."""
    def __init__(self, token: Token):
        super().__init__("Unmatched '('", token.column, token)


class TrailingInputError(ParseError):
    """Tokens left over after a complete expression."""
    def __init__(self, token: Token):
        super().__init__(f"Unexpected trailing input {token.text!r}",
                         token.column, token)


class NestingTooDeepError(ParseError):
    """Groups or negations nested past the parser's depth limit."""
    def __init__(self, token: Token, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Expression nested deeper than {max_depth} levels",
                         token.column, token)


# Nesting limit for groups and negations. Each level costs up to three
# Python frames, so this stays well below the interpreter's recursion limit.
DEFAULT_MAX_DEPTH = 100


# Binary operators per precedence level
ADDITIVE_OPS = {
    TokenType.PLUS: BinOp.ADD,
    TokenType.MINUS: BinOp.SUB,
}

MULTIPLICATIVE_OPS = {
    TokenType.STAR: BinOp.MUL,
    TokenType.SLASH: BinOp.DIV,
}


class Parser:
    """Recursive descent parser for calculator expressions."""

    def __init__(self, tokens: Iterable[Token], max_depth: int = DEFAULT_MAX_DEPTH):
        self.tokens = list(tokens)
        if not self.tokens or self.tokens[-1].type != TokenType.EOF:
            end = self.tokens[-1].end_column if self.tokens else 1
            self.tokens.append(Token(TokenType.EOF, None, "", end))
        self.pos = 0
        self.max_depth = max_depth
        self.depth = 0
        self.open_groups: list[Token] = []  # '(' tokens not yet closed

    def current(self) -> Token:
        """Get current token."""
        return self.tokens[self.pos]

    def advance(self) -> Token:
        """Advance and return previous token."""
        tok = self.current()
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def check(self, *types: TokenType) -> bool:
        """Check if current token is one of the given types."""
        return self.current().type in types

    def match(self, *types: TokenType) -> Optional[Token]:
        """If current token matches, consume and return it."""
        if self.check(*types):
            return self.advance()
        return None

    def enter(self, tok: Token) -> None:
        """Go one nesting level deeper."""
        self.depth += 1
        if self.depth > self.max_depth:
            raise NestingTooDeepError(tok, self.max_depth)

    def leave(self) -> None:
        self.depth -= 1

    # -------------------------------------------------------------------------
    # Expression parsing
    # -------------------------------------------------------------------------

    def parse_expression(self) -> Expr:
        """Parse addition/subtraction."""
        left = self.parse_term()
        while tok := self.match(*ADDITIVE_OPS):
            left = BinaryExpr(ADDITIVE_OPS[tok.type], left, self.parse_term(),
                              tok.column)
        return left

    def parse_term(self) -> Expr:
        """Parse multiplication/division."""
        left = self.parse_factor()
        while tok := self.match(*MULTIPLICATIVE_OPS):
            left = BinaryExpr(MULTIPLICATIVE_OPS[tok.type], left,
                              self.parse_factor(), tok.column)
        return left

    def parse_factor(self) -> Expr:
        """Parse literals, parenthesized groups and negation."""
        tok = self.current()

        if self.match(TokenType.NUMBER):
            return Number(tok.value, tok.column)

        if self.match(TokenType.MINUS):
            self.enter(tok)
            operand = self.parse_factor()
            self.leave()
            return UnaryExpr(UnaryOp.NEG, operand, tok.column)

        if self.match(TokenType.LPAREN):
            self.enter(tok)
            self.open_groups.append(tok)
            expr = self.parse_expression()
            if not self.match(TokenType.RPAREN):
                if self.check(TokenType.EOF):
                    raise UnmatchedParenthesisError(tok)
                raise UnexpectedTokenError(self.current())
            self.open_groups.pop()
            self.leave()
            return expr

        if tok.type == TokenType.EOF:
            # Running out inside a group means the group was never closed
            if self.open_groups:
                raise UnmatchedParenthesisError(self.open_groups[-1])
            raise UnexpectedEndError(tok)

        raise UnexpectedTokenError(tok)

    def parse_line(self) -> Expr:
        """Parse the whole input as one expression."""
        expr = self.parse_expression()
        if not self.check(TokenType.EOF):
            raise TrailingInputError(self.current())
        return expr


def parse(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Expr:
    """Convenience function to parse a line.

    The line is tokenized in full first, so lexer errors surface before
    any parsing is done.
    """
    tokens = tokenize(source)
    parser = Parser(tokens, max_depth)
    return parser.parse_line()
