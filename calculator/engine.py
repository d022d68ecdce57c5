"""
Calculator Engine - Evaluates expression trees to decimal values.

All arithmetic runs in a private decimal context built from CalcConfig,
so evaluating one line never changes how the next one is computed.
The tree is walked with an explicit stack, since a long chain such as
"1 + 1 + ... + 1" builds a tree as deep as the chain is long.
"""

import decimal
import logging
from decimal import Decimal
from typing import Optional

from .ast_nodes import BinOp, BinaryExpr, Expr, Number, UnaryExpr, UnaryOp, dump
from .config import CalcConfig
from .lexer import tokenize
from .parser import ParseError, Parser

logger = logging.getLogger(__name__)


class DivisionByZeroError(ParseError):
    """Division whose right operand evaluates to zero."""
    def __init__(self, column: Optional[int] = None):
        super().__init__("Division by zero", column)


class NumericOverflowError(ParseError):
    """A literal or result outside the configured numeric range."""
    def __init__(self, column: Optional[int] = None):
        super().__init__("Number is too large", column)


class Evaluator:
    """Walks an expression tree and computes its value."""

    def __init__(self, config: Optional[CalcConfig] = None):
        self.config = config or CalcConfig()
        self.context = self.config.make_context()

    def evaluate(self, node: Expr) -> Decimal:
        """Evaluate a tree to a single decimal value."""
        values: list[Decimal] = []
        # (node, children already evaluated)
        stack: list[tuple[Expr, bool]] = [(node, False)]

        while stack:
            node, ready = stack.pop()
            match node:
                case Number(value=value, column=column):
                    values.append(self._checked(self.context.plus, column, value))

                case UnaryExpr(operand=operand) if not ready:
                    stack.append((node, True))
                    stack.append((operand, False))

                case UnaryExpr(op=op, column=column):
                    values.append(self.apply_unary(op, column, values.pop()))

                case BinaryExpr(left=left, right=right) if not ready:
                    stack.append((node, True))
                    stack.append((right, False))
                    stack.append((left, False))

                case BinaryExpr(op=op, column=column):
                    rhs = values.pop()
                    lhs = values.pop()
                    values.append(self.apply_binary(op, column, lhs, rhs))

                case _:
                    raise TypeError(f"Not an expression node: {type(node).__name__}")

        return values.pop()

    def apply_unary(self, op: UnaryOp, column: int, operand: Decimal) -> Decimal:
        match op:
            case UnaryOp.NEG:
                return self._checked(self.context.minus, column, operand)
        raise TypeError(f"Unknown unary operator: {op}")

    def apply_binary(self, op: BinOp, column: int, lhs: Decimal, rhs: Decimal) -> Decimal:
        match op:
            case BinOp.ADD:
                return self._checked(self.context.add, column, lhs, rhs)
            case BinOp.SUB:
                return self._checked(self.context.subtract, column, lhs, rhs)
            case BinOp.MUL:
                return self._checked(self.context.multiply, column, lhs, rhs)
            case BinOp.DIV:
                if rhs.is_zero():
                    raise DivisionByZeroError(column)
                return self._checked(self.context.divide, column, lhs, rhs)
        raise TypeError(f"Unknown binary operator: {op}")

    def _checked(self, operation, column: int, *operands: Decimal) -> Decimal:
        try:
            return operation(*operands)
        except decimal.Overflow:
            raise NumericOverflowError(column or None) from None


def evaluate(node: Expr, config: Optional[CalcConfig] = None) -> Decimal:
    """Convenience function to evaluate a tree."""
    return Evaluator(config).evaluate(node)


def calculate(source: str, config: Optional[CalcConfig] = None) -> Decimal:
    """Lex, parse and evaluate one line of input."""
    config = config or CalcConfig()
    tokens = tokenize(source)
    logger.debug("%d token(s) from %r", len(tokens) - 1, source)

    tree = Parser(tokens, config.max_depth).parse_line()
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("tree: %s", dump(tree))

    result = evaluate(tree, config)
    logger.debug("result: %s", result)
    return result
