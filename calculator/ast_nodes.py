"""
Calculator AST Node Definitions

Node types for parsed arithmetic expressions.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class BinOp(Enum):
    """Binary operators."""
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'


class UnaryOp(Enum):
    """Unary operators."""
    NEG = '-'


@dataclass
class Number:
    """Numeric literal: 42, 1.5, 0xff"""
    value: Decimal
    column: int = 0


@dataclass
class BinaryExpr:
    """Binary expression: a + b"""
    op: BinOp
    left: 'Expr'
    right: 'Expr'
    column: int = 0  # of the operator


@dataclass
class UnaryExpr:
    """Unary expression: -x"""
    op: UnaryOp
    operand: 'Expr'
    column: int = 0


Expr = Number | BinaryExpr | UnaryExpr


def dump(node: Expr) -> str:
    """Render a tree as a fully parenthesized prefix form, e.g. (+ 1 (* 2 3))."""
    parts: list[str] = []
    stack: list[tuple[Expr, bool]] = [(node, False)]

    while stack:
        node, ready = stack.pop()
        match node:
            case Number(value=value):
                parts.append(str(value))
            case BinaryExpr(left=left, right=right) if not ready:
                stack.extend([(node, True), (right, False), (left, False)])
            case BinaryExpr(op=op):
                right = parts.pop()
                left = parts.pop()
                parts.append(f"({op.value} {left} {right})")
            case UnaryExpr(operand=operand) if not ready:
                stack.extend([(node, True), (operand, False)])
            case UnaryExpr(op=op):
                parts.append(f"({op.value} {parts.pop()})")
            case _:
                raise TypeError(f"Not an expression node: {type(node).__name__}")

    return parts.pop()
