"""
Calculator configuration.

Numeric range of the evaluator and presentation options of the shell.
"""

import decimal
from dataclasses import dataclass

from .parser import DEFAULT_MAX_DEPTH


@dataclass
class CalcConfig:
    """Configuration for evaluation and the interactive shell."""
    precision: int = 28     # Significant digits kept per result
    max_exponent: int = 28  # Largest adjusted exponent before overflow
    max_depth: int = DEFAULT_MAX_DEPTH  # Nested groups and negations
    # Shell options
    prompt: str = ""
    banner: bool = True

    def __post_init__(self):
        if self.precision < 1:
            raise ValueError(f"precision must be positive, got {self.precision}")
        if self.max_exponent < 0:
            raise ValueError(f"max_exponent must not be negative, got {self.max_exponent}")
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")

    def make_context(self) -> decimal.Context:
        """Build a decimal context for one evaluation.

        Overflow is trapped; values below the range round toward zero.
        """
        return decimal.Context(
            prec=self.precision,
            Emax=self.max_exponent,
            Emin=-self.max_exponent,
            rounding=decimal.ROUND_HALF_EVEN,
            traps=[decimal.Overflow, decimal.InvalidOperation,
                   decimal.DivisionByZero],
        )
