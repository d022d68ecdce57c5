#!/usr/bin/env python3
"""
Calculator CLI - Evaluate arithmetic expressions

Usage:
    calc                 # Interactive: one expression per line, Ctrl+C to exit
    calc eval "2 * (3 + 0x10)"
    calc tokens "1 + 2"  # Show the token stream
    calc tree "1 + 2"    # Show the parsed expression tree
"""

import argparse
import logging
import sys
from decimal import Decimal
from typing import Optional, TextIO

from .ast_nodes import dump
from .config import CalcConfig
from .engine import calculate
from .lexer import LexError, Lexer
from .parser import ParseError, parse

logger = logging.getLogger(__name__)

BANNER = ("Type an arithmetic expression and press Enter to evaluate. "
          "Press Ctrl+C to exit.")


def format_result(value: Decimal) -> str:
    """Plain decimal notation with trailing zeros trimmed."""
    if value.is_zero():
        return "0"
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_error(source: str, error: Exception) -> str:
    """Error message, plus the input line with a caret under the column."""
    lines = [f"Error: {error}"]
    column = getattr(error, "column", None)
    if column:
        token = getattr(error, "token", None)
        width = max(1, token.end_column - token.column) if token else 1
        lines.append(f"  {source}")
        lines.append("  " + " " * (column - 1) + "^" * width)
    return "\n".join(lines)


def run_line(source: str, config: CalcConfig,
             out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> bool:
    """Evaluate one line and print the outcome. Returns True on success."""
    out = out or sys.stdout
    err = err or sys.stderr
    try:
        result = calculate(source, config)
    except (LexError, ParseError) as e:
        logger.debug("rejected %r: %s", source, type(e).__name__)
        print(format_error(source, e), file=err)
        return False
    print(format_result(result), file=out)
    return True


def config_from_args(args: argparse.Namespace) -> CalcConfig:
    return CalcConfig(
        precision=args.precision,
        max_exponent=args.max_exponent,
        max_depth=args.max_depth,
        prompt=args.prompt,
        banner=not args.no_banner,
    )


def cmd_repl(args: argparse.Namespace) -> int:
    """Interactive loop."""
    config = args.config
    if config.banner:
        print(BANNER)
        print()

    while True:
        try:
            line = input(config.prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            return 0
        run_line(line, config)


def cmd_eval(args: argparse.Namespace) -> int:
    """Evaluate a single expression."""
    source = " ".join(args.expression)
    return 0 if run_line(source, args.config) else 1


def cmd_tokens(args: argparse.Namespace) -> int:
    """Print the token stream."""
    source = " ".join(args.expression)
    try:
        for tok in Lexer(source):
            print(tok)
    except LexError as e:
        print(format_error(source, e), file=sys.stderr)
        return 1
    return 0


def cmd_tree(args: argparse.Namespace) -> int:
    """Print the parsed tree without evaluating it."""
    source = " ".join(args.expression)
    try:
        tree = parse(source, args.config.max_depth)
    except (LexError, ParseError) as e:
        print(format_error(source, e), file=sys.stderr)
        return 1
    print(dump(tree))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="calc",
        description="Calculator - decimal and hexadecimal arithmetic"
    )
    parser.add_argument("--precision", type=int, default=CalcConfig.precision,
                        help="Significant digits per result")
    parser.add_argument("--max-exponent", type=int, default=CalcConfig.max_exponent,
                        help="Largest decimal exponent before overflow")
    parser.add_argument("--max-depth", type=int, default=CalcConfig.max_depth,
                        help="Deepest nesting of groups and negations")
    parser.add_argument("--prompt", default=CalcConfig.prompt,
                        help="Prompt shown before each line")
    parser.add_argument("--no-banner", action="store_true",
                        help="Do not print the banner on startup")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log lexing, parsing and evaluation steps")
    parser.set_defaults(func=cmd_repl)
    subparsers = parser.add_subparsers(dest="command")

    # Repl command
    repl_parser = subparsers.add_parser("repl", help="Interactive loop (default)")
    repl_parser.set_defaults(func=cmd_repl)

    # Eval command
    eval_parser = subparsers.add_parser("eval", help="Evaluate one expression")
    eval_parser.add_argument("expression", nargs="+", help="Expression text")
    eval_parser.set_defaults(func=cmd_eval)

    # Tokens command
    tokens_parser = subparsers.add_parser("tokens", help="Show the token stream")
    tokens_parser.add_argument("expression", nargs="+", help="Expression text")
    tokens_parser.set_defaults(func=cmd_tokens)

    # Tree command
    tree_parser = subparsers.add_parser("tree", help="Show the expression tree")
    tree_parser.add_argument("expression", nargs="+", help="Expression text")
    tree_parser.set_defaults(func=cmd_tree)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    try:
        args.config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
