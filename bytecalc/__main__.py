"""
CLI interface for the storage calculator.

Usage:
    python -m bytecalc "1 + 2 KiB + 3 MiB"
    python -m bytecalc --stats 4 GiB as MB
    python -m bytecalc            # interactive
"""

import sys
import argparse

from .errors import LOCATED_ERRORS, Diagnostic
from .formatters import as_bin, as_bin_size, as_dec_size
from .interpreter import evaluate, interpreter_conf
from .parser import parse
from .units import FullUnit, Unit, UnitPrefix
from .value import Value


class CliConf:
    LABEL_COLOR = "\033[32m"
    RESET_COLOR = "\033[0m"
    LABEL_WIDTH = 14
    PROMPT = "> "
    EXIT_WORDS = ("exit", "quit")


cli_conf = CliConf()

BYTES = FullUnit(UnitPrefix.NONE, Unit.BYTE)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point, returns the exit code."""
    parser = argparse.ArgumentParser(
        description="Evaluate arithmetic over bits and bytes with decimal and binary prefixes",
        prog="python -m bytecalc",
    )
    parser.add_argument(
        "expression", nargs="*", help="Expression to evaluate, words are joined with spaces (default: interactive)"
    )
    parser.add_argument("--ast", action="store_true", help="Print the parsed expression tree")
    parser.add_argument(
        "--stats", action="store_true", help="Print the result in bytes as decimal, hex, octal, binary and sizes"
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored labels")

    args = parser.parse_args(argv)
    color = not args.no_color and sys.stdout.isatty()

    if args.expression:
        return run(" ".join(args.expression), show_ast=args.ast, show_stats=args.stats, color=color)
    return repl(show_ast=args.ast, show_stats=args.stats, color=color)


def run(text: str, *, show_ast: bool = False, show_stats: bool = False, color: bool = False) -> int:
    """Evaluate one expression and print '<input> = <value>', or the diagnostic to stderr."""
    try:
        expr = parse(text, max_nesting=interpreter_conf.MAX_NESTING)
        value = evaluate(expr)
    except LOCATED_ERRORS as err:
        print(Diagnostic.from_error(err).render(text), file=sys.stderr)
        return 1

    if show_ast:
        print(expr)
    print(f"{text} = {value}")
    if show_stats:
        print_stats(value, color=color)
    return 0


def repl(*, show_ast: bool = False, show_stats: bool = False, color: bool = False) -> int:
    """Read-evaluate-print loop until EOF or an exit word."""
    try:
        import readline  # noqa: F401 - enables line editing in input()
    except ImportError:
        pass

    while True:
        try:
            line = input(cli_conf.PROMPT).strip()
        except EOFError:
            print()
            return 0
        except KeyboardInterrupt:
            print()
            return 130

        if not line:
            continue
        if line in cli_conf.EXIT_WORDS:
            return 0
        run(line, show_ast=show_ast, show_stats=show_stats, color=color)


def print_stats(value: Value, color: bool = False):
    """Print the value in bytes in several notations; dimensionless values are taken as bytes."""
    magnitude = value.convert_to(BYTES).magnitude
    if not 0 <= magnitude < 2**64:
        print(_label("Stats", color) + f"not available for {value}")
        return

    num = int(magnitude)
    rows = (
        ("Decimal", f"{num}"),
        ("Hex", f"0x{num:X}"),
        ("Octal", f"0o{num:o}"),
        ("Binary", as_bin(num)),
        ("Decimal Size", as_dec_size(num)),
        ("Binary Size", as_bin_size(num)),
    )
    for label, text in rows:
        print(_label(label, color) + text)


def _label(label: str, color: bool) -> str:
    text = f"{label}:".ljust(cli_conf.LABEL_WIDTH)
    if color:
        return f"{cli_conf.LABEL_COLOR}{text}{cli_conf.RESET_COLOR}"
    return text


if __name__ == "__main__":
    sys.exit(main())
