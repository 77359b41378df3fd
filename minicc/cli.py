"""Command-line entry point: compile a source file to assembly."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from minicc.errors import PosError
from minicc.generator import GenerationError, Generator
from minicc.lexer import format_tokens, tokenize
from minicc.parser import Parser, format_program


class CliError(Exception):
    """Raised for problems with arguments or files."""


def compile_source(text: str, debug: bool = False) -> str:
    """Compile source text to assembly, printing tokens and AST when ``debug``."""
    tokens = tokenize(text)
    if debug:
        print("=== Tokens ===")
        print(format_tokens(tokens), end="")

    parser = Parser(tokens, text)
    program = parser.parse()
    if debug:
        print("=== AST ===")
        print(format_program(program), end="")

    return Generator().generate_program(program)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="minicc", description="Compile a small C subset.")
    parser.add_argument("-i", dest="input", default="", help="Input file name")
    parser.add_argument("-o", dest="output", default="out.s", help="Output file name")
    parser.add_argument("-d", dest="debug", action="store_true", help="Enable debug mode")
    return parser


def run(argv: Optional[Sequence[str]] = None) -> None:
    """Parse arguments, compile the input file and write the assembly output."""
    args = _build_parser().parse_args(argv)
    if not args.input:
        raise CliError("input file name is required")

    try:
        with open(args.input, encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        raise CliError(f"failed to read input file: {exc}") from exc

    asm = compile_source(text, args.debug)

    try:
        with open(args.output, "w", encoding="utf-8") as handle:
            handle.write(asm)
    except OSError as exc:
        raise CliError(f"failed to write output file: {exc}") from exc


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the compiler; print any error and return a non-zero status on failure."""
    try:
        run(argv)
    except (CliError, PosError, GenerationError) as exc:
        print(exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())