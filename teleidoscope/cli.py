#!/usr/bin/env python3
"""
Teleidoscope command line driver
================================

Reads a Teleidoscope program, parses it once and, if that succeeds,
writes the generated JavaScript module. Nothing is written when the
program has a syntax error; the diagnostic goes to stderr instead.

Usage:
    teleidoscope [input] [options]

Options:
    -o, --output FILE   Write the module to FILE instead of stdout
    --tokens            Dump the token stream instead of compiling
    --ast               Dump the parsed program instead of compiling
    --warnings          Also report lexer warnings on stderr
"""

import argparse
import sys
from typing import List, Optional, Tuple

from .lexer.lexer import Lexer
from .lexer.tokens import TokenType
from .parser.parser import Parser, ParseResult
from .parser.errors import ParseError
from .backend.asmjs_backend import AsmJSBackend


def compile_source(source: str, filename: str = "<stdin>") -> Tuple[Optional[str], List[ParseError]]:
    """
    Run the whole pipeline on one source text.

    Returns:
        (module text, []) on success, (None, errors) on a syntax error
    """
    return compile_tokens(Lexer(source, filename))


def compile_tokens(lexer: Lexer) -> Tuple[Optional[str], List[ParseError]]:
    """Parse everything `lexer` yields and, if that succeeds, generate the module once."""
    result = Parser(lexer).parse()
    if result.has_errors():
        return None, result.errors
    return AsmJSBackend().generate(result.program), []


def dump_tokens(lexer: Lexer) -> str:
    """One line per token, EOF excluded."""
    lines = []
    for token in lexer.tokenize():
        if token.type == TokenType.EOF:
            break
        lines.append(str(token))
    return "".join(line + "\n" for line in lines)


def report(diagnostics) -> None:
    for diagnostic in diagnostics:
        print(str(diagnostic), end="", file=sys.stderr)


def read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def write_output(text: str, path: Optional[str]) -> None:
    if path is None:
        sys.stdout.write(text)
        return
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit status."""

    parser = argparse.ArgumentParser(
        prog="teleidoscope",
        description="Compile Teleidoscope source to an asm.js-style JavaScript module",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    teleidoscope < fib.tel > fib.js       # Compile stdin to stdout
    teleidoscope fib.tel -o fib.js        # Compile a file
    teleidoscope fib.tel --tokens         # Show the token stream
        """
    )

    parser.add_argument('input', nargs='?', default='-',
                        help='Source file to compile (default: stdin)')
    parser.add_argument('-o', '--output', default=None,
                        help='Write the generated module to this file')

    # Dump modes
    parser.add_argument('--tokens', action='store_true',
                        help='Print the token stream instead of compiling')
    parser.add_argument('--ast', action='store_true',
                        help='Print the parsed program as s-expressions instead of compiling')
    parser.add_argument('--warnings', action='store_true',
                        help='Report lexer warnings on stderr')

    args = parser.parse_args(argv)

    try:
        source = read_source(args.input)
    except OSError as e:
        print(f"ERROR: cannot read {args.input}: {e.strerror}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"ERROR: cannot read {args.input}: not valid UTF-8 "
              f"(byte {e.object[e.start]:#04x} at offset {e.start})", file=sys.stderr)
        return 1

    filename = "<stdin>" if args.input == "-" else args.input
    lexer = Lexer(source, filename)

    if args.tokens:
        write_output(dump_tokens(lexer), args.output)
        if args.warnings:
            report(lexer.warnings)
        return 0

    if args.ast:
        result: ParseResult = Parser(lexer).parse()
        output = None if result.has_errors() else result.program.to_sexpr() + "\n"
        errors = result.errors
    else:
        output, errors = compile_tokens(lexer)

    if args.warnings:
        report(lexer.warnings)

    if errors:
        report(errors)
        return 1

    write_output(output, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
