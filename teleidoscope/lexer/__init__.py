"""
Teleidoscope Lexer Package

Hand-written scanner for the Teleidoscope expression language.

Author: xwest
"""

from .tokens import Token, TokenType, KEYWORDS, BINARY_PRECEDENCE
from .lexer import Lexer, tokenize_string, tokenize_file, parse_decimal
from .errors import Diagnostic, LexerWarning

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "KEYWORDS",
    "BINARY_PRECEDENCE",
    "Diagnostic",
    "LexerWarning",
    "tokenize_string",
    "tokenize_file",
    "parse_decimal",
]
