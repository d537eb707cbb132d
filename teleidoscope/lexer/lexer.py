"""
Teleidoscope Lexer - turns source text into tokens, one at a time.

The scan cursor lives on the Lexer instance, so two compilations never
share state. The parser pulls tokens with next_token() and only ever
looks one token ahead.

Author: xwest
"""

import math
import re
import string
from typing import List

from .tokens import Token, TokenType, KEYWORDS
from .errors import (
    LexerWarning, create_malformed_number_warning, create_number_overflow_warning
)


IDENTIFIER_START = frozenset(string.ascii_letters)
IDENTIFIER_CONTINUE = frozenset(string.ascii_letters + string.digits)
NUMBER_CHARS = frozenset(string.digits + ".")
# Same set as C's isspace() in the default locale
WHITESPACE = frozenset(string.whitespace)

# Longest leading decimal number inside a [0-9.]+ lexeme
DECIMAL_PREFIX = re.compile(r'\d+\.?\d*|\.\d+')


def parse_decimal(lexeme: str) -> float:
    """
    Permissive decimal conversion.

    Uses the longest valid leading decimal number, so '1.2.3' reads as 1.2
    and a lone '.' reads as 0.0. Never raises.
    """
    match = DECIMAL_PREFIX.match(lexeme)
    if not match:
        return 0.0
    return float(match.group(0))


class Lexer:
    """
    Teleidoscope lexical analyzer.

    Skips whitespace and '#' comments, recognizes keywords, identifiers
    and numbers, and hands back every other character as a one-character
    token. Reaching the end of the source yields EOF tokens forever.
    """

    def __init__(self, source: str, filename: str = "<stdin>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Complete source text
            filename: Name of the source, kept for reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.warnings: List[LexerWarning] = []

    def next_token(self) -> Token:
        """Scan and return the next token."""
        self._skip_whitespace_and_comments()

        if self.pos >= len(self.source):
            return Token(TokenType.EOF, "")

        current_char = self.source[self.pos]

        if current_char in IDENTIFIER_START:
            return self._tokenize_identifier_or_keyword()

        if current_char in NUMBER_CHARS:
            return self._tokenize_number()

        self.pos += 1
        return Token(TokenType.CHARACTER, current_char)

    def tokenize(self) -> List[Token]:
        """
        Tokenize the rest of the source.

        Returns:
            List of tokens ending with a single EOF token
        """
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                return tokens

    def _tokenize_identifier_or_keyword(self) -> Token:
        start_pos = self.pos
        self.pos += 1
        while self.pos < len(self.source) and self.source[self.pos] in IDENTIFIER_CONTINUE:
            self.pos += 1

        lexeme = self.source[start_pos:self.pos]
        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
        value = lexeme if token_type == TokenType.IDENTIFIER else None
        return Token(token_type, lexeme, value)

    def _tokenize_number(self) -> Token:
        start_pos = self.pos
        while self.pos < len(self.source) and self.source[self.pos] in NUMBER_CHARS:
            self.pos += 1

        lexeme = self.source[start_pos:self.pos]
        value = parse_decimal(lexeme)

        match = DECIMAL_PREFIX.match(lexeme)
        if match is None or match.group(0) != lexeme:
            self.warnings.append(create_malformed_number_warning(lexeme, value))
        if math.isinf(value):
            self.warnings.append(create_number_overflow_warning(lexeme))

        return Token(TokenType.NUMBER, lexeme, value)

    def _skip_whitespace_and_comments(self):
        """Skip whitespace and '#'-to-end-of-line comments."""
        while self.pos < len(self.source):
            char = self.source[self.pos]

            if char in WHITESPACE:
                self.pos += 1
                continue

            if char == '#':
                while self.pos < len(self.source) and self.source[self.pos] != '\n':
                    self.pos += 1
                continue

            break

    def has_warnings(self) -> bool:
        """Check if lexer recorded any warnings."""
        return len(self.warnings) > 0


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Name used for reporting

    Returns:
        List of tokens ending with EOF
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        OSError: If the file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, filepath)
