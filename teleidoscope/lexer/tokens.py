"""
Token definitions for the Teleidoscope lexer.

The language is tiny: five keywords, identifiers, numbers and single
character symbols. Everything that is not a keyword, identifier or
number comes through as a CHARACTER token carrying the character itself.

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Optional


class TokenType(Enum):
    """Enumeration of all token types in Teleidoscope."""

    EOF = auto()                    # End of input

    # Keywords
    DEF = auto()                    # def
    EXTERN = auto()                 # extern
    IF = auto()                     # if
    THEN = auto()                   # then
    ELSE = auto()                   # else

    IDENTIFIER = auto()             # [A-Za-z][A-Za-z0-9]*
    NUMBER = auto()                 # [0-9.]+

    # Any other non-whitespace character: operators, parentheses, ';', ','
    CHARACTER = auto()


@dataclass(frozen=True)
class Token:
    """
    A lexical token.

    `lexeme` is the raw text; `value` is the float for NUMBER tokens and
    the name for IDENTIFIER tokens, None otherwise.
    """
    type: TokenType
    lexeme: str
    value: Any = None

    def __str__(self) -> str:
        if self.type == TokenType.IDENTIFIER:
            return f"ID<{self.lexeme}>"
        if self.type == TokenType.NUMBER:
            return "NUMBER<%g>" % self.value
        if self.type == TokenType.CHARACTER:
            if " " <= self.lexeme <= "~":
                return f"'{self.lexeme}'"
            return f"CHARACTER<{ord(self.lexeme)}>"
        return self.type.name

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.value!r})"

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.type in KEYWORDS.values()

    def is_char(self, char: str) -> bool:
        """Check if this token is the single-character symbol `char`."""
        return self.type == TokenType.CHARACTER and self.lexeme == char

    @property
    def symbol(self) -> Optional[str]:
        """The character of a CHARACTER token, None for anything else."""
        return self.lexeme if self.type == TokenType.CHARACTER else None


KEYWORDS = {
    "def": TokenType.DEF,
    "extern": TokenType.EXTERN,
    "if": TokenType.IF,
    "then": TokenType.THEN,
    "else": TokenType.ELSE,
}

# Binary operator precedence; higher binds tighter. Anything missing from
# the table has precedence -1 and ends an expression.
BINARY_PRECEDENCE = {
    "<": 10,
    "+": 20,
    "-": 20,
    "*": 40,
}
