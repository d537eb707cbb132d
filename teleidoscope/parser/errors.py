"""
Error handling for the Teleidoscope parser.

Every syntax error is an unexpected token at some grammar position. The
parser does not try to recover: the first ParseError ends the parse.

Author: xwest
"""

from typing import Optional, List, Union

from ..lexer.tokens import Token, TokenType
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser meets a token it cannot use.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


PARSER_ERROR_CODES = {
    "P001": "Unexpected token in expression",
    "P002": "Expected token not found",
    "P003": "Malformed argument list",
    "P004": "Malformed prototype",
    "P005": "Expression nested too deeply",
}


def describe_token(token: Token) -> str:
    """Human readable name of a token for error messages."""
    if token.type == TokenType.EOF:
        return "end of input"
    if token.type == TokenType.NUMBER:
        return f"number '{token.lexeme}'"
    if token.type == TokenType.IDENTIFIER:
        return f"identifier '{token.lexeme}'"
    if token.is_keyword:
        return f"keyword '{token.lexeme}'"
    return f"'{token.lexeme}'"


# Helper functions for creating common parser errors

def create_unexpected_token_error(found: Token) -> ParseError:
    """Create an error for a token that cannot start an expression."""
    return ParseError(
        message=f"unknown token when expecting an expression, found {describe_token(found)}",
        token=found,
        code="P001",
        help_text="An expression starts with a number, an identifier, 'if' or '('."
    )


def create_missing_token_error(expected: Union[TokenType, str], found: Token) -> ParseError:
    """Create an error for a missing keyword or symbol."""
    expected_str = expected.name.lower() if isinstance(expected, TokenType) else expected
    return ParseError(
        message=f"expected '{expected_str}', found {describe_token(found)}",
        token=found,
        code="P002",
        suggestions=[f"Add the missing '{expected_str}'"]
    )


def create_argument_list_error(found: Token) -> ParseError:
    """Create an error for a bad separator in a call's argument list."""
    return ParseError(
        message=f"Expected ')' or ',' in argument list, found {describe_token(found)}",
        token=found,
        code="P003",
        help_text="Call arguments are separated by ',' and closed with ')'."
    )


def create_prototype_error(expected: str, found: Token) -> ParseError:
    """Create an error for a malformed 'def' or 'extern' prototype."""
    return ParseError(
        message=f"Expected {expected} in prototype, found {describe_token(found)}",
        token=found,
        code="P004",
        help_text="A prototype looks like: name(arg1 arg2 ...)"
    )


def create_nesting_error(found: Token, limit: int) -> ParseError:
    """Create an error for an expression nested beyond what the compiler handles."""
    return ParseError(
        message=f"expression nested too deeply (limit {limit}), found {describe_token(found)}",
        token=found,
        code="P005",
        help_text="Split the expression into smaller functions."
    )
