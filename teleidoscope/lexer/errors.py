"""
Diagnostics for the Teleidoscope lexer.

The lexer itself never fails: every character sequence maps to some
token. What it can do is notice input it accepted on a best-effort
basis, such as a numeric literal with more than one decimal point,
and record a warning about it.

Author: xwest
"""

from typing import Optional, List
from dataclasses import dataclass


@dataclass
class Diagnostic:
    """Base class for diagnostics (errors, warnings)."""
    message: str
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerWarning:
    """
    Represents a lexer warning that doesn't stop compilation.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        self.diagnostic = Diagnostic(
            message=message,
            severity="warning",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def message(self) -> str:
        return self.diagnostic.message

    def __str__(self) -> str:
        return str(self.diagnostic)


LEXER_WARNING_CODES = {
    "L001": "Malformed numeric literal",
    "L002": "Numeric literal out of range",
}


def create_malformed_number_warning(lexeme: str, value: float) -> LexerWarning:
    """Create a warning for a numeric literal that is not a plain decimal."""
    return LexerWarning(
        message=f"Malformed numeric literal '{lexeme}' read as {value!r}",
        code="L001",
        help_text="Only the longest leading decimal number is used; the rest of the literal is ignored.",
        suggestions=["Use at most one decimal point in a number"]
    )


def create_number_overflow_warning(lexeme: str) -> LexerWarning:
    """Create a warning for a numeric literal too large for a double."""
    shown = lexeme if len(lexeme) <= 20 else lexeme[:17] + "..."
    return LexerWarning(
        message=f"Numeric literal '{shown}' is too large for a double, read as infinity",
        code="L002"
    )
