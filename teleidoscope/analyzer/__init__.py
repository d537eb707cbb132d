"""
Teleidoscope Symbol Management Package

The symbol table the parser fills in and the backend reads back to decide
which host bindings to import.

Author: xwest
"""

from .symbol_table import (
    SymbolTable, Symbol, SymbolKind,
    PLATFORM_CONSTANTS, MATH_CONSTANTS, MATH_FUNCTIONS,
)

__all__ = [
    "SymbolTable", "Symbol", "SymbolKind",
    "PLATFORM_CONSTANTS", "MATH_CONSTANTS", "MATH_FUNCTIONS",
]
