"""
Teleidoscope Compiler Package

Compiles a small functional expression language (numbers, functions,
externs, if/then/else) into an asm.js-style JavaScript module.

Architecture:
    teleidoscope/
    ├── lexer/           # Tokenization
    ├── analyzer/        # Symbol table (known names, used-bits)
    ├── parser/          # Syntax analysis and AST generation
    ├── backend/         # JavaScript code generation
    └── cli.py           # Command line driver

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .lexer import Lexer
from .analyzer import SymbolTable
from .parser import Parser
from .backend import AsmJSBackend

__all__ = [
    # Core classes
    "Lexer",
    "SymbolTable",
    "Parser",
    "AsmJSBackend",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
