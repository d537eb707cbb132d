"""
Teleidoscope Parser Package

Recursive descent parser with precedence climbing for binary operators.
Builds the AST and fills in the symbol table in a single pass.

Author: xwest
"""

from .ast_nodes import *
from .parser import Parser, ParseResult, parse_string, parse_file
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser", "ParseResult", "parse_string", "parse_file",

    # AST nodes
    "AST", "ASTNode", "ASTNodeType",
    "Program", "Expression", "Prototype", "FunctionDef",
    "NumberLiteral", "Variable", "BinaryOp", "FunctionCall", "IfExpression",

    # Error handling
    "ParseError",
]
