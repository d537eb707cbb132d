"""
Teleidoscope Parser Implementation

Recursive descent for the statement-level grammar, precedence climbing
for binary operators:

    program     := (definition | extern_decl | expression | ';')* EOF
    definition  := 'def' prototype expression
    extern_decl := 'extern' prototype
    prototype   := identifier '(' identifier* ')'
    expression  := primary (binop primary)*
    primary     := number | identifier_expr | if_expr | '(' expression ')'
    identifier_expr := identifier ['(' (expression (',' expression)*)? ')']
    if_expr     := 'if' expression 'then' expression 'else' expression

While it builds the tree the parser also keeps the symbol table up to
date: definitions and externs are registered, and every reference marks
the symbol it resolves to as used. Names are resolved at the point they
are seen, so a function is not visible inside its own body or to code
above its definition.

Author: xwest
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..lexer.lexer import Lexer
from ..lexer.tokens import Token, TokenType, BINARY_PRECEDENCE
from ..analyzer.symbol_table import SymbolTable
from .ast_nodes import *
from .errors import (
    ParseError, create_unexpected_token_error, create_missing_token_error,
    create_argument_list_error, create_prototype_error, create_nesting_error
)

# Deepest run of nested sub-expressions the recursive descent will enter
MAX_NESTING_DEPTH = 100
# Tallest expression tree handed on to the backend
MAX_EXPRESSION_DEPTH = 256


@dataclass
class ParseResult:
    """
    Outcome of a parse: either a Program or the errors that stopped it.

    The parser stops at the first error, so `errors` holds at most one
    entry today; callers should not rely on that.
    """
    program: Optional[Program] = None
    errors: List[ParseError] = field(default_factory=list)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def raise_first(self):
        """Raise the first error, if any."""
        if self.errors:
            raise self.errors[0]


class Parser:
    """
    Teleidoscope parser.

    Pulls tokens from a Lexer with one token of lookahead. All parse state
    (current token, symbol table, collected definitions) belongs to the
    instance, so independent parsers can run side by side.
    """

    def __init__(self, lexer: Lexer, symbols: Optional[SymbolTable] = None):
        """
        Initialize parser.

        Args:
            lexer: Token source
            symbols: Symbol table to fill in; a freshly seeded one by default
        """
        self.lexer = lexer
        self.symbols = symbols if symbols is not None else SymbolTable()
        self.current: Token = Token(TokenType.EOF, "")
        self.errors: List[ParseError] = []
        self.functions: List[FunctionDef] = []
        self.expressions: List[Expression] = []
        self._nesting = 0

    def parse(self) -> ParseResult:
        """
        Parse the whole token stream.

        Returns:
            ParseResult with the Program, or with the error that stopped
            parsing. No partial program is ever returned.
        """
        self._advance()

        try:
            while self.current.type != TokenType.EOF:
                self._parse_item()
        except ParseError as e:
            self.errors.append(e)
            return ParseResult(errors=list(self.errors))
        except RecursionError:
            self.errors.append(create_nesting_error(self.current, MAX_NESTING_DEPTH))
            return ParseResult(errors=list(self.errors))

        program = Program(self.symbols, self.functions, self.expressions)
        return ParseResult(program=program)

    def _parse_item(self):
        """Parse one top-level item and record it."""
        if self.current.is_char(';'):
            self._advance()
        elif self.current.type == TokenType.DEF:
            function = self._parse_definition()
            self.functions.insert(0, function)
            # Registered only now that the body has been parsed
            self.symbols.define_function(function.name)
        elif self.current.type == TokenType.EXTERN:
            prototype = self._parse_extern()
            self.symbols.declare_extern(prototype.name)
        else:
            self.expressions.append(self._parse_expression())

    def _parse_definition(self) -> FunctionDef:
        """definition := 'def' prototype expression"""
        self._advance()  # Consume 'def'
        prototype = self._parse_prototype()
        body = self._parse_expression()
        return FunctionDef(prototype, body)

    def _parse_extern(self) -> Prototype:
        """extern_decl := 'extern' prototype"""
        self._advance()  # Consume 'extern'
        return self._parse_prototype()

    def _parse_prototype(self) -> Prototype:
        """prototype := identifier '(' identifier* ')'"""
        if self.current.type != TokenType.IDENTIFIER:
            raise create_prototype_error("function name", self.current)
        name = self.current.lexeme
        self._advance()

        if not self.current.is_char('('):
            raise create_prototype_error("'('", self.current)

        params = []
        self._advance()
        while self.current.type == TokenType.IDENTIFIER:
            params.append(self.current.lexeme)
            self._advance()

        if not self.current.is_char(')'):
            raise create_prototype_error("')'", self.current)
        self._advance()

        return Prototype(name, params)

    # Expressions

    def _parse_expression(self) -> Expression:
        """expression := primary (binop primary)*"""
        self._nesting += 1
        try:
            if self._nesting > MAX_NESTING_DEPTH:
                raise create_nesting_error(self.current, MAX_NESTING_DEPTH)
            left = self._parse_primary()
            expr = self._parse_binop_rhs(0, left)
        finally:
            self._nesting -= 1

        # Operator chains grow the tree without nesting the parse
        if expr.depth > MAX_EXPRESSION_DEPTH:
            raise create_nesting_error(self.current, MAX_EXPRESSION_DEPTH)
        return expr

    def _parse_binop_rhs(self, min_precedence: int, left: Expression) -> Expression:
        """Fold operators binding at least as tight as `min_precedence` onto `left`."""
        while True:
            precedence = self._get_precedence()
            if precedence < min_precedence:
                return left

            operator = self.current.lexeme
            self._advance()
            right = self._parse_primary()

            # A tighter operator after the right operand claims it first
            if precedence < self._get_precedence():
                right = self._parse_binop_rhs(precedence + 1, right)

            left = BinaryOp(operator, left, right)

    def _get_precedence(self) -> int:
        """Precedence of the current token, -1 if it is not a binary operator."""
        if self.current.type != TokenType.CHARACTER:
            return -1
        return BINARY_PRECEDENCE.get(self.current.lexeme, -1)

    def _parse_primary(self) -> Expression:
        """primary := number | identifier_expr | if_expr | '(' expression ')'"""
        if self.current.type == TokenType.IDENTIFIER:
            return self._parse_identifier_expr()
        if self.current.type == TokenType.NUMBER:
            return self._parse_number()
        if self.current.type == TokenType.IF:
            return self._parse_if_expression()
        if self.current.is_char('('):
            return self._parse_grouping()
        raise create_unexpected_token_error(self.current)

    def _parse_number(self) -> NumberLiteral:
        node = NumberLiteral(self.current.value)
        self._advance()
        return node

    def _parse_grouping(self) -> Expression:
        """Parse parenthesized expression."""
        self._advance()  # Consume (
        expr = self._parse_expression()
        if not self.current.is_char(')'):
            raise create_missing_token_error(")", self.current)
        self._advance()
        return expr

    def _parse_identifier_expr(self) -> Expression:
        """identifier_expr := identifier ['(' (expression (',' expression)*)? ')']"""
        name = self.current.lexeme
        self.symbols.mark_used(name)
        self._advance()

        if not self.current.is_char('('):
            return Variable(name)

        self._advance()  # Consume (
        args = []
        if not self.current.is_char(')'):
            while True:
                args.append(self._parse_expression())
                if self.current.is_char(')'):
                    break
                if not self.current.is_char(','):
                    raise create_argument_list_error(self.current)
                self._advance()
        self._advance()  # Consume )

        return FunctionCall(name, args)

    def _parse_if_expression(self) -> IfExpression:
        """if_expr := 'if' expression 'then' expression 'else' expression"""
        self._advance()  # Consume 'if'
        condition = self._parse_expression()

        self._consume(TokenType.THEN)
        then_branch = self._parse_expression()

        self._consume(TokenType.ELSE)
        else_branch = self._parse_expression()

        return IfExpression(condition, then_branch, else_branch)

    # Utility methods

    def _advance(self) -> Token:
        """Move to the next token and return it."""
        self.current = self.lexer.next_token()
        return self.current

    def _consume(self, token_type: TokenType) -> Token:
        """Consume a keyword of the given type or raise."""
        if self.current.type != token_type:
            raise create_missing_token_error(token_type, self.current)
        token = self.current
        self._advance()
        return token


def parse_string(source: str, filename: str = "<string>",
                 symbols: Optional[SymbolTable] = None) -> Program:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: Name used for reporting
        symbols: Symbol table to use; a fresh one by default

    Returns:
        Program AST

    Raises:
        ParseError: If parsing fails
    """
    result = Parser(Lexer(source, filename), symbols).parse()
    result.raise_first()
    return result.program


def parse_file(filepath: str) -> Program:
    """
    Convenience function to parse a source file.

    Raises:
        ParseError: If parsing fails
        OSError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return parse_string(source, filepath)
