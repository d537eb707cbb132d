"""
asm.js-style JavaScript backend for Teleidoscope.

Turns a parsed Program into one self-contained JavaScript module:

    console.log((function (stdlib, foreign) {
      "use asm";
      var sin = stdlib.Math.sin;
      function f(x) {
        x = +x;
        return +sin(x);
      }
      function $() {
        return +f(1.);
      }
      return $;
    }(this, foreign))());

Externs are imported only if something referenced them while parsing;
this is the only optimization the backend does. The `foreign` parameter
and argument only appear when one of those externs is not part of the
platform object.

Author: xwest
"""

import math
from typing import List

from ..analyzer.symbol_table import Symbol
from ..parser.ast_nodes import *


class AsmJSBackend:
    """
    Code generator producing asm.js-flavoured JavaScript text.

    Stateless between calls to generate(); one backend can serve any
    number of programs.
    """

    STDLIB_NAME = "stdlib"
    FOREIGN_NAME = "foreign"

    def __init__(self, indent: str = "  ", driver_name: str = "$"):
        """
        Initialize the backend.

        Args:
            indent: One level of indentation in the generated code
            driver_name: Name of the synthesized function running the
                top-level expressions
        """
        self.indent = indent
        self.driver_name = driver_name

    def generate(self, program: Program) -> str:
        """
        Generate the JavaScript module for a program.

        Args:
            program: Successfully parsed program

        Returns:
            Module source text, ending with a newline
        """
        uses_foreign = program.symbols.uses_foreign()

        params = [self.STDLIB_NAME]
        args = ["this"]
        if uses_foreign:
            params.append(self.FOREIGN_NAME)
            args.append(self.FOREIGN_NAME)

        lines = [f"console.log((function ({', '.join(params)}) {{"]
        lines.append(self._line(1, '"use asm";'))

        for symbol in program.symbols.used_externs():
            lines.append(self._line(1, self._generate_import(symbol)))

        for function in program.functions:
            lines.extend(self._generate_function(function))

        lines.extend(self._generate_driver(program.expressions))

        lines.append(self._line(1, f"return {self.driver_name};"))
        lines.append(f"}}({', '.join(args)}))());")

        return "\n".join(lines) + "\n"

    def _generate_import(self, symbol: Symbol) -> str:
        """Alias statement pulling one extern into the module."""
        if symbol.is_stdlib:
            path = self.STDLIB_NAME + (".Math" if symbol.is_math else "")
        else:
            path = self.FOREIGN_NAME
        return f"var {symbol.name} = {path}.{symbol.name};"

    def _generate_function(self, function: FunctionDef) -> List[str]:
        """Function declaration with every parameter coerced to a double on entry."""
        lines = [self._line(1, f"function {function.name}({', '.join(function.params)}) {{")]
        for param in function.params:
            lines.append(self._line(2, f"{param} = +{param};"))
        lines.extend(self._generate_return(function.body, 2))
        lines.append(self._line(1, "}"))
        return lines

    def _generate_driver(self, expressions: List[Expression]) -> List[str]:
        """The driver runs the top-level expressions in order and returns the last."""
        lines = [self._line(1, f"function {self.driver_name}() {{")]
        for expr in expressions[:-1]:
            lines.append(self._line(2, f"{self._generate_expression(expr)};"))
        if expressions:
            lines.extend(self._generate_return(expressions[-1], 2))
        lines.append(self._line(1, "}"))
        return lines

    def _generate_return(self, expr: Expression, depth: int) -> List[str]:
        """Statements returning `expr`; a conditional here becomes a real if/else."""
        if isinstance(expr, IfExpression):
            condition = self._generate_expression(expr.condition)
            lines = [self._line(depth, f"if ({condition}) {{")]
            lines.extend(self._generate_return(expr.then_branch, depth + 1))
            lines.append(self._line(depth, "} else {"))
            lines.extend(self._generate_return(expr.else_branch, depth + 1))
            lines.append(self._line(depth, "}"))
            return lines

        return [self._line(depth, f"return {self._generate_expression(expr)};")]

    def _generate_expression(self, expr: Expression) -> str:
        """Render an expression in value position."""
        if isinstance(expr, NumberLiteral):
            return format_number(expr.value)

        elif isinstance(expr, Variable):
            return expr.name

        elif isinstance(expr, BinaryOp):
            left = self._generate_expression(expr.left)
            right = self._generate_expression(expr.right)
            return f"({left} {expr.operator} {right})"

        elif isinstance(expr, FunctionCall):
            args = ", ".join(self._generate_expression(arg) for arg in expr.args)
            return f"+{expr.callee}({args})"

        elif isinstance(expr, IfExpression):
            condition = self._generate_expression(expr.condition)
            then_value = self._generate_expression(expr.then_branch)
            else_value = self._generate_expression(expr.else_branch)
            return f"({condition} ? {then_value} : {else_value})"

        raise TypeError(f"Cannot generate code for {type(expr).__name__}")

    def _line(self, depth: int, text: str) -> str:
        return self.indent * depth + text


def format_number(value: float) -> str:
    """
    Render a numeric literal so JavaScript reads it as a double.

    Integral values get a trailing '.' (3 -> '3.'); everything else uses
    the shortest decimal text that round-trips (3.5 -> '3.5'). Values
    too large for a double come out as 1e999.
    """
    if math.isinf(value):
        # JavaScript reads an overflowing literal as Infinity
        return "1e999" if value > 0 else "-1e999"
    if math.isnan(value):
        return "(0. / 0.)"
    if value.is_integer():
        return f"{int(value)}."
    return repr(value)


def generate_string(source: str, filename: str = "<string>") -> str:
    """
    Convenience function: parse a source string and generate its module.

    Raises:
        ParseError: If parsing fails
    """
    from ..parser.parser import parse_string

    return AsmJSBackend().generate(parse_string(source, filename))
