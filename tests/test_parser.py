"""
Test suite for the Teleidoscope parser.

Tests cover:
- Operator precedence and associativity
- Definitions, externs, calls and conditionals
- Symbol table updates made while parsing
- Syntax errors and the no-partial-program rule

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from teleidoscope.lexer.lexer import Lexer
from teleidoscope.analyzer.symbol_table import SymbolTable, SymbolKind
from teleidoscope.parser.parser import (
    Parser, parse_string, MAX_NESTING_DEPTH, MAX_EXPRESSION_DEPTH
)
from teleidoscope.parser.ast_nodes import (
    BinaryOp, FunctionCall, FunctionDef, IfExpression, NumberLiteral, Variable
)
from teleidoscope.parser.errors import ParseError


class TestExpressionParsing(unittest.TestCase):
    """Precedence climbing and primary expressions."""

    def _expr(self, source: str) -> str:
        program = parse_string(source)
        self.assertEqual(len(program.expressions), 1)
        return program.expressions[0].to_sexpr()

    def test_multiplication_binds_tighter(self):
        self.assertEqual(self._expr("1 + 2 * 3"), "(+ 1 (* 2 3))")
        self.assertEqual(self._expr("1 * 2 + 3"), "(+ (* 1 2) 3)")

    def test_comparison_binds_loosest(self):
        self.assertEqual(self._expr("1 < 2 + 3"), "(< 1 (+ 2 3))")
        self.assertEqual(self._expr("1 + 2 < 3"), "(< (+ 1 2) 3)")

    def test_left_associative(self):
        self.assertEqual(self._expr("1 - 2 - 3"), "(- (- 1 2) 3)")
        self.assertEqual(self._expr("1 - 2 + 3"), "(+ (- 1 2) 3)")

    def test_mixed_chain(self):
        self.assertEqual(self._expr("1 + 2 * 3 - 4"), "(- (+ 1 (* 2 3)) 4)")
        self.assertEqual(self._expr("a < b * c + d"), "(< a (+ (* b c) d))")

    def test_parentheses_override_precedence(self):
        self.assertEqual(self._expr("(1 + 2) * 3"), "(* (+ 1 2) 3)")

    def test_node_types(self):
        expr = parse_string("f(x, 2)").expressions[0]

        self.assertIsInstance(expr, FunctionCall)
        self.assertEqual(expr.callee, "f")
        self.assertIsInstance(expr.args[0], Variable)
        self.assertIsInstance(expr.args[1], NumberLiteral)
        self.assertEqual(expr.args[1].value, 2.0)

    def test_call_without_arguments(self):
        self.assertEqual(self._expr("f()"), "(call f)")

    def test_nested_calls(self):
        self.assertEqual(self._expr("atan2(sin(.4), cos(42))"),
                         "(call atan2 (call sin 0.4) (call cos 42))")

    def test_if_expression(self):
        expr = parse_string("if x < 3 then 1 else f(x)").expressions[0]

        self.assertIsInstance(expr, IfExpression)
        self.assertEqual(expr.to_sexpr(), "(if (< x 3) 1 (call f x))")

    def test_if_branches_take_full_expressions(self):
        self.assertEqual(self._expr("if a then 1 + 2 else 3 * 4"),
                         "(if a (+ 1 2) (* 3 4))")

    def test_unknown_operator_ends_expression(self):
        """'/' is not an operator, so it cannot continue '1' and cannot start an expression."""
        result = Parser(Lexer("1 / 2")).parse()
        self.assertTrue(result.has_errors())
        self.assertEqual(result.errors[0].code, "P001")


class TestProgramParsing(unittest.TestCase):
    """Top-level items and the program unit."""

    def test_definition(self):
        program = parse_string("def foo(x y) x + y")

        self.assertEqual(len(program.functions), 1)
        function = program.functions[0]
        self.assertIsInstance(function, FunctionDef)
        self.assertEqual(function.name, "foo")
        self.assertEqual(function.params, ["x", "y"])
        self.assertIsInstance(function.body, BinaryOp)
        self.assertEqual(program.expressions, [])

    def test_parameter_order_is_kept(self):
        program = parse_string("def f(c a b) a")
        self.assertEqual(program.functions[0].params, ["c", "a", "b"])

    def test_functions_most_recent_first(self):
        program = parse_string("def a() 1 def b() 2 def c() 3")
        self.assertEqual([f.name for f in program.functions], ["c", "b", "a"])

    def test_top_level_expressions_in_source_order(self):
        program = parse_string("1; 2; def f() 0; 3")
        self.assertEqual([e.to_sexpr() for e in program.expressions], ["1", "2", "3"])

    def test_semicolons_are_optional(self):
        program = parse_string(";;; 1 2 ;")
        self.assertEqual(len(program.expressions), 2)

    def test_empty_program(self):
        program = parse_string("")
        self.assertEqual(program.functions, [])
        self.assertEqual(program.expressions, [])

    def test_extern_is_not_a_function(self):
        program = parse_string("extern bar(x)")
        self.assertEqual(program.functions, [])
        self.assertEqual(program.symbols.lookup("bar").kind,
                         SymbolKind.EXTERN | SymbolKind.FUNCTION)

    def test_sexpr_dump(self):
        program = parse_string("def f(x) x * 2; f(1)")
        self.assertEqual(program.to_sexpr(), "(def (f x) (* x 2))\n(call f 1)")


class TestSymbolUsage(unittest.TestCase):
    """Declarations and references recorded in the symbol table."""

    def test_call_marks_used(self):
        program = parse_string("extern bar(x); bar(5)")
        self.assertTrue(program.symbols.lookup("bar").is_used)

    def test_variable_marks_used(self):
        program = parse_string("PI * 2")
        self.assertTrue(program.symbols.lookup("PI").is_used)

    def test_unreferenced_extern_stays_unused(self):
        program = parse_string("extern bar(x); 1")
        self.assertFalse(program.symbols.lookup("bar").is_used)

    def test_reference_inside_body_counts(self):
        program = parse_string("def f(x) sin(x)")
        self.assertTrue(program.symbols.lookup("sin").is_used)

    def test_extern_redeclaration_ignored(self):
        program = parse_string("extern bar(x); extern bar(a b)")
        records = [s for s in program.symbols.symbols() if s.name == "bar"]
        self.assertEqual(len(records), 1)

    def test_definition_registered_after_body(self):
        """A function does not see itself while its body is parsed."""
        program = parse_string("def fib(x) fib(x - 1)")
        fib = program.symbols.lookup("fib")

        self.assertEqual(fib.kind, SymbolKind.FUNCTION)
        self.assertFalse(fib.is_used)

    def test_forward_reference_not_resolved(self):
        program = parse_string("foo(1); def foo(x) x")
        self.assertFalse(program.symbols.lookup("foo").is_used)

    def test_later_reference_resolves(self):
        program = parse_string("def foo(x) x; foo(1)")
        self.assertTrue(program.symbols.lookup("foo").is_used)

    def test_user_function_shadows_builtin(self):
        program = parse_string("def sin(x) x; sin(1)")
        symbols = [s for s in program.symbols.symbols() if s.name == "sin"]

        self.assertEqual(len(symbols), 2)
        self.assertTrue(symbols[0].is_used)       # the user function
        self.assertFalse(symbols[1].is_used)      # the Math builtin

    def test_caller_supplied_symbol_table(self):
        table = SymbolTable(seed_builtins=False)
        result = Parser(Lexer("sin(1)"), table).parse()

        self.assertIs(result.program.symbols, table)
        self.assertIsNone(table.lookup("sin"))


class TestSyntaxErrors(unittest.TestCase):
    """Every unexpected token aborts the parse."""

    def _error(self, source: str) -> ParseError:
        result = Parser(Lexer(source)).parse()
        self.assertTrue(result.has_errors())
        self.assertIsNone(result.program)
        return result.errors[0]

    def test_unmatched_parenthesis(self):
        error = self._error("(1 + 2")
        self.assertEqual(error.code, "P002")
        self.assertIn("expected ')'", error.message)

    def test_unexpected_token(self):
        self.assertEqual(self._error(")").code, "P001")
        self.assertEqual(self._error("1 +").code, "P001")

    def test_missing_then(self):
        error = self._error("if 1 2 else 3")
        self.assertEqual(error.code, "P002")
        self.assertIn("'then'", error.message)

    def test_missing_else(self):
        error = self._error("if 1 then 2")
        self.assertIn("'else'", error.message)
        self.assertIn("end of input", error.message)

    def test_bad_argument_list(self):
        self.assertEqual(self._error("f(1 2)").code, "P003")

    def test_bad_prototypes(self):
        self.assertEqual(self._error("def 1(x) x").code, "P004")
        self.assertEqual(self._error("extern foo x").code, "P004")
        self.assertEqual(self._error("def foo(x, y) x").code, "P004")

    def test_missing_definition_body(self):
        self.assertEqual(self._error("def foo(x)").code, "P001")

    def test_error_after_valid_items_discards_everything(self):
        result = Parser(Lexer("def f(x) x; f(1); (")).parse()

        self.assertIsNone(result.program)
        self.assertEqual(len(result.errors), 1)

    def test_deeply_nested_parentheses(self):
        """Nesting past the limit is a diagnostic, not a crash."""
        error = self._error("(" * 2000 + "1" + ")" * 2000)

        self.assertEqual(error.code, "P005")
        self.assertIn("nested too deeply", error.message)

    def test_deeply_nested_calls(self):
        error = self._error("f(" * 500 + "1" + ")" * 500)
        self.assertEqual(error.code, "P005")

    def test_long_operator_chain(self):
        """A flat chain builds a tall left-leaning tree, which is limited too."""
        error = self._error("1" + " + 1" * (MAX_EXPRESSION_DEPTH + 10))
        self.assertEqual(error.code, "P005")

    def test_nesting_within_limits(self):
        depth = MAX_NESTING_DEPTH - 1
        program = parse_string("(" * depth + "1" + ")" * depth)
        self.assertEqual(program.expressions[0].to_sexpr(), "1")

        program = parse_string("1" + " + 1" * (MAX_EXPRESSION_DEPTH - 2))
        self.assertEqual(program.expressions[0].depth, MAX_EXPRESSION_DEPTH - 1)

    def test_parse_string_raises(self):
        with self.assertRaises(ParseError):
            parse_string("(1 + 2")

    def test_diagnostic_text(self):
        error = self._error("(1 + 2")
        self.assertTrue(str(error).startswith("ERROR[P002]: expected ')'"))


if __name__ == '__main__':
    unittest.main()
