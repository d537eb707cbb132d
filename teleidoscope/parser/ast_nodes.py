"""
Abstract Syntax Tree node definitions for Teleidoscope.

One class per node kind, each carrying only its own fields. Nodes own
their children outright; nothing is shared between trees. Ordered
collections (arguments, parameters, definitions, top-level expressions)
are plain lists on the node that owns them.

Every node can render itself as an s-expression with to_sexpr(), which
is what the --ast dump and the parser tests use.

Author: xwest
"""

from abc import ABC, abstractmethod
from typing import List, TYPE_CHECKING
from enum import Enum

if TYPE_CHECKING:
    from ..analyzer.symbol_table import SymbolTable


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    PROGRAM = "Program"

    PROTOTYPE = "Prototype"
    FUNCTION_DEF = "FunctionDef"

    NUMBER = "Number"
    VARIABLE = "Variable"
    BINARY_OP = "BinaryOp"
    FUNCTION_CALL = "FunctionCall"
    IF_EXPRESSION = "IfExpression"


class ASTNode(ABC):
    """Base class for all AST nodes."""

    def __init__(self, node_type: ASTNodeType):
        self.node_type = node_type

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        pass

    @abstractmethod
    def to_sexpr(self) -> str:
        """Render this subtree as an s-expression."""
        pass

    def __str__(self) -> str:
        return self.to_sexpr()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_sexpr()})"


# ============================================================================
# Expressions
# ============================================================================

class Expression(ASTNode):
    """
    Base class for expressions.

    `depth` is the height of the expression tree, 1 for a leaf. Composite
    nodes compute it once from their children when they are built.
    """
    depth: int = 1

    @staticmethod
    def _height(children: List['Expression']) -> int:
        return 1 + max((child.depth for child in children), default=0)


class NumberLiteral(Expression):
    """Numeric literal. Every number in the language is a float."""
    value: float

    def __init__(self, value: float):
        super().__init__(ASTNodeType.NUMBER)
        self.value = value

    def children(self) -> List[ASTNode]:
        return []

    def to_sexpr(self) -> str:
        return "%g" % self.value


class Variable(Expression):
    """Reference to a named value (a parameter or a host constant)."""
    name: str

    def __init__(self, name: str):
        super().__init__(ASTNodeType.VARIABLE)
        self.name = name

    def children(self) -> List[ASTNode]:
        return []

    def to_sexpr(self) -> str:
        return self.name


class BinaryOp(Expression):
    """Binary operation expression."""
    operator: str
    left: Expression
    right: Expression

    def __init__(self, operator: str, left: Expression, right: Expression):
        super().__init__(ASTNodeType.BINARY_OP)
        self.operator = operator
        self.left = left
        self.right = right
        self.depth = self._height([left, right])

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]

    def to_sexpr(self) -> str:
        return f"({self.operator} {self.left.to_sexpr()} {self.right.to_sexpr()})"


class FunctionCall(Expression):
    """Call of a named function with positional arguments."""
    callee: str
    args: List[Expression]

    def __init__(self, callee: str, args: List[Expression]):
        super().__init__(ASTNodeType.FUNCTION_CALL)
        self.callee = callee
        self.args = args
        self.depth = self._height(args)

    def children(self) -> List[ASTNode]:
        return list(self.args)

    def to_sexpr(self) -> str:
        parts = [f"call {self.callee}"] + [arg.to_sexpr() for arg in self.args]
        return f"({' '.join(parts)})"


class IfExpression(Expression):
    """if/then/else; both branches are required and it yields a value."""
    condition: Expression
    then_branch: Expression
    else_branch: Expression

    def __init__(self, condition: Expression, then_branch: Expression,
                 else_branch: Expression):
        super().__init__(ASTNodeType.IF_EXPRESSION)
        self.condition = condition
        self.then_branch = then_branch
        self.else_branch = else_branch
        self.depth = self._height([condition, then_branch, else_branch])

    def children(self) -> List[ASTNode]:
        return [self.condition, self.then_branch, self.else_branch]

    def to_sexpr(self) -> str:
        return (f"(if {self.condition.to_sexpr()} "
                f"{self.then_branch.to_sexpr()} {self.else_branch.to_sexpr()})")


# ============================================================================
# Declarations
# ============================================================================

class Prototype(ASTNode):
    """A function's name and ordered parameter names, without a body."""
    name: str
    params: List[str]

    def __init__(self, name: str, params: List[str]):
        super().__init__(ASTNodeType.PROTOTYPE)
        self.name = name
        self.params = params

    def children(self) -> List[ASTNode]:
        return []

    def to_sexpr(self) -> str:
        return f"({' '.join([self.name] + self.params)})"


class FunctionDef(ASTNode):
    """Function definition: a prototype plus a single body expression."""
    prototype: Prototype
    body: Expression

    def __init__(self, prototype: Prototype, body: Expression):
        super().__init__(ASTNodeType.FUNCTION_DEF)
        self.prototype = prototype
        self.body = body

    @property
    def name(self) -> str:
        return self.prototype.name

    @property
    def params(self) -> List[str]:
        return self.prototype.params

    def children(self) -> List[ASTNode]:
        return [self.prototype, self.body]

    def to_sexpr(self) -> str:
        return f"(def {self.prototype.to_sexpr()} {self.body.to_sexpr()})"


# ============================================================================
# Top-level node
# ============================================================================

class Program(ASTNode):
    """
    Root of a compiled unit.

    Holds the symbol table filled in while parsing, the function
    definitions (most recent first) and the top-level expressions
    (source order).
    """
    symbols: 'SymbolTable'
    functions: List[FunctionDef]
    expressions: List[Expression]

    def __init__(self, symbols: 'SymbolTable', functions: List[FunctionDef],
                 expressions: List[Expression]):
        super().__init__(ASTNodeType.PROGRAM)
        self.symbols = symbols
        self.functions = functions
        self.expressions = expressions

    def children(self) -> List[ASTNode]:
        return list(self.functions) + list(self.expressions)

    def to_sexpr(self) -> str:
        return "\n".join(child.to_sexpr() for child in self.children())


# Alias for the main AST type
AST = Program
