"""
Abstract Syntax Tree (AST) node definitions for CyaScript.

This module defines the node types the parser builds, plus the variants a
later resolution pass fills in and the variants reserved for grammar that
does not exist yet. Every node is immutable. Nodes never point back into
the token stream: identifier and string text is shared, not copied.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional, Union

from cyascript.utils.errors import UnsupportedFeatureError

Line = int


class ASTNode(ABC):
    """Base class for all AST nodes."""

    @abstractmethod
    def accept(self, visitor: "ASTVisitor") -> Any:
        """Accept a visitor for tree traversal."""
        pass


# -----------------------------------------------------------------------------
# Basic Types
# -----------------------------------------------------------------------------


class BasicType(Enum):
    """Primitive storage category of a value, assigned by semantic analysis."""

    INT = "int"
    NUM = "num"
    CHAR = "char"
    BOOL = "bool"
    REF = "Ref"

    def __str__(self) -> str:
        return self.value


class DataType(Enum):
    """Resolved value type of an expression after semantic analysis."""

    INT = "int"
    NUM = "num"
    CHAR = "char"
    BOOL = "bool"

    def __str__(self) -> str:
        return self.value


# -----------------------------------------------------------------------------
# Parsed Types
# -----------------------------------------------------------------------------


class ParsedType(ASTNode):
    """Base class for type annotations as written in source."""

    pass


@dataclass(frozen=True, slots=True)
class SingleType(ParsedType):
    """
    A named type with optional generic arguments.

    ``generic`` is None for a non-generic type. An empty tuple is distinct
    from None and means explicit empty angle brackets.

    Examples:
        Int, List<Int>, Map<Str, (Int, Bool)>, Unit<>
    """

    name: str
    generic: Optional[tuple[ParsedType, ...]] = None

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_single_type(self)

    def __str__(self) -> str:
        if self.generic is None:
            return self.name
        return f"{self.name}<{', '.join(str(arg) for arg in self.generic)}>"


@dataclass(frozen=True, slots=True)
class TupleType(ParsedType):
    """
    A tuple type.

    Example:
        (Int, Str)
    """

    items: tuple[ParsedType, ...]

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_tuple_type(self)

    def __str__(self) -> str:
        return f"({', '.join(str(item) for item in self.items)})"


@dataclass(frozen=True, slots=True)
class SelfType(ParsedType):
    """The ``Self`` receiver-type placeholder."""

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_self_type(self)

    def __str__(self) -> str:
        return "Self"


# -----------------------------------------------------------------------------
# Variables
# -----------------------------------------------------------------------------


class Var:
    """
    A variable reference.

    The parser only builds ``VarName``. The other variants are produced by
    the resolution pass that maps names onto storage slots.
    """

    pass


@dataclass(frozen=True, slots=True)
class VarName(Var):
    """An unresolved reference by name."""

    name: str


@dataclass(frozen=True, slots=True)
class LocalVar(Var):
    """A local slot: ``index`` within the frame ``depth`` levels up."""

    basic_type: BasicType
    index: int
    depth: int = 0


@dataclass(frozen=True, slots=True)
class StaticVar(Var):
    """A file-level static slot."""

    basic_type: BasicType
    index: int


class TypeRefKind(Enum):
    """What a resolved type reference points at."""

    CLASS = auto()
    ENUM = auto()
    INTERFACE = auto()
    BUILTIN_TYPE = auto()


@dataclass(frozen=True, slots=True)
class TypeRef(Var):
    """A reference to a class, enum, interface or builtin type by table index."""

    kind: TypeRefKind
    index: int


@dataclass(frozen=True, slots=True)
class DirectFn(Var):
    """A direct reference to a function by table index."""

    index: int


class VarId:
    """Identifies a field in an object construction."""

    pass


@dataclass(frozen=True, slots=True)
class VarIdName(VarId):
    name: str


@dataclass(frozen=True, slots=True)
class VarIdIndex(VarId):
    index: int
    depth: int = 0


@dataclass(frozen=True, slots=True)
class VarIdDoubleIndex(VarId):
    outer: int
    inner: int


# -----------------------------------------------------------------------------
# Expressions
# -----------------------------------------------------------------------------


class Expression(ASTNode):
    """Base class for all expressions."""

    pass


@dataclass(frozen=True, slots=True)
class NoneLiteral(Expression):
    """The absent value."""

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_none_literal(self)


@dataclass(frozen=True, slots=True)
class IntLiteral(Expression):
    """A 64-bit signed integer literal."""

    value: int

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_int_literal(self)


@dataclass(frozen=True, slots=True)
class NumLiteral(Expression):
    """A floating-point literal."""

    value: float

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_num_literal(self)


@dataclass(frozen=True, slots=True)
class CharLiteral(Expression):
    """A single character literal."""

    value: str

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_char_literal(self)


@dataclass(frozen=True, slots=True)
class BoolLiteral(Expression):
    """A boolean literal."""

    value: bool

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_bool_literal(self)


@dataclass(frozen=True, slots=True)
class StrLiteral(Expression):
    """A string literal."""

    value: str

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_str_literal(self)


@dataclass(frozen=True, slots=True)
class VarExpr(Expression):
    """A variable used as a value."""

    var: Var

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_var_expr(self)


@dataclass(frozen=True, slots=True)
class TupleExpr(Expression):
    """
    A tuple of expressions.

    Examples:
        (), (a,), (a, "b", 3)
    """

    items: tuple[Expression, ...]

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_tuple_expr(self)


@dataclass(frozen=True, slots=True)
class ArrayExpr(Expression):
    """
    An array or queue literal.

    Attributes:
        elements: The element expressions
        element_type: Storage category shared by all elements
        is_queue: True when the literal builds a queue rather than an array
    """

    elements: tuple[Expression, ...]
    element_type: BasicType
    is_queue: bool = False

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_array_expr(self)


@dataclass(frozen=True, slots=True)
class Construction(Expression):
    """
    Object construction.

    Attributes:
        target: The constructed type, as written or once resolved
        fields: ``(field, storage category, initializer)`` triples in order
    """

    target: Union[ParsedType, DataType]
    fields: tuple[tuple[VarId, BasicType, Expression], ...]

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_construction(self)


@dataclass(frozen=True, slots=True)
class Cast(Expression):
    """A cast to a written type; ``data_type`` is filled in by analysis."""

    expr: Expression
    parsed_type: ParsedType
    data_type: Optional[DataType] = None

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_cast(self)


@dataclass(frozen=True, slots=True)
class NegOp(Expression):
    """Arithmetic negation."""

    operand: Expression

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_neg_op(self)


@dataclass(frozen=True, slots=True)
class NotOp(Expression):
    """Logical not."""

    operand: Expression

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_not_op(self)


# Reserved expressions. The grammar has no rule that builds these yet.


class BinaryOperator(Enum):
    """Binary operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    AND = "and"
    OR = "or"


@dataclass(frozen=True, slots=True)
class BinaryOp(Expression):
    """``left op1 e1 op2 e2 ...``, kept flat for a later precedence pass."""

    left: Expression
    operations: tuple[tuple[BinaryOperator, Expression], ...]

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_binary_op(self)


@dataclass(frozen=True, slots=True)
class IfElse(Expression):
    """Conditional with ``(condition, body)`` branches and an optional else body."""

    branches: tuple[tuple[Expression, tuple["Statement", ...]], ...]
    otherwise: Optional[tuple["Statement", ...]] = None

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_if_else(self)


@dataclass(frozen=True, slots=True)
class Match(Expression):
    """Pattern match with ``(pattern, body)`` arms."""

    subject: Expression
    arms: tuple[tuple[Expression, tuple["Statement", ...]], ...]

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_match(self)


@dataclass(frozen=True, slots=True)
class Chain(Expression):
    """
    Chained member access and calls.

    Each link is a field name or the argument tuple of a call.
    """

    head: Expression
    links: tuple[Union[str, tuple[Expression, ...]], ...]

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_chain(self)


# -----------------------------------------------------------------------------
# Statements
# -----------------------------------------------------------------------------


class Statement(ASTNode):
    """Base class for all statements."""

    line: Line


@dataclass(frozen=True, slots=True)
class LetStatement(Statement):
    """
    A variable declaration.

    Examples:
        let x = "hi";
        let x: Int = 5
        let x Int = 5
    """

    var: Var
    parsed_type: Optional[ParsedType]
    expr: Expression
    line: Line

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_let_statement(self)


@dataclass(frozen=True, slots=True)
class ExprStatement(Statement):
    """An expression whose value is the result of the enclosing block."""

    expr: Expression
    line: Line

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_expr_statement(self)


@dataclass(frozen=True, slots=True)
class DiscardStatement(Statement):
    """An expression evaluated for effect; its value is dropped."""

    expr: Expression
    line: Line

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_discard_statement(self)


# Reserved statements. The grammar has no rule that builds these yet.


@dataclass(frozen=True, slots=True)
class WhileStatement(Statement):
    condition: Expression
    body: tuple[Statement, ...]
    line: Line

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_while_statement(self)


@dataclass(frozen=True, slots=True)
class ForStatement(Statement):
    var: Var
    iterable: Expression
    body: tuple[Statement, ...]
    line: Line

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_for_statement(self)


@dataclass(frozen=True, slots=True)
class ContinueStatement(Statement):
    line: Line

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_continue_statement(self)


@dataclass(frozen=True, slots=True)
class BreakStatement(Statement):
    line: Line

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_break_statement(self)


@dataclass(frozen=True, slots=True)
class ReturnStatement(Statement):
    expr: Expression
    line: Line

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_return_statement(self)


@dataclass(frozen=True, slots=True)
class IfResultStatement(Statement):
    """The value a branch of an ``IfElse`` yields."""

    expr: Expression
    line: Line

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_if_result_statement(self)


# -----------------------------------------------------------------------------
# Functions and Files
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ParsedFunc:
    """
    A function declaration.

    Attributes:
        params: ``(name, declared type)`` pairs in order
        body: The statements of the body
        return_type: Declared return type, if any
    """

    params: tuple[tuple[str, ParsedType], ...]
    body: tuple[Statement, ...]
    return_type: Optional[ParsedType] = None


@dataclass(frozen=True, slots=True)
class ParsedFile(ASTNode):
    """
    Root node: everything parsed from one source file.

    Attributes:
        statements: Top-level statements in order
        funcs: ``(name, function, is_public)`` entries
        index: Position of this file in a multi-file compilation unit,
            assigned by the module loader
    """

    statements: tuple[Statement, ...]
    funcs: tuple[tuple[str, ParsedFunc, bool], ...] = ()
    index: int = 0

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_parsed_file(self)


# -----------------------------------------------------------------------------
# Visitor
# -----------------------------------------------------------------------------


class ASTVisitor:
    """
    Visitor pattern base class for AST traversal.

    Subclasses override the ``visit_*`` methods for the nodes they handle.
    Unhandled parser-produced nodes fall through to ``generic_visit``.
    Reserved nodes raise ``UnsupportedFeatureError`` unless a subclass
    explicitly takes them on.
    """

    def visit(self, node: ASTNode) -> Any:
        """Dispatch to the appropriate visit method."""
        return node.accept(self)

    def generic_visit(self, node: ASTNode) -> Any:
        raise NotImplementedError(
            f"{type(self).__name__} does not handle {type(node).__name__}"
        )

    # Types

    def visit_single_type(self, node: SingleType) -> Any:
        return self.generic_visit(node)

    def visit_tuple_type(self, node: TupleType) -> Any:
        return self.generic_visit(node)

    def visit_self_type(self, node: SelfType) -> Any:
        return self.generic_visit(node)

    # Expressions

    def visit_none_literal(self, node: NoneLiteral) -> Any:
        return self.generic_visit(node)

    def visit_int_literal(self, node: IntLiteral) -> Any:
        return self.generic_visit(node)

    def visit_num_literal(self, node: NumLiteral) -> Any:
        return self.generic_visit(node)

    def visit_char_literal(self, node: CharLiteral) -> Any:
        return self.generic_visit(node)

    def visit_bool_literal(self, node: BoolLiteral) -> Any:
        return self.generic_visit(node)

    def visit_str_literal(self, node: StrLiteral) -> Any:
        return self.generic_visit(node)

    def visit_var_expr(self, node: VarExpr) -> Any:
        return self.generic_visit(node)

    def visit_tuple_expr(self, node: TupleExpr) -> Any:
        return self.generic_visit(node)

    def visit_array_expr(self, node: ArrayExpr) -> Any:
        return self.generic_visit(node)

    def visit_construction(self, node: Construction) -> Any:
        return self.generic_visit(node)

    def visit_cast(self, node: Cast) -> Any:
        return self.generic_visit(node)

    def visit_neg_op(self, node: NegOp) -> Any:
        return self.generic_visit(node)

    def visit_not_op(self, node: NotOp) -> Any:
        return self.generic_visit(node)

    def visit_binary_op(self, node: BinaryOp) -> Any:
        raise UnsupportedFeatureError("binary operation")

    def visit_if_else(self, node: IfElse) -> Any:
        raise UnsupportedFeatureError("conditional expression")

    def visit_match(self, node: Match) -> Any:
        raise UnsupportedFeatureError("pattern match")

    def visit_chain(self, node: Chain) -> Any:
        raise UnsupportedFeatureError("member access and call chain")

    # Statements

    def visit_let_statement(self, node: LetStatement) -> Any:
        return self.generic_visit(node)

    def visit_expr_statement(self, node: ExprStatement) -> Any:
        return self.generic_visit(node)

    def visit_discard_statement(self, node: DiscardStatement) -> Any:
        return self.generic_visit(node)

    def visit_while_statement(self, node: WhileStatement) -> Any:
        raise UnsupportedFeatureError("while loop", node.line)

    def visit_for_statement(self, node: ForStatement) -> Any:
        raise UnsupportedFeatureError("for loop", node.line)

    def visit_continue_statement(self, node: ContinueStatement) -> Any:
        raise UnsupportedFeatureError("continue statement", node.line)

    def visit_break_statement(self, node: BreakStatement) -> Any:
        raise UnsupportedFeatureError("break statement", node.line)

    def visit_return_statement(self, node: ReturnStatement) -> Any:
        raise UnsupportedFeatureError("return statement", node.line)

    def visit_if_result_statement(self, node: IfResultStatement) -> Any:
        raise UnsupportedFeatureError("if result", node.line)

    # Root

    def visit_parsed_file(self, node: ParsedFile) -> Any:
        return self.generic_visit(node)
