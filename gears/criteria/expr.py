"""
Criteria expression tree and the visitor that walks it.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any, List, Sequence

from ..errors import InvalidArgumentError, UnsupportedExpressionError


class Expression(ABC):
    """Base class of all criteria expressions."""

    @abstractmethod
    def visit(self, visitor: "ExpressionVisitor") -> Any:
        """Let the visitor walk this expression."""


class Value(Expression):
    """A literal value on the right side of a comparison."""

    def __init__(self, value: Any):
        self.value = value

    def get_value(self) -> Any:
        return self.value

    def visit(self, visitor: "ExpressionVisitor") -> Any:
        return visitor.walk_value(self)

    def __repr__(self) -> str:
        return f"Value({self.value!r})"


class Comparison(Expression):
    """Comparison of a field with a value."""

    EQ = '='
    NEQ = '<>'
    LT = '<'
    LTE = '<='
    GT = '>'
    GTE = '>='
    IS = 'IS'
    IN = 'IN'
    NIN = 'NIN'
    CONTAINS = 'CONTAINS'
    MEMBER_OF = 'MEMBER_OF'
    STARTS_WITH = 'STARTS_WITH'
    ENDS_WITH = 'ENDS_WITH'

    def __init__(self, field: str, operator: str, value: Any):
        if not isinstance(value, Value):
            value = Value(value)

        if operator in (self.IN, self.NIN):
            values = value.get_value()
            if isinstance(values, (str, bytes, Mapping)) or not isinstance(values, Iterable):
                raise InvalidArgumentError(
                    f"{operator} comparison on '{field}' requires a list of values, got {type(values).__name__}"
                )

        self.field = field
        self.operator = operator
        self.value = value

    def get_field(self) -> str:
        return self.field

    def get_operator(self) -> str:
        return self.operator

    def get_value(self) -> Value:
        return self.value

    def visit(self, visitor: "ExpressionVisitor") -> Any:
        return visitor.walk_comparison(self)

    def __repr__(self) -> str:
        return f"Comparison({self.field!r}, {self.operator!r}, {self.value.value!r})"


class CompositeExpression(Expression):
    """Logical combination of expressions."""

    TYPE_AND = 'AND'
    TYPE_OR = 'OR'
    TYPE_NOT = 'NOT'

    def __init__(self, type: str, expressions: Sequence[Expression]):
        expressions = list(expressions)
        for expression in expressions:
            if isinstance(expression, Value):
                raise InvalidArgumentError("Values are not supported expressions as children of composite expressions.")
            if not isinstance(expression, Expression):
                raise InvalidArgumentError(f"No expression given to CompositeExpression: {expression!r}")

        if type == self.TYPE_NOT and len(expressions) != 1:
            raise InvalidArgumentError("A NOT expression takes exactly one expression.")

        self.type = type
        self.expressions = expressions

    def get_type(self) -> str:
        return self.type

    def get_expression_list(self) -> List[Expression]:
        return list(self.expressions)

    def visit(self, visitor: "ExpressionVisitor") -> Any:
        return visitor.walk_composite_expression(self)

    def __repr__(self) -> str:
        return f"CompositeExpression({self.type!r}, {self.expressions!r})"


class ExpressionVisitor(ABC):
    """
    Walks an expression tree.

    Subclasses translate every kind of expression; dispatch() picks the
    right walk method for a node.
    """

    @abstractmethod
    def walk_comparison(self, comparison: Comparison) -> Any:
        """Convert a comparison expression."""

    @abstractmethod
    def walk_value(self, value: Value) -> Any:
        """Convert a value expression."""

    @abstractmethod
    def walk_composite_expression(self, expr: CompositeExpression) -> Any:
        """Convert a composite expression."""

    def dispatch(self, expr: Expression) -> Any:
        if isinstance(expr, Comparison):
            return self.walk_comparison(expr)
        if isinstance(expr, Value):
            return self.walk_value(expr)
        if isinstance(expr, CompositeExpression):
            return self.walk_composite_expression(expr)

        raise UnsupportedExpressionError(f"Unknown Expression {type(expr).__name__}")
