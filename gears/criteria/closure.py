"""
In-memory evaluation of criteria against objects and mappings.
"""

import functools
from collections.abc import Iterable, Mapping
from typing import Any, Callable, List

from ..errors import UnsupportedExpressionError
from ..property import NullTolerancePropertyAccessor, is_scalar
from .criteria import DESC, Criteria
from .expr import Comparison, CompositeExpression, ExpressionVisitor, Value

Predicate = Callable[[Any], bool]

_accessor = NullTolerancePropertyAccessor()


def get_field_value(item: Any, field: str) -> Any:
    """Read a field from a mapping item or an object, None if unreadable."""
    if isinstance(item, Mapping):
        return item.get(field)
    return _accessor.get_value(item, field)


def _ordered(compare: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def wrapped(left, right) -> bool:
        if left is None or right is None:
            return False
        return compare(left, right)

    return wrapped


def _contains(haystack: Any, needle: Any) -> bool:
    if isinstance(haystack, str):
        return needle is not None and str(needle) in haystack
    return False


def _member_of(collection: Any, value: Any) -> bool:
    if isinstance(collection, Mapping):
        return value in collection.values()
    if isinstance(collection, Iterable) and not is_scalar(collection):
        return value in collection
    return False


class ClosureExpressionVisitor(ExpressionVisitor):
    """
    Compiles an expression into a predicate.

        predicate = criteria.get_where_expression().visit(ClosureExpressionVisitor())
        matching = [item for item in items if predicate(item)]
    """

    _COMPARATORS = {
        Comparison.EQ: lambda left, right: left == right,
        Comparison.IS: lambda left, right: left == right,
        Comparison.NEQ: lambda left, right: left != right,
        Comparison.LT: _ordered(lambda left, right: left < right),
        Comparison.LTE: _ordered(lambda left, right: left <= right),
        Comparison.GT: _ordered(lambda left, right: left > right),
        Comparison.GTE: _ordered(lambda left, right: left >= right),
        Comparison.IN: lambda left, right: left in right,
        Comparison.NIN: lambda left, right: left not in right,
        Comparison.CONTAINS: _contains,
        Comparison.MEMBER_OF: _member_of,
        Comparison.STARTS_WITH: lambda left, right: isinstance(left, str) and left.startswith(str(right)),
        Comparison.ENDS_WITH: lambda left, right: isinstance(left, str) and left.endswith(str(right)),
    }

    def walk_comparison(self, comparison: Comparison) -> Predicate:
        operator = comparison.get_operator()
        if operator not in self._COMPARATORS:
            raise UnsupportedExpressionError(f"Unknown comparison operator {operator}")

        compare = self._COMPARATORS[operator]
        field = comparison.get_field()
        value = self.dispatch(comparison.get_value())

        return lambda item: bool(compare(get_field_value(item, field), value))

    def walk_value(self, value: Value) -> Any:
        return value.get_value()

    def walk_composite_expression(self, expr: CompositeExpression) -> Predicate:
        predicates = [self.dispatch(child) for child in expr.get_expression_list()]

        if expr.get_type() == CompositeExpression.TYPE_AND:
            return lambda item: all(predicate(item) for predicate in predicates)
        if expr.get_type() == CompositeExpression.TYPE_OR:
            return lambda item: any(predicate(item) for predicate in predicates)
        if expr.get_type() == CompositeExpression.TYPE_NOT:
            return lambda item: not predicates[0](item)

        raise UnsupportedExpressionError(f"Unknown composite {expr.get_type()}")


def _compare_values(left: Any, right: Any) -> int:
    # None sorts first
    if left is None or right is None:
        return (left is not None) - (right is not None)
    if left == right:
        return 0
    return -1 if left < right else 1


def matching(items: Iterable[Any], criteria: Criteria) -> List[Any]:
    """Filter, order and slice items in memory according to the criteria."""
    result = list(items)

    expression = criteria.get_where_expression()
    if expression is not None:
        predicate = expression.visit(ClosureExpressionVisitor())
        result = [item for item in result if predicate(item)]

    orderings = criteria.get_orderings()
    if orderings:
        def compare(left, right) -> int:
            for field, direction in orderings.items():
                order = _compare_values(get_field_value(left, field), get_field_value(right, field))
                if order:
                    return -order if direction == DESC else order
            return 0

        result.sort(key=functools.cmp_to_key(compare))

    first = criteria.get_first_result() or 0
    max_results = criteria.get_max_results()
    if first or max_results is not None:
        result = result[first:None if max_results is None else first + max_results]

    return result
