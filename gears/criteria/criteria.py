"""
Criteria: a where expression plus ordering and slicing.
"""

from typing import Any, Dict, Iterable, Optional

from .expr import Comparison, CompositeExpression, Expression

ASC = 'ASC'
DESC = 'DESC'


def _as_list(values: Any) -> Any:
    # Strings and scalars are left alone so Comparison can reject them
    if isinstance(values, (str, bytes)) or not hasattr(values, '__iter__'):
        return values
    return list(values)


class ExpressionBuilder:
    """Shortcuts for building expressions."""

    def and_x(self, *expressions: Expression) -> CompositeExpression:
        return CompositeExpression(CompositeExpression.TYPE_AND, expressions)

    def or_x(self, *expressions: Expression) -> CompositeExpression:
        return CompositeExpression(CompositeExpression.TYPE_OR, expressions)

    def not_(self, expression: Expression) -> CompositeExpression:
        return CompositeExpression(CompositeExpression.TYPE_NOT, [expression])

    def eq(self, field: str, value: Any) -> Comparison:
        return Comparison(field, Comparison.EQ, value)

    def neq(self, field: str, value: Any) -> Comparison:
        return Comparison(field, Comparison.NEQ, value)

    def lt(self, field: str, value: Any) -> Comparison:
        return Comparison(field, Comparison.LT, value)

    def lte(self, field: str, value: Any) -> Comparison:
        return Comparison(field, Comparison.LTE, value)

    def gt(self, field: str, value: Any) -> Comparison:
        return Comparison(field, Comparison.GT, value)

    def gte(self, field: str, value: Any) -> Comparison:
        return Comparison(field, Comparison.GTE, value)

    def is_null(self, field: str) -> Comparison:
        return Comparison(field, Comparison.IS, None)

    def is_not_null(self, field: str) -> Comparison:
        return Comparison(field, Comparison.NEQ, None)

    def in_(self, field: str, values: Iterable[Any]) -> Comparison:
        return Comparison(field, Comparison.IN, _as_list(values))

    def not_in(self, field: str, values: Iterable[Any]) -> Comparison:
        return Comparison(field, Comparison.NIN, _as_list(values))

    def contains(self, field: str, value: Any) -> Comparison:
        return Comparison(field, Comparison.CONTAINS, value)

    def member_of(self, field: str, value: Any) -> Comparison:
        return Comparison(field, Comparison.MEMBER_OF, value)

    def starts_with(self, field: str, value: Any) -> Comparison:
        return Comparison(field, Comparison.STARTS_WITH, value)

    def ends_with(self, field: str, value: Any) -> Comparison:
        return Comparison(field, Comparison.ENDS_WITH, value)


_expression_builder = ExpressionBuilder()


class Criteria:
    """
    Filtering, ordering and slicing of a result set.

        criteria = Criteria(Comparison('uuid', Comparison.EQ, order_id))
        criteria.or_where(Comparison('_related', Comparison.MEMBER_OF, order_id))
    """

    def __init__(
        self,
        expression: Optional[Expression] = None,
        orderings: Optional[Dict[str, str]] = None,
        first_result: Optional[int] = None,
        max_results: Optional[int] = None,
    ):
        self._expression = expression
        self._orderings: Dict[str, str] = {}
        self._first_result = first_result
        self._max_results = max_results

        if orderings:
            self.order_by(orderings)

    @classmethod
    def create(cls) -> "Criteria":
        return cls()

    @staticmethod
    def expr() -> ExpressionBuilder:
        return _expression_builder

    def where(self, expression: Expression) -> "Criteria":
        """Set the where expression, replacing any previous one."""
        self._expression = expression
        return self

    def and_where(self, expression: Expression) -> "Criteria":
        """Append an expression with AND."""
        if self._expression is None:
            return self.where(expression)

        self._expression = CompositeExpression(
            CompositeExpression.TYPE_AND, [self._expression, expression]
        )
        return self

    def or_where(self, expression: Expression) -> "Criteria":
        """Append an expression with OR."""
        if self._expression is None:
            return self.where(expression)

        self._expression = CompositeExpression(
            CompositeExpression.TYPE_OR, [self._expression, expression]
        )
        return self

    def get_where_expression(self) -> Optional[Expression]:
        return self._expression

    def order_by(self, orderings: Dict[str, str]) -> "Criteria":
        """Set the orderings, a map of field to ASC or DESC."""
        self._orderings = {
            field: DESC if str(direction).upper() == DESC else ASC
            for field, direction in orderings.items()
        }
        return self

    def get_orderings(self) -> Dict[str, str]:
        return dict(self._orderings)

    def set_first_result(self, first_result: Optional[int]) -> "Criteria":
        self._first_result = first_result
        return self

    def get_first_result(self) -> Optional[int]:
        return self._first_result

    def set_max_results(self, max_results: Optional[int]) -> "Criteria":
        self._max_results = max_results
        return self

    def get_max_results(self) -> Optional[int]:
        return self._max_results


def merge_criteria(*criteria: Criteria) -> Criteria:
    """
    Merge the where expressions of several criteria into a new one with AND.

        merge_criteria(
            Criteria(Comparison('status', Comparison.EQ, 'new')),
            Criteria(Comparison('type', Comparison.NEQ, 'foo')),
        )
    """
    result = Criteria()

    for item in criteria:
        expression = item.get_where_expression()
        if expression is not None:
            result.and_where(expression)

    return result
