"""
Translation of criteria expressions into SQL conditions.
"""

from typing import Any, Optional

from ..errors import UnsupportedExpressionError
from .dialect import Dialect
from .expr import Comparison, CompositeExpression, ExpressionVisitor, Value
from .query import QueryBuilder


class SqlExpressionVisitor(ExpressionVisitor):
    """
    Renders expressions as SQL and binds the values to a query builder.

        criteria = Criteria(Comparison('uuid', Comparison.EQ, order_id))
        criteria.or_where(Comparison('_related', Comparison.MEMBER_OF, order_id))

        qb = QueryBuilder(dialect)
        visitor = SqlExpressionVisitor(qb)
        qb.select('*').from_('events').and_where(criteria.get_where_expression().visit(visitor))

    Field names are written into the SQL as given and must come from
    trusted code.
    """

    _OPERATORS = {
        Comparison.EQ: '=',
        Comparison.NEQ: '<>',
        Comparison.LT: '<',
        Comparison.LTE: '<=',
        Comparison.GT: '>',
        Comparison.GTE: '>=',
    }

    def __init__(self, query_builder: QueryBuilder, dialect: Optional[Dialect] = None):
        self.query_builder = query_builder
        self.dialect = dialect or query_builder.dialect

    def walk_comparison(self, comparison: Comparison) -> str:
        field = comparison.get_field()
        operator = comparison.get_operator()
        value = comparison.get_value().get_value()

        if value is None and operator in (Comparison.EQ, Comparison.IS):
            return f"{field} IS NULL"
        if value is None and operator == Comparison.NEQ:
            return f"{field} IS NOT NULL"

        if operator in self._OPERATORS:
            return f"{field} {self._OPERATORS[operator]} {self.dispatch(comparison.get_value())}"
        if operator == Comparison.IS:
            return f"{field} = {self.dispatch(comparison.get_value())}"

        if operator in (Comparison.IN, Comparison.NIN):
            return self._walk_in(field, operator, value)

        if operator == Comparison.CONTAINS:
            return f"{field} LIKE {self._bind(f'%{value}%')}"
        if operator == Comparison.STARTS_WITH:
            return f"{field} LIKE {self._bind(f'{value}%')}"
        if operator == Comparison.ENDS_WITH:
            return f"{field} LIKE {self._bind(f'%{value}')}"

        if operator == Comparison.MEMBER_OF:
            return self.dialect.member_of(field, self.dispatch(comparison.get_value()))

        raise UnsupportedExpressionError(f"Unknown comparison operator {operator}")

    def _walk_in(self, field: str, operator: str, values: Any) -> str:
        values = list(values)
        if not values:
            # Nothing is in an empty list
            return '1 = 0' if operator == Comparison.IN else '1 = 1'

        placeholders = ', '.join(self._bind(value) for value in values)
        keyword = 'IN' if operator == Comparison.IN else 'NOT IN'
        return f"{field} {keyword} ({placeholders})"

    def walk_value(self, value: Value) -> str:
        return self._bind(value.get_value())

    def _bind(self, value: Any) -> str:
        parameters = self.query_builder.get_parameters()
        self.query_builder.set_parameter(len(parameters), value)
        return self.dialect.placeholder

    def walk_composite_expression(self, expr: CompositeExpression) -> str:
        expressions = [self.dispatch(child) for child in expr.get_expression_list()]

        if expr.get_type() == CompositeExpression.TYPE_AND:
            return '(' + ' AND '.join(expressions) + ')'
        if expr.get_type() == CompositeExpression.TYPE_OR:
            return '(' + ' OR '.join(expressions) + ')'
        if expr.get_type() == CompositeExpression.TYPE_NOT:
            return f"NOT ({expressions[0]})"

        raise UnsupportedExpressionError(f"Unknown composite {expr.get_type()}")
