"""
Criteria package: expression trees for filtering, translated into SQL
conditions or evaluated in memory.
"""

from .expr import Expression, Value, Comparison, CompositeExpression, ExpressionVisitor
from .criteria import ASC, DESC, Criteria, ExpressionBuilder, merge_criteria
from .dialect import Dialect, SQLiteDialect, MySQLDialect, get_dialect
from .query import QueryBuilder
from .sql import SqlExpressionVisitor
from .closure import ClosureExpressionVisitor, get_field_value, matching

__all__ = [
    'Expression', 'Value', 'Comparison', 'CompositeExpression', 'ExpressionVisitor',
    'ASC', 'DESC', 'Criteria', 'ExpressionBuilder', 'merge_criteria',
    'Dialect', 'SQLiteDialect', 'MySQLDialect', 'get_dialect',
    'QueryBuilder', 'SqlExpressionVisitor',
    'ClosureExpressionVisitor', 'get_field_value', 'matching',
]
