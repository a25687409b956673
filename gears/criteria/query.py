"""
Minimal SELECT query builder with positional parameters.
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple

from .dialect import Dialect, SQLiteDialect

logger = logging.getLogger(__name__)


def _combine(operator: str, predicates: Sequence[str]) -> str:
    if len(predicates) == 1:
        return predicates[0]
    return '(' + f') {operator} ('.join(predicates) + ')'


class QueryBuilder:
    """
    Builds a SELECT statement for a DB-API connection.

        qb = QueryBuilder()
        qb.select('*').from_('events').and_where('uuid = ?').set_parameter(0, order_id)
        cursor = qb.execute(connection)

    Parameters are positional, the SQL uses the dialect placeholder.
    """

    def __init__(self, dialect: Optional[Dialect] = None):
        self.dialect = dialect or SQLiteDialect()
        self._select: List[str] = []
        self._from: Optional[Tuple[str, Optional[str]]] = None
        self._where: Optional[str] = None
        self._order_by: List[str] = []
        self._first_result: Optional[int] = None
        self._max_results: Optional[int] = None
        self._parameters: List[Any] = []

    def select(self, *columns: str) -> "QueryBuilder":
        self._select = list(columns) or ['*']
        return self

    def add_select(self, *columns: str) -> "QueryBuilder":
        self._select.extend(columns)
        return self

    def from_(self, table: str, alias: Optional[str] = None) -> "QueryBuilder":
        self._from = (table, alias)
        return self

    def where(self, *predicates: str) -> "QueryBuilder":
        """Set the where clause, predicates are combined with AND."""
        self._where = _combine('AND', predicates) if predicates else None
        return self

    def and_where(self, *predicates: str) -> "QueryBuilder":
        if self._where is not None:
            predicates = (self._where,) + predicates
        return self.where(*predicates)

    def or_where(self, *predicates: str) -> "QueryBuilder":
        if self._where is not None:
            predicates = (self._where,) + predicates
        self._where = _combine('OR', predicates) if predicates else None
        return self

    def order_by(self, sort: str, order: Optional[str] = None) -> "QueryBuilder":
        self._order_by = []
        return self.add_order_by(sort, order)

    def add_order_by(self, sort: str, order: Optional[str] = None) -> "QueryBuilder":
        self._order_by.append(f"{sort} {order.upper()}" if order else sort)
        return self

    def set_first_result(self, first_result: Optional[int]) -> "QueryBuilder":
        self._first_result = first_result
        return self

    def set_max_results(self, max_results: Optional[int]) -> "QueryBuilder":
        self._max_results = max_results
        return self

    def set_parameter(self, index: int, value: Any) -> "QueryBuilder":
        """Bind a positional parameter; index len(parameters) appends."""
        if index == len(self._parameters):
            self._parameters.append(value)
        else:
            self._parameters[index] = value
        return self

    def get_parameters(self) -> List[Any]:
        return list(self._parameters)

    def get_sql(self) -> str:
        if self._from is None:
            raise ValueError("No table to select from, call from_() first")

        table, alias = self._from
        sql = f"SELECT {', '.join(self._select or ['*'])} FROM {table}"
        if alias:
            sql += f" {alias}"
        if self._where:
            sql += f" WHERE {self._where}"
        if self._order_by:
            sql += f" ORDER BY {', '.join(self._order_by)}"

        return sql + self.dialect.limit(self._max_results, self._first_result)

    def execute(self, connection: Any):
        """Run the query on a DB-API connection and return the cursor."""
        sql = self.get_sql()
        logger.debug("Executing %s with %d parameters", sql, len(self._parameters))

        cursor = connection.cursor()
        cursor.execute(sql, self._parameters)
        return cursor

    def __str__(self) -> str:
        return self.get_sql()
