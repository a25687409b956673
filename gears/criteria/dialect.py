"""
SQL dialects.

A dialect returns the SQL fragments that differ between database
backends, so queries and schemas can be written once.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Type

from ..errors import InvalidArgumentError


class Dialect(ABC):
    """Fragments shared by the supported backends."""

    name = 'generic'
    placeholder = '?'
    unlimited = '-1'

    @abstractmethod
    def member_of(self, field: str, placeholder: str) -> str:
        """Condition: the JSON array in field contains the bound value."""

    def limit(self, max_results: Optional[int], first_result: Optional[int]) -> str:
        """LIMIT/OFFSET clause, empty when no slicing is requested."""
        if max_results is None and not first_result:
            return ''
        if max_results is None:
            return f" LIMIT {self.unlimited} OFFSET {int(first_result)}"

        clause = f" LIMIT {int(max_results)}"
        if first_result:
            clause += f" OFFSET {int(first_result)}"
        return clause

    def json_type(self) -> str:
        return 'TEXT'

    def text_type(self) -> str:
        return 'TEXT'

    def uuid_type(self, binary: bool) -> str:
        return 'BLOB' if binary else 'VARCHAR(36)'

    def auto_increment(self) -> str:
        return 'INTEGER PRIMARY KEY AUTOINCREMENT'

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SQLiteDialect(Dialect):
    """
    SQLite dialect.

    JSON arrays are searched with the json_each() table valued function.
    """

    name = 'sqlite'

    def member_of(self, field: str, placeholder: str) -> str:
        return f"EXISTS (SELECT 1 FROM json_each({field}) WHERE json_each.value = {placeholder})"


class MySQLDialect(Dialect):
    """MySQL dialect (MySQL 8.0.17+ for MEMBER OF)."""

    name = 'mysql'
    unlimited = '18446744073709551615'

    def member_of(self, field: str, placeholder: str) -> str:
        return f"{placeholder} MEMBER OF({field})"

    def json_type(self) -> str:
        return 'JSON'

    def text_type(self) -> str:
        return 'LONGTEXT'

    def uuid_type(self, binary: bool) -> str:
        return 'BINARY(16)' if binary else 'VARCHAR(36)'

    def auto_increment(self) -> str:
        return 'BIGINT PRIMARY KEY AUTO_INCREMENT'


_DIALECTS: Dict[str, Type[Dialect]] = {
    SQLiteDialect.name: SQLiteDialect,
    MySQLDialect.name: MySQLDialect,
}


def get_dialect(name: str) -> Dialect:
    """Return the dialect by name ('sqlite' or 'mysql')."""
    try:
        return _DIALECTS[name.lower()]()
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown SQL dialect '{name}', supported: {', '.join(sorted(_DIALECTS))}"
        )
