"""
Event store on a DB-API 2.0 connection.
"""

import json
import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, List, Optional

from ..core.config import Config
from ..criteria import Criteria, Dialect, QueryBuilder, SQLiteDialect, SqlExpressionVisitor, get_dialect
from ..errors import DuplicatePlayheadError, EventStreamNotFoundError, StorageError
from .base import SelectableEventStore
from .domain import DomainEventStream, DomainMessage
from .related import related_ids
from .serializer import Serializer

logger = logging.getLogger(__name__)


class SqlEventStore(SelectableEventStore):
    """
    Stores domain messages in a single table.

        store = SqlEventStore(sqlite3.connect('events.db'), serializer, serializer, 'events')
        store.configure_schema()
        store.append(order_id, DomainEventStream([...]))

        criteria = Criteria(Comparison('uuid', Comparison.EQ, order_id))
        criteria.or_where(Comparison('_related', Comparison.MEMBER_OF, order_id))
        store.walk(criteria, lambda message: print(message.payload))

    The _related column holds a JSON array with the related ids of
    RelatedProcessEvent payloads, so related events can be selected with
    MEMBER_OF. With use_binary the aggregate ids are stored as 16 bytes and
    must be UUIDs.
    """

    def __init__(
        self,
        connection: Any,
        payload_serializer: Serializer,
        metadata_serializer: Serializer,
        table_name: str,
        use_binary: bool = False,
        dialect: Optional[Dialect] = None,
    ):
        self.connection = connection
        self.payload_serializer = payload_serializer
        self.metadata_serializer = metadata_serializer
        self.table_name = table_name
        self.use_binary = use_binary
        self.dialect = dialect or SQLiteDialect()

    @classmethod
    def from_config(
        cls,
        connection: Any,
        payload_serializer: Serializer,
        metadata_serializer: Serializer,
        config: Config,
    ) -> "SqlEventStore":
        """Create a store with the table, binary ids and dialect of the configuration."""
        return cls(
            connection,
            payload_serializer,
            metadata_serializer,
            config.event_store_table,
            config.event_store_use_binary,
            get_dialect(config.sql_dialect),
        )

    def configure_schema(self) -> None:
        """Create the events table if it does not exist."""
        d = self.dialect
        sql = (
            f"CREATE TABLE IF NOT EXISTS {self.table_name} ("
            f"id {d.auto_increment()}, "
            f"uuid {d.uuid_type(self.use_binary)} NOT NULL, "
            f"playhead INTEGER NOT NULL, "
            f"payload {d.text_type()} NOT NULL, "
            f"metadata {d.text_type()} NOT NULL, "
            f"recorded_on VARCHAR(32) NOT NULL, "
            f"type VARCHAR(255) NOT NULL, "
            f"_related {d.json_type()} NOT NULL, "
            f"UNIQUE (uuid, playhead))"
        )

        cursor = self.connection.cursor()
        try:
            cursor.execute(sql)
            self.connection.commit()
        finally:
            cursor.close()

        logger.info("Event store table %s is ready", self.table_name)

    def load(self, id: Any) -> DomainEventStream:
        stream = self.load_from_playhead(id, 0)
        if not len(stream):
            raise EventStreamNotFoundError(
                f"EventStream not found for aggregate with id {id} for table {self.table_name}",
                metadata={"id": str(id)},
            )
        return stream

    def load_from_playhead(self, id: Any, playhead: int) -> DomainEventStream:
        placeholder = self.dialect.placeholder
        sql = (
            f"SELECT uuid, playhead, metadata, payload, recorded_on FROM {self.table_name} "
            f"WHERE uuid = {placeholder} AND playhead >= {placeholder} ORDER BY playhead ASC"
        )

        cursor = self.connection.cursor()
        try:
            cursor.execute(sql, [self._convert_identifier(id), playhead])
            messages = [self._deserialize_event(row) for row in self._rows(cursor)]
        finally:
            cursor.close()

        return DomainEventStream(messages)

    def append(self, id: Any, stream: DomainEventStream) -> None:
        placeholders = ', '.join([self.dialect.placeholder] * 7)
        sql = (
            f"INSERT INTO {self.table_name} "
            f"(uuid, playhead, metadata, payload, recorded_on, type, _related) "
            f"VALUES ({placeholders})"
        )

        # DB-API drivers expose their exceptions on the connection
        integrity_error = getattr(self.connection, 'IntegrityError', ())

        cursor = self.connection.cursor()
        try:
            for message in stream:
                cursor.execute(sql, self._prepare_row(message))
            self.connection.commit()
        except integrity_error as e:
            self.connection.rollback()
            raise DuplicatePlayheadError(
                f"An event with the same playhead was already recorded for aggregate {id}",
                cause=e,
                metadata={"id": str(id)},
            )
        except Exception as e:
            self.connection.rollback()
            raise StorageError(f"Failed to append events for aggregate {id}: {e}", cause=e)
        finally:
            cursor.close()

        logger.debug("Appended %d events to aggregate %s", len(stream), id)

    def walk(self, criteria: Criteria, callback: Callable[[DomainMessage], Any]) -> None:
        query_builder = QueryBuilder(self.dialect)
        visitor = SqlExpressionVisitor(query_builder)

        query_builder.select('*').from_(self.table_name)

        expression = criteria.get_where_expression()
        if expression is not None:
            query_builder.and_where(expression.visit(visitor))

        for field, direction in (criteria.get_orderings() or {'id': 'ASC'}).items():
            query_builder.add_order_by(field, direction)

        query_builder.set_first_result(criteria.get_first_result())
        query_builder.set_max_results(criteria.get_max_results())

        cursor = query_builder.execute(self.connection)
        try:
            for row in self._rows(cursor):
                callback(self._deserialize_event(row))
        finally:
            cursor.close()

    def _prepare_row(self, message: DomainMessage) -> List[Any]:
        return [
            self._convert_identifier(message.id),
            message.playhead,
            json.dumps(self.metadata_serializer.serialize(message.metadata)),
            json.dumps(self.payload_serializer.serialize(message.payload)),
            message.recorded_on.isoformat(),
            message.type,
            json.dumps(related_ids(message.payload)),
        ]

    def _deserialize_event(self, row: Dict[str, Any]) -> DomainMessage:
        return DomainMessage(
            self._convert_stored_identifier(row['uuid']),
            int(row['playhead']),
            self.metadata_serializer.deserialize(json.loads(row['metadata'])),
            self.payload_serializer.deserialize(json.loads(row['payload'])),
            datetime.fromisoformat(row['recorded_on']),
        )

    @staticmethod
    def _rows(cursor) -> Iterator[Dict[str, Any]]:
        columns = [column[0] for column in cursor.description]
        for row in cursor.fetchall():
            yield dict(zip(columns, row))

    def _convert_identifier(self, id: Any) -> Any:
        if self.use_binary:
            return uuid.UUID(str(id)).bytes
        return str(id)

    def _convert_stored_identifier(self, id: Any) -> str:
        if self.use_binary:
            return str(uuid.UUID(bytes=bytes(id)))
        return id
