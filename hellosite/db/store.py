"""Data store backed by a pooled SQLAlchemy engine."""

from __future__ import annotations

import dataclasses
import typing
from typing import Any, Mapping, TypeVar

from sqlalchemy import Engine, Row, text
from sqlalchemy.exc import MultipleResultsFound, NoResultFound

from .interfaces import DataStorePort, MultipleRowsError, NoRowError, RowBindError

RecordT = TypeVar("RecordT")


def db_bind_row(row: Row | tuple[Any, ...], record_type: type[RecordT]) -> RecordT:
    """Bind row columns positionally onto the fields of a record dataclass.

    Args:
        row: Result row.
        record_type: Dataclass type receiving the columns.

    Returns:
        RecordT: Record built from the row.

    Raises:
        RowBindError: Raised when the column count or a column type does not match.
    """

    record_fields = dataclasses.fields(record_type)
    values = tuple(row)
    if len(values) != len(record_fields):
        raise RowBindError(
            f"row has {len(values)} columns but {record_type.__name__} expects {len(record_fields)}"
        )

    type_hints = typing.get_type_hints(record_type)
    for field, value in zip(record_fields, values):
        expected_type = type_hints[field.name]
        if isinstance(value, bool) and expected_type is not bool:
            raise RowBindError(f"column {field.name} holds bool, expected {expected_type.__name__}")
        if not isinstance(value, expected_type):
            raise RowBindError(
                f"column {field.name} holds {type(value).__name__}, expected {expected_type.__name__}"
            )
    return record_type(*values)


class SQLAlchemyDataStore(DataStorePort):
    """Data store executing scoped queries on pooled connections.

    Each query checks one connection out of the bounded pool and returns it
    when the query finishes, so concurrent requests never share a connection.
    """

    def __init__(self, engine: Engine):
        """Initialize the data store.

        Args:
            engine: SQLAlchemy engine owning the connection pool.

        Raises:
            ValueError: Raised when engine is None.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_connection_label(self) -> str:
        return self._engine.url.render_as_string(hide_password=True)

    def db_query_row(
        self,
        query: str,
        parameters: Mapping[str, Any] | None,
        record_type: type[RecordT],
    ) -> RecordT:
        """Execute a query that must return exactly one row and bind it.

        Args:
            query: SQL text with named bind parameters.
            parameters: Bind parameter values.
            record_type: Dataclass whose fields receive the row columns in order.

        Returns:
            RecordT: Bound record instance.

        Raises:
            NoRowError: Raised when the query returns no rows.
            MultipleRowsError: Raised when the query returns more than one row.
            RowBindError: Raised when binding fails.
            SQLAlchemyError: Raised when query execution fails.
        """

        with self._engine.connect() as connection:
            result = connection.execute(text(query), dict(parameters or {}))
            try:
                row = result.one()
            except NoResultFound as error:
                raise NoRowError("query returned no rows") from error
            except MultipleResultsFound as error:
                raise MultipleRowsError("query returned more than one row") from error

        return db_bind_row(row, record_type)

    def db_close(self) -> None:
        self._engine.dispose()
