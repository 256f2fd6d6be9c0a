"""Typed interfaces and errors for database-layer services.

All SQL access must remain in the db package and its submodules.
"""

from typing import Any, Mapping, Protocol, TypeVar

from hellosite.domain import UserRecord

RecordT = TypeVar("RecordT")


class DataStoreConnectionError(ConnectionError):
    """Raised when the data store cannot be reached at startup."""


class QueryRowError(RuntimeError):
    """Raised when a single-row query does not yield exactly one bindable row."""


class NoRowError(QueryRowError):
    """Raised when a single-row query returns no rows."""


class MultipleRowsError(QueryRowError):
    """Raised when a single-row query returns more than one row."""


class RowBindError(QueryRowError):
    """Raised when a row column cannot be bound to its record field."""


class DataStorePort(Protocol):
    """Port definition for scoped query execution against the data store."""

    def db_query_row(self, query: str, parameters: Mapping[str, Any] | None, record_type: type[RecordT]) -> RecordT:
        """Execute a query that must return exactly one row and bind it.

        Args:
            query: SQL text with named bind parameters.
            parameters: Bind parameter values.
            record_type: Dataclass whose fields receive the row columns in order.

        Returns:
            RecordT: Bound record instance.

        Raises:
            QueryRowError: Raised when the row count is not one or binding fails.
        """

    def db_close(self) -> None:
        """Release every pooled connection."""


class UserRepositoryPort(Protocol):
    """Port definition for user lookups."""

    def db_fetch_user(self) -> UserRecord:
        """Fetch the single user row.

        Returns:
            UserRecord: Bound user projection.

        Raises:
            QueryRowError: Raised when the table does not hold exactly one user.
        """
