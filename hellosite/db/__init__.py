"""Database layer package for all SQL and persistence boundaries."""

from .interfaces import (
    DataStoreConnectionError,
    DataStorePort,
    MultipleRowsError,
    NoRowError,
    QueryRowError,
    RowBindError,
    UserRepositoryPort,
)
from .session import db_connect, db_create_engine
from .store import SQLAlchemyDataStore, db_bind_row
from .users import USER_SELECT_QUERY, SQLAlchemyUserRepository

__all__ = [
    "DataStoreConnectionError",
    "DataStorePort",
    "MultipleRowsError",
    "NoRowError",
    "QueryRowError",
    "RowBindError",
    "SQLAlchemyDataStore",
    "SQLAlchemyUserRepository",
    "USER_SELECT_QUERY",
    "UserRepositoryPort",
    "db_bind_row",
    "db_connect",
    "db_create_engine",
]
