"""Database engine utilities.

This module centralizes database connectivity primitives to enforce the db-layer
boundary for all SQLAlchemy usage.
"""

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError

from hellosite.log import log_get_logger

from .interfaces import DataStoreConnectionError

logger = log_get_logger(__name__)


def db_create_engine(database_url: str, pool_size: int = 5) -> Engine:
    """Create the SQLAlchemy engine with a bounded connection pool.

    Args:
        database_url: SQLAlchemy database URL.
        pool_size: Maximum number of pooled connections; no overflow is allowed.

    Returns:
        Engine: Configured SQLAlchemy engine.

    Raises:
        ValueError: Raised when the database URL is blank or the pool size is not positive.
    """

    if not database_url.strip():
        raise ValueError("database_url must not be blank")
    if pool_size < 1:
        raise ValueError("pool_size must be positive")

    return create_engine(database_url, pool_pre_ping=True, pool_size=pool_size, max_overflow=0)


def db_connect(database_url: str, pool_size: int = 5) -> Engine:
    """Create the engine and verify connectivity with a lightweight query.

    Args:
        database_url: SQLAlchemy database URL.
        pool_size: Maximum number of pooled connections.

    Returns:
        Engine: Engine with at least one verified connection.

    Raises:
        DataStoreConnectionError: Raised when the database cannot be reached.
    """

    try:
        engine = db_create_engine(database_url=database_url, pool_size=pool_size)
    except (ValueError, TypeError, SQLAlchemyError) as error:
        raise DataStoreConnectionError(f"database engine could not be created: {error}") from error

    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as error:
        engine.dispose()
        raise DataStoreConnectionError("database connectivity check failed") from error

    logger.info("Connected to database %s", engine.url.render_as_string(hide_password=True))
    return engine
