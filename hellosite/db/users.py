"""User repository over the data store."""

from hellosite.domain import UserRecord

from .interfaces import DataStorePort, UserRepositoryPort

USER_SELECT_QUERY = "select id, name from users"


class SQLAlchemyUserRepository(UserRepositoryPort):
    """User lookups issued through the shared data store."""

    def __init__(self, data_store: DataStorePort):
        if data_store is None:
            raise ValueError("data_store must not be None")
        self._data_store = data_store

    def db_fetch_user(self) -> UserRecord:
        """Fetch the single user row.

        Returns:
            UserRecord: Bound user projection.

        Raises:
            QueryRowError: Raised when the table does not hold exactly one user.
        """

        return self._data_store.db_query_row(USER_SELECT_QUERY, None, UserRecord)
