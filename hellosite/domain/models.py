"""Typed row projections fetched from the data store."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserRecord:
    """Fixed-shape projection of one ``users`` row.

    Attributes:
        id: Primary key of the user.
        name: Display name of the user.
    """

    id: int
    name: str
