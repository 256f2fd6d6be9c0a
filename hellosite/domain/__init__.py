"""Domain models used across application layer boundaries."""

from .models import UserRecord

__all__ = ["UserRecord"]
