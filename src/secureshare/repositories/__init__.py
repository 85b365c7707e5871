"""Storage backends for users and transfers."""

from .base import Store, TransferStore, UserStore
from .memory import InMemoryStore
from .sql import SqlStore

__all__ = ["InMemoryStore", "SqlStore", "Store", "TransferStore", "UserStore"]
