from .base import BaseStorageQuerySet, StorageProvider
from .inmemory import InMemoryProvider
from .pgvector.provider import PgVectorProvider

__all__ = [
    "StorageProvider",
    "BaseStorageQuerySet",
    "InMemoryProvider",
    "PgVectorProvider",
]
