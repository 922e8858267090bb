"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    FirestoreUnavailableError,
    InfrastructureError,
    RedisConnectionError,
    StorageUnavailableError,
)

__all__ = [
    "FirestoreUnavailableError",
    "InfrastructureError",
    "RedisConnectionError",
    "StorageUnavailableError",
]
