"""Exceções de infraestrutura para falhas recuperáveis de IO."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class StorageUnavailableError(InfrastructureError):
    """Store de pedidos indisponível (não inicializado ou sem conexão)."""


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao acessar Redis."""


class FirestoreUnavailableError(StorageUnavailableError):
    """Falha de indisponibilidade ao acessar Firestore."""
