"""Factories de clientes externos - Redis e Firestore."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# Redis Client Factory
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def create_async_redis_client(redis_url: str) -> AsyncRedis[bytes]:
    """Cria cliente Redis assíncrono (singleton por URL).

    Returns:
        Cliente Redis assíncrono

    Raises:
        ValueError: Se redis_url vazio
    """
    from redis.asyncio import Redis as AsyncRedis

    if not redis_url:
        msg = "REDIS_URL não configurado"
        raise ValueError(msg)

    client: AsyncRedis[bytes] = AsyncRedis.from_url(
        redis_url,
        decode_responses=False,
        socket_connect_timeout=5.0,
        health_check_interval=30,
    )

    host = client.connection_pool.connection_kwargs.get("host", "unknown")
    logger.info("async_redis_client_created", extra={"host": host})
    return client


# ──────────────────────────────────────────────────────────────────────────────
# Firestore Client Factory
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def create_firestore_client(project_id: str, database: str = "(default)") -> FirestoreClient:
    """Cria cliente Firestore (singleton por projeto/database).

    Returns:
        Cliente Firestore
    """
    from google.cloud import firestore

    client = firestore.Client(project=project_id or None, database=database)
    logger.info(
        "firestore_client_created",
        extra={"project": project_id, "database": database},
    )
    return client
