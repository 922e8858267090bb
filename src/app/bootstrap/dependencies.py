"""Factories de stores e serviços: wiring de implementações concretas.

Backends escolhidos por configuração:
- ORDER_STORE_BACKEND: memory (dev) | firestore (staging/production)
- NOTIFIER_BACKEND: local (instância única) | redis (multi-instância)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.bootstrap.clients import create_async_redis_client, create_firestore_client
from app.domain.qr_payload import BankAccount
from app.infra.notifications import LocalBroadcaster, RedisPaymentNotifier
from app.infra.stores import GatedOrderStore, MemoryOrderStore
from app.use_cases.orders import CreateOrderUseCase, GetOrderUseCase
from app.use_cases.payments import WebhookReconciler
from config.settings import (
    get_bank_settings,
    get_base_settings,
    get_firestore_settings,
    get_order_settings,
)

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

    from app.protocols.order_store import OrderStoreProtocol
    from app.protocols.payment_notifier import PaymentNotifierProtocol
    from config.settings import OrderSettings

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# Order Store Factory
# ──────────────────────────────────────────────────────────────────────────────


def create_order_store(settings: OrderSettings | None = None) -> GatedOrderStore:
    """Cria store de pedidos (sempre atrás do readiness gate).

    Returns:
        GatedOrderStore; initialize() deve ser chamado no startup.

    Raises:
        ValueError: Backend desconhecido
    """
    settings = settings or get_order_settings()
    backend = settings.store_backend

    inner: OrderStoreProtocol
    if backend == "firestore":
        # Import tardio: google-cloud-firestore só é carregado quando usado
        from app.infra.stores.firestore_order_store import FirestoreOrderStore

        fs_settings = get_firestore_settings()
        client = create_firestore_client(
            fs_settings.project_id or get_base_settings().gcp_project,
            fs_settings.database,
        )
        inner = FirestoreOrderStore(client, collection=fs_settings.collection_orders)
    elif backend == "memory":
        base = get_base_settings()
        if not base.is_development:
            logger.warning(
                "memory_store_in_non_dev",
                extra={"backend": "memory", "environment": base.environment},
            )
        inner = MemoryOrderStore()
    else:
        msg = f"ORDER_STORE_BACKEND inválido: {backend}"
        raise ValueError(msg)

    logger.info("order_store_created", extra={"backend": backend})
    return GatedOrderStore(inner)


# ──────────────────────────────────────────────────────────────────────────────
# Notifier Factory
# ──────────────────────────────────────────────────────────────────────────────


def create_notifier(
    broadcaster: LocalBroadcaster,
    settings: OrderSettings | None = None,
) -> tuple[PaymentNotifierProtocol, AsyncRedis[bytes] | None]:
    """Cria notifier de eventos de pagamento.

    Returns:
        (notifier, cliente Redis ou None quando backend local)
    """
    settings = settings or get_order_settings()
    if settings.notifier_backend == "redis":
        redis_client = create_async_redis_client(get_base_settings().redis_url)
        logger.info("payment_notifier_created", extra={"backend": "redis"})
        return RedisPaymentNotifier(redis_client, broadcaster), redis_client

    logger.info("payment_notifier_created", extra={"backend": "local"})
    return broadcaster, None


# ──────────────────────────────────────────────────────────────────────────────
# Container
# ──────────────────────────────────────────────────────────────────────────────


@dataclass
class ServiceContainer:
    """Dependências do processo, criadas uma vez no startup."""

    store: GatedOrderStore
    broadcaster: LocalBroadcaster
    notifier: PaymentNotifierProtocol
    create_order: CreateOrderUseCase
    get_order: GetOrderUseCase
    reconciler: WebhookReconciler
    redis_client: AsyncRedis[bytes] | None = None


def build_container(
    *,
    store: GatedOrderStore | None = None,
    notifier: PaymentNotifierProtocol | None = None,
    broadcaster: LocalBroadcaster | None = None,
    account: BankAccount | None = None,
) -> ServiceContainer:
    """Monta o container; argumentos explícitos substituem os defaults (testes)."""
    order_settings = get_order_settings()
    broadcaster = broadcaster or LocalBroadcaster(order_settings.subscriber_queue_size)
    store = store or create_order_store(order_settings)

    redis_client = None
    if notifier is None:
        notifier, redis_client = create_notifier(broadcaster, order_settings)

    account = account or BankAccount.from_settings(get_bank_settings())

    return ServiceContainer(
        store=store,
        broadcaster=broadcaster,
        notifier=notifier,
        create_order=CreateOrderUseCase(
            store,
            account,
            code_prefix=order_settings.code_prefix,
            max_attempts=order_settings.code_max_attempts,
        ),
        get_order=GetOrderUseCase(store),
        reconciler=WebhookReconciler(
            store,
            notifier,
            code_prefix=order_settings.code_prefix,
        ),
        redis_client=redis_client,
    )
