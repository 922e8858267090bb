"""Settings de pedidos: código, store e fan-out de notificações."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

OrderStoreBackend = Literal["memory", "firestore"]
NotifierBackend = Literal["local", "redis"]

DEFAULT_ORDER_CODE_PREFIX = "MEOSTORE"


@dataclass(frozen=True)
class OrderSettings:
    """Configurações do ciclo de vida de pedidos.

    Attributes:
        code_prefix: Prefixo do código de pedido (ex: MEOSTORE)
        code_max_attempts: Tentativas de gerar código único antes de falhar
        store_backend: Backend do store de pedidos (memory|firestore)
        notifier_backend: Backend do fan-out (local|redis)
        subscriber_queue_size: Eventos pendentes por observer antes de descartar
    """

    code_prefix: str = DEFAULT_ORDER_CODE_PREFIX
    code_max_attempts: int = 5
    store_backend: OrderStoreBackend = "memory"
    notifier_backend: NotifierBackend = "local"
    subscriber_queue_size: int = 100

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações de pedidos.

        Args:
            base: BaseSettings para verificar ambiente e dependências.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if not self.code_prefix.isalnum():
            errors.append("ORDER_CODE_PREFIX deve ser alfanumérico")

        if self.code_max_attempts < 1:
            errors.append("ORDER_CODE_MAX_ATTEMPTS deve ser >= 1")

        if self.store_backend not in ("memory", "firestore"):
            errors.append(f"ORDER_STORE_BACKEND inválido: {self.store_backend}")

        if self.store_backend == "memory" and not base.is_development:
            errors.append(
                "ORDER_STORE_BACKEND=memory proibido em staging/production. "
                "Use Firestore."
            )

        if self.store_backend == "firestore" and not base.gcp_project:
            errors.append("ORDER_STORE_BACKEND=firestore requer GCP_PROJECT configurado")

        if self.notifier_backend not in ("local", "redis"):
            errors.append(f"NOTIFIER_BACKEND inválido: {self.notifier_backend}")

        if self.notifier_backend == "redis" and not base.redis_url:
            errors.append("NOTIFIER_BACKEND=redis requer REDIS_URL configurado")

        if self.subscriber_queue_size <= 0:
            errors.append("NOTIFIER_SUBSCRIBER_QUEUE_SIZE deve ser > 0")

        return errors


def _default_store_backend() -> str:
    environment = os.getenv("ENVIRONMENT", "development").lower()
    return "firestore" if environment in ("staging", "production") else "memory"


def _load_orders_from_env() -> OrderSettings:
    """Carrega OrderSettings de variáveis de ambiente."""
    return OrderSettings(
        code_prefix=os.getenv("ORDER_CODE_PREFIX", DEFAULT_ORDER_CODE_PREFIX).upper(),
        code_max_attempts=int(os.getenv("ORDER_CODE_MAX_ATTEMPTS", "5")),
        store_backend=os.getenv(  # type: ignore[arg-type]
            "ORDER_STORE_BACKEND", _default_store_backend()
        ).lower(),
        notifier_backend=os.getenv("NOTIFIER_BACKEND", "local").lower(),  # type: ignore[arg-type]
        subscriber_queue_size=int(os.getenv("NOTIFIER_SUBSCRIBER_QUEUE_SIZE", "100")),
    )


@lru_cache(maxsize=1)
def get_order_settings() -> OrderSettings:
    """Retorna instância cacheada de OrderSettings."""
    return _load_orders_from_env()
