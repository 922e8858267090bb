"""Gate de prontidão para o store de pedidos.

Enquanto initialize() não concluir, toda operação falha rápido com
StorageUnavailableError em vez de chegar num backend não conectado.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.order_store import OrderStoreProtocol
from utils.errors import StorageUnavailableError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.order import Order, PaidFields

logger = logging.getLogger(__name__)


class GatedOrderStore(OrderStoreProtocol):
    """Decorator de OrderStoreProtocol com readiness gating."""

    def __init__(self, inner: OrderStoreProtocol) -> None:
        self._inner = inner
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def backend(self) -> str:
        return type(self._inner).__name__

    def _ensure_ready(self) -> None:
        if not self._ready:
            raise StorageUnavailableError("order_store_not_ready")

    async def initialize(self) -> None:
        await self._inner.initialize()
        self._ready = True
        logger.info("order_store_ready", extra={"backend": self.backend})

    def close(self) -> None:
        self._ready = False

    async def insert(self, order: Order) -> None:
        self._ensure_ready()
        await self._inner.insert(order)

    async def find_by_code(self, order_code: str) -> Order | None:
        self._ensure_ready()
        return await self._inner.find_by_code(order_code)

    async def compare_and_set_paid(
        self,
        order_codes: Sequence[str],
        fields: PaidFields,
    ) -> Order | None:
        self._ensure_ready()
        return await self._inner.compare_and_set_paid(order_codes, fields)
