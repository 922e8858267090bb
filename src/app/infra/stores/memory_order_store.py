"""Store de pedidos em memória: apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios
e sem coordenação entre instâncias.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from app.domain.errors import DuplicateKeyError
from app.protocols.order_store import OrderStoreProtocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.order import Order, PaidFields

logger = logging.getLogger(__name__)


class MemoryOrderStore(OrderStoreProtocol):
    """Store de pedidos em memória.

    O lock garante a atomicidade de insert e compare-and-set entre
    threads (TestClient, to_thread); nenhuma operação faz await com o lock.
    """

    def __init__(self) -> None:
        self._orders: dict[str, Order] = {}
        self._lock = threading.Lock()

    async def initialize(self) -> None:
        logger.debug("memory_order_store_initialized")

    async def insert(self, order: Order) -> None:
        with self._lock:
            if order.order_code in self._orders:
                raise DuplicateKeyError(order.order_code)
            self._orders[order.order_code] = order

    async def find_by_code(self, order_code: str) -> Order | None:
        with self._lock:
            return self._orders.get(order_code)

    async def compare_and_set_paid(
        self,
        order_codes: Sequence[str],
        fields: PaidFields,
    ) -> Order | None:
        with self._lock:
            for code in order_codes:
                current = self._orders.get(code)
                if current is None or not current.is_pending:
                    continue
                updated = current.mark_paid(fields)
                self._orders[code] = updated
                return updated
        return None

    def __len__(self) -> int:
        return len(self._orders)
