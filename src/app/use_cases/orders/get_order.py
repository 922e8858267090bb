"""Use case de consulta de pedido (polling do cliente)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.errors import OrderNotFoundError

if TYPE_CHECKING:
    from app.domain.order import Order
    from app.protocols.order_store import OrderStoreProtocol


class GetOrderUseCase:
    """Busca pedido pelo código exato."""

    def __init__(self, store: OrderStoreProtocol) -> None:
        self._store = store

    async def execute(self, order_code: str) -> Order:
        """Retorna o pedido.

        Raises:
            OrderNotFoundError: Código inexistente.
        """
        order = await self._store.find_by_code(order_code)
        if order is None:
            raise OrderNotFoundError(order_code)
        return order
