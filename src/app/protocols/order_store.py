"""Protocolo de domínio para o store de pedidos.

Contrato (async):
- initialize() -> None
  Conecta/verifica o backend. Falha aqui é fatal no startup.
- insert(order) -> None
  Levanta DuplicateKeyError se o order_code já existir.
- find_by_code(order_code) -> Order | None
- compare_and_set_paid(order_codes, fields) -> Order | None
  Operação atômica condicional: marca como paid o primeiro código da lista
  que exista com status pending. Retorna None se nenhum estiver pending
  (já pago ou inexistente). Nunca sobrescreve um pedido já pago.

Falhas de infraestrutura levantam StorageUnavailableError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.order import Order, PaidFields


class OrderStoreProtocol(ABC):
    """Contrato mínimo para stores de pedidos."""

    @abstractmethod
    async def initialize(self) -> None:
        """Prepara o backend (conexão, verificação de saúde)."""

    @abstractmethod
    async def insert(self, order: Order) -> None:
        """Insere pedido novo.

        Raises:
            DuplicateKeyError: Se order_code já existir.
        """

    @abstractmethod
    async def find_by_code(self, order_code: str) -> Order | None:
        """Busca pedido pelo código exato."""

    @abstractmethod
    async def compare_and_set_paid(
        self,
        order_codes: Sequence[str],
        fields: PaidFields,
    ) -> Order | None:
        """Transiciona atomicamente pending -> paid.

        Args:
            order_codes: Códigos aceitos, em ordem de preferência.
            fields: Campos gravados na transição.

        Returns:
            Pedido atualizado, ou None se nenhum código estava pending.
        """
