"""Protocolo para fan-out de eventos de pagamento em tempo real."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.events import PaymentSuccessEvent


class PaymentNotifierProtocol(Protocol):
    """Contrato para publicação de eventos aos observers conectados.

    publish() não bloqueia nem espera confirmação de entrega: falhas são
    registradas em log pela implementação e nunca propagadas ao webhook.
    """

    def publish(self, event: PaymentSuccessEvent) -> None:
        """Publica evento para todos os observers (broadcast)."""
        ...
