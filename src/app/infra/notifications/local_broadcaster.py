"""Fan-out em processo para observers conectados (WebSocket).

Cada observer recebe uma fila própria e limitada. publish() usa
put_nowait: observer lento ou desconectado perde o evento, o webhook
nunca espera. Não há persistência nem replay.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.domain.events import PaymentSuccessEvent

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 100


class LocalBroadcaster:
    """Broadcast sem filtro para todas as filas inscritas."""

    def __init__(self, queue_size: int = DEFAULT_QUEUE_SIZE) -> None:
        self._queue_size = queue_size
        self._subscribers: set[asyncio.Queue[dict[str, Any]]] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> asyncio.Queue[dict[str, Any]]:
        """Registra um observer e retorna sua fila de eventos."""
        queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=self._queue_size)
        self._subscribers.add(queue)
        logger.debug("observer_subscribed", extra={"subscribers": len(self._subscribers)})
        return queue

    def unsubscribe(self, queue: asyncio.Queue[dict[str, Any]]) -> None:
        self._subscribers.discard(queue)
        logger.debug("observer_unsubscribed", extra={"subscribers": len(self._subscribers)})

    def publish(self, event: PaymentSuccessEvent) -> None:
        """Publica evento de pagamento (PaymentNotifierProtocol)."""
        self.broadcast(event.to_message())

    def broadcast(self, message: dict[str, Any]) -> int:
        """Entrega mensagem a todas as filas sem bloquear.

        Returns:
            Quantidade de observers que receberam a mensagem.
        """
        delivered = 0
        for queue in list(self._subscribers):
            try:
                queue.put_nowait(message)
            except asyncio.QueueFull:
                logger.warning(
                    "observer_event_dropped",
                    extra={"event": message.get("event"), "reason": "queue_full"},
                )
                continue
            delivered += 1
        logger.info(
            "event_broadcast",
            extra={"event": message.get("event"), "delivered": delivered},
        )
        return delivered
