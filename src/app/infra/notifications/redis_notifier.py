"""Fan-out entre instâncias via Redis Pub/Sub.

publish() envia o evento ao canal Redis numa task em background; cada
instância mantém um listener que repassa as mensagens do canal ao seu
LocalBroadcaster. Assim um webhook recebido pela instância A chega aos
observers conectados na instância B.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import TYPE_CHECKING, Any

from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

    from app.domain.events import PaymentSuccessEvent
    from app.infra.notifications.local_broadcaster import LocalBroadcaster

logger = logging.getLogger(__name__)

EVENTS_CHANNEL = "payments:events"
LISTENER_RETRY_SECONDS = 1.0


class RedisPaymentNotifier:
    """PaymentNotifierProtocol sobre Redis Pub/Sub.

    Args:
        redis_client: Cliente Redis assíncrono
        local: Broadcaster local que entrega aos observers desta instância
        channel: Canal Redis dos eventos
    """

    def __init__(
        self,
        redis_client: AsyncRedis[bytes],
        local: LocalBroadcaster,
        channel: str = EVENTS_CHANNEL,
    ) -> None:
        self._redis = redis_client
        self._local = local
        self._channel = channel
        self._tasks: set[asyncio.Task[None]] = set()
        self._listener: asyncio.Task[None] | None = None

    def publish(self, event: PaymentSuccessEvent) -> None:
        """Agenda publicação no canal sem bloquear o chamador."""
        task = asyncio.create_task(self._publish_async(event.to_message()))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _publish_async(self, message: dict[str, Any]) -> None:
        try:
            await self._publish_raw(message)
        except RedisConnectionError as exc:
            # Sem Redis, ao menos os observers desta instância recebem
            logger.error(
                "payment_event_publish_failed",
                extra={"channel": self._channel, "error": str(exc.__cause__ or exc)},
            )
            self._local.broadcast(message)

    async def _publish_raw(self, message: dict[str, Any]) -> None:
        try:
            await self._redis.publish(self._channel, json.dumps(message))
        except Exception as exc:
            raise RedisConnectionError("Falha ao publicar evento no Redis") from exc

    async def start(self) -> None:
        """Inicia o listener do canal (uma vez por instância)."""
        if self._listener is None:
            self._listener = asyncio.create_task(self._listen_forever())
            logger.info("payment_event_listener_started", extra={"channel": self._channel})

    async def _listen_forever(self) -> None:
        while True:
            try:
                await self._listen_once()
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.error(
                    "payment_event_listener_failed",
                    extra={"channel": self._channel, "error_type": type(exc).__name__},
                )
                await asyncio.sleep(LISTENER_RETRY_SECONDS)

    async def _listen_once(self) -> None:
        pubsub = self._redis.pubsub()
        await pubsub.subscribe(self._channel)
        try:
            async for raw in pubsub.listen():
                self.relay(raw)
        finally:
            await pubsub.aclose()

    def relay(self, raw: dict[str, Any]) -> None:
        """Repassa uma mensagem do canal ao broadcaster local."""
        if raw.get("type") != "message":
            return
        try:
            message = json.loads(raw["data"])
        except (TypeError, ValueError):
            logger.warning("payment_event_malformed", extra={"channel": self._channel})
            return
        self._local.broadcast(message)

    async def stop(self, timeout_seconds: float = 5.0) -> None:
        """Cancela o listener e aguarda publicações pendentes."""
        if self._listener is not None:
            self._listener.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._listener
            self._listener = None
        if self._tasks:
            await asyncio.wait(list(self._tasks), timeout=timeout_seconds)
