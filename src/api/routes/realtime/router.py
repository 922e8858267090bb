"""Endpoint WebSocket para observers de pagamento.

Cada conexão recebe todos os eventos `payment_success` publicados após o
connect (sem filtro por pedido e sem replay). Mensagens enviadas pelo
cliente são ignoradas.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from api.routes.dependencies import get_container

logger = logging.getLogger(__name__)

router = APIRouter()


async def _drain_client(websocket: WebSocket) -> None:
    # Retorna quando o cliente desconecta
    with contextlib.suppress(WebSocketDisconnect):
        while True:
            await websocket.receive_text()


@router.websocket("/ws")
async def payment_events(websocket: WebSocket) -> None:
    broadcaster = get_container(websocket).broadcaster
    # Inscrito antes do handshake
    queue = broadcaster.subscribe()
    receiver: asyncio.Task[None] | None = None
    try:
        await websocket.accept()
        logger.info("observer_connected", extra={"subscribers": broadcaster.subscriber_count})
        receiver = asyncio.create_task(_drain_client(websocket))
        while not receiver.done():
            getter = asyncio.ensure_future(queue.get())
            done, _ = await asyncio.wait(
                {getter, receiver},
                return_when=asyncio.FIRST_COMPLETED,
            )
            if getter not in done:
                getter.cancel()
                break
            await websocket.send_json(getter.result())
    except WebSocketDisconnect:
        logger.debug("observer_send_disconnected")
    finally:
        if receiver is not None:
            receiver.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await receiver
        broadcaster.unsubscribe(queue)
        logger.info("observer_disconnected", extra={"subscribers": broadcaster.subscriber_count})
