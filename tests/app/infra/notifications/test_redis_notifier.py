"""Testes do fan-out entre instâncias via Redis Pub/Sub."""

from __future__ import annotations

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.domain.events import PaymentSuccessEvent
from app.infra.notifications import EVENTS_CHANNEL, LocalBroadcaster, RedisPaymentNotifier

EVENT = PaymentSuccessEvent(
    order_code="MEOSTORE-123456",
    tx_id="tx-1",
    amount=1000,
    description="ck",
)


class _FakePubSub:
    def __init__(self, messages: list[dict]) -> None:
        self._messages = messages
        self.subscribe = AsyncMock()
        self.aclose = AsyncMock()

    async def listen(self):
        for message in self._messages:
            yield message
        # Mantém o listener vivo até ser cancelado
        await asyncio.Event().wait()


@pytest.mark.asyncio
async def test_publish_sends_json_to_channel() -> None:
    redis_client = MagicMock()
    redis_client.publish = AsyncMock(return_value=1)
    notifier = RedisPaymentNotifier(redis_client, LocalBroadcaster())

    notifier.publish(EVENT)
    await notifier.stop()

    channel, payload = redis_client.publish.call_args.args
    assert channel == EVENTS_CHANNEL
    assert json.loads(payload) == EVENT.to_message()


@pytest.mark.asyncio
async def test_publish_failure_falls_back_to_local(caplog) -> None:
    caplog.set_level("ERROR")
    redis_client = MagicMock()
    redis_client.publish = AsyncMock(side_effect=ConnectionError("down"))
    local = LocalBroadcaster()
    queue = local.subscribe()
    notifier = RedisPaymentNotifier(redis_client, local)

    notifier.publish(EVENT)
    await notifier.stop()

    assert queue.get_nowait() == EVENT.to_message()
    assert any(r.getMessage() == "payment_event_publish_failed" for r in caplog.records)


def test_relay_ignores_non_messages_and_malformed_payloads() -> None:
    local = LocalBroadcaster()
    queue = local.subscribe()
    notifier = RedisPaymentNotifier(MagicMock(), local)

    notifier.relay({"type": "subscribe", "data": 1})
    notifier.relay({"type": "message", "data": b"not-json"})
    notifier.relay({"type": "message", "data": json.dumps(EVENT.to_message()).encode()})

    assert queue.qsize() == 1
    assert queue.get_nowait()["data"]["txId"] == "tx-1"


@pytest.mark.asyncio
async def test_listener_relays_channel_messages() -> None:
    pubsub = _FakePubSub(
        [
            {"type": "subscribe", "data": 1},
            {"type": "message", "data": json.dumps(EVENT.to_message()).encode()},
        ]
    )
    redis_client = MagicMock()
    redis_client.pubsub.return_value = pubsub
    local = LocalBroadcaster()
    queue = local.subscribe()
    notifier = RedisPaymentNotifier(redis_client, local)

    await notifier.start()
    message = await asyncio.wait_for(queue.get(), timeout=1.0)
    await notifier.stop()

    assert message == EVENT.to_message()
    pubsub.subscribe.assert_awaited_once_with(EVENTS_CHANNEL)
    pubsub.aclose.assert_awaited_once()
