"""Notificações em tempo real (fan-out de eventos de pagamento)."""

from __future__ import annotations

from app.infra.notifications.local_broadcaster import LocalBroadcaster
from app.infra.notifications.redis_notifier import EVENTS_CHANNEL, RedisPaymentNotifier

__all__ = [
    "EVENTS_CHANNEL",
    "LocalBroadcaster",
    "RedisPaymentNotifier",
]
