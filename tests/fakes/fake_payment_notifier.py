"""Fake de PaymentNotifierProtocol para testes."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.events import PaymentSuccessEvent


class FakePaymentNotifier:
    """Guarda eventos publicados; opcionalmente falha em publish()."""

    def __init__(self, *, fail: bool = False) -> None:
        self.events: list[PaymentSuccessEvent] = []
        self._fail = fail

    def publish(self, event: PaymentSuccessEvent) -> None:
        if self._fail:
            raise RuntimeError("notifier indisponível")
        self.events.append(event)
