"""Eventos emitidos para observers em tempo real."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

PAYMENT_SUCCESS_EVENT = "payment_success"


@dataclass(frozen=True, slots=True)
class PaymentSuccessEvent:
    """Pedido transicionou para paid."""

    order_code: str
    tx_id: str
    amount: int | float | None
    description: str

    def to_message(self) -> dict[str, Any]:
        """Envelope enviado aos observers (e ao canal Redis)."""
        return {
            "event": PAYMENT_SUCCESS_EVENT,
            "data": {
                "orderCode": self.order_code,
                "txId": self.tx_id,
                "amount": self.amount,
                "description": self.description,
            },
        }

    @classmethod
    def from_message(cls, message: dict[str, Any]) -> PaymentSuccessEvent:
        """Reconstrói evento a partir do envelope."""
        data = message.get("data") or {}
        return cls(
            order_code=data["orderCode"],
            tx_id=str(data.get("txId", "")),
            amount=data.get("amount"),
            description=data.get("description", ""),
        )
