"""Modelo de pedido de pagamento.

Um pedido nasce `pending` e pode transicionar para `paid` exatamente uma
vez. Não há transição reversa nem remoção pelo serviço.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from app.domain.errors import InvalidStatusTransitionError


class OrderStatus(str, Enum):
    """Status do pedido (monotônico)."""

    PENDING = "pending"
    PAID = "paid"


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _parse_datetime(value: Any) -> datetime | None:
    """Aceita datetime (Firestore) ou ISO-8601 (JSON/memória)."""
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


@dataclass(frozen=True, slots=True)
class PaidFields:
    """Campos gravados na transição pending -> paid.

    Atributos:
        tx_id: ID da transação no agregador
        bank_description: Descrição bruta da transação bancária (auditoria)
        paid_at: Momento da transição
        paid_amount: Valor informado pela transação (apenas auditoria)
    """

    tx_id: str
    bank_description: str
    paid_at: datetime = field(default_factory=_utcnow)
    paid_amount: int | float | None = None


@dataclass(frozen=True, slots=True)
class Order:
    """Pedido de pagamento.

    Atributos:
        order_code: Código único (PREFIX-NNNNNN), imutável
        uid: Identificador opaco do usuário/conta solicitante
        amount: Valor positivo (moeda única implícita)
        status: pending | paid
        created_at: Momento de criação
        transfer_description: Descrição que o pagador deve usar na transferência
        paid_at: Momento do pagamento (None enquanto pending)
        tx_id: ID da transação do agregador
        bank_description: Descrição bruta da transação casada
        paid_amount: Valor recebido informado pelo agregador
    """

    order_code: str
    uid: str
    amount: int | float
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=_utcnow)
    transfer_description: str = ""
    paid_at: datetime | None = None
    tx_id: str | None = None
    bank_description: str | None = None
    paid_amount: int | float | None = None

    @property
    def is_pending(self) -> bool:
        return self.status is OrderStatus.PENDING

    def mark_paid(self, fields: PaidFields) -> Order:
        """Retorna cópia paga do pedido.

        Raises:
            InvalidStatusTransitionError: Se o pedido não estiver pending.
        """
        if not self.is_pending:
            raise InvalidStatusTransitionError(
                f"{self.order_code}: {self.status.value} -> paid"
            )
        return replace(
            self,
            status=OrderStatus.PAID,
            paid_at=fields.paid_at,
            tx_id=fields.tx_id,
            bank_description=fields.bank_description,
            paid_amount=fields.paid_amount,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serializa para persistência (snake_case, datetimes nativos, sem None)."""
        data: dict[str, Any] = {
            "order_code": self.order_code,
            "uid": self.uid,
            "amount": self.amount,
            "status": self.status.value,
            "created_at": self.created_at,
            "transfer_description": self.transfer_description,
            "paid_at": self.paid_at,
            "tx_id": self.tx_id,
            "bank_description": self.bank_description,
            "paid_amount": self.paid_amount,
        }
        return {key: value for key, value in data.items() if value is not None}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Order:
        """Deserializa de persistência."""
        created_at = _parse_datetime(data.get("created_at"))
        return cls(
            order_code=data["order_code"],
            uid=str(data.get("uid", "")),
            amount=data["amount"],
            status=OrderStatus(data.get("status", OrderStatus.PENDING.value)),
            created_at=created_at or _utcnow(),
            transfer_description=data.get("transfer_description", ""),
            paid_at=_parse_datetime(data.get("paid_at")),
            tx_id=data.get("tx_id"),
            bank_description=data.get("bank_description"),
            paid_amount=data.get("paid_amount"),
        )

    def to_public_dict(self) -> dict[str, Any]:
        """Representação pública (camelCase, ISO-8601), usada pela API."""
        data: dict[str, Any] = {
            "orderCode": self.order_code,
            "uid": self.uid,
            "amount": self.amount,
            "status": self.status.value,
            "transferDesc": self.transfer_description,
            "createdAt": self.created_at.isoformat(),
            "paidAt": self.paid_at.isoformat() if self.paid_at else None,
            "txId": self.tx_id,
            "bankDescription": self.bank_description,
            "paidAmount": self.paid_amount,
        }
        return {key: value for key, value in data.items() if value is not None}
