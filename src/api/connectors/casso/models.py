"""Modelos do payload de webhook Casso.

V2 envia `data` como objeto único; V1 (legado) envia lista de transações.
Campos desconhecidos são ignorados para tolerar evolução do agregador.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.transaction import BankTransaction, WebhookNotification


class CassoTransaction(BaseModel):
    """Transação creditada informada pelo Casso."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str | None = None
    tid: str | None = None
    reference: str | None = None
    description: str = ""
    amount: float | int | None = None
    transaction_date_time: str | None = Field(default=None, alias="transactionDateTime")
    when: str | None = None

    @field_validator("id", "tid", "reference", mode="before")
    @classmethod
    def _coerce_identifier(cls, value: Any) -> Any:
        # Casso envia ids numéricos no V2 e strings no V1
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("description", mode="before")
    @classmethod
    def _coerce_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def tx_id(self) -> str:
        return self.id or self.tid or self.reference or ""

    def to_domain(self) -> BankTransaction:
        return BankTransaction(
            tx_id=self.tx_id,
            description=self.description,
            amount=self.amount,
            reference=self.reference,
            occurred_at=self.transaction_date_time or self.when,
        )


class CassoWebhookPayload(BaseModel):
    """Envelope do webhook: `error` (0 = ok) e `data`."""

    model_config = ConfigDict(extra="ignore")

    error: int = 0
    data: CassoTransaction | list[CassoTransaction] | None = None

    @property
    def transactions(self) -> list[CassoTransaction]:
        if self.data is None:
            return []
        if isinstance(self.data, list):
            return self.data
        return [self.data]

    def to_domain(self) -> WebhookNotification:
        return WebhookNotification(
            error=self.error,
            transactions=tuple(tx.to_domain() for tx in self.transactions),
        )
