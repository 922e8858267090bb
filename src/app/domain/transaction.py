"""Transações bancárias recebidas do agregador, já normalizadas.

O conector de borda (api/connectors/casso) converte o JSON do webhook
nestes modelos; a camada de aplicação não conhece o formato do agregador.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class BankTransaction:
    """Uma transação creditada na conta de recebimento.

    Atributos:
        tx_id: ID da transação no agregador
        description: Descrição livre digitada pelo pagador/banco
        amount: Valor creditado
        reference: Referência do banco (quando informada)
        occurred_at: Data/hora informada pelo banco, sem parse
    """

    tx_id: str
    description: str = ""
    amount: int | float | None = None
    reference: str | None = None
    occurred_at: str | None = None


@dataclass(frozen=True, slots=True)
class WebhookNotification:
    """Notificação do agregador: código de erro + transações."""

    error: int = 0
    transactions: tuple[BankTransaction, ...] = field(default_factory=tuple)

    @property
    def is_actionable(self) -> bool:
        return self.error == 0 and bool(self.transactions)
