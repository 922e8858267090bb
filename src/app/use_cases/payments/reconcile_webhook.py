"""Conciliação de notificações bancárias com pedidos pendentes.

Fluxo por transação:
1. Extrai o código de pedido da descrição livre
2. Compare-and-set atômico pending -> paid no store (candidatos em ordem)
3. Em sucesso, publica PaymentSuccessEvent para os observers
4. Sem transição, classifica: duplicate (mesmo tx_id), conflict (tx_id
   diferente) ou unattributed (pedido inexistente)

A serialização de entregas concorrentes do mesmo código fica no store;
este módulo não mantém locks próprios.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING

from app.domain.errors import UnattributedPaymentError
from app.domain.events import PaymentSuccessEvent
from app.domain.order import PaidFields
from app.domain.order_code import extract_order_code
from app.observability.metrics import (
    record_latency,
    record_payment_reconciled,
    record_unattributed_payment,
)
from config.settings.orders import DEFAULT_ORDER_CODE_PREFIX
from utils.errors import StorageUnavailableError

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.domain.order import Order
    from app.domain.transaction import BankTransaction, WebhookNotification
    from app.protocols.order_store import OrderStoreProtocol
    from app.protocols.payment_notifier import PaymentNotifierProtocol

logger = logging.getLogger(__name__)

REASON_NO_ORDER_CODE = "no_order_code"
REASON_ORDER_NOT_FOUND = "order_not_found"


class ReconciliationOutcome(str, Enum):
    """Resultado da conciliação de uma transação."""

    PAID = "paid"
    DUPLICATE = "duplicate"
    CONFLICT = "conflict"
    UNATTRIBUTED = "unattributed"
    IGNORED = "ignored"
    STORAGE_ERROR = "storage_error"


@dataclass(frozen=True, slots=True)
class TransactionResult:
    tx_id: str
    outcome: ReconciliationOutcome
    order_code: str | None = None


@dataclass(frozen=True, slots=True)
class ReconciliationResult:
    """Resultado agregado de uma notificação."""

    transactions: tuple[TransactionResult, ...] = field(default_factory=tuple)

    @property
    def ignored(self) -> bool:
        return not self.transactions

    def count(self, outcome: ReconciliationOutcome) -> int:
        return sum(1 for item in self.transactions if item.outcome is outcome)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class WebhookReconciler:
    """Aplica notificações do agregador aos pedidos.

    Args:
        store: Store de pedidos (compare-and-set atômico)
        notifier: Fan-out de eventos em tempo real
        code_prefix: Prefixo dos códigos de pedido
        clock: Fonte de tempo para paid_at (injetável em testes)
    """

    def __init__(
        self,
        store: OrderStoreProtocol,
        notifier: PaymentNotifierProtocol,
        code_prefix: str = DEFAULT_ORDER_CODE_PREFIX,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._code_prefix = code_prefix
        self._clock = clock

    async def reconcile(self, notification: WebhookNotification) -> ReconciliationResult:
        """Concilia todas as transações da notificação.

        Transações sem pedido ou com falha de store são registradas e não
        interrompem as demais.
        """
        if not notification.is_actionable:
            logger.info(
                "webhook_ignored",
                extra={
                    "aggregator_error": notification.error,
                    "transactions": len(notification.transactions),
                },
            )
            record_payment_reconciled(ReconciliationOutcome.IGNORED.value)
            return ReconciliationResult()

        start = time.perf_counter()
        results: list[TransactionResult] = []
        for tx in notification.transactions:
            try:
                result = await self.reconcile_transaction(tx)
            except UnattributedPaymentError as exc:
                logger.warning(
                    "payment_unattributed",
                    extra={
                        "tx_id": exc.tx_id,
                        "reason": exc.reason,
                        "amount": tx.amount,
                    },
                )
                record_unattributed_payment(exc.tx_id, exc.reason, tx.amount)
                result = TransactionResult(
                    tx_id=exc.tx_id,
                    outcome=ReconciliationOutcome.UNATTRIBUTED,
                )
            except StorageUnavailableError as exc:
                match = extract_order_code(tx.description, self._code_prefix)
                logger.error(
                    "payment_storage_unavailable",
                    extra={
                        "tx_id": tx.tx_id,
                        "amount": tx.amount,
                        "candidates": list(match.candidates) if match else [],
                        "error": str(exc),
                    },
                )
                result = TransactionResult(
                    tx_id=tx.tx_id,
                    outcome=ReconciliationOutcome.STORAGE_ERROR,
                    order_code=match.canonical if match else None,
                )
            record_payment_reconciled(result.outcome.value, result.order_code)
            results.append(result)

        record_latency("webhook", "reconcile", (time.perf_counter() - start) * 1000)
        return ReconciliationResult(transactions=tuple(results))

    async def reconcile_transaction(self, tx: BankTransaction) -> TransactionResult:
        """Concilia uma transação.

        Raises:
            UnattributedPaymentError: Descrição sem código ou pedido inexistente.
            StorageUnavailableError: Store indisponível.
        """
        match = extract_order_code(tx.description, self._code_prefix)
        if match is None:
            raise UnattributedPaymentError(tx.tx_id, REASON_NO_ORDER_CODE)

        fields = PaidFields(
            tx_id=tx.tx_id,
            bank_description=tx.description,
            paid_at=self._clock(),
            paid_amount=tx.amount,
        )
        updated = await self._store.compare_and_set_paid(match.candidates, fields)
        if updated is not None:
            logger.info(
                "payment_reconciled",
                extra={"order_code": updated.order_code, "tx_id": tx.tx_id},
            )
            self._notify(updated, tx)
            return TransactionResult(
                tx_id=tx.tx_id,
                outcome=ReconciliationOutcome.PAID,
                order_code=updated.order_code,
            )

        return await self._classify_miss(match.candidates, tx)

    async def _classify_miss(
        self,
        candidates: tuple[str, ...],
        tx: BankTransaction,
    ) -> TransactionResult:
        existing: Order | None = None
        for code in candidates:
            existing = await self._store.find_by_code(code)
            if existing is not None:
                break
        if existing is None:
            raise UnattributedPaymentError(tx.tx_id, REASON_ORDER_NOT_FOUND)

        # tx_id vazio nunca identifica uma reentrega
        if tx.tx_id and existing.tx_id == tx.tx_id:
            logger.info(
                "payment_duplicate_delivery",
                extra={"order_code": existing.order_code, "tx_id": tx.tx_id},
            )
            outcome = ReconciliationOutcome.DUPLICATE
        else:
            logger.warning(
                "payment_conflicting_repeat",
                extra={
                    "order_code": existing.order_code,
                    "tx_id": tx.tx_id,
                    "paid_tx_id": existing.tx_id,
                    "amount": tx.amount,
                },
            )
            outcome = ReconciliationOutcome.CONFLICT
        return TransactionResult(
            tx_id=tx.tx_id,
            outcome=outcome,
            order_code=existing.order_code,
        )

    def _notify(self, order: Order, tx: BankTransaction) -> None:
        event = PaymentSuccessEvent(
            order_code=order.order_code,
            tx_id=tx.tx_id,
            amount=tx.amount if tx.amount is not None else order.amount,
            description=tx.description,
        )
        try:
            self._notifier.publish(event)
        except Exception:
            # Pedido já está paid; falha de fan-out não invalida a conciliação
            logger.exception(
                "payment_notification_failed",
                extra={"order_code": order.order_code},
            )
