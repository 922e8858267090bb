"""Use cases de pagamentos (conciliação de webhooks)."""

from .reconcile_webhook import (
    ReconciliationOutcome,
    ReconciliationResult,
    TransactionResult,
    WebhookReconciler,
)

__all__ = [
    "ReconciliationOutcome",
    "ReconciliationResult",
    "TransactionResult",
    "WebhookReconciler",
]
