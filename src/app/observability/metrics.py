"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados (metric_type) e podem
ser agregadas depois (Cloud Logging, BigQuery). Pagamentos sem pedido e
assinaturas rejeitadas saem com `alert=True` para roteamento a operadores.

Uso:
    from app.observability.metrics import record_latency

    start = time.perf_counter()
    # ... operação ...
    record_latency("webhook", "reconcile", (time.perf_counter() - start) * 1000)
"""

from __future__ import annotations

import logging

from app.observability.correlation import get_correlation_id

logger = logging.getLogger(__name__)


def record_latency(component: str, operation: str, latency_ms: float) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "webhook", "orders")
        operation: Nome da operação (ex: "reconcile", "create")
        latency_ms: Latência em milissegundos
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": get_correlation_id(),
        },
    )


def record_order_created(order_code: str, attempts: int) -> None:
    """Registra criação de pedido (attempts > 1 indica colisão de código)."""
    logger.info(
        "metric_order_created",
        extra={
            "metric_type": "counter",
            "component": "orders",
            "order_code": order_code,
            "attempts": attempts,
        },
    )


def record_payment_reconciled(outcome: str, order_code: str | None = None) -> None:
    """Registra resultado da conciliação (paid|duplicate|conflict|ignored|storage_error)."""
    logger.info(
        "metric_payment_reconciled",
        extra={
            "metric_type": "counter",
            "component": "webhook",
            "outcome": outcome,
            "order_code": order_code,
        },
    )


def record_unattributed_payment(
    tx_id: str,
    reason: str,
    amount: int | float | None = None,
) -> None:
    """Dinheiro recebido sem pedido correspondente: lacuna de conciliação.

    Args:
        tx_id: ID da transação no agregador
        reason: no_order_code | order_not_found
        amount: Valor recebido
    """
    logger.error(
        "metric_unattributed_payment",
        extra={
            "metric_type": "counter",
            "component": "webhook",
            "alert": True,
            "tx_id": tx_id,
            "reason": reason,
            "amount": amount,
        },
    )


def record_signature_rejected(reason: str) -> None:
    """Webhook com assinatura inválida: possível requisição forjada."""
    logger.warning(
        "metric_signature_rejected",
        extra={
            "metric_type": "counter",
            "component": "webhook",
            "alert": True,
            "reason": reason,
        },
    )
