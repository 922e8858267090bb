"""Observabilidade: correlation_id e métricas via logs estruturados.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_latency, record_unattributed_payment
"""

from app.observability.correlation import (
    CORRELATION_HEADER,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_latency,
    record_order_created,
    record_payment_reconciled,
    record_signature_rejected,
    record_unattributed_payment,
)

__all__ = [
    "CORRELATION_HEADER",
    "get_correlation_id",
    "record_latency",
    "record_order_created",
    "record_payment_reconciled",
    "record_signature_rejected",
    "record_unattributed_payment",
    "reset_correlation_id",
    "set_correlation_id",
]
