"""Protocolos e contratos do core da aplicação."""

from .order_store import OrderStoreProtocol
from .payment_notifier import PaymentNotifierProtocol

__all__ = [
    "OrderStoreProtocol",
    "PaymentNotifierProtocol",
]
