"""Domínio de pedidos e pagamentos: modelos puros, sem IO."""

from app.domain.errors import (
    DuplicateKeyError,
    InvalidStatusTransitionError,
    OrderCreationFailedError,
    OrderError,
    OrderNotFoundError,
    OrderValidationError,
    SignatureInvalidError,
    UnattributedPaymentError,
)
from app.domain.events import PAYMENT_SUCCESS_EVENT, PaymentSuccessEvent
from app.domain.order import Order, OrderStatus, PaidFields
from app.domain.order_code import (
    OrderCodeMatch,
    extract_order_code,
    generate_order_code,
    is_valid_order_code,
    normalize_order_code,
)
from app.domain.qr_payload import (
    BankAccount,
    QrPayload,
    build_qr_payload,
    build_qr_url,
    build_transfer_description,
)
from app.domain.transaction import BankTransaction, WebhookNotification

__all__ = [
    "PAYMENT_SUCCESS_EVENT",
    "BankAccount",
    "BankTransaction",
    "DuplicateKeyError",
    "InvalidStatusTransitionError",
    "Order",
    "OrderCodeMatch",
    "OrderCreationFailedError",
    "OrderError",
    "OrderNotFoundError",
    "OrderStatus",
    "OrderValidationError",
    "PaidFields",
    "PaymentSuccessEvent",
    "QrPayload",
    "SignatureInvalidError",
    "UnattributedPaymentError",
    "WebhookNotification",
    "build_qr_payload",
    "build_qr_url",
    "build_transfer_description",
    "extract_order_code",
    "generate_order_code",
    "is_valid_order_code",
    "normalize_order_code",
]
