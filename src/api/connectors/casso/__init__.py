"""Connector Casso: assinatura, modelos do payload e parsing do webhook."""

from .models import CassoTransaction, CassoWebhookPayload
from .signature import SignatureResult, check_webhook_signature
from .webhook import InvalidJsonError, WebhookRequestError, parse_webhook_request

__all__ = [
    "CassoTransaction",
    "CassoWebhookPayload",
    "InvalidJsonError",
    "SignatureResult",
    "WebhookRequestError",
    "check_webhook_signature",
    "parse_webhook_request",
]
