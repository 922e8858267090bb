"""Criptografia de borda: assinatura HMAC dos webhooks do agregador."""

from .signature import (
    compute_casso_signature,
    parse_signature_header,
    verify_casso_signature,
)

__all__ = [
    "compute_casso_signature",
    "parse_signature_header",
    "verify_casso_signature",
]
