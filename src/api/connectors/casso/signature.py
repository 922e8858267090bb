"""Verificação de assinatura do webhook Casso na borda HTTP."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.infra.crypto import parse_signature_header, verify_casso_signature
from config.settings.casso import SIGNATURE_HEADER

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da verificação.

    Attributes:
        valid: Requisição aceita
        skipped: Verificação desligada (bypass de development)
        error: Motivo da rejeição, quando houver
    """

    valid: bool
    skipped: bool = False
    error: str | None = None


def _get_header(headers: Mapping[str, str], name: str) -> str | None:
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def check_webhook_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
    *,
    bypass: bool = False,
    header_name: str = SIGNATURE_HEADER,
) -> SignatureResult:
    """Valida o header de assinatura contra o corpo bruto.

    Args:
        raw_body: Corpo bruto da requisição
        headers: Headers recebidos (qualquer caixa)
        secret: Secret do webhook
        bypass: Pula a verificação (só deve vir ligado em development)
        header_name: Nome do header de assinatura

    Returns:
        SignatureResult; nunca levanta exceção.
    """
    if bypass:
        logger.warning("webhook_signature_bypassed", extra={"header": header_name})
        return SignatureResult(valid=True, skipped=True)

    if not secret:
        return SignatureResult(valid=False, error="missing_secret")

    signature_header = _get_header(headers, header_name)
    if not signature_header:
        return SignatureResult(valid=False, error="missing_header")

    parts = parse_signature_header(signature_header)
    if not parts.get("t") or not parts.get("v1"):
        return SignatureResult(valid=False, error="malformed_header")

    if not verify_casso_signature(raw_body, signature_header, secret):
        return SignatureResult(valid=False, error="mismatch")

    return SignatureResult(valid=True)
