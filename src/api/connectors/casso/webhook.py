"""Parse e validação inicial do webhook Casso (sem PII)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from pydantic import ValidationError

from api.connectors.casso.models import CassoWebhookPayload
from api.connectors.casso.signature import SignatureResult, check_webhook_signature
from app.domain.errors import SignatureInvalidError
from config.settings.casso import SIGNATURE_HEADER

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.domain.transaction import WebhookNotification


class WebhookRequestError(ValueError):
    """Erro base para falhas de payload do webhook."""


class InvalidJsonError(WebhookRequestError):
    """JSON inválido ou fora do formato esperado."""


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
    *,
    bypass: bool = False,
    header_name: str = SIGNATURE_HEADER,
) -> tuple[WebhookNotification, SignatureResult]:
    """Valida assinatura e converte o JSON em WebhookNotification.

    A assinatura é verificada sobre o corpo bruto antes de qualquer parse.

    Raises:
        SignatureInvalidError: Se a assinatura for inválida
        InvalidJsonError: Se o JSON estiver inválido ou não for objeto

    Returns:
        (WebhookNotification, SignatureResult)
    """
    signature_result = check_webhook_signature(
        raw_body,
        headers,
        secret,
        bypass=bypass,
        header_name=header_name,
    )
    if not signature_result.valid:
        raise SignatureInvalidError(signature_result.error or "invalid_signature")

    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    try:
        model = CassoWebhookPayload.model_validate(payload)
    except ValidationError as exc:
        raise InvalidJsonError("payload_schema_invalid") from exc

    return model.to_domain(), signature_result
