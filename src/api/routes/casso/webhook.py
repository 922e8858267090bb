"""Endpoint de webhook do Casso.

Endpoint:
- POST /casso-webhook: notificação de transação bancária

Segurança:
- Assinatura HMAC-SHA256 (X-Casso-Signature) validada sobre o corpo bruto
- Bypass apenas em development (CASSO_SKIP_SIGNATURE)

Resposta:
- Sempre 200: o agregador reenvia em qualquer outro status e a
  conciliação é idempotente; falhas ficam nos logs
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request

from api.connectors.casso import InvalidJsonError, parse_webhook_request
from api.routes.dependencies import get_container
from app.domain.errors import SignatureInvalidError
from app.observability import (
    CORRELATION_HEADER,
    get_correlation_id,
    record_signature_rejected,
    reset_correlation_id,
    set_correlation_id,
)
from config.settings import get_base_settings, get_casso_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/casso-webhook", response_model=None)
async def receive_webhook(request: Request) -> dict[str, Any]:
    """Recebe notificação do Casso e concilia com pedidos pendentes.

    Validações:
    1. Assinatura HMAC (corpo bruto, antes do parse)
    2. JSON válido
    3. Estrutura do payload (error + data objeto/lista)

    Returns:
        {"success": true} ou {"success": false, ...}, sempre com 200.
    """
    token = set_correlation_id(request.headers.get(CORRELATION_HEADER))

    try:
        settings = get_casso_settings()
        raw_body = await request.body()
        headers = dict(request.headers)

        try:
            notification, signature_result = parse_webhook_request(
                raw_body=raw_body,
                headers=headers,
                secret=settings.webhook_secret or None,
                bypass=settings.bypass_enabled(get_base_settings()),
                header_name=settings.signature_header,
            )
        except SignatureInvalidError as exc:
            logger.warning(
                "webhook_signature_invalid",
                extra={
                    "channel": "casso",
                    "correlation_id": get_correlation_id(),
                    "reason": exc.reason,
                },
            )
            record_signature_rejected(exc.reason)
            return {"success": False, "message": "Invalid signature"}
        except InvalidJsonError as exc:
            logger.warning(
                "webhook_json_invalid",
                extra={
                    "channel": "casso",
                    "correlation_id": get_correlation_id(),
                    "error": str(exc),
                },
            )
            return {"success": False}

        logger.info(
            "webhook_received",
            extra={
                "channel": "casso",
                "correlation_id": get_correlation_id(),
                "signature_skipped": signature_result.skipped,
                "payload_size": len(raw_body),
                "transactions": len(notification.transactions),
            },
        )

        reconciler = get_container(request).reconciler
        result = await reconciler.reconcile(notification)

        logger.info(
            "webhook_processed",
            extra={
                "channel": "casso",
                "correlation_id": get_correlation_id(),
                "outcomes": [item.outcome.value for item in result.transactions],
            },
        )
        return {"success": True}

    finally:
        reset_correlation_id(token)
