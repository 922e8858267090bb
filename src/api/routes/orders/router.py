"""Endpoints de pedidos.

Endpoints:
- POST /create-order: cria pedido pending e retorna QR de pagamento
- GET /order/{order_code}: consulta de status (polling do cliente)
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from api.routes.dependencies import get_container
from app.domain.errors import OrderCreationFailedError, OrderNotFoundError, OrderValidationError
from app.observability import record_latency
from utils.errors import StorageUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        content={"success": False, "error": message},
        status_code=status_code,
    )


async def _read_json_object(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise OrderValidationError("JSON inválido") from exc
    if not isinstance(body, dict):
        raise OrderValidationError("body deve ser objeto JSON")
    return body


@router.post("/create-order", response_model=None)
async def create_order(request: Request) -> JSONResponse:
    """Cria pedido e retorna dados de pagamento.

    Body: {"uid": str, "amount": number > 0}

    Returns:
        200 {success, orderCode, transferDesc, amount, qrUrl}
        400 entrada inválida; 500 sem código único ou store indisponível
    """
    container = get_container(request)
    start = time.perf_counter()
    try:
        body = await _read_json_object(request)
        result = await container.create_order.execute(body.get("uid"), body.get("amount"))
    except OrderValidationError as exc:
        logger.info("create_order_rejected", extra={"error": str(exc)})
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except OrderCreationFailedError as exc:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    except StorageUnavailableError as exc:
        logger.error("create_order_storage_unavailable", extra={"error": str(exc)})
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Storage unavailable")

    record_latency("orders", "create", (time.perf_counter() - start) * 1000)
    return JSONResponse(content=result.to_response())


@router.get("/order/{order_code}", response_model=None)
async def get_order(order_code: str, request: Request) -> JSONResponse:
    """Retorna o pedido (camelCase) ou 404."""
    container = get_container(request)
    try:
        order = await container.get_order.execute(order_code)
    except OrderNotFoundError:
        return JSONResponse(
            content={"error": "Order not found"},
            status_code=status.HTTP_404_NOT_FOUND,
        )
    except StorageUnavailableError as exc:
        logger.error(
            "get_order_storage_unavailable",
            extra={"order_code": order_code, "error": str(exc)},
        )
        return JSONResponse(
            content={"error": "Failed to get order"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return JSONResponse(content=order.to_public_dict())
