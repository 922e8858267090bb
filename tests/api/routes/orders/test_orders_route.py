"""Testes dos endpoints de pedidos."""

from __future__ import annotations

import re
from unittest.mock import AsyncMock

import pytest

from utils.errors import StorageUnavailableError


def test_create_order_returns_qr_and_stores_pending(client, container) -> None:
    response = client.post("/create-order", json={"uid": "u1", "amount": 50000})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert re.fullmatch(r"MEOSTORE-\d{6}", body["orderCode"])
    assert body["transferDesc"] == f"{body['orderCode']} - Deposit for UID u1"
    assert body["amount"] == 50000
    assert body["qrUrl"].startswith(
        "https://img.vietqr.io/image/970448-0014100027536007-compact2.png?amount=50000"
    )

    order = client.get(f"/order/{body['orderCode']}").json()
    assert order["status"] == "pending"
    assert order["uid"] == "u1"


@pytest.mark.parametrize(
    "payload",
    [{}, {"uid": "u1"}, {"amount": 1000}, {"uid": "u1", "amount": 0}, {"uid": "u1", "amount": "x"}],
)
def test_create_order_invalid_input_is_400(client, payload: dict) -> None:
    response = client.post("/create-order", json=payload)

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert response.json()["error"]


def test_create_order_malformed_json_is_400(client) -> None:
    response = client.post(
        "/create-order",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400


def test_create_order_non_finite_amount_is_400(client) -> None:
    # 1e400 estoura o float e chega como inf
    response = client.post(
        "/create-order",
        content=b'{"uid": "u1", "amount": 1e400}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "amount deve ser finito e > 0"}


def test_create_order_storage_down_is_500(client, container) -> None:
    container.create_order.execute = AsyncMock(side_effect=StorageUnavailableError("down"))

    response = client.post("/create-order", json={"uid": "u1", "amount": 1000})

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Storage unavailable"}


def test_unknown_order_is_404(client) -> None:
    response = client.get("/order/UNKNOWN-1")

    assert response.status_code == 404
    assert response.json() == {"error": "Order not found"}


def test_get_order_storage_down_is_500(client, container) -> None:
    container.get_order.execute = AsyncMock(side_effect=StorageUnavailableError("down"))

    response = client.get("/order/MEOSTORE-123456")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to get order"}
