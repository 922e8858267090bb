"""Testes do endpoint de webhook Casso."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

from app.infra.crypto import compute_casso_signature
from utils.errors import StorageUnavailableError

SECRET = "casso-secret"


def _post_webhook(client, payload: dict, *, secret: str = SECRET, signed: bool = True):
    body = json.dumps(payload).encode()
    headers = {"Content-Type": "application/json"}
    if signed:
        signature = compute_casso_signature(body, "1700000000", secret)
        headers["X-Casso-Signature"] = f"t=1700000000,v1={signature}"
    return client.post("/casso-webhook", content=body, headers=headers)


def _create_order(client) -> str:
    return client.post("/create-order", json={"uid": "u1", "amount": 50000}).json()["orderCode"]


def test_signed_webhook_marks_order_paid(client) -> None:
    code = _create_order(client)

    response = _post_webhook(
        client,
        {"error": 0, "data": {"id": 1, "description": f"Chuyen tien {code} tks", "amount": 50000}},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
    order = client.get(f"/order/{code}").json()
    assert order["status"] == "paid"
    assert order["txId"] == "1"
    assert order["paidAt"]


def test_replayed_webhook_keeps_first_payment(client) -> None:
    code = _create_order(client)
    payload = {"error": 0, "data": {"id": 1, "description": code, "amount": 50000}}

    _post_webhook(client, payload)
    first_paid_at = client.get(f"/order/{code}").json()["paidAt"]
    response = _post_webhook(client, payload)

    assert response.json() == {"success": True}
    assert client.get(f"/order/{code}").json()["paidAt"] == first_paid_at


def test_invalid_signature_is_acknowledged_without_effect(client) -> None:
    code = _create_order(client)

    response = _post_webhook(
        client,
        {"error": 0, "data": {"id": 1, "description": code}},
        secret="wrong-secret",
    )

    assert response.status_code == 200
    assert response.json() == {"success": False, "message": "Invalid signature"}
    assert client.get(f"/order/{code}").json()["status"] == "pending"


def test_unsigned_webhook_is_rejected(client) -> None:
    response = _post_webhook(client, {"error": 0, "data": None}, signed=False)

    assert response.json() == {"success": False, "message": "Invalid signature"}


def test_unattributed_payment_is_acknowledged(client) -> None:
    response = _post_webhook(client, {"error": 0, "data": {"id": 7, "description": "nap tien"}})

    assert response.status_code == 200
    assert response.json() == {"success": True}


def test_invalid_json_is_acknowledged(client) -> None:
    body = b"not json"
    signature = compute_casso_signature(body, "1700000000", SECRET)

    response = client.post(
        "/casso-webhook",
        content=body,
        headers={"X-Casso-Signature": f"t=1700000000,v1={signature}"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": False}


def test_storage_failure_is_logged_and_returns_200(client, container, caplog) -> None:
    caplog.set_level("INFO")
    container.store.compare_and_set_paid = AsyncMock(side_effect=StorageUnavailableError("down"))

    response = _post_webhook(
        client, {"error": 0, "data": {"id": 7, "description": "MEOSTORE-123456"}}
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
    failures = [r for r in caplog.records if r.getMessage() == "payment_storage_unavailable"]
    assert len(failures) == 1
    assert failures[0].tx_id == "7"


def test_skip_signature_only_in_development(client, monkeypatch) -> None:
    from config.settings import get_base_settings, get_casso_settings

    monkeypatch.setenv("CASSO_SKIP_SIGNATURE", "true")
    monkeypatch.setenv("ENVIRONMENT", "production")
    get_base_settings.cache_clear()
    get_casso_settings.cache_clear()

    response = _post_webhook(client, {"error": 0, "data": None}, signed=False)
    assert response.json() == {"success": False, "message": "Invalid signature"}

    monkeypatch.setenv("ENVIRONMENT", "development")
    get_base_settings.cache_clear()

    response = _post_webhook(client, {"error": 0, "data": None}, signed=False)
    assert response.json() == {"success": True}
