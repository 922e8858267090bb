"""Testes do WebSocket de eventos de pagamento."""

from __future__ import annotations

import json

from app.infra.crypto import compute_casso_signature

SECRET = "casso-secret"


def test_observer_receives_payment_success(client, container) -> None:
    code = client.post("/create-order", json={"uid": "u1", "amount": 50000}).json()["orderCode"]
    body = json.dumps(
        {"error": 0, "data": {"id": 42, "description": f"ck {code}", "amount": 50000}}
    ).encode()
    signature = compute_casso_signature(body, "1700000000", SECRET)

    with client.websocket_connect("/ws") as websocket:
        assert container.broadcaster.subscriber_count == 1
        client.post(
            "/casso-webhook",
            content=body,
            headers={"X-Casso-Signature": f"t=1700000000,v1={signature}"},
        )
        message = websocket.receive_json()

    assert message == {
        "event": "payment_success",
        "data": {
            "orderCode": code,
            "txId": "42",
            "amount": 50000,
            "description": f"ck {code}",
        },
    }
