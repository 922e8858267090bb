"""Testes das métricas registradas via logs estruturados."""

from __future__ import annotations

from app.observability import (
    record_latency,
    record_signature_rejected,
    record_unattributed_payment,
)


def test_unattributed_payment_is_alert(caplog) -> None:
    caplog.set_level("INFO")

    record_unattributed_payment("tx-9", "no_order_code", 10000)

    [record] = [r for r in caplog.records if r.getMessage() == "metric_unattributed_payment"]
    assert record.levelname == "ERROR"
    assert record.alert is True
    assert record.reason == "no_order_code"
    assert record.amount == 10000


def test_signature_rejected_is_alert(caplog) -> None:
    caplog.set_level("INFO")

    record_signature_rejected("mismatch")

    [record] = [r for r in caplog.records if r.getMessage() == "metric_signature_rejected"]
    assert record.levelname == "WARNING"
    assert record.alert is True


def test_latency_is_rounded(caplog) -> None:
    caplog.set_level("INFO")

    record_latency("webhook", "reconcile", 12.3456)

    [record] = [r for r in caplog.records if r.getMessage() == "metric_latency"]
    assert record.latency_ms == 12.35
    assert record.metric_type == "latency"
