"""Testes do composition root (validação de settings e factories)."""

from __future__ import annotations

import pytest

from app.bootstrap import validate_runtime_settings
from app.bootstrap.dependencies import build_container, create_notifier, create_order_store
from app.infra.notifications import LocalBroadcaster
from app.infra.stores import GatedOrderStore
from config.settings import OrderSettings

VALID_ENV = {
    "CASSO_WEBHOOK_SECRET": "secret",
    "BANK_BIN": "970448",
    "BANK_ACCOUNT_NUMBER": "0014100027536007",
    "BANK_ACCOUNT_NAME": "DONG THI THU HA",
}


@pytest.fixture
def valid_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name, value in VALID_ENV.items():
        monkeypatch.setenv(name, value)
    for name in ("ORDER_STORE_BACKEND", "NOTIFIER_BACKEND", "CASSO_SKIP_SIGNATURE"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_development_only_warns(valid_env, caplog) -> None:
    caplog.set_level("WARNING")
    valid_env.setenv("ENVIRONMENT", "development")
    valid_env.delenv("CASSO_WEBHOOK_SECRET")

    validate_runtime_settings()

    assert any(r.getMessage() == "settings_validation_failed" for r in caplog.records)


def test_production_fails_fast(valid_env) -> None:
    valid_env.setenv("ENVIRONMENT", "production")
    valid_env.setenv("ORDER_STORE_BACKEND", "memory")

    with pytest.raises(RuntimeError, match="Configuração inválida para production"):
        validate_runtime_settings()


def test_production_with_complete_env_passes(valid_env) -> None:
    valid_env.setenv("ENVIRONMENT", "production")
    valid_env.setenv("GCP_PROJECT", "meostore")

    validate_runtime_settings()


def test_memory_store_is_gated() -> None:
    store = create_order_store(OrderSettings(store_backend="memory"))

    assert isinstance(store, GatedOrderStore)
    assert not store.ready


def test_unknown_store_backend_raises() -> None:
    with pytest.raises(ValueError, match="ORDER_STORE_BACKEND"):
        create_order_store(OrderSettings(store_backend="mongo"))  # type: ignore[arg-type]


def test_local_notifier_is_the_broadcaster() -> None:
    broadcaster = LocalBroadcaster()

    notifier, redis_client = create_notifier(broadcaster, OrderSettings(notifier_backend="local"))

    assert notifier is broadcaster
    assert redis_client is None


def test_build_container_wires_use_cases(valid_env) -> None:
    valid_env.setenv("ENVIRONMENT", "development")

    container = build_container()

    assert container.notifier is container.broadcaster
    assert container.create_order is not None
    assert container.reconciler is not None
