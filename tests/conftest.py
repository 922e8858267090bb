"""Configuração do pytest para o serviço de pagamentos MeoStore."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

TEST_BANK_BIN = "970448"
TEST_ACCOUNT_NUMBER = "0014100027536007"
TEST_ACCOUNT_NAME = "DONG THI THU HA"


def _settings_getters() -> tuple:
    from config.settings import (
        get_bank_settings,
        get_base_settings,
        get_casso_settings,
        get_firestore_settings,
        get_order_settings,
    )

    return (
        get_bank_settings,
        get_base_settings,
        get_casso_settings,
        get_firestore_settings,
        get_order_settings,
    )


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings são lru_cache; cada teste lê o próprio ambiente."""
    for getter in _settings_getters():
        getter.cache_clear()
    yield
    for getter in _settings_getters():
        getter.cache_clear()


@pytest.fixture
def bank_account():
    from app.domain.qr_payload import BankAccount

    return BankAccount(
        bank_bin=TEST_BANK_BIN,
        account_number=TEST_ACCOUNT_NUMBER,
        account_name=TEST_ACCOUNT_NAME,
    )


@pytest.fixture
def memory_store():
    from app.infra.stores import MemoryOrderStore

    return MemoryOrderStore()


@pytest.fixture
def fake_notifier():
    from tests.fakes.fake_payment_notifier import FakePaymentNotifier

    return FakePaymentNotifier()


WEBHOOK_SECRET = "casso-secret"


@pytest.fixture
def container(bank_account, monkeypatch: pytest.MonkeyPatch):
    """Container com store em memória e fan-out local (sem Redis/Firestore)."""
    from app.bootstrap.dependencies import build_container
    from app.infra.notifications import LocalBroadcaster
    from app.infra.stores import GatedOrderStore, MemoryOrderStore

    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("CASSO_WEBHOOK_SECRET", WEBHOOK_SECRET)
    monkeypatch.delenv("CASSO_SKIP_SIGNATURE", raising=False)
    broadcaster = LocalBroadcaster()
    return build_container(
        store=GatedOrderStore(MemoryOrderStore()),
        notifier=broadcaster,
        broadcaster=broadcaster,
        account=bank_account,
    )


@pytest.fixture
def client(container):
    from fastapi.testclient import TestClient

    from app.app import create_app

    with TestClient(create_app(container)) as test_client:
        yield test_client
