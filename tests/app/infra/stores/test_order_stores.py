"""Testes dos stores de pedidos em memória e do readiness gate."""

from __future__ import annotations

import pytest

from app.domain.errors import DuplicateKeyError
from app.domain.order import Order, OrderStatus, PaidFields
from app.infra.stores import GatedOrderStore, MemoryOrderStore
from utils.errors import StorageUnavailableError


def _order(code: str = "MEOSTORE-123456") -> Order:
    return Order(order_code=code, uid="u1", amount=1000)


class TestMemoryOrderStore:
    @pytest.mark.asyncio
    async def test_insert_and_find(self) -> None:
        store = MemoryOrderStore()
        await store.insert(_order())

        found = await store.find_by_code("MEOSTORE-123456")

        assert found is not None
        assert found.uid == "u1"
        assert await store.find_by_code("MEOSTORE-000000") is None

    @pytest.mark.asyncio
    async def test_duplicate_insert_raises(self) -> None:
        store = MemoryOrderStore()
        await store.insert(_order())

        with pytest.raises(DuplicateKeyError):
            await store.insert(_order())

    @pytest.mark.asyncio
    async def test_compare_and_set_requires_pending(self) -> None:
        store = MemoryOrderStore()
        await store.insert(_order())

        first = await store.compare_and_set_paid(
            ["MEOSTORE-123456"], PaidFields(tx_id="tx-1", bank_description="a")
        )
        second = await store.compare_and_set_paid(
            ["MEOSTORE-123456"], PaidFields(tx_id="tx-2", bank_description="b")
        )

        assert first is not None
        assert first.status is OrderStatus.PAID
        assert second is None
        stored = await store.find_by_code("MEOSTORE-123456")
        assert stored.tx_id == "tx-1"

    @pytest.mark.asyncio
    async def test_compare_and_set_uses_first_pending_candidate(self) -> None:
        store = MemoryOrderStore()
        await store.insert(_order("MEOSTORE123456"))

        updated = await store.compare_and_set_paid(
            ["MEOSTORE-123456", "MEOSTORE123456"],
            PaidFields(tx_id="tx-1", bank_description="a"),
        )

        assert updated is not None
        assert updated.order_code == "MEOSTORE123456"

    @pytest.mark.asyncio
    async def test_compare_and_set_unknown_code(self) -> None:
        store = MemoryOrderStore()

        assert (
            await store.compare_and_set_paid(
                ["MEOSTORE-123456"], PaidFields(tx_id="tx-1", bank_description="a")
            )
            is None
        )


class TestGatedOrderStore:
    @pytest.mark.asyncio
    async def test_operations_fail_before_initialize(self) -> None:
        store = GatedOrderStore(MemoryOrderStore())

        assert not store.ready
        with pytest.raises(StorageUnavailableError):
            await store.insert(_order())
        with pytest.raises(StorageUnavailableError):
            await store.find_by_code("MEOSTORE-123456")
        with pytest.raises(StorageUnavailableError):
            await store.compare_and_set_paid(
                ["MEOSTORE-123456"], PaidFields(tx_id="tx-1", bank_description="a")
            )

    @pytest.mark.asyncio
    async def test_delegates_after_initialize(self) -> None:
        inner = MemoryOrderStore()
        store = GatedOrderStore(inner)

        await store.initialize()
        await store.insert(_order())

        assert store.ready
        assert store.backend == "MemoryOrderStore"
        assert len(inner) == 1
        assert await store.find_by_code("MEOSTORE-123456") is not None

    @pytest.mark.asyncio
    async def test_close_reopens_gate(self) -> None:
        store = GatedOrderStore(MemoryOrderStore())
        await store.initialize()

        store.close()

        with pytest.raises(StorageUnavailableError):
            await store.find_by_code("MEOSTORE-123456")

    @pytest.mark.asyncio
    async def test_failed_initialize_keeps_gate_closed(self) -> None:
        class _BrokenStore(MemoryOrderStore):
            async def initialize(self) -> None:
                raise StorageUnavailableError("boom")

        store = GatedOrderStore(_BrokenStore())

        with pytest.raises(StorageUnavailableError):
            await store.initialize()
        assert not store.ready
