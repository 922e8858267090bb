"""Firestore Order Store.

Cada pedido é um documento cujo id é o order_code, o que dá a constraint
de unicidade de graça: `create()` falha com AlreadyExists em colisão.

A transição pending -> paid roda numa transação Firestore (leitura dos
candidatos + update condicional), então entregas concorrentes do mesmo
webhook, mesmo em instâncias diferentes, serializam no servidor.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore

from app.domain.errors import DuplicateKeyError
from app.domain.order import Order, OrderStatus, PaidFields
from app.protocols.order_store import OrderStoreProtocol
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from google.cloud.firestore import Client as FirestoreClient
    from google.cloud.firestore import DocumentReference, Transaction

logger = logging.getLogger(__name__)

ORDERS_COLLECTION = "orders"
HEALTH_COLLECTION = "_health"


def compare_and_set_in_transaction(
    transaction: Transaction,
    refs: Sequence[DocumentReference],
    fields: PaidFields,
) -> Order | None:
    """Corpo da transação de pagamento.

    Firestore exige todas as leituras antes de qualquer escrita; por isso
    os candidatos são lidos primeiro e só um é atualizado.
    """
    snapshots = [ref.get(transaction=transaction) for ref in refs]
    for ref, snapshot in zip(refs, snapshots, strict=True):
        if not snapshot.exists:
            continue
        order = Order.from_dict(snapshot.to_dict() or {})
        if not order.is_pending:
            continue
        paid = order.mark_paid(fields)
        transaction.update(ref, _paid_update(fields))
        return paid
    return None


def _paid_update(fields: PaidFields) -> dict[str, Any]:
    update: dict[str, Any] = {
        "status": OrderStatus.PAID.value,
        "paid_at": fields.paid_at,
        "tx_id": fields.tx_id,
        "bank_description": fields.bank_description,
    }
    if fields.paid_amount is not None:
        update["paid_amount"] = fields.paid_amount
    return update


class FirestoreOrderStore(OrderStoreProtocol):
    """Store de pedidos usando Firestore."""

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection: str = ORDERS_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection_name = collection

    def _collection(self) -> Any:
        return self._db.collection(self._collection_name)

    async def initialize(self) -> None:
        await asyncio.to_thread(self._initialize_sync)

    def _initialize_sync(self) -> None:
        try:
            self._db.collection(HEALTH_COLLECTION).document("check").set(
                {"updated_at": datetime.now(UTC), "service": "meostore-payments"}
            )
        except gcp_exceptions.GoogleAPIError as exc:
            raise FirestoreUnavailableError("Firestore indisponível no startup") from exc
        logger.info(
            "firestore_order_store_initialized",
            extra={"collection": self._collection_name},
        )

    async def insert(self, order: Order) -> None:
        await asyncio.to_thread(self._insert_sync, order)

    def _insert_sync(self, order: Order) -> None:
        try:
            self._collection().document(order.order_code).create(order.to_dict())
        except gcp_exceptions.AlreadyExists as exc:
            raise DuplicateKeyError(order.order_code) from exc
        except gcp_exceptions.GoogleAPIError as exc:
            logger.error(
                "order_insert_failed",
                extra={"error_type": type(exc).__name__, "order_code": order.order_code},
            )
            raise FirestoreUnavailableError("Falha ao inserir pedido no Firestore") from exc

    async def find_by_code(self, order_code: str) -> Order | None:
        return await asyncio.to_thread(self._find_sync, order_code)

    def _find_sync(self, order_code: str) -> Order | None:
        try:
            doc = self._collection().document(order_code).get()
        except gcp_exceptions.GoogleAPIError as exc:
            logger.error(
                "order_get_failed",
                extra={"error_type": type(exc).__name__, "order_code": order_code},
            )
            raise FirestoreUnavailableError("Falha ao consultar pedido no Firestore") from exc
        if not doc.exists:
            return None
        return Order.from_dict(doc.to_dict() or {})

    async def compare_and_set_paid(
        self,
        order_codes: Sequence[str],
        fields: PaidFields,
    ) -> Order | None:
        return await asyncio.to_thread(self._compare_and_set_sync, list(order_codes), fields)

    def _compare_and_set_sync(
        self,
        order_codes: list[str],
        fields: PaidFields,
    ) -> Order | None:
        refs = [self._collection().document(code) for code in order_codes]
        run = firestore.transactional(compare_and_set_in_transaction)
        try:
            return run(self._db.transaction(), refs, fields)
        except gcp_exceptions.GoogleAPIError as exc:
            logger.error(
                "order_compare_and_set_failed",
                extra={"error_type": type(exc).__name__, "order_codes": order_codes},
            )
            raise FirestoreUnavailableError("Falha na transação de pagamento") from exc
