"""Stores: implementações concretas de persistência de pedidos.

Módulos disponíveis:
    - memory_order_store: Store em memória para desenvolvimento/testes
    - firestore_order_store: Store de produção usando Firestore
    - gated_order_store: Readiness gate sobre qualquer store
"""

from __future__ import annotations

from app.infra.stores.gated_order_store import GatedOrderStore
from app.infra.stores.memory_order_store import MemoryOrderStore

__all__ = [
    "GatedOrderStore",
    "MemoryOrderStore",
]
