"""Agregador de settings do serviço de pagamentos.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

from config.settings.bank import (
    VIETQR_IMAGE_BASE_URL,
    BankSettings,
    get_bank_settings,
)
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.casso import (
    SIGNATURE_HEADER,
    CassoSettings,
    get_casso_settings,
)
from config.settings.infra import (
    FirestoreSettings,
    get_firestore_settings,
)
from config.settings.orders import (
    DEFAULT_ORDER_CODE_PREFIX,
    NotifierBackend,
    OrderSettings,
    OrderStoreBackend,
    get_order_settings,
)

__all__ = [
    # Constants
    "DEFAULT_ORDER_CODE_PREFIX",
    "SIGNATURE_HEADER",
    "VIETQR_IMAGE_BASE_URL",
    # Base
    "BankSettings",
    "BaseSettings",
    "CassoSettings",
    "Environment",
    # Infrastructure
    "FirestoreSettings",
    "NotifierBackend",
    "OrderSettings",
    "OrderStoreBackend",
    "get_bank_settings",
    "get_base_settings",
    "get_casso_settings",
    "get_firestore_settings",
    "get_order_settings",
]
