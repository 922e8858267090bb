"""Use case de criação de pedido de pagamento."""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.domain.errors import DuplicateKeyError, OrderCreationFailedError, OrderValidationError
from app.domain.order import Order
from app.domain.order_code import generate_order_code
from app.domain.qr_payload import BankAccount, QrPayload, build_qr_payload
from app.observability.metrics import record_order_created
from config.settings.orders import DEFAULT_ORDER_CODE_PREFIX

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.order_store import OrderStoreProtocol

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5


@dataclass(frozen=True, slots=True)
class CreateOrderResult:
    """Pedido criado e dados de pagamento exibidos ao cliente."""

    order: Order
    qr: QrPayload
    attempts: int

    def to_response(self) -> dict[str, object]:
        return {
            "success": True,
            "orderCode": self.order.order_code,
            "transferDesc": self.qr.transfer_description,
            "amount": self.order.amount,
            "qrUrl": self.qr.qr_url,
        }


def validate_order_input(uid: object, amount: object) -> tuple[str, int | float]:
    """Valida uid e amount.

    Raises:
        OrderValidationError: Campo ausente, vazio ou valor não positivo/não finito.
    """
    if uid is None or (isinstance(uid, str) and not uid.strip()):
        raise OrderValidationError("uid é obrigatório")
    if not isinstance(uid, (str, int)) or isinstance(uid, bool):
        raise OrderValidationError("uid deve ser string")
    if amount is None:
        raise OrderValidationError("amount é obrigatório")
    if isinstance(amount, bool) or not isinstance(amount, numbers.Real):
        raise OrderValidationError("amount deve ser numérico")
    if not math.isfinite(amount) or not amount > 0:
        raise OrderValidationError("amount deve ser finito e > 0")
    return str(uid).strip(), amount  # type: ignore[return-value]


class CreateOrderUseCase:
    """Gera código, monta QR e persiste o pedido.

    Colisões de código são detectadas pela constraint de unicidade do store
    (DuplicateKeyError): um novo código é gerado e a inserção repetida, até
    `max_attempts` tentativas.
    """

    def __init__(
        self,
        store: OrderStoreProtocol,
        account: BankAccount,
        code_prefix: str = DEFAULT_ORDER_CODE_PREFIX,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        code_generator: Callable[[str], str] = generate_order_code,
    ) -> None:
        self._store = store
        self._account = account
        self._code_prefix = code_prefix
        self._max_attempts = max_attempts
        self._generate_code = code_generator

    async def execute(self, uid: object, amount: object) -> CreateOrderResult:
        """Cria pedido pending.

        Raises:
            OrderValidationError: Entrada inválida.
            OrderCreationFailedError: Sem código único após max_attempts.
            StorageUnavailableError: Store indisponível.
        """
        clean_uid, clean_amount = validate_order_input(uid, amount)

        for attempt in range(1, self._max_attempts + 1):
            order_code = self._generate_code(self._code_prefix)
            qr = build_qr_payload(self._account, clean_amount, order_code, clean_uid)
            order = Order(
                order_code=order_code,
                uid=clean_uid,
                amount=clean_amount,
                transfer_description=qr.transfer_description,
            )
            try:
                await self._store.insert(order)
            except DuplicateKeyError:
                logger.warning(
                    "order_code_collision",
                    extra={"order_code": order_code, "attempt": attempt},
                )
                continue

            logger.info(
                "order_created",
                extra={"order_code": order_code, "attempt": attempt},
            )
            record_order_created(order_code, attempt)
            return CreateOrderResult(order=order, qr=qr, attempts=attempt)

        logger.error("order_creation_failed", extra={"attempts": self._max_attempts})
        raise OrderCreationFailedError(self._max_attempts)
