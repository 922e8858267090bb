"""Exceções de domínio de pedidos.

Falhas de infraestrutura (store fora do ar) ficam em utils.errors.
"""

from __future__ import annotations


class OrderError(Exception):
    """Base para erros de domínio de pedidos."""


class OrderValidationError(OrderError, ValueError):
    """Campos obrigatórios ausentes ou inválidos na criação do pedido."""


class DuplicateKeyError(OrderError):
    """order_code já existe no store (colisão de geração)."""

    def __init__(self, order_code: str) -> None:
        super().__init__(f"order_code duplicado: {order_code}")
        self.order_code = order_code


class OrderNotFoundError(OrderError):
    """Pedido inexistente."""

    def __init__(self, order_code: str) -> None:
        super().__init__(f"pedido não encontrado: {order_code}")
        self.order_code = order_code


class OrderCreationFailedError(OrderError):
    """Não foi possível gerar um order_code único dentro do limite."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"order_code único não gerado após {attempts} tentativas")
        self.attempts = attempts


class InvalidStatusTransitionError(OrderError):
    """Transição de status fora de pending -> paid."""


class UnattributedPaymentError(OrderError):
    """Dinheiro recebido sem pedido correspondente.

    Attributes:
        tx_id: ID da transação no agregador
        reason: no_order_code | order_not_found
    """

    def __init__(self, tx_id: str, reason: str) -> None:
        super().__init__(f"pagamento sem pedido ({reason}): tx {tx_id}")
        self.tx_id = tx_id
        self.reason = reason


class SignatureInvalidError(OrderError):
    """Webhook com assinatura ausente, malformada ou divergente.

    Attributes:
        reason: missing_header | malformed_header | mismatch | missing_secret
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"assinatura inválida: {reason}")
        self.reason = reason
