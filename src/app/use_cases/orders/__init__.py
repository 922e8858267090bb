"""Use cases de pedidos."""

from .create_order import CreateOrderResult, CreateOrderUseCase, validate_order_input
from .get_order import GetOrderUseCase

__all__ = [
    "CreateOrderResult",
    "CreateOrderUseCase",
    "GetOrderUseCase",
    "validate_order_input",
]
