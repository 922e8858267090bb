"""Rotas HTTP da API.

Estrutura:
- routes/orders/: criação e consulta de pedidos
- routes/casso/: webhook de transações bancárias
- routes/realtime/: WebSocket de eventos de pagamento
- routes/health/: health checks e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
