"""Agregador de rotas: registra todos os routers da API.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.casso.webhook import router as casso_router
from api.routes.health.router import router as health_router
from api.routes.orders.router import router as orders_router
from api.routes.realtime.router import router as realtime_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks (sem prefixo para /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    api_router.include_router(orders_router, tags=["orders"])
    api_router.include_router(casso_router, tags=["casso"])
    api_router.include_router(realtime_router, tags=["realtime"])

    return api_router
