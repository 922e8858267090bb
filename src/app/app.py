"""Entrypoint do serviço de pagamentos MeoStore.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 3000

Uso (desenvolvimento):
    python -m app.app
"""

from __future__ import annotations

import inspect
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.dependencies import ServiceContainer, build_container
from app.infra.notifications import RedisPaymentNotifier
from config.logging import get_logger
from config.settings import get_base_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = get_logger(__name__)


async def _close_redis(redis_client: object | None) -> None:
    if redis_client is None:
        return
    close = getattr(redis_client, "aclose", None) or getattr(redis_client, "close", None)
    if callable(close):
        result = close()
        if inspect.isawaitable(result):
            await result


def create_app(container: ServiceContainer | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        container: Dependências prontas (testes). Se None, o container é
            montado a partir das settings no startup.

    Returns:
        Aplicação FastAPI configurada.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Startup: valida settings, inicializa store (fatal) e listener Redis.

        Shutdown: para o listener, aguarda publicações e fecha conexões.
        """
        service = get_base_settings().service_name
        logger.info("app_starting", extra={"service": service})

        if container is None:
            initialize_app()
            validate_runtime_settings()
            services = build_container()
        else:
            services = container
        app.state.container = services

        try:
            await services.store.initialize()
        except Exception:
            logger.critical("order_store_initialization_failed", exc_info=True)
            raise

        notifier = services.notifier
        if isinstance(notifier, RedisPaymentNotifier):
            await notifier.start()

        yield

        logger.info("app_shutting_down", extra={"service": service})
        if isinstance(notifier, RedisPaymentNotifier):
            await notifier.stop(timeout_seconds=5.0)
        services.store.close()
        await _close_redis(services.redis_client)

    fastapi_app = FastAPI(
        title="MeoStore Payments",
        description="Pedidos de depósito via QR e conciliação de webhooks bancários",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Frontend estático em outra origem consome /create-order e /order
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": get_base_settings().service_name})
    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta."""
    import uvicorn

    initialize_app()
    settings = get_base_settings()
    logger.info("app_run", extra={"port": settings.port, "environment": settings.environment})
    uvicorn.run("app.app:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
