"""Acesso ao container de serviços a partir das rotas."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi.requests import HTTPConnection

if TYPE_CHECKING:
    from app.bootstrap.dependencies import ServiceContainer


def get_container(connection: HTTPConnection) -> ServiceContainer:
    """Retorna o ServiceContainer registrado em app.state (HTTP ou WebSocket)."""
    return connection.app.state.container
