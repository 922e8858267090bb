"""Settings do agregador Casso (webhook V2).

O secret é usado apenas para validar a assinatura HMAC dos webhooks.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from config.settings.base.core import BaseSettings

SIGNATURE_HEADER = "X-Casso-Signature"


@dataclass(frozen=True)
class CassoSettings:
    """Configurações do webhook Casso.

    Attributes:
        webhook_secret: Secret compartilhado para HMAC-SHA256
        skip_signature: Desliga a verificação (apenas development)
        signature_header: Nome do header de assinatura
    """

    webhook_secret: str = ""
    skip_signature: bool = False
    signature_header: str = SIGNATURE_HEADER

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações do webhook.

        Args:
            base: BaseSettings para verificar ambiente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.skip_signature and not base.is_development:
            errors.append(
                "CASSO_SKIP_SIGNATURE proibido em staging/production"
            )

        if not self.webhook_secret and not self.skip_signature:
            errors.append("CASSO_WEBHOOK_SECRET não configurado")

        return errors

    def bypass_enabled(self, base: BaseSettings) -> bool:
        """Bypass só vale em development, mesmo se a flag vier ligada."""
        return self.skip_signature and base.is_development


def _load_casso_from_env() -> CassoSettings:
    """Carrega CassoSettings de variáveis de ambiente.

    Aceita CASSO_SECRET como alias legado de CASSO_WEBHOOK_SECRET.
    """
    return CassoSettings(
        webhook_secret=os.getenv("CASSO_WEBHOOK_SECRET", os.getenv("CASSO_SECRET", "")),
        skip_signature=os.getenv("CASSO_SKIP_SIGNATURE", "").lower() in ("true", "1", "yes"),
        signature_header=os.getenv("CASSO_SIGNATURE_HEADER", SIGNATURE_HEADER),
    )


@lru_cache(maxsize=1)
def get_casso_settings() -> CassoSettings:
    """Retorna instância cacheada de CassoSettings."""
    return _load_casso_from_env()
