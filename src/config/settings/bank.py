"""Settings da conta bancária exibida no QR (VietQR).

Dados estáticos, não são secrets, mas são operacionalmente sensíveis:
um valor errado desvia todos os depósitos.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

VIETQR_IMAGE_BASE_URL = "https://img.vietqr.io/image"
VIETQR_TEMPLATES = frozenset({"compact", "compact2", "qr_only", "print"})


@dataclass(frozen=True)
class BankSettings:
    """Conta de recebimento.

    Attributes:
        bank_bin: BIN do banco no padrão Napas (6 dígitos, ex: 970448 = OCB)
        account_number: Número da conta (ou VA) que recebe as transferências
        account_name: Nome do titular exibido no QR
        qr_template: Template de imagem do VietQR
        qr_base_url: URL base do gerador de imagens
    """

    bank_bin: str = ""
    account_number: str = ""
    account_name: str = ""
    qr_template: str = "compact2"
    qr_base_url: str = VIETQR_IMAGE_BASE_URL

    def validate(self) -> list[str]:
        """Valida os campos da conta.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not (self.bank_bin.isdigit() and len(self.bank_bin) == 6):
            errors.append("BANK_BIN deve ter 6 dígitos")

        if not self.account_number.isdigit():
            errors.append("BANK_ACCOUNT_NUMBER deve conter apenas dígitos")

        if not self.account_name.strip():
            errors.append("BANK_ACCOUNT_NAME não configurado")

        if self.qr_template not in VIETQR_TEMPLATES:
            errors.append(f"VIETQR_TEMPLATE inválido: {self.qr_template}")

        return errors


def _load_bank_from_env() -> BankSettings:
    """Carrega BankSettings de variáveis de ambiente."""
    return BankSettings(
        bank_bin=os.getenv("BANK_BIN", "").strip(),
        account_number=os.getenv("BANK_ACCOUNT_NUMBER", "").strip(),
        account_name=os.getenv("BANK_ACCOUNT_NAME", "").strip(),
        qr_template=os.getenv("VIETQR_TEMPLATE", "compact2").strip(),
        qr_base_url=os.getenv("VIETQR_BASE_URL", VIETQR_IMAGE_BASE_URL).rstrip("/"),
    )


@lru_cache(maxsize=1)
def get_bank_settings() -> BankSettings:
    """Retorna instância cacheada de BankSettings."""
    return _load_bank_from_env()
