"""Montagem do QR de transferência (VietQR Quick Link).

Função pura: dados da conta (configuração estática) + pedido -> URL da
imagem do QR. Sem efeitos colaterais.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import quote, urlencode

from config.settings.bank import VIETQR_IMAGE_BASE_URL

if TYPE_CHECKING:
    from config.settings.bank import BankSettings

TRANSFER_DESCRIPTION_TEMPLATE = "{order_code} - Deposit for UID {uid}"


@dataclass(frozen=True, slots=True)
class BankAccount:
    """Conta que recebe as transferências."""

    bank_bin: str
    account_number: str
    account_name: str
    template: str = "compact2"
    base_url: str = VIETQR_IMAGE_BASE_URL

    @classmethod
    def from_settings(cls, settings: BankSettings) -> BankAccount:
        return cls(
            bank_bin=settings.bank_bin,
            account_number=settings.account_number,
            account_name=settings.account_name,
            template=settings.qr_template,
            base_url=settings.qr_base_url,
        )


@dataclass(frozen=True, slots=True)
class QrPayload:
    """Resultado exibido ao cliente."""

    qr_url: str
    transfer_description: str


def build_transfer_description(order_code: str, uid: str) -> str:
    """Descrição que o pagador deve usar na transferência."""
    return TRANSFER_DESCRIPTION_TEMPLATE.format(order_code=order_code, uid=uid)


def format_amount(amount: int | float) -> str:
    """Formata valor sem casas decimais supérfluas (50000.0 -> 50000)."""
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


def build_qr_url(
    account: BankAccount,
    amount: int | float,
    order_code: str,
    uid: str,
) -> str:
    """Monta a URL da imagem do QR.

    Formato:
        {base}/{bin}-{conta}-{template}.png?amount=..&addInfo=..&accountName=..

    Os valores da query são codificados como encodeURIComponent
    (espaço vira %20, não +).
    """
    query = urlencode(
        {
            "amount": format_amount(amount),
            "addInfo": build_transfer_description(order_code, uid),
            "accountName": account.account_name,
        },
        quote_via=quote,
        safe="",
    )
    path = f"{account.bank_bin}-{account.account_number}-{account.template}.png"
    return f"{account.base_url}/{path}?{query}"


def build_qr_payload(
    account: BankAccount,
    amount: int | float,
    order_code: str,
    uid: str,
) -> QrPayload:
    """Monta URL do QR e descrição de transferência em uma chamada."""
    return QrPayload(
        qr_url=build_qr_url(account, amount, order_code, uid),
        transfer_description=build_transfer_description(order_code, uid),
    )
