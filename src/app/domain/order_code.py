"""Geração e extração de códigos de pedido.

O código (ex: MEOSTORE-123456) é o único elo entre a transferência bancária
e o pedido: o pagador digita o código na descrição da transferência e o
banco o repassa ao agregador. Bancos costumam remover o hífen, mudar a
caixa e anexar referências próprias, por isso a extração é tolerante.

Funções puras, sem IO: testáveis com descrições arbitrárias.
"""

from __future__ import annotations

import random
import re
from dataclasses import dataclass
from functools import lru_cache

from config.settings.orders import DEFAULT_ORDER_CODE_PREFIX

ORDER_CODE_MIN = 100000
ORDER_CODE_MAX = 999999

_system_random = random.SystemRandom()


@dataclass(frozen=True, slots=True)
class OrderCodeMatch:
    """Código encontrado em uma descrição bancária.

    Atributos:
        canonical: Forma canônica PREFIX-{digits}
        raw: Trecho exatamente como apareceu na descrição
        digits: Dígitos capturados
    """

    canonical: str
    raw: str
    digits: str

    @property
    def candidates(self) -> tuple[str, ...]:
        """Códigos aceitos no compare-and-set (canônico primeiro).

        A forma casada sem normalização só é incluída quando difere da
        canônica, para tolerar pedidos antigos gravados sem hífen.
        """
        as_matched = self.raw.upper()
        if as_matched == self.canonical:
            return (self.canonical,)
        return (self.canonical, as_matched)


def generate_order_code(
    prefix: str = DEFAULT_ORDER_CODE_PREFIX,
    rng: random.Random | None = None,
) -> str:
    """Gera código PREFIX-NNNNNN com número uniforme em [100000, 999999].

    Não consulta estado externo: colisões são detectadas pela constraint
    de unicidade do store e tratadas pelo caso de uso de criação.
    """
    number = (rng or _system_random).randint(ORDER_CODE_MIN, ORDER_CODE_MAX)
    return f"{prefix.upper()}-{number}"


def normalize_order_code(digits: str, prefix: str = DEFAULT_ORDER_CODE_PREFIX) -> str:
    """Monta a forma canônica PREFIX-{digits}."""
    return f"{prefix.upper()}-{digits}"


@lru_cache(maxsize=8)
def _search_pattern(prefix: str) -> re.Pattern[str]:
    # [0-9] em vez de \d: só dígitos ASCII entram na forma canônica
    return re.compile(rf"{re.escape(prefix)}-?([0-9]+)", re.IGNORECASE)


@lru_cache(maxsize=8)
def _full_pattern(prefix: str) -> re.Pattern[str]:
    return re.compile(rf"{re.escape(prefix)}-[0-9]{{6}}")


def extract_order_code(
    description: str | None,
    prefix: str = DEFAULT_ORDER_CODE_PREFIX,
) -> OrderCodeMatch | None:
    """Extrai o primeiro código de pedido de uma descrição livre.

    Aceita prefixo em qualquer caixa, hífen opcional e texto ao redor
    (sem âncoras de início/fim).

    Args:
        description: Descrição da transação bancária.
        prefix: Prefixo do código.

    Returns:
        OrderCodeMatch ou None se nenhum código for encontrado.
    """
    if not description:
        return None
    match = _search_pattern(prefix.upper()).search(description)
    if match is None:
        return None
    digits = match.group(1)
    return OrderCodeMatch(
        canonical=normalize_order_code(digits, prefix),
        raw=match.group(0),
        digits=digits,
    )


def is_valid_order_code(code: str, prefix: str = DEFAULT_ORDER_CODE_PREFIX) -> bool:
    """Verifica se o código está no formato exato PREFIX-NNNNNN."""
    return _full_pattern(prefix.upper()).fullmatch(code) is not None
