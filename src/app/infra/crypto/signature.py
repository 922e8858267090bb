"""Validação de assinatura HMAC-SHA256 dos webhooks Casso (V2).

Header `X-Casso-Signature`: pares `chave=valor` separados por vírgula,
ex: `t=1700000000,v1=<hex>`. A assinatura cobre `"{t}.{corpo bruto}"`.
"""

from __future__ import annotations

import hashlib
import hmac


def parse_signature_header(signature_header: str | None) -> dict[str, str]:
    """Converte o header em dict, ignorando segmentos malformados."""
    parts: dict[str, str] = {}
    if not signature_header:
        return parts
    for segment in signature_header.split(","):
        key, sep, value = segment.partition("=")
        if not sep:
            continue
        parts[key.strip()] = value.strip()
    return parts


def compute_casso_signature(raw_body: bytes | str, timestamp: str, secret: str) -> str:
    """Calcula o HMAC-SHA256 hex de `"{t}.{raw_body}"`."""
    body = raw_body if isinstance(raw_body, bytes) else raw_body.encode("utf-8")
    signed_payload = timestamp.encode("utf-8") + b"." + body
    return hmac.new(secret.encode("utf-8"), signed_payload, hashlib.sha256).hexdigest()


def verify_casso_signature(
    raw_body: bytes | str,
    signature_header: str | None,
    secret: str | None,
) -> bool:
    """Valida assinatura do webhook Casso.

    Args:
        raw_body: Corpo bruto da requisição (byte a byte, sem parse)
        signature_header: Valor do header X-Casso-Signature
        secret: Secret compartilhado do webhook

    Returns:
        True se assinatura válida. False se header/secret ausentes,
        se faltar `t` ou `v1`, ou se o HMAC não conferir.
    """
    if not signature_header or not secret:
        return False

    parts = parse_signature_header(signature_header)
    timestamp = parts.get("t")
    expected = parts.get("v1")
    if not timestamp or not expected:
        return False

    computed = compute_casso_signature(raw_body, timestamp, secret)
    return hmac.compare_digest(computed.encode("ascii"), expected.encode("utf-8"))
