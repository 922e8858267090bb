"""Testes da montagem do QR VietQR."""

from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

from app.domain.qr_payload import (
    build_qr_payload,
    build_qr_url,
    build_transfer_description,
    format_amount,
)


def test_transfer_description() -> None:
    assert build_transfer_description("MEOSTORE-123456", "u1") == (
        "MEOSTORE-123456 - Deposit for UID u1"
    )


def test_format_amount() -> None:
    assert format_amount(50000) == "50000"
    assert format_amount(50000.0) == "50000"
    assert format_amount(12.5) == "12.5"


def test_qr_url_exact(bank_account) -> None:
    url = build_qr_url(bank_account, 50000, "MEOSTORE-123456", "u1")

    assert url == (
        "https://img.vietqr.io/image/970448-0014100027536007-compact2.png"
        "?amount=50000"
        "&addInfo=MEOSTORE-123456%20-%20Deposit%20for%20UID%20u1"
        "&accountName=DONG%20THI%20THU%20HA"
    )


def test_qr_url_encodes_reserved_characters(bank_account) -> None:
    url = build_qr_url(bank_account, 100, "MEOSTORE-123456", "a&b=c/d")
    query = parse_qs(urlsplit(url).query)

    assert "%26" in url
    assert "%2F" in url
    assert query["addInfo"] == ["MEOSTORE-123456 - Deposit for UID a&b=c/d"]


def test_payload_pairs_url_and_description(bank_account) -> None:
    payload = build_qr_payload(bank_account, 20000, "MEOSTORE-999999", "uid-9")

    assert payload.transfer_description == "MEOSTORE-999999 - Deposit for UID uid-9"
    assert "amount=20000" in payload.qr_url
