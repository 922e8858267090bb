"""Testes de geração e extração de códigos de pedido."""

from __future__ import annotations

import random
import re

import pytest

from app.domain.order_code import (
    ORDER_CODE_MAX,
    ORDER_CODE_MIN,
    extract_order_code,
    generate_order_code,
    is_valid_order_code,
)

CODE_PATTERN = re.compile(r"^MEOSTORE-\d{6}$")


class _FixedRandom(random.Random):
    def __init__(self, pick: str) -> None:
        super().__init__()
        self._pick = pick

    def randint(self, a: int, b: int) -> int:
        return a if self._pick == "min" else b


class TestGenerateOrderCode:
    def test_format_is_prefix_and_six_digits(self) -> None:
        for _ in range(200):
            assert CODE_PATTERN.match(generate_order_code())

    def test_range_bounds(self) -> None:
        assert generate_order_code(rng=_FixedRandom("min")) == f"MEOSTORE-{ORDER_CODE_MIN}"
        assert generate_order_code(rng=_FixedRandom("max")) == f"MEOSTORE-{ORDER_CODE_MAX}"

    def test_seeded_rng_is_deterministic(self) -> None:
        first = generate_order_code(rng=random.Random(42))
        second = generate_order_code(rng=random.Random(42))
        assert first == second

    def test_custom_prefix_is_uppercased(self) -> None:
        assert generate_order_code("shop").startswith("SHOP-")


class TestExtractOrderCode:
    def test_canonical_code_inside_free_text(self) -> None:
        match = extract_order_code("Chuyen tien MEOSTORE-123456 tks")

        assert match is not None
        assert match.canonical == "MEOSTORE-123456"
        assert match.candidates == ("MEOSTORE-123456",)

    def test_missing_hyphen_and_lowercase(self) -> None:
        match = extract_order_code("ck meostore123456 nap game")

        assert match is not None
        assert match.canonical == "MEOSTORE-123456"
        assert match.raw == "meostore123456"
        assert match.candidates == ("MEOSTORE-123456", "MEOSTORE123456")

    def test_lowercase_with_hyphen_has_single_candidate(self) -> None:
        match = extract_order_code("meostore-654321")

        assert match is not None
        assert match.candidates == ("MEOSTORE-654321",)

    def test_bank_suffix_glued_to_code(self) -> None:
        match = extract_order_code("MBVCB.123.MEOSTORE-123456.CT tu 0123")

        assert match is not None
        assert match.canonical == "MEOSTORE-123456"

    def test_first_code_wins(self) -> None:
        match = extract_order_code("MEOSTORE-111111 va MEOSTORE-222222")

        assert match is not None
        assert match.digits == "111111"

    @pytest.mark.parametrize("description", [None, "", "Chuyen tien nap game", "MEOSTORE-"])
    def test_no_code(self, description: str | None) -> None:
        assert extract_order_code(description) is None

    def test_custom_prefix(self) -> None:
        match = extract_order_code("pay shop42", prefix="shop")

        assert match is not None
        assert match.canonical == "SHOP-42"


class TestIsValidOrderCode:
    def test_exact_format(self) -> None:
        assert is_valid_order_code("MEOSTORE-123456")

    @pytest.mark.parametrize("code", ["MEOSTORE123456", "MEOSTORE-12345", "meostore-123456", "X-123456"])
    def test_rejects_other_forms(self, code: str) -> None:
        assert not is_valid_order_code(code)
