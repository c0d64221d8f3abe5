"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from printshop.domain.exceptions import InvalidQuantity, ValidationError
from printshop.domain.model.value_objects import Money, Quantity, round_cents, to_decimal


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "XOF"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_with_currency(self):
        assert Money.of(10, "EUR").currency == "EUR"

    def test_invalid_amount_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money.of("1", "EUR") + Money.of("1", "XOF")

    def test_str(self):
        assert str(Money.of("550")) == "550.00 XOF"


class TestRounding:

    def test_half_up_on_the_cent(self):
        assert round_cents(Decimal("0.125")) == Decimal("0.13")
        assert round_cents(Decimal("2.675")) == Decimal("2.68")

    def test_rounds_down_below_half(self):
        assert round_cents(Decimal("1.234")) == Decimal("1.23")

    def test_to_decimal_accepts_signed_values(self):
        assert to_decimal("-2.5") == Decimal("-2.5")

    def test_to_decimal_rejects_bools_and_nan(self):
        with pytest.raises(ValidationError):
            to_decimal(True)
        with pytest.raises(ValidationError):
            to_decimal("NaN")


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_positive(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(InvalidQuantity, match="must be positive"):
            Quantity(0)

    def test_non_integer_rejected(self):
        with pytest.raises(InvalidQuantity, match="must be an integer"):
            Quantity(2.5)  # type: ignore[arg-type]
