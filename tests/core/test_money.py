"""Tests for Money."""

from decimal import Decimal
from fractions import Fraction

import pytest
from hypothesis import given
from hypothesis import strategies as st

from casino.money import Money, MoneyParseError

money_values = st.decimals(
    min_value=Decimal("-1000000"),
    max_value=Decimal("1000000"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
).map(Money)


class TestMoneyConstruction:
    """Tests for building Money values."""

    def test_rounds_half_up_to_cents(self):
        assert Money(Decimal("1.005")).amount == Decimal("1.01")
        assert Money(Decimal("1.004")).amount == Decimal("1.00")
        assert Money(Decimal("-1.005")).amount == Decimal("-1.01")

    def test_from_major(self):
        assert Money.from_major(25) == Money(Decimal("25.00"))

    def test_zero(self):
        assert Money.zero().is_zero
        assert not Money.zero().is_positive

    def test_rejects_float(self):
        with pytest.raises(TypeError):
            Money(0.1)

    def test_immutable(self):
        money = Money.from_major(5)
        with pytest.raises(AttributeError):
            money.amount = Decimal("6")


class TestMoneyParse:
    """Tests for Money.parse."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("10", "10.00"),
            ("12.5", "12.50"),
            (" 7.25 ", "7.25"),
            ("$1,000", "1000.00"),
            ("-$5", "-5.00"),
            ("0.125", "0.13"),
        ],
    )
    def test_parses_decimal_text(self, text, expected):
        assert Money.parse(text).amount == Decimal(expected)

    @pytest.mark.parametrize(
        "text", ["", "ten", "1.2.3", "NaN", "Infinity", "$", "1e30", "99999999999999999999999999999"]
    )
    def test_rejects_non_numbers(self, text):
        with pytest.raises(MoneyParseError):
            Money.parse(text)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            Money.parse("abc")


class TestMoneyArithmetic:
    """Tests for arithmetic and comparison."""

    def test_add_and_subtract(self):
        assert Money.parse("10.10") + Money.parse("0.95") == Money.parse("11.05")
        assert Money.parse("10") - Money.parse("12.5") == Money.parse("-2.5")

    def test_scale_by_integer(self):
        assert Money.parse("2.50") * 3 == Money.parse("7.50")
        assert 3 * Money.parse("2.50") == Money.parse("7.50")

    def test_scale_by_ratio_rounds_once(self):
        """$0.05 at 3:2 is $0.075, which rounds half-up to $0.08."""
        assert Money.parse("0.05") * Fraction(3, 2) == Money.parse("0.08")
        assert Money.parse("10") * Fraction(3, 2) == Money.parse("15")

    def test_third_of_a_dollar(self):
        assert Money.parse("1") * Fraction(1, 3) == Money.parse("0.33")

    def test_divide_by_integer(self):
        assert Money.parse("10") / 2 == Money.parse("5")
        assert Money.parse("0.05") / 2 == Money.parse("0.03")

    def test_divide_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            Money.parse("10") / 0

    def test_rejects_bool_and_float_factors(self):
        with pytest.raises(TypeError):
            Money.parse("10") * True
        with pytest.raises(TypeError):
            Money.parse("10") * 1.5

    def test_ordering(self):
        assert Money.parse("9.99") < Money.parse("10")
        assert max(Money.parse("3"), Money.parse("4")) == Money.parse("4")

    def test_negation(self):
        assert -Money.parse("3") == Money.parse("-3")
        assert abs(Money.parse("-3")) == Money.parse("3")

    @given(money_values, money_values)
    def test_add_then_subtract_is_identity(self, a, b):
        assert (a + b) - b == a

    @given(money_values)
    def test_multiply_by_one_is_identity(self, a):
        assert a * 1 == a
        assert a * Fraction(1) == a


class TestMoneyDisplay:
    """Tests for currency formatting."""

    def test_str(self):
        assert str(Money.parse("12.5")) == "$12.50"
        assert str(Money.parse("1000")) == "$1,000.00"
        assert str(Money.parse("-5")) == "-$5.00"

    def test_display_string(self):
        assert Money.zero().to_display_string() == "$0.00"

    def test_repr(self):
        assert repr(Money.parse("3")) == "Money('3.00')"
