"""
Unit Tests for Money and StatusEnum value objects
"""

from decimal import Decimal

import pytest

from erp_core.core.domain import InvalidArgumentException, Money, StatusEnum, to_decimal


class Color(StatusEnum):
    RED = "RED"
    GREEN = "GREEN"


@pytest.mark.unit
class TestMoney:
    """Exact decimal arithmetic."""

    def test_arithmetic_is_exact(self):
        price = Money("25.00")
        line = price.mul(2).sub(Money("5").mul(2))

        assert line == Money("40")
        assert line.percent(8) == Money("3.2")
        assert Money("0.1").add(Money("0.2")) == Money("0.3")

    def test_operators_match_methods(self):
        a, b = Money("10.50"), Money("0.50")

        assert a + b == a.add(b)
        assert a - b == a.sub(b)
        assert -a == Money("-10.50")

    def test_equal_ignores_trailing_zeros(self):
        assert Money("43.2").equal(Money("43.20"))
        assert Money("1") == Money("1.000")

    def test_comparisons(self):
        assert Money("1") < Money("2")
        assert Money("2") >= Money("2.00")
        assert Money("-1").is_negative()
        assert Money("0").is_zero()
        assert Money("0.01").is_positive()

    def test_floats_are_rejected(self):
        with pytest.raises(TypeError):
            Money(0.1)
        with pytest.raises(TypeError):
            to_decimal(True)

    def test_invalid_literal_is_rejected(self):
        with pytest.raises(ValueError):
            Money("abc")

    def test_non_finite_is_rejected(self):
        with pytest.raises(ValueError):
            Money("Infinity")

    def test_division_by_zero_raises_domain_error(self):
        with pytest.raises(InvalidArgumentException):
            Money("10").div(0)

    def test_sum_and_of(self):
        total = Money.sum([Money("1.10"), Money("2.20"), Money("3.30")])

        assert total == Money("6.60")
        assert Money.sum([]) == Money.zero()
        assert Money.of(5) == Money("5")
        assert Money.of(Decimal("1.5")) == Money("1.5")

    def test_quantized_rounds_half_up(self):
        assert str(Money("2.345").quantized()) == "2.35"
        assert str(Money("2.344").quantized()) == "2.34"

    def test_str_and_repr(self):
        assert str(Money("12.50")) == "12.50"
        assert repr(Money("12.50")) == "Money('12.50')"


@pytest.mark.unit
class TestStatusEnum:
    """Closed token enums."""

    def test_values(self):
        assert Color.values() == ["RED", "GREEN"]

    def test_from_string_is_case_insensitive(self):
        assert Color.from_string("red") is Color.RED

    def test_from_string_rejects_unknown(self):
        with pytest.raises(ValueError):
            Color.from_string("BLUE")

    def test_coerce_keeps_invalid_values(self):
        assert Color.coerce("GREEN") is Color.GREEN
        assert Color.coerce("BLUE") == "BLUE"
        assert Color.is_member(Color.RED)
        assert not Color.is_member("red")
