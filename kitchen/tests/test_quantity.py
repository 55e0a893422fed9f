"""
Tests for exact quantity arithmetic and parsing.
"""
import pytest
from fractions import Fraction

from kitchen.engine.parsing import parse_quantity
from kitchen.engine.quantity import Quantity, ZERO
from kitchen.errors import ErrorCode, InvalidQuantityError


class TestQuantityConstruction:
    """Tests for the whole, frac and mixed constructors."""

    def test_whole(self):
        assert Quantity.whole(3).value == Fraction(3)

    def test_frac_is_reduced(self):
        """Fractions are kept in lowest terms."""
        assert Quantity.frac(2, 4) == Quantity.frac(1, 2)

    def test_mixed(self):
        assert Quantity.mixed(1, 1, 2).value == Fraction(3, 2)

    def test_zero_denominator_raises(self):
        """A zero denominator is an invalid quantity, not a crash."""
        with pytest.raises(InvalidQuantityError) as exc_info:
            Quantity.frac(1, 0)
        assert exc_info.value.error_code == ErrorCode.QUANTITY_INVALID
        assert exc_info.value.details["quantity"] == "1/0"

    def test_mixed_zero_denominator_raises(self):
        with pytest.raises(InvalidQuantityError):
            Quantity.mixed(2, 1, 0)

    def test_negative_raises(self):
        with pytest.raises(InvalidQuantityError):
            Quantity(Fraction(-1, 2))


class TestQuantityArithmetic:
    """Tests for exact sums, products and comparisons."""

    def test_sum_is_exact(self):
        """1/3 + 1/3 + 1/3 is exactly one."""
        third = Quantity.frac(1, 3)
        assert third + third + third == Quantity.whole(1)

    def test_sum_is_commutative_and_associative(self):
        a, b, c = Quantity.frac(1, 3), Quantity.mixed(2, 3, 4), Quantity.whole(5)
        assert a + b == b + a
        assert (a + b) + c == a + (b + c)

    def test_add_int(self):
        assert Quantity.frac(1, 2) + 1 == Quantity.mixed(1, 1, 2)
        assert 1 + Quantity.frac(1, 2) == Quantity.mixed(1, 1, 2)

    def test_sum_builtin(self):
        """Quantities work with sum() starting from zero."""
        assert sum([Quantity.frac(1, 4)] * 4, ZERO) == Quantity.whole(1)

    def test_multiply(self):
        assert Quantity.frac(3, 4) * 2 == Quantity.mixed(1, 1, 2)
        assert 2 * Quantity.frac(3, 4) == Quantity.mixed(1, 1, 2)
        assert Quantity.whole(3) * Quantity.frac(1, 2) == Quantity.mixed(1, 1, 2)

    def test_divide(self):
        assert Quantity.whole(3) / 2 == Quantity.mixed(1, 1, 2)

    def test_divide_by_zero_raises(self):
        with pytest.raises(InvalidQuantityError):
            Quantity.whole(3) / 0

    def test_comparison_cross_multiplies(self):
        """2/4 equals 1/2 and 1/3 is less than 1/2."""
        assert Quantity.frac(2, 4) == Quantity.frac(1, 2)
        assert Quantity.frac(1, 3) < Quantity.frac(1, 2)

    def test_truthiness(self):
        assert not ZERO
        assert Quantity.frac(1, 8)

    def test_parts(self):
        q = Quantity.mixed(2, 1, 3)
        assert q.whole_part == 2
        assert q.fractional_part == Fraction(1, 3)
        assert not q.is_whole
        assert Quantity.whole(4).is_whole


class TestQuantityRendering:
    """Tests for str() of quantities."""

    @pytest.mark.parametrize("quantity,expected", [
        (Quantity.whole(2), "2"),
        (Quantity.whole(0), "0"),
        (Quantity.frac(1, 2), "1/2"),
        (Quantity.frac(3, 2), "1 1/2"),
        (Quantity.mixed(2, 2, 3), "2 2/3"),
        (Quantity.frac(4, 2), "2"),
    ])
    def test_str(self, quantity, expected):
        assert str(quantity) == expected


class TestParseQuantity:
    """Tests for parsing standalone quantity text."""

    @pytest.mark.parametrize("text,expected", [
        ("2", Quantity.whole(2)),
        ("007", Quantity.whole(7)),
        ("1/2", Quantity.frac(1, 2)),
        ("1 1/2", Quantity.mixed(1, 1, 2)),
        ("  3/4 ", Quantity.frac(3, 4)),
    ])
    def test_accepted_forms(self, text, expected):
        """Whole numbers, fractions and mixed numbers parse exactly."""
        assert parse_quantity(text) == expected

    @pytest.mark.parametrize("text", ["", "two", "1.5", "-1", "1/", "1 cup"])
    def test_rejected_forms(self, text):
        """Anything else is an invalid quantity."""
        with pytest.raises(InvalidQuantityError):
            parse_quantity(text)

    def test_zero_denominator(self):
        with pytest.raises(InvalidQuantityError) as exc_info:
            parse_quantity("3/0")
        assert "denominator" in exc_info.value.message
