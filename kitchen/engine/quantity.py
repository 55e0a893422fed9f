"""
Exact quantities for ingredient measurements.

A quantity is a whole number, a rational fraction or their sum (a mixed
number). Values are held as a Fraction so addition, scaling and comparison
never round.
"""
from dataclasses import dataclass
from fractions import Fraction
from typing import Union

from kitchen.errors import InvalidQuantityError


@dataclass(frozen=True, order=True)
class Quantity:
    """
    Exact non-negative amount.

    Example:
        >>> Quantity.whole(1) + Quantity.frac(1, 2)
        Quantity(value=Fraction(3, 2))
        >>> str(Quantity.mixed(1, 1, 2))
        '1 1/2'
    """

    value: Fraction

    def __post_init__(self):
        if self.value < 0:
            raise InvalidQuantityError(str(self.value), "quantities cannot be negative")

    @classmethod
    def whole(cls, n: int) -> "Quantity":
        return cls(Fraction(n))

    @classmethod
    def frac(cls, numer: int, denom: int) -> "Quantity":
        """Build a fraction, rejecting a zero denominator."""
        if denom == 0:
            raise InvalidQuantityError(f"{numer}/{denom}", "denominator is zero")
        return cls(Fraction(numer, denom))

    @classmethod
    def mixed(cls, whole: int, numer: int, denom: int) -> "Quantity":
        return cls.whole(whole) + cls.frac(numer, denom)

    @property
    def is_whole(self) -> bool:
        return self.value.denominator == 1

    @property
    def whole_part(self) -> int:
        return self.value.numerator // self.value.denominator

    @property
    def fractional_part(self) -> Fraction:
        return self.value - self.whole_part

    def __add__(self, other: Union["Quantity", int]) -> "Quantity":
        if isinstance(other, Quantity):
            return Quantity(self.value + other.value)
        if isinstance(other, int):
            return Quantity(self.value + other)
        return NotImplemented

    __radd__ = __add__

    def __mul__(self, other: Union["Quantity", int, Fraction]) -> "Quantity":
        if isinstance(other, Quantity):
            return Quantity(self.value * other.value)
        if isinstance(other, (int, Fraction)):
            return Quantity(self.value * other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other: Union[int, Fraction]) -> "Quantity":
        if not isinstance(other, (int, Fraction)):
            return NotImplemented
        if other == 0:
            raise InvalidQuantityError(f"{self} / 0", "division by zero")
        return Quantity(self.value / other)

    def __bool__(self) -> bool:
        return self.value != 0

    def __str__(self) -> str:
        if self.is_whole:
            return str(self.whole_part)
        rest = self.fractional_part
        fraction = f"{rest.numerator}/{rest.denominator}"
        if self.whole_part == 0:
            return fraction
        return f"{self.whole_part} {fraction}"


ZERO = Quantity.whole(0)
