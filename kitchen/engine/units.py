"""
Measurements: an exact quantity tagged with a volume, weight or count unit.

Handles the unit vocabulary accepted in recipe documents, the mapping from
every alias to one canonical unit, and exact conversions between units of
the same kind. Conversion factors are integers so sums stay rational.
"""
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, Optional, Tuple, Union

from kitchen.engine.inflection import singularize
from kitchen.engine.quantity import Quantity
from kitchen.errors import IncompatibleMeasureError, UnitMappingError


class MeasureKind(str, Enum):
    """Measurement domains."""

    VOLUME = "volume"
    WEIGHT = "weight"
    COUNT = "count"


class VolumeUnit(str, Enum):
    """Canonical volume unit tags."""

    TSP = "tsp"
    TBSP = "tbsp"
    FLOZ = "floz"
    ML = "ml"
    LTR = "ltr"
    CUP = "cup"
    QRT = "qrt"
    PINT = "pint"
    GAL = "gal"


class WeightUnit(str, Enum):
    """Canonical weight unit tags."""

    POUND = "lb"
    OUNCE = "oz"
    KILOGRAM = "kg"
    GRAM = "g"


# Unit tokens accepted after a quantity, in match order. A longer alias
# sharing a prefix with a shorter one must come first.
UNIT_TOKENS: Tuple[str, ...] = (
    "tsps", "tsp",
    "tbsps", "tbsp",
    "floz",
    "ml",
    "ltr",
    "lbs", "lb",
    "oz",
    "cups", "cup",
    "qrts", "qrt",
    "quarts", "quart",
    "pints", "pint",
    "pnt",
    "gals", "gal",
    "count",
    "cnt",
    "kilograms", "kilogram",
    "kg",
    "grams", "gram",
    "g",
)

MeasureTag = Tuple[MeasureKind, Optional[Union[VolumeUnit, WeightUnit]]]

# Lowercased, singularized token -> canonical measurement tag
UNIT_ALIASES: Dict[str, MeasureTag] = {
    "tsp": (MeasureKind.VOLUME, VolumeUnit.TSP),
    "tbsp": (MeasureKind.VOLUME, VolumeUnit.TBSP),
    "floz": (MeasureKind.VOLUME, VolumeUnit.FLOZ),
    "ml": (MeasureKind.VOLUME, VolumeUnit.ML),
    "ltr": (MeasureKind.VOLUME, VolumeUnit.LTR),
    "liter": (MeasureKind.VOLUME, VolumeUnit.LTR),
    "cup": (MeasureKind.VOLUME, VolumeUnit.CUP),
    "cp": (MeasureKind.VOLUME, VolumeUnit.CUP),
    "qrt": (MeasureKind.VOLUME, VolumeUnit.QRT),
    "quart": (MeasureKind.VOLUME, VolumeUnit.QRT),
    "pint": (MeasureKind.VOLUME, VolumeUnit.PINT),
    "pnt": (MeasureKind.VOLUME, VolumeUnit.PINT),
    "gal": (MeasureKind.VOLUME, VolumeUnit.GAL),
    "lb": (MeasureKind.WEIGHT, WeightUnit.POUND),
    "oz": (MeasureKind.WEIGHT, WeightUnit.OUNCE),
    "kg": (MeasureKind.WEIGHT, WeightUnit.KILOGRAM),
    "kilogram": (MeasureKind.WEIGHT, WeightUnit.KILOGRAM),
    "g": (MeasureKind.WEIGHT, WeightUnit.GRAM),
    "gram": (MeasureKind.WEIGHT, WeightUnit.GRAM),
    "cnt": (MeasureKind.COUNT, None),
    "count": (MeasureKind.COUNT, None),
}

# Size of each unit in the kind's base unit (ml, g)
ML_PER_UNIT: Dict[VolumeUnit, int] = {
    VolumeUnit.TSP: 5,
    VolumeUnit.TBSP: 15,
    VolumeUnit.FLOZ: 30,
    VolumeUnit.CUP: 240,
    VolumeUnit.PINT: 480,
    VolumeUnit.QRT: 960,
    VolumeUnit.GAL: 3840,
    VolumeUnit.ML: 1,
    VolumeUnit.LTR: 1000,
}

GRAMS_PER_UNIT: Dict[WeightUnit, int] = {
    WeightUnit.OUNCE: 28,
    WeightUnit.POUND: 448,
    WeightUnit.GRAM: 1,
    WeightUnit.KILOGRAM: 1000,
}

# Units that normalize into one another
VOLUME_SYSTEMS = (
    (VolumeUnit.TSP, VolumeUnit.TBSP, VolumeUnit.FLOZ, VolumeUnit.CUP,
     VolumeUnit.PINT, VolumeUnit.QRT, VolumeUnit.GAL),
    (VolumeUnit.ML, VolumeUnit.LTR),
)
WEIGHT_SYSTEMS = (
    (WeightUnit.OUNCE, WeightUnit.POUND),
    (WeightUnit.GRAM, WeightUnit.KILOGRAM),
)


@dataclass(frozen=True)
class Count:
    """A bare quantity with no unit."""

    quantity: Quantity

    kind: ClassVar[MeasureKind] = MeasureKind.COUNT
    unit: ClassVar[None] = None

    def __add__(self, other: "Measurement") -> "Count":
        if not isinstance(other, Count):
            return _incompatible(self, other)
        return Count(self.quantity + other.quantity)

    def normalize(self) -> "Count":
        return self

    def scaled(self, factor) -> "Count":
        return Count(self.quantity * factor)

    def __str__(self) -> str:
        return str(self.quantity)


@dataclass(frozen=True)
class _UnitMeasure:
    unit: Union[VolumeUnit, WeightUnit]
    quantity: Quantity

    kind: ClassVar[MeasureKind]
    _factors: ClassVar[Dict]
    _systems: ClassVar[Tuple]

    def in_base_units(self) -> Quantity:
        return self.quantity * self._factors[self.unit]

    def convert(self, unit) -> "_UnitMeasure":
        """Express this measurement in another unit of the same kind."""
        return type(self)(unit, self.in_base_units() / self._factors[unit])

    def __add__(self, other: "Measurement") -> "_UnitMeasure":
        if type(other) is not type(self):
            return _incompatible(self, other)
        if other.unit == self.unit:
            return type(self)(self.unit, self.quantity + other.quantity)
        # Sum in the smaller unit so the result stays readable
        smaller = min((self.unit, other.unit), key=self._factors.__getitem__)
        return self.convert(smaller) + other.convert(smaller)

    def normalize(self) -> "_UnitMeasure":
        """Convert to the largest unit of the same system with a quantity of at least 1."""
        system = next(s for s in self._systems if self.unit in s)
        base = self.in_base_units()
        for unit in sorted(system, key=self._factors.__getitem__, reverse=True):
            if base.value >= self._factors[unit]:
                return self.convert(unit)
        return self

    def scaled(self, factor) -> "_UnitMeasure":
        return type(self)(self.unit, self.quantity * factor)

    def __str__(self) -> str:
        return f"{self.quantity} {self.unit.value}"


@dataclass(frozen=True)
class Volume(_UnitMeasure):
    unit: VolumeUnit

    kind: ClassVar[MeasureKind] = MeasureKind.VOLUME
    _factors: ClassVar[Dict] = ML_PER_UNIT
    _systems: ClassVar[Tuple] = VOLUME_SYSTEMS


@dataclass(frozen=True)
class Weight(_UnitMeasure):
    unit: WeightUnit

    kind: ClassVar[MeasureKind] = MeasureKind.WEIGHT
    _factors: ClassVar[Dict] = GRAMS_PER_UNIT
    _systems: ClassVar[Tuple] = WEIGHT_SYSTEMS


Measurement = Union[Volume, Weight, Count]


def _incompatible(left, right):
    raise IncompatibleMeasureError(left.kind.value, right.kind.value)


def canonical_unit(token: str) -> str:
    """Fold a unit token to the key used in UNIT_ALIASES."""
    return singularize(token.lower())


def measurement_for(quantity: Quantity, token: Optional[str] = None) -> Measurement:
    """
    Wrap a quantity in the measurement named by a unit token.

    No token means a Count. A token the grammar accepted but the alias table
    does not know raises UnitMappingError.
    """
    if token is None:
        return Count(quantity)
    tag = UNIT_ALIASES.get(canonical_unit(token))
    if tag is None:
        raise UnitMappingError(token)
    kind, unit = tag
    if kind is MeasureKind.VOLUME:
        return Volume(unit, quantity)
    if kind is MeasureKind.WEIGHT:
        return Weight(unit, quantity)
    return Count(quantity)
