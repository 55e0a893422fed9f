"""
Data models for parsed recipe documents.

All models are immutable: editing a recipe means re-parsing its edited text
into a new Recipe, not changing a parsed one in place.
"""
from dataclasses import dataclass
from datetime import timedelta
from typing import NamedTuple, Optional, Tuple

from kitchen.engine.units import MeasureKind, Measurement


class IngredientKey(NamedTuple):
    """Identity of an ingredient for accumulating shopping lists."""

    name: str
    modifier: Optional[str]
    kind: MeasureKind


@dataclass(frozen=True)
class Ingredient:
    """
    One ingredient line of a step.

    Example:
        >>> Ingredient(name="onion", modifier="diced", measure=Count(Quantity.whole(1)))
    """

    name: str  # Singularized: "onions" -> "onion"
    modifier: Optional[str]  # Parenthesized preparation note
    measure: Measurement

    @property
    def key(self) -> IngredientKey:
        return IngredientKey(self.name, self.modifier, self.measure.kind)


@dataclass(frozen=True)
class Step:
    """A timed group of ingredients followed by instructions."""

    duration: Optional[timedelta]
    ingredients: Tuple[Ingredient, ...]
    instructions: str


@dataclass(frozen=True)
class Recipe:
    """A parsed recipe document. Always has at least one step."""

    title: str
    description: Optional[str]
    steps: Tuple[Step, ...]

    def ingredients(self) -> Tuple[Ingredient, ...]:
        """All ingredients of every step, in document order."""
        return tuple(i for step in self.steps for i in step.ingredients)
