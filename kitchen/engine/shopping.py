"""
Shopping list accumulation across recipes.

Combines the ingredients of every selected recipe, scaled by how many times
each recipe is planned. Ingredients with the same name, modifier and
measurement kind are summed exactly; units within a kind are converted.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple, Union

from kitchen.engine.quantity import Quantity
from kitchen.engine.units import Measurement
from kitchen.models.recipe import Ingredient, IngredientKey, Recipe

Multiplier = Union[int, Quantity]


@dataclass(frozen=True)
class ShoppingItem:
    """A combined shopping list entry."""

    name: str
    modifier: Optional[str]
    measure: Measurement
    recipes: Tuple[str, ...]  # Titles of the recipes needing it

    def __str__(self) -> str:
        text = f"{self.measure} {self.name}"
        if self.modifier:
            text += f" ({self.modifier})"
        return text


class IngredientAccumulator:
    """
    Collects ingredients from recipes into a combined shopping list.

    Example:
        >>> acc = IngredientAccumulator()
        >>> acc.add_recipe(pancakes, count=2)
        >>> acc.add_ingredients(staples)
        >>> [str(item) for item in acc.items()]
        ['3 cup flour', '2 egg']
    """

    def __init__(self):
        self._measures: Dict[IngredientKey, Measurement] = {}
        self._sources: Dict[IngredientKey, List[str]] = {}

    def add_ingredient(
        self,
        ingredient: Ingredient,
        count: Multiplier = 1,
        source: Optional[str] = None,
    ) -> None:
        """Add one ingredient, scaled by count. The key includes the measurement kind."""
        key = ingredient.key
        measure = ingredient.measure.scaled(count)
        if key in self._measures:
            self._measures[key] = self._measures[key] + measure
        else:
            self._measures[key] = measure
            self._sources[key] = []
        if source and source not in self._sources[key]:
            self._sources[key].append(source)

    def add_ingredients(self, ingredients: Iterable[Ingredient], count: Multiplier = 1) -> None:
        for ingredient in ingredients:
            self.add_ingredient(ingredient, count)

    def add_recipe(self, recipe: Recipe, count: Multiplier = 1) -> None:
        """Add every ingredient of a recipe, planned count times."""
        if not count:
            return
        for ingredient in recipe.ingredients():
            self.add_ingredient(ingredient, count, source=recipe.title)

    def items(self) -> List[ShoppingItem]:
        """Combined entries sorted by name, each in its most readable unit."""
        entries = [
            ShoppingItem(
                name=key.name,
                modifier=key.modifier,
                measure=measure.normalize(),
                recipes=tuple(self._sources[key]),
            )
            for key, measure in self._measures.items()
        ]
        return sorted(entries, key=lambda item: (item.name.lower(), item.modifier or "", item.measure.kind.value))

    def __len__(self) -> int:
        return len(self._measures)


def accumulate_recipes(
    recipes: Iterable[Tuple[Recipe, Multiplier]],
    staples: Iterable[Ingredient] = (),
) -> List[ShoppingItem]:
    """
    Build a shopping list for planned recipes plus pantry staples.

    Args:
        recipes: (recipe, times planned) pairs.
        staples: Ingredients always bought, added once.

    Returns:
        Combined shopping list entries.
    """
    accumulator = IngredientAccumulator()
    for recipe, count in recipes:
        accumulator.add_recipe(recipe, count)
    accumulator.add_ingredients(staples)
    return accumulator.items()
