"""
Render recipes back to document text.

The output follows the recipe grammar, so parsing a rendered recipe gives
back an equal Recipe. Unit aliases come out in their canonical spelling.
"""
from datetime import timedelta
from typing import List

from kitchen.engine.parsing.combinators import Complete
from kitchen.engine.parsing.cursor import StrIter
from kitchen.engine.parsing.grammar import unit
from kitchen.engine.units import Count
from kitchen.models.recipe import Ingredient, Recipe, Step


def render_duration(duration: timedelta) -> str:
    """Largest time unit dividing the duration exactly: 7200s -> '2 hr', 90s -> '90 s'."""
    seconds = int(duration.total_seconds())
    if seconds and seconds % 3600 == 0:
        return f"{seconds // 3600} hr"
    if seconds and seconds % 60 == 0:
        return f"{seconds // 60} min"
    return f"{seconds} s"


def _needs_count_marker(name: str) -> bool:
    """True when a bare count would merge into the name on re-parse."""
    # Any leading digit starts a quantity: '1 cnt 1/2 lemon' must not become '1 1/2 lemon'
    return name[:1].isdigit() or isinstance(unit(StrIter(name)), Complete)


def render_ingredient(ingredient: Ingredient) -> str:
    measure = ingredient.measure
    if isinstance(measure, Count) and _needs_count_marker(ingredient.name):
        amount = f"{measure.quantity} cnt"
    else:
        amount = str(measure)
    line = f"{amount} {ingredient.name}"
    if ingredient.modifier:
        line += f" ({ingredient.modifier})"
    return line


def render_step(step: Step) -> str:
    header = "step:"
    if step.duration is not None:
        header += f" {render_duration(step.duration)}"
    ingredients = "\n".join(render_ingredient(i) for i in step.ingredients)
    # Instructions are only ever empty on the last step; keep the blank line
    return "\n\n".join([header, ingredients, step.instructions])


def render_recipe(recipe: Recipe) -> str:
    """
    Render a recipe as document text.

    Example:
        >>> print(render_recipe(parse_recipe("title: Toast\\n\\nstep:\\n1 cnt bread\\n\\nToast it.\\n")))
        title: Toast

        step:

        1 bread

        Toast it.
    """
    sections: List[str] = [f"title: {recipe.title}"]
    if recipe.description:
        sections.append(recipe.description)
    sections.extend(render_step(step) for step in recipe.steps)
    return "\n\n".join(sections) + "\n"
