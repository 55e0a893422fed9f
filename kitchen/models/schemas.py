"""
Pydantic API models for recipe documents and shopping lists.
"""
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from kitchen.engine.shopping import ShoppingItem
from kitchen.engine.units import Measurement
from kitchen.errors import ErrorResponse
from kitchen.models.recipe import Ingredient, Recipe, Step


class MeasureSchema(BaseModel):
    """An exact quantity with its unit."""
    kind: str = Field(..., description="volume, weight or count")
    unit: Optional[str] = Field(None, description="Canonical unit tag; null for counts")
    quantity: str = Field(..., description="Exact quantity (e.g., '2', '1/2', '1 1/2')")
    numerator: int
    denominator: int

    @classmethod
    def from_measure(cls, measure: Measurement) -> "MeasureSchema":
        value = measure.quantity.value
        return cls(
            kind=measure.kind.value,
            unit=measure.unit.value if measure.unit else None,
            quantity=str(measure.quantity),
            numerator=value.numerator,
            denominator=value.denominator,
        )


class IngredientSchema(BaseModel):
    """Ingredient line of a step."""
    name: str
    modifier: Optional[str] = None
    measure: MeasureSchema

    @classmethod
    def from_ingredient(cls, ingredient: Ingredient) -> "IngredientSchema":
        return cls(
            name=ingredient.name,
            modifier=ingredient.modifier,
            measure=MeasureSchema.from_measure(ingredient.measure),
        )


class StepSchema(BaseModel):
    """Recipe step."""
    duration_seconds: Optional[int] = Field(None, description="Step timer in whole seconds")
    ingredients: List[IngredientSchema]
    instructions: str

    @classmethod
    def from_step(cls, step: Step) -> "StepSchema":
        return cls(
            duration_seconds=int(step.duration.total_seconds()) if step.duration is not None else None,
            ingredients=[IngredientSchema.from_ingredient(i) for i in step.ingredients],
            instructions=step.instructions,
        )


class RecipeSchema(BaseModel):
    """Parsed recipe document."""
    title: str
    description: Optional[str] = None
    steps: List[StepSchema]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Toast",
                    "description": None,
                    "steps": [
                        {
                            "duration_seconds": 120,
                            "ingredients": [
                                {
                                    "name": "bread",
                                    "modifier": None,
                                    "measure": {
                                        "kind": "count",
                                        "unit": None,
                                        "quantity": "1",
                                        "numerator": 1,
                                        "denominator": 1,
                                    },
                                }
                            ],
                            "instructions": "Toast it.",
                        }
                    ],
                }
            ]
        }
    }

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> "RecipeSchema":
        return cls(
            title=recipe.title,
            description=recipe.description,
            steps=[StepSchema.from_step(s) for s in recipe.steps],
        )


class RecipeTextRequest(BaseModel):
    """Request carrying a recipe document."""
    text: str = Field(..., description="Recipe document text")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"text": "title: Toast\n\nstep:\n1 cnt bread\n\nToast it.\n"}
            ]
        }
    }


class FormatResponse(BaseModel):
    """Canonical rendering of a recipe document."""
    text: str


class CheckResponse(BaseModel):
    """Result of validating a recipe document."""
    valid: bool
    error: Optional[ErrorResponse] = None


class PlannedRecipe(BaseModel):
    """A recipe document planned some number of times."""
    text: str
    count: str = Field(default="1", description="Times planned; whole, fraction or mixed (e.g., '1 1/2')")

    @field_validator('text')
    @classmethod
    def text_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Recipe text cannot be empty')
        return v


class ShoppingListRequest(BaseModel):
    """Recipes to shop for, plus an optional staples ingredient list."""
    recipes: List[PlannedRecipe] = Field(..., min_length=1)
    staples: Optional[str] = Field(None, description="One ingredient per line, e.g. '2 cnt onion'")


class ShoppingItemSchema(BaseModel):
    """Combined shopping list entry."""
    name: str
    modifier: Optional[str] = None
    measure: MeasureSchema
    display: str
    recipes: List[str]

    @classmethod
    def from_item(cls, item: ShoppingItem) -> "ShoppingItemSchema":
        return cls(
            name=item.name,
            modifier=item.modifier,
            measure=MeasureSchema.from_measure(item.measure),
            display=str(item),
            recipes=list(item.recipes),
        )


class ShoppingListResponse(BaseModel):
    """Shopping list built from planned recipes."""
    items: List[ShoppingItemSchema]
    total: int
