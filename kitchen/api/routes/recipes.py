"""
Recipe document API routes: parse, validate, format and shop.

Parsing is CPU-bound, so handlers are plain functions that FastAPI runs in
its threadpool.
"""
import logging
from fastapi import APIRouter, HTTPException, status

from kitchen.engine.parsing import RecipeParser, parse_ingredient_list, parse_quantity
from kitchen.engine.render import render_recipe
from kitchen.engine.shopping import IngredientAccumulator
from kitchen.errors import (
    ErrorCode,
    InvalidQuantityError,
    KitchenError,
    RecipeParseError,
    UnitMappingError,
)
from kitchen.models.schemas import (
    CheckResponse,
    FormatResponse,
    RecipeSchema,
    RecipeTextRequest,
    ShoppingItemSchema,
    ShoppingListRequest,
    ShoppingListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


def _http_error(error: KitchenError) -> HTTPException:
    return HTTPException(
        status_code=error.status_code,
        detail={
            "error_code": error.error_code.value,
            "message": error.message,
            "details": error.details,
        },
    )


def _parse(parser: RecipeParser, text: str):
    """Parse text, translating parser errors into HTTP errors."""
    try:
        return parser.parse(text)
    except RecipeParseError as e:
        logger.warning(f"Rejected recipe document ({e.kind}): {e.message}")
        raise _http_error(e)
    except UnitMappingError as e:
        logger.exception("Unit vocabulary and alias table are out of sync")
        raise _http_error(e)
    except KitchenError as e:
        raise _http_error(e)


@router.post("/parse", response_model=RecipeSchema)
def parse_recipe_document(request: RecipeTextRequest):
    """
    Parse a recipe document into its structured form.

    Returns 422 with the line, column and reason when the document does not
    follow the recipe grammar.
    """
    recipe = _parse(RecipeParser(), request.text)
    return RecipeSchema.from_recipe(recipe)


@router.post("/check", response_model=CheckResponse)
def check_recipe_document(request: RecipeTextRequest):
    """Validate a recipe document without failing the request."""
    parser = RecipeParser()
    try:
        error = parser.check(request.text)
    except UnitMappingError as e:
        logger.exception("Unit vocabulary and alias table are out of sync")
        raise _http_error(e)
    except KitchenError as e:
        error = e
    if error is None:
        return CheckResponse(valid=True)
    return CheckResponse(valid=False, error=error.to_response())


@router.post("/format", response_model=FormatResponse)
def format_recipe_document(request: RecipeTextRequest):
    """Re-render a recipe document in canonical form."""
    recipe = _parse(RecipeParser(), request.text)
    return FormatResponse(text=render_recipe(recipe))


@router.post("/shopping-list", response_model=ShoppingListResponse)
def build_shopping_list(request: ShoppingListRequest):
    """
    Combine the ingredients of planned recipes into one shopping list.

    Quantities are summed exactly and shown in the most readable unit.
    """
    parser = RecipeParser()
    accumulator = IngredientAccumulator()

    for index, planned in enumerate(request.recipes):
        try:
            count = parse_quantity(planned.count)
        except InvalidQuantityError as e:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail={
                    "error_code": ErrorCode.QUANTITY_INVALID.value,
                    "message": f"Recipe {index + 1}: {e.message}",
                    "details": {**e.details, "recipe_index": index},
                },
            )
        accumulator.add_recipe(_parse(parser, planned.text), count)

    if request.staples:
        try:
            accumulator.add_ingredients(parse_ingredient_list(request.staples))
        except KitchenError as e:
            logger.warning(f"Rejected staples list: {e.message}")
            raise _http_error(e)

    items = accumulator.items()
    return ShoppingListResponse(
        items=[ShoppingItemSchema.from_item(item) for item in items],
        total=len(items),
    )
