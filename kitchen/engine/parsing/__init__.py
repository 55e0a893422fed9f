"""
Recipe document parsing module.

This module turns recipe text into a typed Recipe:

1. cursor - immutable position-tracked view over the text
2. combinators - rules returning Complete / Fail / Abort / Incomplete
3. grammar - the quantity, unit and document rules
4. parser - entry points that raise structured errors for failed parses

The RecipeParser adds a document size limit and a result cache on top.
"""

from kitchen.engine.parsing.cursor import StrIter
from kitchen.engine.parsing.combinators import (
    Abort,
    Complete,
    Fail,
    Incomplete,
    ParseError,
    Result,
)
from kitchen.engine.parsing.parser import (
    RecipeParser,
    parse_ingredient_list,
    parse_quantity,
    parse_recipe,
    parse_result,
)
from kitchen.engine.parsing.cache import RecipeParseCache, get_parse_cache

__all__ = [
    # Cursor and outcomes
    "StrIter",
    "Complete",
    "Fail",
    "Abort",
    "Incomplete",
    "ParseError",
    "Result",
    # Entry points
    "parse_recipe",
    "parse_result",
    "parse_ingredient_list",
    "parse_quantity",
    "RecipeParser",
    # Cache
    "RecipeParseCache",
    "get_parse_cache",
]
