"""
Entry points for parsing recipe documents.

parse_result returns the raw combinator outcome. parse_recipe turns a
failed outcome into one of three RecipeParseError subclasses:

1. RecipeGrammarError - nothing at the document root matched
2. RecipeStepError - a `step:` header was recognized but the step is broken
3. RecipeIncompleteError - the document ended while a rule needed more text
"""

import logging
from typing import List, Optional

from kitchen.engine.parsing.cache import RecipeParseCache, get_parse_cache
from kitchen.engine.parsing.combinators import (
    Abort,
    Complete,
    Incomplete,
    Result,
    Rule,
    do_each,
    eoi,
)
from kitchen.engine.parsing.cursor import StrIter
from kitchen.engine.parsing import grammar
from kitchen.engine.quantity import Quantity
from kitchen.errors import (
    InvalidQuantityError,
    RecipeGrammarError,
    RecipeIncompleteError,
    RecipeParseError,
    RecipeStepError,
    RecipeTooLargeError,
)
from kitchen.models.recipe import Ingredient, Recipe

logger = logging.getLogger(__name__)


def parse_result(text: str, rule: Rule = grammar.recipe) -> Result:
    """Run a grammar rule over the whole text and return its outcome as a value."""
    return rule(StrIter(text))


def _raise_for(result: Result, text: str) -> None:
    if isinstance(result, Complete):
        return
    if isinstance(result, Incomplete):
        cursor = result.cursor
        reason = "unexpected end of input"
        error_cls = RecipeIncompleteError
    else:
        cursor = StrIter(text, result.error.offset)
        reason = result.error.message
        error_cls = RecipeStepError if isinstance(result, Abort) else RecipeGrammarError
    line, column = cursor.location()
    raise error_cls(reason, cursor.offset, line, column)


def parse_recipe(text: str) -> Recipe:
    """
    Parse a recipe document.

    Args:
        text: The complete document text.

    Returns:
        The parsed Recipe.

    Raises:
        RecipeParseError: The document does not follow the recipe grammar.
        InvalidQuantityError: A fraction has a zero denominator.
    """
    result = parse_result(text)
    _raise_for(result, text)
    return result.value


def parse_ingredient_list(text: str) -> List[Ingredient]:
    """Parse a bare list of ingredient lines, such as a pantry staples list."""
    result = parse_result(text, grammar.staples)
    _raise_for(result, text)
    return result.value


def parse_quantity(text: str) -> Quantity:
    """
    Parse a standalone quantity: "2", "1/2" or "1 1/2".

    Raises:
        InvalidQuantityError: The text is not a quantity.
    """
    result = parse_result(text.strip(), do_each(grammar.quantity, eoi, build=lambda q, _: q))
    if not isinstance(result, Complete):
        raise InvalidQuantityError(text, "expected a whole number, fraction or mixed number")
    return result.value


class RecipeParser:
    """
    Recipe parser with a document size limit and a result cache.

    Parsing is pure, so a cached Recipe is returned for text that was
    already parsed successfully. Failures are never cached.
    """

    def __init__(
        self,
        max_bytes: Optional[int] = None,
        cache: Optional[RecipeParseCache] = None,
        use_cache: Optional[bool] = None,
    ):
        """
        Initialize the parser.

        Args:
            max_bytes: Largest accepted document in UTF-8 bytes. Defaults to config setting.
            cache: Cache to use. Defaults to the global parse cache.
            use_cache: Whether to cache results. Defaults to config setting.
        """
        from kitchen.config import settings

        self.max_bytes = max_bytes or settings.max_recipe_bytes
        self.use_cache = settings.parse_cache_enabled if use_cache is None else use_cache
        self.cache = cache if cache is not None else (get_parse_cache() if self.use_cache else None)

    def check_size(self, text: str) -> None:
        size = len(text.encode("utf-8"))
        if size > self.max_bytes:
            raise RecipeTooLargeError(size, self.max_bytes)

    def parse(self, text: str) -> Recipe:
        """Parse a document, consulting the cache first."""
        self.check_size(text)

        if self.cache is not None:
            cached = self.cache.get(text)
            if cached is not None:
                return cached

        try:
            parsed = parse_recipe(text)
        except RecipeParseError as e:
            logger.debug(f"Recipe parse failed ({e.kind}) at offset {e.offset}: {e.reason}")
            raise

        if self.cache is not None:
            self.cache.set(text, parsed)
        return parsed

    def check(self, text: str) -> Optional[RecipeParseError]:
        """Return the parse error for a document, or None if it parses."""
        try:
            self.parse(text)
        except RecipeParseError as e:
            return e
        return None
