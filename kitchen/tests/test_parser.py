"""
Tests for parsing whole recipe documents.

Covers the documented behaviors: the minimal document, description
suppression, committed-step failures, error locations and classification,
plus the RecipeParser size limit and cache.
"""
import pytest
from datetime import timedelta

from kitchen.engine.parsing import (
    Abort,
    Complete,
    Fail,
    Incomplete,
    RecipeParseCache,
    RecipeParser,
    parse_ingredient_list,
    parse_recipe,
    parse_result,
)
from kitchen.engine.quantity import Quantity
from kitchen.engine.units import Count, Volume, VolumeUnit, Weight, WeightUnit
from kitchen.errors import (
    ErrorCode,
    InvalidQuantityError,
    RecipeGrammarError,
    RecipeIncompleteError,
    RecipeParseError,
    RecipeStepError,
    RecipeTooLargeError,
)
from kitchen.models.recipe import Ingredient, Recipe, Step


class TestParseRecipe:
    """Tests for documents that parse."""

    def test_minimal_document(self, toast_text):
        """The smallest document: a title and one step."""
        recipe = parse_recipe(toast_text)
        assert recipe == Recipe(
            title="Toast",
            description=None,
            steps=(
                Step(
                    duration=None,
                    ingredients=(Ingredient("bread", None, Count(Quantity.whole(1))),),
                    instructions="Toast it.",
                ),
            ),
        )

    def test_minimal_document_without_trailing_newline(self, toast_text):
        assert parse_recipe(toast_text.rstrip("\n")) == parse_recipe(toast_text)

    def test_extra_blank_lines_between_steps(self):
        """Steps may be separated by more than one blank line."""
        recipe = parse_recipe(
            "title: Eggs\n\nstep:\n2 eggs\n\nBoil.\n\n\n \n\nstep:\n1 tsp salt\n\nServe.\n"
        )
        assert [s.instructions for s in recipe.steps] == ["Boil.", "Serve."]
        assert recipe.steps[1].ingredients[0].name == "salt"

    def test_full_document(self, pancakes_text):
        recipe = parse_recipe(pancakes_text)

        assert recipe.title == "Pancakes"
        assert recipe.description == "Fluffy weekend pancakes."
        assert len(recipe.steps) == 2

        first, second = recipe.steps
        assert first.duration == timedelta(minutes=5)
        assert first.ingredients == (
            Ingredient("flour", None, Volume(VolumeUnit.CUP, Quantity.mixed(1, 1, 2))),
            Ingredient("sugar", None, Volume(VolumeUnit.TBSP, Quantity.whole(2))),
            Ingredient("baking powder", None, Volume(VolumeUnit.TSP, Quantity.whole(1))),
        )
        assert first.instructions == "Whisk the dry ingredients."

        assert second.duration is None
        assert second.ingredients[1] == Ingredient("egg", "beaten", Count(Quantity.whole(2)))
        assert second.ingredients[2].modifier == "melted"
        assert second.instructions.startswith("Stir in the wet ingredients")

    def test_weights_and_seconds(self, omelette_text):
        recipe = parse_recipe(omelette_text)
        step = recipe.steps[0]
        assert step.duration == timedelta(seconds=90)
        assert step.ingredients[1] == Ingredient(
            "cheese", "grated", Volume(VolumeUnit.CUP, Quantity.frac(1, 2))
        )
        assert step.ingredients[2].measure == Weight(WeightUnit.OUNCE, Quantity.whole(1))

    def test_description_suppressed_before_step(self):
        """A 'step:' line right after the title is never read as a description."""
        recipe = parse_recipe("title: T\n\nstep: 2 min\n1 cnt x\n\nDo it.\n")
        assert recipe.description is None
        assert recipe.steps[0].duration == timedelta(seconds=120)

    def test_multiline_description(self):
        text = "title: Soup\n\nWarming.\nServes two.\n\nstep:\n1 qrt stock\n\nSimmer.\n"
        assert parse_recipe(text).description == "Warming.\nServes two."

    def test_longest_unit_match(self):
        """'2 tbsps sugar' is 2 tbsp of sugar."""
        recipe = parse_recipe("title: T\n\nstep:\n2 tbsps sugar\n\nStir.\n")
        ingredient = recipe.steps[0].ingredients[0]
        assert ingredient.name == "sugar"
        assert ingredient.measure == Volume(VolumeUnit.TBSP, Quantity.whole(2))

    def test_unit_like_word_is_part_of_name(self):
        """'2 garlic cloves' is a count of garlic cloves, not grams."""
        recipe = parse_recipe("title: T\n\nstep:\n2 garlic cloves\n\nChop.\n")
        ingredient = recipe.steps[0].ingredients[0]
        assert ingredient.name == "garlic clove"
        assert ingredient.measure == Count(Quantity.whole(2))

    def test_indented_ingredients_and_whitespace_lines(self):
        text = "title: T\n  \nstep:\n  1 cup milk\n  2 eggs\n \t\nMix.\n"
        recipe = parse_recipe(text)
        assert [i.name for i in recipe.steps[0].ingredients] == ["milk", "egg"]
        assert recipe.steps[0].instructions == "Mix."

    def test_carriage_returns(self):
        """Windows line endings parse like Unix ones."""
        text = "title: Toast\r\n\r\nstep:\r\n1 cnt bread\r\n\r\nToast it.\r\n"
        recipe = parse_recipe(text)
        assert recipe.title == "Toast"
        assert recipe.steps[0].instructions == "Toast it."

    def test_last_step_may_have_no_instructions(self):
        recipe = parse_recipe("title: T\n\nstep:\n1 cnt x\n\n")
        assert recipe.steps[0].instructions == ""

    def test_ingredients_across_steps(self, pancakes_text):
        recipe = parse_recipe(pancakes_text)
        assert [i.name for i in recipe.ingredients()] == [
            "flour", "sugar", "baking powder", "milk", "egg", "butter",
        ]


class TestParseFailures:
    """Tests for documents that do not parse."""

    def test_committed_step_failure(self):
        """A recognized step header with no ingredients is a step error."""
        text = "title: T\n\nstep:\n\n\nToast it."
        with pytest.raises(RecipeStepError) as exc_info:
            parse_recipe(text)
        error = exc_info.value
        assert error.error_code == ErrorCode.RECIPE_STEP_INVALID
        assert error.kind == "step"
        assert error.reason == "expected at least one ingredient line"
        assert (error.line, error.column) == (6, 1)
        assert error.offset == text.index("Toast")

    def test_broken_second_step_rejects_document(self, toast_text):
        """Later steps are committed too; nothing falls back to text."""
        text = toast_text + "\nstep: 1 min\nNo ingredients here.\n"
        with pytest.raises(RecipeStepError):
            parse_recipe(text)

    def test_missing_title(self):
        with pytest.raises(RecipeGrammarError) as exc_info:
            parse_recipe("step:\n1 cnt bread\n\nToast it.\n")
        error = exc_info.value
        assert error.error_code == ErrorCode.RECIPE_PARSE_FAILED
        assert error.kind == "grammar"
        assert (error.line, error.column) == (1, 1)
        assert error.status_code == 422

    def test_missing_steps(self):
        """A document must contain a step."""
        with pytest.raises(RecipeParseError):
            parse_recipe("title: T\n\nJust a description.\n\nMore text.\n")

    def test_empty_document_is_incomplete(self):
        with pytest.raises(RecipeIncompleteError) as exc_info:
            parse_recipe("")
        assert exc_info.value.error_code == ErrorCode.RECIPE_INCOMPLETE
        assert exc_info.value.kind == "incomplete"

    def test_truncated_title_is_incomplete(self):
        with pytest.raises(RecipeIncompleteError):
            parse_recipe("title: Toa")

    def test_step_header_only(self):
        """Input ending right after a step header is a step error."""
        with pytest.raises(RecipeStepError):
            parse_recipe("title: T\n\nstep:\n")

    def test_trailing_text_after_steps(self, toast_text):
        with pytest.raises(RecipeGrammarError) as exc_info:
            parse_recipe(toast_text + "\nServe warm.\n\nEnjoy.\n")
        assert exc_info.value.reason == "expected a 'step:' header or the end of the document"

    def test_empty_instructions_before_next_step(self):
        with pytest.raises(RecipeStepError):
            parse_recipe("title: T\n\nstep:\n1 cnt x\n\n\n\nstep:\n1 cnt y\n\nGo.\n")

    def test_step_duration_too_long(self):
        """An oversized step timer is a step error with its location."""
        with pytest.raises(RecipeStepError) as exc_info:
            parse_recipe("title: T\n\nstep: 100000000000 hr\n\n1 cnt egg\n\nWait.\n")
        assert exc_info.value.reason == "step duration is too long"
        assert (exc_info.value.line, exc_info.value.column) == (3, 7)

    def test_zero_denominator(self):
        """A zero denominator is an invalid quantity, not a grammar error."""
        with pytest.raises(InvalidQuantityError):
            parse_recipe("title: T\n\nstep:\n1/0 cup milk\n\nPour.\n")

    def test_error_message_includes_location(self):
        with pytest.raises(RecipeParseError) as exc_info:
            parse_recipe("title: T\n\nstep:\n\n\nToast it.")
        assert exc_info.value.message.startswith("Parse failure at line 6, column 1:")
        assert exc_info.value.details["offset"] == exc_info.value.offset


class TestParseResult:
    """Tests for the raw outcome API."""

    def test_complete(self, toast_text):
        result = parse_result(toast_text)
        assert isinstance(result, Complete)
        assert result.value.title == "Toast"

    def test_fail(self):
        assert isinstance(parse_result("hello"), Fail)

    def test_abort(self):
        assert isinstance(parse_result("title: T\n\nstep:\n\n\nToast it."), Abort)

    def test_incomplete(self):
        assert isinstance(parse_result("tit"), Incomplete)


class TestParseIngredientList:
    """Tests for bare ingredient list documents."""

    def test_staples(self):
        ingredients = parse_ingredient_list("2 cnt onions\n1 lb butter (salted)\n")
        assert ingredients == [
            Ingredient("onion", None, Count(Quantity.whole(2))),
            Ingredient("butter", "salted", Weight(WeightUnit.POUND, Quantity.whole(1))),
        ]

    def test_leading_blank_lines(self):
        assert len(parse_ingredient_list("\n\n1 cnt lemon")) == 1

    def test_bad_line(self):
        with pytest.raises(RecipeGrammarError) as exc_info:
            parse_ingredient_list("1 cnt lemon\nsome salt\n")
        assert exc_info.value.line == 2


class TestRecipeParser:
    """Tests for the size-limited, cached parser."""

    def test_parse(self, toast_text):
        parser = RecipeParser(use_cache=False)
        assert parser.parse(toast_text).title == "Toast"
        assert parser.cache is None

    def test_size_limit(self, toast_text):
        parser = RecipeParser(max_bytes=10, use_cache=False)
        with pytest.raises(RecipeTooLargeError) as exc_info:
            parser.parse(toast_text)
        assert exc_info.value.status_code == 413
        assert exc_info.value.details == {"size": len(toast_text), "max_size": 10}

    def test_size_limit_counts_utf8_bytes(self):
        parser = RecipeParser(max_bytes=3, use_cache=False)
        with pytest.raises(RecipeTooLargeError):
            parser.check_size("éé")

    def test_cache_hit_returns_same_recipe(self, toast_text):
        cache = RecipeParseCache(ttl_hours=1, max_entries=10)
        parser = RecipeParser(cache=cache, use_cache=True)
        first = parser.parse(toast_text)
        assert cache.size == 1
        assert parser.parse(toast_text) is first

    def test_failures_are_not_cached(self):
        cache = RecipeParseCache(ttl_hours=1, max_entries=10)
        parser = RecipeParser(cache=cache, use_cache=True)
        with pytest.raises(RecipeParseError):
            parser.parse("hello")
        assert cache.size == 0

    def test_check(self, toast_text):
        parser = RecipeParser(use_cache=False)
        assert parser.check(toast_text) is None
        error = parser.check("title: T\n\nstep:\n\n\nx")
        assert isinstance(error, RecipeStepError)
