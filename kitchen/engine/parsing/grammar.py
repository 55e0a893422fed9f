"""
Grammar for recipe documents.

A document looks like:

    title: Toast

    Crunchy bread.

    step: 2 min

    1 cnt bread
    1 tbsp butter (softened)

    Toast the bread and spread the butter.

Rules are built from the combinators in this package. Once a `step:` header
is recognized the rest of the step is committed: if it does not parse the
whole document is rejected rather than the header being read as plain text.
"""
from datetime import timedelta
from typing import List, Optional

from kitchen.engine.inflection import singularize_phrase
from kitchen.engine.parsing.combinators import (
    Abort,
    Complete,
    ParseError,
    Result,
    ascii_digit,
    consume_all,
    discard,
    do_each,
    either,
    eoi,
    expect,
    fail,
    must,
    not_,
    optional,
    peek,
    repeat,
    separated,
    text_token,
    until,
    ws,
)
from kitchen.engine.parsing.cursor import StrIter
from kitchen.engine.quantity import Quantity
from kitchen.engine.units import UNIT_TOKENS, Measurement, canonical_unit, measurement_for
from kitchen.models.recipe import Ingredient, Recipe, Step

# Time unit tokens in match order, with their size in seconds. Milliseconds
# are handled separately because they truncate.
TIME_UNIT_TOKENS = ("ms", "sec", "s", "min", "m", "hrs", "hr", "h")
SECONDS_PER_TIME_UNIT = {
    "sec": 1,
    "s": 1,
    "min": 60,
    "m": 60,
    "hrs": 3600,
    "hr": 3600,
    "h": 3600,
}

newline = text_token("\n")


# A blank line: newline, optional whitespace, newline
para_separator = expect(
    do_each(newline, ws, newline, build=lambda *_: ""),
    "expected a blank line",
)

# Lines holding nothing but whitespace
blank_lines = repeat(do_each(ws, newline))


# Numbers and quantities

def num(cursor: StrIter) -> Result:
    """One or more ASCII digits as an unsigned integer."""
    result = expect(consume_all(ascii_digit), "expected a number")(cursor)
    if isinstance(result, Complete):
        return Complete(result.cursor, int(result.value))
    return result


ratio = do_each(num, text_token("/"), num, build=lambda n, _, d: (n, d))

quantity = either(
    do_each(num, ws, ratio, ws, build=lambda w, _, r, __: Quantity.mixed(w, *r)),
    do_each(ratio, ws, build=lambda r, _: Quantity.frac(*r)),
    do_each(num, ws, build=lambda w, _: Quantity.whole(w)),
)


def _unit_boundary(cursor: StrIter) -> Result:
    """A unit token must be followed by whitespace, a newline or end of input."""
    if cursor.at_end() or cursor.peek() in " \t\r\n":
        return Complete(cursor, None)
    return fail(cursor, "expected whitespace after unit")


unit = do_each(
    either(*(text_token(token, ignore_case=True) for token in UNIT_TOKENS)),
    _unit_boundary,
    ws,
    build=lambda token, *_: canonical_unit(token),
)


def measure(cursor: StrIter) -> Result:
    """A quantity followed by an optional unit token."""
    result = do_each(
        quantity,
        optional(do_each(ws, unit, build=lambda _, u: u)),
        ws,
    )(cursor)
    if not isinstance(result, Complete):
        return result
    qty, token, _ = result.value
    return Complete(result.cursor, measurement_for(qty, token))


# Ingredients

def ingredient_name(cursor: StrIter) -> Result:
    result = until(either(newline, eoi, text_token("(")))(cursor)
    if not isinstance(result, Complete):
        return result
    name = result.value.strip()
    if not name:
        return fail(cursor, "expected an ingredient name")
    return Complete(result.cursor, singularize_phrase(name))


ingredient_modifier = do_each(
    text_token("("),
    until(text_token(")")),
    text_token(")"),
    build=lambda _, modifier, __: modifier.strip(),
)


def _build_ingredient(_, measured: Measurement, name: str, modifier: Optional[str], __) -> Ingredient:
    return Ingredient(name=name, modifier=modifier or None, measure=measured)


ingredient = do_each(
    ws,
    expect(measure, "expected an ingredient quantity"),
    ingredient_name,
    optional(ingredient_modifier),
    ws,
    build=_build_ingredient,
)

ingredient_list = separated(newline, ingredient)


# Title and description

def _build_title(_, __, title: str, ___) -> str:
    return title.strip()


_title_line = do_each(
    expect(text_token("title:"), "expected 'title:' header"),
    ws,
    until(newline),
    newline,
    build=_build_title,
)


def title(cursor: StrIter) -> Result:
    result = _title_line(cursor)
    if isinstance(result, Complete) and not result.value:
        return fail(cursor, "expected title text")
    return result


def description(cursor: StrIter) -> Result:
    """Free text up to the next blank line or the end of the document."""
    result = until(either(discard(para_separator), eoi))(cursor)
    if isinstance(result, Complete):
        return Complete(result.cursor, result.value.strip())
    return result


# Steps

MAX_STEP_SECONDS = timedelta.max.days * 24 * 3600

_step_time_parts = do_each(
    num,
    ws,
    either(*(text_token(token) for token in TIME_UNIT_TOKENS)),
    build=lambda count, _, token: (count, token),
)


def step_time(cursor: StrIter) -> Result:
    """A step timer such as '2 min', truncated to whole seconds."""
    result = _step_time_parts(cursor)
    if not isinstance(result, Complete):
        return result
    count, token = result.value
    if token == "ms":
        seconds = count // 1000
    else:
        seconds = count * SECONDS_PER_TIME_UNIT[token]
    if seconds > MAX_STEP_SECONDS:
        # Longer than any timedelta
        return Abort(ParseError(cursor.offset, "step duration is too long"))
    return Complete(result.cursor, timedelta(seconds=seconds))


def _build_step_prefix(_, duration: Optional[timedelta], *__) -> Optional[timedelta]:
    return duration


step_prefix = do_each(
    text_token("step:"),
    optional(do_each(ws, step_time, build=lambda _, d: d)),
    ws,
    expect(newline, "expected a newline after the step header"),
    blank_lines,
    build=_build_step_prefix,
)


def instructions(cursor: StrIter) -> Result:
    """Step instructions; they may only be empty at the end of the document."""
    result = description(cursor)
    if isinstance(result, Complete) and not result.value:
        if result.cursor.remaining().strip():
            return fail(cursor, "expected step instructions")
    return result


def _build_step(duration: Optional[timedelta], body: list) -> Step:
    ingredients, _, text, _ = body
    return Step(duration=duration, ingredients=tuple(ingredients), instructions=text)


step = do_each(
    step_prefix,
    must(
        do_each(
            expect(ingredient_list, "expected at least one ingredient line"),
            expect(para_separator, "expected a blank line after the ingredients"),
            instructions,
            either(para_separator, eoi),
        ),
        "unexpected end of input in step",
    ),
    build=_build_step,
)


def _build_step_list(first: Step, rest: List[Step]) -> List[Step]:
    return [first] + rest


step_list = do_each(
    expect(step, "expected a 'step:' header"),
    repeat(do_each(blank_lines, step, build=lambda _, s: s)),
    build=_build_step_list,
)


# Document

def _trailing_content(cursor: StrIter) -> Result:
    end = ws(cursor).cursor
    while end.peek() == "\n":
        end = ws(end.advance(1)).cursor
    if end.at_end():
        return Complete(end, None)
    return fail(end, "expected a 'step:' header or the end of the document")


def _build_recipe(title_text, _, desc, __, ___, steps, ____) -> Recipe:
    return Recipe(title=title_text, description=desc or None, steps=tuple(steps))


recipe = do_each(
    title,
    blank_lines,
    optional(do_each(peek(not_(step_prefix)), description, build=lambda _, d: d)),
    optional(para_separator),
    blank_lines,
    step_list,
    _trailing_content,
    build=_build_recipe,
)


def staples(cursor: StrIter) -> Result:
    """A bare ingredient list document, one ingredient per line."""
    return do_each(blank_lines, ingredient_list, _trailing_content, build=lambda _, i, __: i)(cursor)
