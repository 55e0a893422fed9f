"""
Parser combinators over StrIter.

Every rule is a callable taking a cursor and returning one of four outcomes:

- Complete: the rule matched; parsing continues from the returned cursor.
- Fail: the rule did not match here; sibling alternatives may still be tried.
- Abort: the rule committed to a section and then broke; nothing else is tried.
- Incomplete: the input ended before the rule could decide.

Outcomes are plain values, never exceptions, so whether an alternative can
still be tried is visible at every call site.
"""
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, TypeVar, Union

from kitchen.engine.parsing.cursor import StrIter

T = TypeVar("T")


@dataclass(frozen=True)
class ParseError:
    """Where a rule stopped and what it expected there."""

    offset: int
    message: str


@dataclass(frozen=True)
class Complete(Generic[T]):
    cursor: StrIter
    value: T


@dataclass(frozen=True)
class Fail:
    error: ParseError


@dataclass(frozen=True)
class Abort:
    error: ParseError


@dataclass(frozen=True)
class Incomplete:
    cursor: StrIter


Result = Union[Complete, Fail, Abort, Incomplete]
Rule = Callable[[StrIter], Result]


def fail(cursor: StrIter, message: str) -> Fail:
    return Fail(ParseError(cursor.offset, message))


def _error_of(result: Result, message: str) -> ParseError:
    if isinstance(result, Incomplete):
        return ParseError(result.cursor.offset, message)
    return result.error


# Primitive matchers

def text_token(token: str, ignore_case: bool = False) -> Rule:
    """Match a literal string, returning the text as written in the input."""
    wanted = token.lower() if ignore_case else token

    def rule(cursor: StrIter) -> Result:
        found = cursor.peek(len(token))
        if ignore_case:
            found = found.lower()
        if found == wanted:
            return Complete(cursor.advance(len(token)), cursor.peek(len(token)))
        if len(found) < len(token) and wanted.startswith(found):
            return Incomplete(cursor)
        return fail(cursor, f"expected {token!r}")

    rule.__name__ = f"text_token({token!r})"
    return rule


def ascii_digit(cursor: StrIter) -> Result:
    if cursor.at_end():
        return Incomplete(cursor)
    char = cursor.peek()
    if "0" <= char <= "9":
        return Complete(cursor.advance(1), char)
    return fail(cursor, "expected a digit")


def eoi(cursor: StrIter) -> Result:
    """Match the end of input."""
    if cursor.at_end():
        return Complete(cursor, "")
    return fail(cursor, "expected end of input")


_WHITESPACE = " \t\r"


def ws(cursor: StrIter) -> Result:
    """Consume zero or more spaces, tabs or carriage returns."""
    end = cursor
    while not end.at_end() and end.peek() in _WHITESPACE:
        end = end.advance(1)
    return Complete(end, cursor.span_to(end))


# Combinators

def do_each(*rules: Rule, build: Optional[Callable[..., Any]] = None) -> Rule:
    """
    Run rules in order, threading the cursor.

    The first non-Complete outcome is returned unchanged. On success the
    collected values are passed to build (or returned as a list).
    """

    def rule(cursor: StrIter) -> Result:
        values = []
        for sub in rules:
            result = sub(cursor)
            if not isinstance(result, Complete):
                return result
            cursor = result.cursor
            values.append(result.value)
        return Complete(cursor, build(*values) if build else values)

    return rule


def either(*rules: Rule) -> Rule:
    """
    Try rules in order from the same cursor.

    The first Complete or Abort wins. If every rule fails the outcome is
    Incomplete when any of them ran out of input, otherwise the Fail that
    got furthest into the text.
    """

    def rule(cursor: StrIter) -> Result:
        furthest: Optional[Fail] = None
        incomplete: Optional[Incomplete] = None
        for sub in rules:
            result = sub(cursor)
            if isinstance(result, (Complete, Abort)):
                return result
            if isinstance(result, Incomplete):
                incomplete = incomplete or result
            elif furthest is None or result.error.offset > furthest.error.offset:
                furthest = result
        if incomplete is not None:
            return incomplete
        return furthest or fail(cursor, "no alternative matched")

    return rule


def optional(inner: Rule, default: Any = None) -> Rule:
    """Complete with default when inner fails; Abort passes through."""

    def rule(cursor: StrIter) -> Result:
        result = inner(cursor)
        if isinstance(result, (Fail, Incomplete)):
            return Complete(cursor, default)
        return result

    return rule


def repeat(inner: Rule) -> Rule:
    """Apply inner zero or more times, collecting values until it fails."""

    def rule(cursor: StrIter) -> Result:
        values: List[Any] = []
        while True:
            result = inner(cursor)
            if isinstance(result, Abort):
                return result
            if not isinstance(result, Complete) or result.cursor.offset == cursor.offset:
                return Complete(cursor, values)
            values.append(result.value)
            cursor = result.cursor

    return rule


def separated(separator: Rule, item: Rule) -> Rule:
    """
    One or more items divided by separator.

    A trailing separator that is not followed by an item is left unconsumed.
    """

    def rule(cursor: StrIter) -> Result:
        first = item(cursor)
        if not isinstance(first, Complete):
            return first
        values = [first.value]
        cursor = first.cursor
        while True:
            sep = separator(cursor)
            if isinstance(sep, Abort):
                return sep
            if not isinstance(sep, Complete):
                break
            nxt = item(sep.cursor)
            if isinstance(nxt, Abort):
                return nxt
            if not isinstance(nxt, Complete):
                break
            values.append(nxt.value)
            cursor = nxt.cursor
        return Complete(cursor, values)

    return rule


def until(terminator: Rule) -> Rule:
    """
    Consume text up to, not including, the first place terminator matches.

    Returns the consumed span. If the input runs out before the terminator
    ever matches the outcome is Incomplete.
    """

    def rule(cursor: StrIter) -> Result:
        end = cursor
        while True:
            result = terminator(end)
            if isinstance(result, Complete):
                return Complete(end, cursor.span_to(end))
            if isinstance(result, Abort):
                return result
            if end.at_end():
                return Incomplete(end)
            end = end.advance(1)

    return rule


def consume_all(inner: Rule) -> Rule:
    """Apply inner one or more times and return the consumed span."""

    def rule(cursor: StrIter) -> Result:
        result = repeat(inner)(cursor)
        if not isinstance(result, Complete):
            return result
        if result.cursor.offset == cursor.offset:
            first = inner(cursor)
            return first if not isinstance(first, Complete) else fail(cursor, "expected input")
        return Complete(result.cursor, cursor.span_to(result.cursor))

    return rule


def peek(inner: Rule) -> Rule:
    """Run inner without consuming input."""

    def rule(cursor: StrIter) -> Result:
        result = inner(cursor)
        if isinstance(result, Complete):
            return Complete(cursor, result.value)
        return result

    return rule


def not_(inner: Rule, message: str = "unexpected input") -> Rule:
    """
    Succeed, consuming nothing, only where inner does not match.

    Running out of input counts as not matching. Abort passes through.
    """

    def rule(cursor: StrIter) -> Result:
        result = inner(cursor)
        if isinstance(result, Complete):
            return fail(cursor, message)
        if isinstance(result, Abort):
            return result
        return Complete(cursor, None)

    return rule


def must(inner: Rule, message: str = "required input is missing") -> Rule:
    """
    Commit to inner: a Fail (or running out of input) becomes an Abort.

    The Abort keeps the position and reason of the failure it replaces.
    """

    def rule(cursor: StrIter) -> Result:
        result = inner(cursor)
        if isinstance(result, (Fail, Incomplete)):
            return Abort(_error_of(result, message))
        return result

    return rule


def discard(inner: Rule) -> Rule:
    """Run inner and replace its value with None."""
    return map_value(inner, lambda _: None)


def map_value(inner: Rule, fn: Callable[[Any], Any]) -> Rule:
    """Transform the value of a Complete outcome."""

    def rule(cursor: StrIter) -> Result:
        result = inner(cursor)
        if isinstance(result, Complete):
            return Complete(result.cursor, fn(result.value))
        return result

    return rule


def expect(inner: Rule, message: str) -> Rule:
    """Replace the reason of a Fail with a message naming what was expected."""

    def rule(cursor: StrIter) -> Result:
        result = inner(cursor)
        if isinstance(result, Fail):
            return Fail(ParseError(result.error.offset, message))
        return result

    return rule
