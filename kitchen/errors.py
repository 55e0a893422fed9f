"""
Custom exceptions and error codes for the Kitchen application.

This module provides:
- Structured error codes for categorized error handling
- Custom exception classes for specific failure scenarios
- Error response schema for consistent API responses
"""
from enum import Enum
from typing import Optional, Dict, Any
from pydantic import BaseModel


class ErrorCode(str, Enum):
    """
    Application-wide error codes for categorized error handling.

    Format: CATEGORY_SPECIFIC_ERROR
    Categories:
    - RECIPE_*: Recipe document parsing errors
    - QUANTITY_*: Quantity arithmetic errors
    - MEASURE_*: Measurement and unit errors
    """

    # Recipe document errors
    RECIPE_PARSE_FAILED = "RECIPE_PARSE_FAILED"
    RECIPE_STEP_INVALID = "RECIPE_STEP_INVALID"
    RECIPE_INCOMPLETE = "RECIPE_INCOMPLETE"
    RECIPE_TOO_LARGE = "RECIPE_TOO_LARGE"

    # Quantity errors
    QUANTITY_INVALID = "QUANTITY_INVALID"

    # Measurement errors
    MEASURE_INCOMPATIBLE = "MEASURE_INCOMPATIBLE"
    MEASURE_UNKNOWN_UNIT = "MEASURE_UNKNOWN_UNIT"

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse(BaseModel):
    """Structured error response for API errors."""
    error_code: ErrorCode
    message: str
    details: Optional[Dict[str, Any]] = None

    class Config:
        use_enum_values = True


class KitchenError(Exception):
    """
    Base exception for all Kitchen application errors.

    Provides structured error information for consistent error handling.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        """Convert exception to ErrorResponse for API output."""
        return ErrorResponse(
            error_code=self.error_code,
            message=self.message,
            details=self.details if self.details else None,
        )


# Recipe parsing exceptions

class RecipeParseError(KitchenError):
    """
    Base exception for a recipe document the grammar could not accept.

    Carries the character offset and 1-based line/column at which the
    grammar could not proceed.
    """

    kind = "grammar"

    def __init__(
        self,
        reason: str,
        offset: int,
        line: int = 1,
        column: int = 1,
        error_code: ErrorCode = ErrorCode.RECIPE_PARSE_FAILED,
    ):
        self.reason = reason
        self.offset = offset
        self.line = line
        self.column = column
        super().__init__(
            message=f"Parse failure at line {line}, column {column}: {reason}",
            error_code=error_code,
            details={
                "kind": self.kind,
                "reason": reason,
                "offset": offset,
                "line": line,
                "column": column,
            },
            status_code=422,
        )


class RecipeGrammarError(RecipeParseError):
    """Raised when no production at the document root matched."""

    kind = "grammar"


class RecipeStepError(RecipeParseError):
    """Raised when a step header was recognized but the rest of the step did not parse."""

    kind = "step"

    def __init__(self, reason: str, offset: int, line: int = 1, column: int = 1):
        super().__init__(
            reason, offset, line, column, error_code=ErrorCode.RECIPE_STEP_INVALID
        )


class RecipeIncompleteError(RecipeParseError):
    """Raised when the document ended while a rule still required more text."""

    kind = "incomplete"

    def __init__(self, reason: str, offset: int, line: int = 1, column: int = 1):
        super().__init__(
            reason, offset, line, column, error_code=ErrorCode.RECIPE_INCOMPLETE
        )


class RecipeTooLargeError(KitchenError):
    """Raised when a recipe document exceeds the configured size limit."""

    def __init__(self, size: int, max_size: int):
        super().__init__(
            message=f"Recipe document is {size} bytes; the maximum is {max_size} bytes",
            error_code=ErrorCode.RECIPE_TOO_LARGE,
            details={"size": size, "max_size": max_size},
            status_code=413,
        )


# Quantity and measurement exceptions

class InvalidQuantityError(KitchenError):
    """Raised when a quantity cannot be evaluated (e.g. a zero denominator)."""

    def __init__(self, text: str, reason: str):
        super().__init__(
            message=f"Invalid quantity '{text}': {reason}",
            error_code=ErrorCode.QUANTITY_INVALID,
            details={"quantity": text, "reason": reason},
            status_code=422,
        )


class IncompatibleMeasureError(KitchenError):
    """Raised when measurements of different kinds are combined."""

    def __init__(self, left: str, right: str):
        super().__init__(
            message=f"Cannot combine {left} measure with {right} measure",
            error_code=ErrorCode.MEASURE_INCOMPATIBLE,
            details={"left": left, "right": right},
            status_code=422,
        )


class UnitMappingError(KitchenError):
    """
    Raised when the grammar accepted a unit token that has no measurement mapping.

    This means the unit vocabulary and the alias table are out of sync. It is
    a programming defect, never a user input error.
    """

    def __init__(self, token: str):
        super().__init__(
            message=f"Unit token '{token}' has no measurement mapping",
            error_code=ErrorCode.MEASURE_UNKNOWN_UNIT,
            details={"token": token},
            status_code=500,
        )
