# =============================================================================
# partials/exceptions.py - Error Types
# =============================================================================
# Structured errors raised by the partials library.
# Following the principle: "Errors should tell HOW to fix, not just WHAT failed."
#
# Producer and predicate failures are NOT wrapped here: an exception raised
# while forcing a Lazy value or evaluating a condition propagates unmodified
# out of the transform call.
# =============================================================================

from typing import Any


class PartialsError(Exception):
    """
    Base error class for the partials library.

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        status_code: HTTP status used when the error reaches the web layer
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "PARTIALS_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        result: dict[str, Any] = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Parsing
# =============================================================================

class ParseError(PartialsError):
    """Raised when a directive string is not a valid selector."""

    def __init__(self, expression: str, reason: str):
        super().__init__(
            message=f"Invalid partial expression '{expression}': {reason}",
            code="PARTIAL_PARSE_ERROR",
            status_code=400,
            suggestion="Use dotted names, '*' or brace groups, e.g. 'songs.{name,artist}'",
            details={"expression": expression, "reason": reason},
        )
        self.expression = expression
        self.reason = reason


# =============================================================================
# Schema / Transformation
# =============================================================================

class SchemaError(PartialsError):
    """Raised when a Data class has no usable property schema."""

    def __init__(self, data_class: type, reason: str):
        super().__init__(
            message=f"Cannot build schema for {data_class.__name__}: {reason}",
            code="SCHEMA_ERROR",
            suggestion="Declare Data subclasses with the partials.dataclass decorator",
            details={"data_class": data_class.__name__},
        )


class MaxDepthExceededError(PartialsError):
    """Raised when a transformation nests deeper than the configured maximum."""

    def __init__(self, max_depth: int):
        super().__init__(
            message=f"Maximum transformation depth of {max_depth} reached",
            code="MAX_DEPTH_EXCEEDED",
            suggestion="Raise MAX_TRANSFORMATION_DEPTH or check for cyclic Data references",
            details={"max_depth": max_depth},
        )
        self.max_depth = max_depth
