"""Error codes, messages and exceptions for runtime type validation.

Validation failures are data: they are collected into a
:class:`~typeflow.validation.Validation` under one of the codes below. A
malformed type graph is a programming error instead, and surfaces as an
:class:`InvariantViolation` that is never collected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from typeflow.validation import Validation


ERR_CONSTRAINT_VIOLATION = "ERR_CONSTRAINT_VIOLATION"
ERR_EXPECT_ARRAY = "ERR_EXPECT_ARRAY"
ERR_EXPECT_BOOLEAN = "ERR_EXPECT_BOOLEAN"
ERR_EXPECT_EMPTY = "ERR_EXPECT_EMPTY"
ERR_EXPECT_EXACT_VALUE = "ERR_EXPECT_EXACT_VALUE"
ERR_EXPECT_FUNCTION = "ERR_EXPECT_FUNCTION"
ERR_EXPECT_INSTANCEOF = "ERR_EXPECT_INSTANCEOF"
ERR_EXPECT_NULL = "ERR_EXPECT_NULL"
ERR_EXPECT_NUMBER = "ERR_EXPECT_NUMBER"
ERR_EXPECT_OBJECT = "ERR_EXPECT_OBJECT"
ERR_EXPECT_STRING = "ERR_EXPECT_STRING"
ERR_EXPECT_VOID = "ERR_EXPECT_VOID"
ERR_NO_UNION = "ERR_NO_UNION"
ERR_UNKNOWN_KEY = "ERR_UNKNOWN_KEY"

ERROR_MESSAGES: dict[str, str] = {
    ERR_CONSTRAINT_VIOLATION: "violated a constraint",
    ERR_EXPECT_ARRAY: "must be an Array",
    ERR_EXPECT_BOOLEAN: "must be true or false",
    ERR_EXPECT_EMPTY: "must be empty",
    ERR_EXPECT_EXACT_VALUE: "must be exactly {0}",
    ERR_EXPECT_FUNCTION: "must be a function",
    ERR_EXPECT_INSTANCEOF: "must be an instance of {0}",
    ERR_EXPECT_NULL: "must be null",
    ERR_EXPECT_NUMBER: "must be a number",
    ERR_EXPECT_OBJECT: "must be an object",
    ERR_EXPECT_STRING: "must be a string",
    ERR_EXPECT_VOID: "must be undefined",
    ERR_NO_UNION: "must be one of: {0}",
    ERR_UNKNOWN_KEY: "should not contain the key: {0}",
}


def get_error_message(
    code: str,
    *params: object,
    overrides: Mapping[str, str] | None = None,
) -> str:
    """Render the message for an error code.

    Args:
        code: One of the ``ERR_*`` codes
        *params: Positional values substituted into ``{0}``, ``{1}``...
        overrides: Optional per-code message templates

    Returns:
        The formatted message

    Raises:
        KeyError: If the code is unknown

    """
    if overrides and code in overrides:
        template = overrides[code]
    elif code in ERROR_MESSAGES:
        template = ERROR_MESSAGES[code]
    else:
        msg = f"Unknown error code: {code!r}"
        raise KeyError(msg)
    return template.format(*params)


class TypeFlowError(Exception):
    """Base class for all typeflow exceptions."""


class InvariantViolation(TypeFlowError):
    """The type graph itself is malformed.

    Raised while validating, never recorded as a validation error.
    """


class RuntimeTypeError(TypeFlowError, TypeError):
    """A value failed validation in a context that requires it to pass."""

    def __init__(self, validation: Validation) -> None:
        self.validation = validation
        super().__init__(str(validation))


def invariant(condition: object, message: str) -> None:
    """Raise InvariantViolation unless condition holds."""
    if not condition:
        raise InvariantViolation(message)
