"""typeflow - Runtime type validation with generics, mapped and deferred types."""

from typeflow.compare import compare_types, sort_by_specificity
from typeflow.config import ContextOptions
from typeflow.context import TypeContext
from typeflow.errors import (
    ERROR_MESSAGES,
    InvariantViolation,
    RuntimeTypeError,
    TypeFlowError,
    get_error_message,
)
from typeflow.kinds import UNDEFINED, ValueKind, kind_of
from typeflow.types import (
    ObjMapiType,
    ObjMapType,
    ParameterizedTypeAlias,
    Type,
    TypeKind,
    TypeParameter,
    TypeTDZ,
)
from typeflow.validation import (
    IdentifierPath,
    Validation,
    ValidationError,
    stringify_path,
)

__all__ = [
    # Errors
    "ERROR_MESSAGES",
    # Values
    "UNDEFINED",
    # Configuration
    "ContextOptions",
    # Validation
    "IdentifierPath",
    "InvariantViolation",
    # Core types
    "ObjMapType",
    "ObjMapiType",
    "ParameterizedTypeAlias",
    "RuntimeTypeError",
    "Type",
    # Factory
    "TypeContext",
    "TypeFlowError",
    "TypeKind",
    "TypeParameter",
    "TypeTDZ",
    "Validation",
    "ValidationError",
    "ValueKind",
    # Specificity
    "compare_types",
    "get_error_message",
    "kind_of",
    "sort_by_specificity",
    "stringify_path",
]
