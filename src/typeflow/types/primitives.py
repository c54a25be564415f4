"""Leaf types: top and bottom types, null, void and scalar kinds."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from typeflow.errors import (
    ERR_EXPECT_BOOLEAN,
    ERR_EXPECT_EMPTY,
    ERR_EXPECT_EXACT_VALUE,
    ERR_EXPECT_NULL,
    ERR_EXPECT_NUMBER,
    ERR_EXPECT_STRING,
    ERR_EXPECT_VOID,
)
from typeflow.kinds import ValueKind, kind_of
from typeflow.types.base import Type, TypeKind

if TYPE_CHECKING:
    from typeflow.types.base import Comparison
    from typeflow.validation import IdentifierPath, Validation


def render_value(value: Any) -> str:
    """Render a literal value the way it is written in a type annotation."""
    match kind_of(value):
        case ValueKind.NULL:
            return "null"
        case ValueKind.UNDEFINED:
            return "undefined"
        case ValueKind.BOOLEAN:
            return "true" if value else "false"
        case ValueKind.STRING:
            return json.dumps(value)
        case _:
            return repr(value)


# =============================================================================
# Top and bottom
# =============================================================================


class _PermissiveType(Type):
    """Shared behaviour of the types that accept every value."""

    label = ""

    def accepts(self, value: Any) -> bool:
        del value
        return True

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        del validation, path, value
        return False

    def compare_with(self, other: Type) -> Comparison:
        return 0 if other.kind is self.kind else 1

    def to_string(self, *, with_declaration: bool = False) -> str:
        del with_declaration
        return self.label


class AnyType(_PermissiveType, kind=TypeKind.ANY):
    """Opts out of checking entirely."""

    label = "any"


class MixedType(_PermissiveType, kind=TypeKind.MIXED):
    """Any value, known only by its runtime kind."""

    label = "mixed"


class ExistentialType(_PermissiveType, kind=TypeKind.EXISTENTIAL):
    """Inferred-type placeholder (``*``). Accepts everything at runtime."""

    label = "*"


class EmptyType(Type, kind=TypeKind.EMPTY):
    """The bottom type. No value conforms."""

    def accepts(self, value: Any) -> bool:
        del value
        return False

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        del value
        validation.add_error(path, self, ERR_EXPECT_EMPTY)
        return True

    def compare_with(self, other: Type) -> Comparison:
        return 0 if other.kind is TypeKind.EMPTY else -1

    def to_string(self, *, with_declaration: bool = False) -> str:
        del with_declaration
        return "empty"


# =============================================================================
# Scalars
# =============================================================================


class _ScalarType(Type):
    """A type satisfied by exactly one runtime value kind."""

    value_kind = ValueKind.NULL
    error_code = ""
    label = ""

    def accepts(self, value: Any) -> bool:
        return kind_of(value) is self.value_kind

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        if self.accepts(value):
            return False
        validation.add_error(path, self, self.error_code)
        return True

    def compare_with(self, other: Type) -> Comparison:
        if other.kind is self.kind:
            return 0
        if other.kind is TypeKind.LITERAL and other.value_kind is self.value_kind:  # type: ignore[attr-defined]
            return 1
        return -1

    def to_string(self, *, with_declaration: bool = False) -> str:
        del with_declaration
        return self.label


class NullLiteralType(_ScalarType, kind=TypeKind.NULL):
    """Exactly ``None``."""

    value_kind = ValueKind.NULL
    error_code = ERR_EXPECT_NULL
    label = "null"


class VoidType(_ScalarType, kind=TypeKind.VOID):
    """An absent value (``UNDEFINED``)."""

    value_kind = ValueKind.UNDEFINED
    error_code = ERR_EXPECT_VOID
    label = "void"


class BooleanType(_ScalarType, kind=TypeKind.BOOLEAN):
    """True or False."""

    value_kind = ValueKind.BOOLEAN
    error_code = ERR_EXPECT_BOOLEAN
    label = "boolean"


class NumberType(_ScalarType, kind=TypeKind.NUMBER):
    """Integers and floats, excluding booleans."""

    value_kind = ValueKind.NUMBER
    error_code = ERR_EXPECT_NUMBER
    label = "number"


class StringType(_ScalarType, kind=TypeKind.STRING):
    """Text."""

    value_kind = ValueKind.STRING
    error_code = ERR_EXPECT_STRING
    label = "string"


class LiteralType(Type, kind=TypeKind.LITERAL):
    """A single value: ``"a"``, ``42``, ``true``."""

    value: Any

    @property
    def value_kind(self) -> ValueKind:
        """Runtime kind of the wrapped value."""
        return kind_of(self.value)

    def accepts(self, value: Any) -> bool:
        return kind_of(value) is self.value_kind and value == self.value

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        if self.accepts(value):
            return False
        validation.add_error(path, self, ERR_EXPECT_EXACT_VALUE, self.to_string())
        return True

    def compare_with(self, other: Type) -> Comparison:
        if other.kind is TypeKind.LITERAL and self.accepts(other.value):  # type: ignore[attr-defined]
            return 0
        return -1

    def to_string(self, *, with_declaration: bool = False) -> str:
        del with_declaration
        return render_value(self.value)

    def to_json(self) -> dict[str, Any]:
        return {"typeName": self.type_name, "value": self.value}
