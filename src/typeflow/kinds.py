"""Value and type classification.

Shape checks and cross-type dispatch branch on small, closed enums rather
than on scattered ``isinstance`` queries.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum, StrEnum
from typing import Any, Final


class _Undefined:
    """Marker for an absent value, e.g. a missing property."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Final = _Undefined()


class ValueKind(Enum):
    """Closed set of runtime value kinds."""

    NULL = "null"
    UNDEFINED = "undefined"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    CALLABLE = "callable"


class TypeKind(StrEnum):
    """Every concrete type variant. The value doubles as its ``typeName``."""

    ANY = "AnyType"
    MIXED = "MixedType"
    EXISTENTIAL = "ExistentialType"
    EMPTY = "EmptyType"
    NULL = "NullLiteralType"
    VOID = "VoidType"
    BOOLEAN = "BooleanType"
    NUMBER = "NumberType"
    STRING = "StringType"
    LITERAL = "LiteralType"
    OBJECT = "ObjectType"
    PROPERTY = "ObjectTypeProperty"
    FUNCTION = "FunctionType"
    FUNCTION_PARAM = "FunctionTypeParam"
    FUNCTION_REST_PARAM = "FunctionTypeRestParam"
    PARAMETERIZED_FUNCTION = "ParameterizedFunctionType"
    ARRAY = "ArrayType"
    UNION = "UnionType"
    NULLABLE = "NullableType"
    REF = "RefType"
    TYPE_PARAMETER = "TypeParameter"
    FLOW_INTO = "FlowIntoType"
    PARTIAL = "PartialType"
    TYPE_ALIAS = "TypeAlias"
    PARAMETERIZED_TYPE_ALIAS = "ParameterizedTypeAlias"
    TYPE_PARAMETER_APPLICATION = "TypeParameterApplication"
    TDZ = "TypeTDZ"
    OBJ_MAPI = "$ObjMapiType"
    OBJ_MAP = "$ObjMapType"


_OBJECT_LIKE = frozenset({ValueKind.OBJECT, ValueKind.ARRAY, ValueKind.CALLABLE})


def kind_of(value: Any) -> ValueKind:
    """Classify a runtime value."""
    match value:
        case None:
            return ValueKind.NULL
        case _Undefined():
            return ValueKind.UNDEFINED
        # bool before int: bool is an int subclass
        case bool():
            return ValueKind.BOOLEAN
        case int() | float():
            return ValueKind.NUMBER
        case str():
            return ValueKind.STRING
        case list() | tuple():
            return ValueKind.ARRAY
        case _ if callable(value):
            return ValueKind.CALLABLE
        case _:
            return ValueKind.OBJECT


def is_object_like(value: Any) -> bool:
    """Return True for values that can carry properties (not null)."""
    return kind_of(value) in _OBJECT_LIKE


def read_property(value: Any, key: str) -> Any:
    """Read a property from a mapping or attribute holder.

    Absent keys yield ``UNDEFINED``.
    """
    if isinstance(value, Mapping):
        return value.get(key, UNDEFINED)
    return getattr(value, key, UNDEFINED)


def own_keys(value: Any) -> tuple[str, ...]:
    """List the keys an object-like value carries."""
    if isinstance(value, Mapping):
        return tuple(k for k in value if isinstance(k, str))
    attrs = getattr(value, "__dict__", None)
    if attrs is None:
        return ()
    return tuple(k for k in attrs if not k.startswith("_"))
