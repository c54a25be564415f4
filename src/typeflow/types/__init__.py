"""Runtime type nodes."""

from typeflow.types.base import Comparison, Type, TypeKind
from typeflow.types.collections import ArrayType, NullableType, RefType, UnionType
from typeflow.types.deferred import TypeTDZ
from typeflow.types.functions import (
    FunctionType,
    FunctionTypeParam,
    FunctionTypeRestParam,
    ParameterizedFunctionType,
)
from typeflow.types.generics import (
    FlowIntoType,
    ParameterizedTypeAlias,
    PartialType,
    TypeAlias,
    TypeParameter,
    TypeParameterApplication,
)
from typeflow.types.mapped import ObjMapiType, ObjMapType
from typeflow.types.objects import ObjectType, ObjectTypeProperty
from typeflow.types.primitives import (
    AnyType,
    BooleanType,
    EmptyType,
    ExistentialType,
    LiteralType,
    MixedType,
    NullLiteralType,
    NumberType,
    StringType,
    VoidType,
)

__all__ = [
    "AnyType",
    "ArrayType",
    "BooleanType",
    "Comparison",
    "EmptyType",
    "ExistentialType",
    "FlowIntoType",
    "FunctionType",
    "FunctionTypeParam",
    "FunctionTypeRestParam",
    "LiteralType",
    "MixedType",
    "NullLiteralType",
    "NullableType",
    "NumberType",
    "ObjMapType",
    "ObjMapiType",
    "ObjectType",
    "ObjectTypeProperty",
    "ParameterizedFunctionType",
    "ParameterizedTypeAlias",
    "PartialType",
    "RefType",
    "StringType",
    "Type",
    "TypeAlias",
    "TypeKind",
    "TypeParameter",
    "TypeParameterApplication",
    "TypeTDZ",
    "UnionType",
    "VoidType",
]
