"""The factory every type node is built through.

A TypeContext owns the options, the diagnostics logger and the interned leaf
types. Nodes keep a back-reference to the context that built them so they can
create derived types (literals, objects, ``mixed``) while validating.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from typeflow.compare import INDIRECT_KINDS, compare_types
from typeflow.config import ContextOptions
from typeflow.errors import RuntimeTypeError, invariant
from typeflow.kinds import ValueKind, kind_of
from typeflow.types.base import Type, TypeKind
from typeflow.types.collections import ArrayType, NullableType, RefType, UnionType
from typeflow.types.deferred import TypeRevealer, TypeTDZ
from typeflow.types.functions import (
    BodyCreator,
    FunctionType,
    FunctionTypeParam,
    FunctionTypeRestParam,
    ParameterizedFunctionType,
)
from typeflow.types.generics import (
    Constraint,
    FlowIntoType,
    ParameterizedTypeAlias,
    PartialType,
    TypeAlias,
    TypeParameter,
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
from typeflow.validation import Validation

_log = logging.getLogger(__name__)

# Distinguishes "no literal value given" from a given None
_MISSING: Any = object()


class TypeContext:
    """Builds and owns runtime types.

    Example:
        >>> t = TypeContext()
        >>> point = t.object({"x": t.number(), "y": t.number()})
        >>> point.accepts({"x": 1, "y": 2})
        True

    """

    def __init__(self, options: ContextOptions | None = None) -> None:
        self.options = options if options is not None else ContextOptions()
        self.logger = logging.getLogger(self.options.logger_name)

        self._any = AnyType(context=self)
        self._mixed = MixedType(context=self)
        self._existential = ExistentialType(context=self)
        self._empty = EmptyType(context=self)
        self._null = NullLiteralType(context=self)
        self._void = VoidType(context=self)
        self._boolean = BooleanType(context=self)
        self._number = NumberType(context=self)
        self._string = StringType(context=self)

    # =========================================================================
    # Leaves
    # =========================================================================

    def any(self) -> AnyType:
        return self._any

    def mixed(self) -> MixedType:
        return self._mixed

    def existential(self) -> ExistentialType:
        return self._existential

    def empty(self) -> EmptyType:
        return self._empty

    def null(self) -> NullLiteralType:
        return self._null

    def void(self) -> VoidType:
        return self._void

    def boolean(self, value: bool = _MISSING) -> BooleanType | LiteralType:  # noqa: FBT001
        """The boolean type, or a boolean literal when value is given."""
        return self._boolean if value is _MISSING else self.literal(value)

    def number(self, value: float = _MISSING) -> NumberType | LiteralType:
        """The number type, or a number literal when value is given."""
        return self._number if value is _MISSING else self.literal(value)

    def string(self, value: str = _MISSING) -> StringType | LiteralType:
        """The string type, or a string literal when value is given."""
        return self._string if value is _MISSING else self.literal(value)

    def literal(self, value: Any) -> LiteralType:
        return LiteralType(value=value, context=self)

    # =========================================================================
    # Structure
    # =========================================================================

    def object(
        self,
        *props_or_mapping: ObjectTypeProperty | Mapping[str, Type],
        exact: bool = False,
    ) -> ObjectType:
        """Build an object type.

        Args:
            *props_or_mapping: Properties, or mappings of key to value type
                which expand to required properties
            exact: Reject keys that are not declared

        """
        properties: list[ObjectTypeProperty] = []
        for item in props_or_mapping:
            if isinstance(item, Mapping):
                properties.extend(self.property(k, v) for k, v in item.items())
            else:
                properties.append(item)
        return ObjectType(properties=tuple(properties), exact=exact, context=self)

    def exact_object(
        self,
        *props_or_mapping: ObjectTypeProperty | Mapping[str, Type],
    ) -> ObjectType:
        return self.object(*props_or_mapping, exact=True)

    def property(
        self,
        key: str,
        value: Type,
        optional: bool = False,  # noqa: FBT001, FBT002
    ) -> ObjectTypeProperty:
        return ObjectTypeProperty(key=key, value=value, optional=optional, context=self)

    def array(self, element: Type | None = None) -> ArrayType:
        return ArrayType(element=element if element is not None else self._any, context=self)

    def union(self, *types: Type) -> Type:
        """Build a union.

        Nested unions are flattened and equivalent members dropped. A union
        of one member is that member.
        """
        members: list[Type] = []
        for candidate in _flatten_unions(types):
            if any(_same_type(member, candidate) for member in members):
                continue
            members.append(candidate)
        invariant(members, "A union needs at least one member.")
        if len(members) == 1:
            return members[0]
        return UnionType(types=tuple(members), context=self)

    def nullable(self, type: Type) -> NullableType:  # noqa: A002
        return NullableType(type=type, context=self)

    def ref(self, target: type) -> RefType:
        """Instances of the class target."""
        invariant(isinstance(target, type), "Reference target must be a class.")
        return RefType(target=target, context=self)

    # =========================================================================
    # Functions
    # =========================================================================

    def function(
        self,
        *params: FunctionTypeParam,
        returns: Type | None = None,
        rest: FunctionTypeRestParam | None = None,
    ) -> FunctionType:
        return FunctionType(params=params, rest=rest, return_type=returns, context=self)

    def param(
        self,
        name: str,
        type: Type,  # noqa: A002
        optional: bool = False,  # noqa: FBT001, FBT002
    ) -> FunctionTypeParam:
        return FunctionTypeParam(name=name, type=type, optional=optional, context=self)

    def rest(self, name: str, type: Type) -> FunctionTypeRestParam:  # noqa: A002
        return FunctionTypeRestParam(name=name, type=type, context=self)

    def generic_function(self, body_creator: BodyCreator) -> ParameterizedFunctionType:
        """Build a generic function type.

        Example:
            >>> identity = t.generic_function(
            ...     lambda fn: t.function(
            ...         t.param("value", v := fn.type_parameter("V")),
            ...         returns=v,
            ...     ),
            ... )

        """
        return ParameterizedFunctionType(body_creator=body_creator, context=self)

    # =========================================================================
    # Generics
    # =========================================================================

    def type_parameter(
        self,
        id: str,  # noqa: A002
        bound: Type | None = None,
        default: Type | None = None,
    ) -> TypeParameter:
        return TypeParameter(id=id, bound=bound, default=default, context=self)

    def flow_into(self, type_parameter: TypeParameter) -> FlowIntoType:
        return type_parameter.flow_into()

    def type_alias(
        self,
        name: str,
        body_or_creator: Type | Callable[[PartialType], Type],
        *constraints: Constraint,
    ) -> TypeAlias | ParameterizedTypeAlias:
        """Name a type, or a generic type when given a creator callable.

        The creator receives a PartialType, declares parameters on it with
        ``type_parameter`` and returns the body.
        """
        if isinstance(body_or_creator, Type):
            return TypeAlias(
                name=name,
                type=body_or_creator,
                constraints=list(constraints),
                context=self,
            )
        return ParameterizedTypeAlias(
            name=name,
            type_creator=body_or_creator,
            constraints=list(constraints),
            context=self,
        )

    def tdz(self, reveal: TypeRevealer) -> TypeTDZ:
        """Refer to a type that is not defined yet."""
        return TypeTDZ(reveal=reveal, context=self)

    # =========================================================================
    # Mapped types
    # =========================================================================

    def obj_mapi(self, object: Type, mapper: Type) -> ObjMapiType:  # noqa: A002
        return ObjMapiType(object=object, mapper=mapper, context=self)

    def obj_map(self, object: Type, mapper: Type) -> ObjMapType:  # noqa: A002
        return ObjMapType(object=object, mapper=mapper, context=self)

    # =========================================================================
    # Inference
    # =========================================================================

    def type_of(self, value: Any) -> Type:
        """Infer the general type of a runtime value.

        Scalars infer their kind, not a literal: ``type_of(1)`` is ``number``.
        A container that contains itself infers ``any`` (``{}`` for mappings)
        at the point where it recurs.
        """
        return self._infer(value, set())

    def _infer(self, value: Any, active: set[int]) -> Type:
        match kind_of(value):
            case ValueKind.NULL:
                return self._null
            case ValueKind.UNDEFINED:
                return self._void
            case ValueKind.BOOLEAN:
                return self._boolean
            case ValueKind.NUMBER:
                return self._number
            case ValueKind.STRING:
                return self._string
            case ValueKind.ARRAY:
                if not value:
                    return self.array(self._any)
                if id(value) in active:
                    return self._any
                active.add(id(value))
                try:
                    members = (self._infer(item, active) for item in value)
                    return self.array(self.union(*members))
                finally:
                    active.discard(id(value))
            case ValueKind.CALLABLE:
                return self.function(rest=self.rest("args", self._any), returns=self._any)
            case _ if isinstance(value, Mapping):
                if id(value) in active:
                    return self.object()
                active.add(id(value))
                try:
                    return self.object(
                        *(
                            self.property(key, self._infer(item, active))
                            for key, item in value.items()
                            if isinstance(key, str)
                        ),
                    )
                finally:
                    active.discard(id(value))
            case _:
                return self.ref(type(value))

    # =========================================================================
    # Diagnostics and entry points
    # =========================================================================

    def emit_warning_message(self, message: str) -> None:
        """Report a non-fatal problem, unless warnings are disabled."""
        if self.options.warnings:
            self.logger.warning(message)

    def validate(self, type: Type, value: Any) -> Validation:  # noqa: A002
        """Collect every error value has against type."""
        validation = Validation(
            input=value,
            input_name=self.options.input_name,
            messages=self.options.messages or None,
        )
        type.collect_errors(validation, (), value)
        _log.debug("Validated against %s: %d error(s)", type, len(validation))
        return validation

    def check(self, type: Type, value: Any) -> Any:  # noqa: A002
        """Return value if it conforms to type.

        Raises:
            RuntimeTypeError: If it does not, carrying the validation

        """
        validation = self.validate(type, value)
        if not validation.is_valid:
            raise RuntimeTypeError(validation)
        return value


def _flatten_unions(types: Iterable[Type]) -> Iterable[Type]:
    for t in types:
        if t.kind is TypeKind.UNION:
            yield from _flatten_unions(t.types)  # type: ignore[attr-defined]
        else:
            yield t


def _same_type(a: Type, b: Type) -> bool:
    if a is b:
        return True
    # Indirect types may not be resolvable yet, e.g. a forward reference
    if a.kind in INDIRECT_KINDS or b.kind in INDIRECT_KINDS:
        return False
    return compare_types(a, b) == 0 and compare_types(b, a) == 0
