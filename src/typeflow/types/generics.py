"""Generic types: type parameters, aliases and their applications.

A type parameter infers by first use: the first value it validates (after
passing any bound) fixes its shape, and every later value must match that
recorded shape. State lives on the parameter node, so inference is scoped to
one use of a generic. Parameterized aliases build a fresh set of parameters
every time they are used.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import field
from typing import TYPE_CHECKING, Any, Self

from typeflow.compare import compare_types
from typeflow.errors import ERR_CONSTRAINT_VIOLATION
from typeflow.types.base import Type, TypeKind

if TYPE_CHECKING:
    from typeflow.types.base import Comparison
    from typeflow.types.objects import ObjectTypeProperty
    from typeflow.validation import IdentifierPath, Validation

_log = logging.getLogger(__name__)

type Constraint = Callable[[Any], bool]
type TypeCreator = Callable[[PartialType], Type]

# Bounds that let any value through without recording it
_PASSTHROUGH_KINDS = frozenset({TypeKind.ANY, TypeKind.EXISTENTIAL})


def _passes_constraints(constraints: Sequence[Constraint], value: Any) -> bool:
    return all(constraint(value) for constraint in constraints)


def _collect_constraint_errors(
    owner: Type,
    constraints: Sequence[Constraint],
    validation: Validation,
    path: IdentifierPath,
    value: Any,
) -> bool:
    has_errors = False
    for constraint in constraints:
        if not constraint(value):
            validation.add_error(path, owner, ERR_CONSTRAINT_VIOLATION)
            has_errors = True
    return has_errors


def _has_property(t: Type, key: str) -> bool:
    inner = t.unwrap()
    has_property = getattr(inner, "has_property", None)
    return callable(has_property) and bool(has_property(key))


def _get_property(t: Type, key: str) -> ObjectTypeProperty | None:
    inner = t.unwrap()
    get_property = getattr(inner, "get_property", None)
    if not callable(get_property):
        return None
    return get_property(key)


# =============================================================================
# Type parameters
# =============================================================================


class TypeParameter(Type, kind=TypeKind.TYPE_PARAMETER):
    """A generic parameter such as ``T`` in ``type Box<T> = { value: T }``.

    Attributes:
        id: Display name
        bound: Optional upper bound, or a FlowIntoType to defer to
        default: Optional default type; used like a bound when checking
        recorded: Type inferred from the first accepted value (write-once)

    """

    id: str
    bound: Type | None = None
    default: Type | None = None
    recorded: Type | None = field(default=None, init=False)
    _flow_into: FlowIntoType | None = field(default=None, init=False)

    @property
    def bound_or_default(self) -> Type | None:
        """The bound if present, otherwise the default."""
        return self.bound if self.bound is not None else self.default

    def record(self, inferred: Type) -> None:
        """Fix the shape of this parameter. Later calls are ignored."""
        if self.recorded is not None:
            return
        _log.debug("Type parameter %s recorded as %s", self.id, inferred)
        self.recorded = inferred

    def flow_into(self) -> FlowIntoType:
        """Get the node standing for whatever this parameter records."""
        if self._flow_into is None:
            self._flow_into = FlowIntoType(type_parameter=self, context=self.context)
        return self._flow_into

    def accepts(self, value: Any) -> bool:
        bound = self.bound_or_default
        if bound is not None and bound.kind is TypeKind.FLOW_INTO:
            return bound.accepts(value)
        if self.recorded is not None:
            return self.recorded.accepts(value)
        if bound is not None:
            if bound.kind in _PASSTHROUGH_KINDS:
                return True
            if not bound.accepts(value):
                return False

        self.record(self.context.type_of(value))
        return True

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        bound = self.bound_or_default
        if bound is not None and bound.kind is TypeKind.FLOW_INTO:
            return bound.collect_errors(validation, path, value)
        if self.recorded is not None:
            return self.recorded.collect_errors(validation, path, value)
        if bound is not None:
            if bound.kind in _PASSTHROUGH_KINDS:
                return False
            if bound.collect_errors(validation, path, value):
                return True

        self.record(self.context.type_of(value))
        return False

    def accepts_type(self, other: Type) -> bool:
        bound = self.bound_or_default
        if bound is not None and bound.kind is TypeKind.FLOW_INTO:
            return bound.accepts_type(other)
        if self.recorded is not None:
            return self.recorded.accepts_type(other)
        if bound is not None:
            if bound.kind in _PASSTHROUGH_KINDS:
                return True
            if not bound.accepts_type(other):
                return False

        self.record(other)
        return True

    def compare_with(self, other: Type) -> Comparison:
        # Other has already been unwrapped, so a parameter here is free
        if other.kind is TypeKind.TYPE_PARAMETER:
            return 1
        if self.recorded is not None:
            return compare_types(self.recorded, other)
        if (bound := self.bound_or_default) is not None:
            return compare_types(bound, other)
        return 1

    def unwrap(self) -> Type:
        if self.recorded is not None:
            return self.recorded.unwrap()
        if (bound := self.bound_or_default) is not None:
            return bound.unwrap()
        return self

    def to_string(self, *, with_declaration: bool = False) -> str:
        if with_declaration:
            if self.default is not None:
                return f"{self.id} = {self.default.to_string()}"
            if self.bound is not None:
                return f"{self.id}: {self.bound.to_string()}"
        return self.id

    def to_json(self) -> dict[str, Any]:
        return {
            "typeName": self.type_name,
            "id": self.id,
            "bound": self.bound.to_json() if self.bound is not None else None,
            "recorded": self.recorded.to_json() if self.recorded is not None else None,
        }


class FlowIntoType(Type, kind=TypeKind.FLOW_INTO):
    """Stands for the type another parameter will eventually record.

    Used as the bound of a dependent parameter so values checked there are
    checked (and, on first use, recorded) by the target parameter instead.
    """

    type_parameter: TypeParameter

    def accepts(self, value: Any) -> bool:
        return self.type_parameter.accepts(value)

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        return self.type_parameter.collect_errors(validation, path, value)

    def accepts_type(self, other: Type) -> bool:
        return self.type_parameter.accepts_type(other)

    def compare_with(self, other: Type) -> Comparison:
        return self.type_parameter.compare_with(other)

    def unwrap(self) -> Type:
        return self.type_parameter.unwrap()

    def to_string(self, *, with_declaration: bool = False) -> str:
        return self.type_parameter.to_string(with_declaration=with_declaration)

    def to_json(self) -> dict[str, Any]:
        return self.type_parameter.to_json()


# =============================================================================
# Aliases
# =============================================================================


class PartialType(Type, kind=TypeKind.PARTIAL):
    """Placeholder for a generic body while it is being created.

    The creator receives the partial, declares parameters on it and may refer
    to it (through ``apply``) to build recursive types.
    """

    name: str
    type: Type = field(default=None)  # type: ignore[assignment]
    type_parameters: list[TypeParameter] = field(default_factory=list)
    constraints: list[Constraint] = field(default_factory=list)

    def type_parameter(
        self,
        id: str,  # noqa: A002
        bound: Type | None = None,
        default: Type | None = None,
    ) -> TypeParameter:
        """Declare a type parameter on this body."""
        target = TypeParameter(id=id, bound=bound, default=default, context=self.context)
        self.type_parameters.append(target)
        return target

    def bind(self, type_instances: Sequence[Type]) -> None:
        """Bound each declared parameter by the matching type argument."""
        for param, instance in zip(self.type_parameters, type_instances, strict=False):
            param.bound = instance

    def apply(self, *type_instances: Type) -> TypeParameterApplication:
        """Refer to this body applied to type arguments."""
        return TypeParameterApplication(
            parent=self,
            type_instances=type_instances,
            context=self.context,
        )

    def accepts(self, value: Any) -> bool:
        return self.type.accepts(value) and _passes_constraints(self.constraints, value)

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        if self.type.collect_errors(validation, path, value):
            return True
        return _collect_constraint_errors(
            self,
            self.constraints,
            validation,
            path,
            value,
        )

    def compare_with(self, other: Type) -> Comparison:
        if other is self:
            return 0
        return compare_types(self.type, other)

    def unwrap(self) -> Type:
        return self.type.unwrap()

    def resolve(self) -> Type:
        """Get the body type."""
        return self.type

    def has_property(self, key: str) -> bool:
        """Return True if the body declares key."""
        return _has_property(self, key)

    def get_property(self, key: str) -> ObjectTypeProperty | None:
        """Get the body's property for key, if any."""
        return _get_property(self, key)

    def to_string(self, *, with_declaration: bool = False) -> str:
        params = ", ".join(
            p.to_string(with_declaration=True) for p in self.type_parameters
        )
        head = f"{self.name}<{params}>"
        if with_declaration:
            return f"type {head} = {self.type.to_string()};"
        return head

    def to_json(self) -> dict[str, Any]:
        return {
            "typeName": self.type_name,
            "name": self.name,
            "typeParameters": [p.to_json() for p in self.type_parameters],
            "type": self.type.to_json(),
        }


class TypeAlias(Type, kind=TypeKind.TYPE_ALIAS):
    """A named type, optionally narrowed by value constraints."""

    name: str
    type: Type
    constraints: list[Constraint] = field(default_factory=list)

    def add_constraint(self, *constraints: Constraint) -> Self:
        """Append predicates every accepted value must also satisfy."""
        self.constraints.extend(constraints)
        return self

    def accepts(self, value: Any) -> bool:
        return self.type.accepts(value) and _passes_constraints(self.constraints, value)

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        if self.type.collect_errors(validation, path, value):
            return True
        return _collect_constraint_errors(
            self,
            self.constraints,
            validation,
            path,
            value,
        )

    def compare_with(self, other: Type) -> Comparison:
        if other is self:
            return 0
        return compare_types(self.type, other)

    def unwrap(self) -> Type:
        return self.type.unwrap()

    def resolve(self) -> Type:
        """Get the aliased type."""
        return self.type

    def has_property(self, key: str) -> bool:
        """Return True if the aliased type declares key."""
        return _has_property(self, key)

    def get_property(self, key: str) -> ObjectTypeProperty | None:
        """Get the aliased type's property for key, if any."""
        return _get_property(self, key)

    def to_string(self, *, with_declaration: bool = False) -> str:
        if with_declaration:
            return f"type {self.name} = {self.type.to_string()};"
        return self.name

    def to_json(self) -> dict[str, Any]:
        return {
            "typeName": self.type_name,
            "name": self.name,
            "type": self.type.to_json(),
        }


class ParameterizedTypeAlias(Type, kind=TypeKind.PARAMETERIZED_TYPE_ALIAS):
    """A generic alias such as ``type List<T> = { head: T, tail: ?List<T> }``.

    ``type_creator`` receives a PartialType placeholder, declares parameters
    on it and returns the body. A partial is created for each use, so type
    parameters infer afresh per validation.
    """

    name: str
    type_creator: TypeCreator
    constraints: list[Constraint] = field(default_factory=list)

    def get_partial(self, *type_instances: Type) -> PartialType:
        """Create the body, bounding parameters by any type arguments."""
        target = PartialType(name=self.name, context=self.context)
        target.type = self.type_creator(target)
        target.bind(type_instances)
        return target

    @property
    def partial(self) -> PartialType:
        """A freshly created, unapplied body."""
        return self.get_partial()

    @property
    def type_parameters(self) -> list[TypeParameter]:
        """Parameters declared by the body."""
        return self.partial.type_parameters

    def add_constraint(self, *constraints: Constraint) -> Self:
        """Append predicates every accepted value must also satisfy."""
        self.constraints.extend(constraints)
        return self

    def apply(self, *type_instances: Type) -> TypeParameterApplication:
        """Apply type arguments, e.g. ``Box<number>``."""
        return TypeParameterApplication(
            parent=self,
            type_instances=type_instances,
            context=self.context,
        )

    def specialize(self, *type_instances: Type) -> Type:
        target = self.get_partial(*type_instances)
        target.constraints = list(self.constraints)
        return target

    def accepts(self, value: Any) -> bool:
        if not self.partial.accepts(value):
            return False
        return _passes_constraints(self.constraints, value)

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        if self.partial.collect_errors(validation, path, value):
            return True
        return _collect_constraint_errors(
            self,
            self.constraints,
            validation,
            path,
            value,
        )

    def accepts_type(self, other: Type) -> bool:
        return self.partial.accepts_type(other)

    def compare_with(self, other: Type) -> Comparison:
        return self.partial.compare_with(other)

    def unwrap(self) -> Type:
        return self.partial.unwrap()

    def resolve(self) -> Type:
        """Get the body type of a fresh partial."""
        return self.partial.resolve()

    def has_property(self, key: str) -> bool:
        """Return True if the body declares key."""
        return _has_property(self, key)

    def get_property(self, key: str) -> ObjectTypeProperty | None:
        """Get the body's property for key, if any."""
        return _get_property(self, key)

    def to_string(self, *, with_declaration: bool = False) -> str:
        return self.partial.to_string(with_declaration=with_declaration)

    def to_json(self) -> dict[str, Any]:
        return self.partial.to_json()


class TypeParameterApplication(Type, kind=TypeKind.TYPE_PARAMETER_APPLICATION):
    """A generic type applied to type arguments, e.g. ``List<number>``."""

    parent: Type
    type_instances: tuple[Type, ...] = ()

    def _target(self) -> Type:
        return self.parent.specialize(*self.type_instances)

    def accepts(self, value: Any) -> bool:
        return self._target().accepts(value)

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        return self._target().collect_errors(validation, path, value)

    def compare_with(self, other: Type) -> Comparison:
        return compare_types(self._target(), other)

    def unwrap(self) -> Type:
        return self._target().unwrap()

    def has_property(self, key: str) -> bool:
        """Return True if the applied type declares key."""
        return _has_property(self, key)

    def get_property(self, key: str) -> ObjectTypeProperty | None:
        """Get the applied type's property for key, if any."""
        return _get_property(self, key)

    def to_string(self, *, with_declaration: bool = False) -> str:
        del with_declaration
        name = getattr(self.parent, "name", None) or self.parent.to_string()
        args = ", ".join(t.to_string() for t in self.type_instances)
        return f"{name}<{args}>"

    def to_json(self) -> dict[str, Any]:
        return {
            "typeName": self.type_name,
            "parent": getattr(self.parent, "name", None) or self.parent.to_string(),
            "typeInstances": [t.to_json() for t in self.type_instances],
        }
