"""Function types, also usable as type-level mapping functions."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from typeflow.compare import compare_types
from typeflow.errors import ERR_EXPECT_FUNCTION, invariant
from typeflow.kinds import ValueKind, kind_of
from typeflow.types.base import Type, TypeKind
from typeflow.types.generics import PartialType, TypeParameterApplication

if TYPE_CHECKING:
    from typeflow.types.base import Comparison
    from typeflow.validation import IdentifierPath, Validation

type BodyCreator = Callable[[PartialType], Type]


class FunctionTypeParam(Type, kind=TypeKind.FUNCTION_PARAM):
    """A named positional parameter."""

    name: str
    type: Type
    optional: bool = False

    def accepts(self, value: Any) -> bool:
        return self.type.accepts(value)

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        return self.type.collect_errors(validation, path, value)

    def accepts_type(self, other: Type) -> bool:
        if self.optional and other.kind is TypeKind.VOID:
            return True
        return self.type.accepts_type(other)

    def compare_with(self, other: Type) -> Comparison:
        return compare_types(self.type, other)

    def to_string(self, *, with_declaration: bool = False) -> str:
        del with_declaration
        marker = "?" if self.optional else ""
        return f"{self.name}{marker}: {self.type.to_string()}"

    def to_json(self) -> dict[str, Any]:
        return {
            "typeName": self.type_name,
            "name": self.name,
            "type": self.type.to_json(),
            "optional": self.optional,
        }


class FunctionTypeRestParam(Type, kind=TypeKind.FUNCTION_REST_PARAM):
    """Collects surplus arguments, each checked against ``type``."""

    name: str
    type: Type

    def accepts(self, value: Any) -> bool:
        return self.type.accepts(value)

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        return self.type.collect_errors(validation, path, value)

    def accepts_type(self, other: Type) -> bool:
        return self.type.accepts_type(other)

    def compare_with(self, other: Type) -> Comparison:
        return compare_types(self.type, other)

    def to_string(self, *, with_declaration: bool = False) -> str:
        del with_declaration
        return f"...{self.name}: {self.type.to_string()}"

    def to_json(self) -> dict[str, Any]:
        return {
            "typeName": self.type_name,
            "name": self.name,
            "type": self.type.to_json(),
        }


class FunctionType(Type, kind=TypeKind.FUNCTION):
    """A callable type.

    At runtime any callable conforms; parameters are not introspected. At the
    type level, ``invoke`` applies the function to argument types and yields
    its return type.
    """

    params: tuple[FunctionTypeParam, ...] = ()
    rest: FunctionTypeRestParam | None = None
    return_type: Type | None = None

    def _returns(self) -> Type:
        return self.return_type if self.return_type is not None else self.context.any()

    def invoke(self, *arg_types: Type) -> Type:
        """Apply the function to argument types.

        Type parameters among the params record the argument types, so the
        return type can refer to them. Arguments that do not fit yield the
        empty type.
        """
        for i, param in enumerate(self.params):
            if i < len(arg_types):
                if not param.accepts_type(arg_types[i]):
                    return self.context.empty()
            elif not param.optional:
                return self.context.empty()

        surplus = arg_types[len(self.params) :]
        if surplus and self.rest is not None:
            for arg in surplus:
                if not self.rest.accepts_type(arg):
                    return self.context.empty()
        return self._returns()

    def accepts(self, value: Any) -> bool:
        return kind_of(value) is ValueKind.CALLABLE

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        if self.accepts(value):
            return False
        validation.add_error(path, self, ERR_EXPECT_FUNCTION)
        return True

    def compare_with(self, other: Type) -> Comparison:
        if other.kind is TypeKind.PARAMETERIZED_FUNCTION:
            other = other.unwrap()
        if other.kind is not TypeKind.FUNCTION:
            return -1

        is_greater = False
        other_params: tuple[FunctionTypeParam, ...] = other.params  # type: ignore[attr-defined]
        for param, candidate in zip(self.params, other_params, strict=False):
            # Parameters are contravariant
            result = compare_types(candidate.type, param.type)
            if result == -1:
                return -1
            if result == 1:
                is_greater = True
        if len(self.params) != len(other_params):
            return -1

        result = compare_types(self._returns(), other._returns())  # type: ignore[attr-defined]
        if result == -1:
            return -1
        return 1 if is_greater or result == 1 else 0

    def to_string(self, *, with_declaration: bool = False) -> str:
        del with_declaration
        items = [param.to_string() for param in self.params]
        if self.rest is not None:
            items.append(self.rest.to_string())
        return f"({', '.join(items)}) => {self._returns().to_string()}"

    def to_json(self) -> dict[str, Any]:
        return {
            "typeName": self.type_name,
            "params": [param.to_json() for param in self.params],
            "rest": self.rest.to_json() if self.rest is not None else None,
            "returnType": self._returns().to_json(),
        }


class ParameterizedFunctionType(Type, kind=TypeKind.PARAMETERIZED_FUNCTION):
    """A generic function type, e.g. ``<V>(key: string, value: V) => V``.

    The body is rebuilt on every ``unwrap`` so each invocation binds its own,
    fresh type parameters.
    """

    body_creator: BodyCreator

    def get_partial(self, *type_instances: Type) -> PartialType:
        """Build the body with fresh type parameters."""
        partial = PartialType(name="", context=self.context)
        partial.type = self.body_creator(partial)
        invariant(
            partial.type.kind is TypeKind.FUNCTION,
            "Generic function body must be a function type.",
        )
        partial.bind(type_instances)
        return partial

    def invoke(self, *arg_types: Type) -> Type:
        """Apply a freshly instantiated body to argument types."""
        return self.unwrap().invoke(*arg_types)  # type: ignore[attr-defined]

    def apply(self, *type_instances: Type) -> TypeParameterApplication:
        """Apply type arguments, e.g. ``identity<number>``."""
        return TypeParameterApplication(
            parent=self,
            type_instances=type_instances,
            context=self.context,
        )

    def specialize(self, *type_instances: Type) -> Type:
        return self.get_partial(*type_instances).type

    def accepts(self, value: Any) -> bool:
        return kind_of(value) is ValueKind.CALLABLE

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        if self.accepts(value):
            return False
        validation.add_error(path, self, ERR_EXPECT_FUNCTION)
        return True

    def compare_with(self, other: Type) -> Comparison:
        return compare_types(self.unwrap(), other)

    def unwrap(self) -> Type:
        return self.get_partial().type

    def to_string(self, *, with_declaration: bool = False) -> str:
        del with_declaration
        partial = self.get_partial()
        params = ", ".join(p.to_string(with_declaration=True) for p in partial.type_parameters)
        return f"<{params}>{partial.type.to_string()}"

    def to_json(self) -> dict[str, Any]:
        partial = self.get_partial()
        return {
            "typeName": self.type_name,
            "typeParameters": [p.to_json() for p in partial.type_parameters],
            "body": partial.type.to_json(),
        }
