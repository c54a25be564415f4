"""Composite types: arrays, unions, nullables and class references."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from typeflow.compare import compare_types
from typeflow.errors import ERR_EXPECT_ARRAY, ERR_EXPECT_INSTANCEOF, ERR_NO_UNION
from typeflow.kinds import UNDEFINED, ValueKind, kind_of
from typeflow.types.base import Type, TypeKind

if TYPE_CHECKING:
    from typeflow.types.base import Comparison
    from typeflow.validation import IdentifierPath, Validation


class ArrayType(Type, kind=TypeKind.ARRAY):
    """A list or tuple whose elements all conform to ``element``."""

    element: Type

    def accepts(self, value: Any) -> bool:
        if kind_of(value) is not ValueKind.ARRAY:
            return False
        return all(self.element.accepts(item) for item in value)

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        if kind_of(value) is not ValueKind.ARRAY:
            validation.add_error(path, self, ERR_EXPECT_ARRAY)
            return True
        has_errors = False
        for i, item in enumerate(value):
            if self.element.collect_errors(validation, (*path, i), item):
                has_errors = True
        return has_errors

    def compare_with(self, other: Type) -> Comparison:
        if other.kind is not TypeKind.ARRAY:
            return -1
        return compare_types(self.element, other.element)  # type: ignore[attr-defined]

    def to_string(self, *, with_declaration: bool = False) -> str:
        del with_declaration
        return f"Array<{self.element.to_string()}>"

    def to_json(self) -> dict[str, Any]:
        return {"typeName": self.type_name, "elementType": self.element.to_json()}


class UnionType(Type, kind=TypeKind.UNION):
    """A value conforming to at least one member."""

    types: tuple[Type, ...]

    def accepts(self, value: Any) -> bool:
        return any(t.accepts(value) for t in self.types)

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        if self.accepts(value):
            return False
        validation.add_error(path, self, ERR_NO_UNION, self.to_string())
        return True

    def compare_with(self, other: Type) -> Comparison:
        if other.kind is TypeKind.UNION:
            is_greater = False
            for candidate in other.types:  # type: ignore[attr-defined]
                result = self._best_match(candidate)
                if result == -1:
                    return -1
                if result == 1:
                    is_greater = True
            if is_greater or len(self.types) > len(other.types):  # type: ignore[attr-defined]
                return 1
            return 0
        if self._best_match(other) == -1:
            return -1
        return 1

    def _best_match(self, other: Type) -> Comparison:
        results = {compare_types(t, other) for t in self.types}
        if 0 in results:
            return 0
        if 1 in results:
            return 1
        return -1

    def to_string(self, *, with_declaration: bool = False) -> str:
        del with_declaration
        return " | ".join(t.to_string() for t in self.types)

    def to_json(self) -> dict[str, Any]:
        return {"typeName": self.type_name, "types": [t.to_json() for t in self.types]}


class NullableType(Type, kind=TypeKind.NULLABLE):
    """``?T``: None, an absent value, or a T."""

    type: Type

    def accepts(self, value: Any) -> bool:
        if value is None or value is UNDEFINED:
            return True
        return self.type.accepts(value)

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        if value is None or value is UNDEFINED:
            return False
        return self.type.collect_errors(validation, path, value)

    def compare_with(self, other: Type) -> Comparison:
        if other.kind in (TypeKind.NULL, TypeKind.VOID):
            return 1
        if other.kind is TypeKind.NULLABLE:
            return compare_types(self.type, other.type)  # type: ignore[attr-defined]
        if compare_types(self.type, other) == -1:
            return -1
        return 1

    def to_string(self, *, with_declaration: bool = False) -> str:
        del with_declaration
        return f"?{self.type.to_string()}"

    def to_json(self) -> dict[str, Any]:
        return {"typeName": self.type_name, "type": self.type.to_json()}


class RefType(Type, kind=TypeKind.REF):
    """Instances of a class, e.g. a boxed constructor reference."""

    target: type

    def accepts(self, value: Any) -> bool:
        return isinstance(value, self.target)

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        if self.accepts(value):
            return False
        validation.add_error(path, self, ERR_EXPECT_INSTANCEOF, self.to_string())
        return True

    def compare_with(self, other: Type) -> Comparison:
        if other.kind is not TypeKind.REF:
            return -1
        other_target: type = other.target  # type: ignore[attr-defined]
        if other_target is self.target:
            return 0
        if issubclass(other_target, self.target):
            return 1
        return -1

    def to_string(self, *, with_declaration: bool = False) -> str:
        del with_declaration
        return self.target.__name__

    def to_json(self) -> dict[str, Any]:
        return {
            "typeName": self.type_name,
            "module": self.target.__module__,
            "name": self.target.__name__,
        }
