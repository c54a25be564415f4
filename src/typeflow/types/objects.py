"""Object shapes: an ordered set of keyed properties."""

from __future__ import annotations

from dataclasses import field
from typing import TYPE_CHECKING, Any

from typeflow.compare import compare_types
from typeflow.errors import ERR_EXPECT_OBJECT, ERR_UNKNOWN_KEY
from typeflow.kinds import UNDEFINED, is_object_like, own_keys, read_property
from typeflow.types.base import Type, TypeKind

if TYPE_CHECKING:
    from typeflow.types.base import Comparison
    from typeflow.validation import IdentifierPath, Validation


class ObjectTypeProperty(Type, kind=TypeKind.PROPERTY):
    """A keyed property of an object type."""

    key: str
    value: Type
    optional: bool = False

    def accepts(self, value: Any) -> bool:
        if self.optional and value is UNDEFINED:
            return True
        return self.value.accepts(value)

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        if self.optional and value is UNDEFINED:
            return False
        return self.value.collect_errors(validation, path, value)

    def compare_with(self, other: Type) -> Comparison:
        if other.kind is not TypeKind.PROPERTY or other.key != self.key:  # type: ignore[attr-defined]
            return -1
        return compare_types(self.value, other.value)  # type: ignore[attr-defined]

    def unwrap(self) -> Type:
        return self.value.unwrap()

    def to_string(self, *, with_declaration: bool = False) -> str:
        del with_declaration
        marker = "?" if self.optional else ""
        return f"{self.key}{marker}: {self.value.to_string()}"

    def to_json(self) -> dict[str, Any]:
        return {
            "typeName": self.type_name,
            "key": self.key,
            "value": self.value.to_json(),
            "optional": self.optional,
        }


class ObjectType(Type, kind=TypeKind.OBJECT):
    """Structural object type.

    Property order is preserved for rendering only. An exact object also
    rejects keys it does not declare.
    """

    properties: tuple[ObjectTypeProperty, ...] = ()
    exact: bool = False
    _index: dict[str, ObjectTypeProperty] = field(init=False, default_factory=dict)

    def __post_init__(self) -> None:
        self._index = {prop.key: prop for prop in self.properties}

    def has_property(self, key: str) -> bool:
        """Return True if the object declares key."""
        return key in self._index

    def get_property(self, key: str) -> ObjectTypeProperty | None:
        """Get the declared property for key, if any."""
        return self._index.get(key)

    def accepts(self, value: Any) -> bool:
        if not is_object_like(value):
            return False
        for prop in self.properties:
            if not prop.accepts(read_property(value, prop.key)):
                return False
        if self.exact:
            return all(key in self._index for key in own_keys(value))
        return True

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        if not is_object_like(value):
            validation.add_error(path, self, ERR_EXPECT_OBJECT)
            return True

        has_errors = False
        for prop in self.properties:
            if prop.collect_errors(
                validation,
                (*path, prop.key),
                read_property(value, prop.key),
            ):
                has_errors = True

        if self.exact:
            for key in own_keys(value):
                if key not in self._index:
                    validation.add_error((*path, key), self, ERR_UNKNOWN_KEY, key)
                    has_errors = True
        return has_errors

    def compare_with(self, other: Type) -> Comparison:
        if other.kind is not TypeKind.OBJECT:
            return -1
        if self.exact and not other.exact:  # type: ignore[attr-defined]
            return -1

        is_greater = False
        other_index: dict[str, ObjectTypeProperty] = other._index  # type: ignore[attr-defined]
        for prop in self.properties:
            candidate = other_index.get(prop.key)
            if candidate is None:
                if not prop.optional:
                    return -1
                is_greater = True
                continue
            if candidate.optional and not prop.optional:
                return -1
            result = compare_types(prop.value, candidate.value)
            if result == -1:
                return -1
            if result == 1 or (prop.optional and not candidate.optional):
                is_greater = True

        if any(key not in self._index for key in other_index):
            if self.exact:
                return -1
            is_greater = True
        return 1 if is_greater else 0

    def to_string(self, *, with_declaration: bool = False) -> str:
        del with_declaration
        body = ", ".join(prop.to_string() for prop in self.properties)
        if self.exact:
            return f"{{| {body} |}}" if body else "{||}"
        return f"{{ {body} }}" if body else "{}"

    def to_json(self) -> dict[str, Any]:
        return {
            "typeName": self.type_name,
            "exact": self.exact,
            "properties": [prop.to_json() for prop in self.properties],
        }
