"""Mapped object types.

``$ObjMapi<O, F>`` derives a new object type from ``O`` by applying the
type-level function ``F`` to each property's key and value type.
``$ObjMap<O, F>`` does the same but passes only the value type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from typeflow.compare import compare_types
from typeflow.errors import ERR_EXPECT_OBJECT, invariant
from typeflow.kinds import is_object_like, read_property
from typeflow.types.base import Type, TypeKind

if TYPE_CHECKING:
    from collections.abc import Iterator

    from typeflow.types.base import Comparison
    from typeflow.types.objects import ObjectType
    from typeflow.validation import IdentifierPath, Validation


class _MappedObjectType(Type):
    object: Type
    mapper: Type

    label = "$ObjMap"

    def _invoke(self, mapper: Type, key: str, value: Type) -> Type:
        raise NotImplementedError

    def _source(self) -> ObjectType:
        target = self.object.unwrap()
        invariant(target.kind is TypeKind.OBJECT, "Target must be an object type.")
        invariant(
            self.mapper.unwrap().kind is TypeKind.FUNCTION,
            "Mapper must be a function type.",
        )
        return target  # type: ignore[return-value]

    def _mapped_properties(self, source: ObjectType) -> Iterator[tuple[str, Type]]:
        for prop in source.properties:
            # Generic mappers unwrap to fresh parameters for each property
            yield prop.key, self._invoke(self.mapper.unwrap(), prop.key, prop.value)

    def accepts(self, value: Any) -> bool:
        source = self._source()
        if value is None or not is_object_like(value):
            return False
        for key, mapped in self._mapped_properties(source):
            if not mapped.accepts(read_property(value, key)):
                return False
        return True

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        source = self._source()
        if value is None or not is_object_like(value):
            validation.add_error(path, self, ERR_EXPECT_OBJECT)
            return True

        has_errors = False
        for key, mapped in self._mapped_properties(source):
            if mapped.collect_errors(validation, (*path, key), read_property(value, key)):
                has_errors = True
        return has_errors

    def compare_with(self, other: Type) -> Comparison:
        return compare_types(self.unwrap(), other)

    def unwrap(self) -> Type:
        source = self._source()
        return self.context.object(
            *(
                self.context.property(key, mapped)
                for key, mapped in self._mapped_properties(source)
            ),
        )

    def to_string(self, *, with_declaration: bool = False) -> str:
        del with_declaration
        return f"{self.label}<{self.object.to_string()}, {self.mapper.to_string()}>"

    def to_json(self) -> dict[str, Any]:
        return {
            "typeName": self.type_name,
            "object": self.object.to_json(),
            "mapper": self.mapper.to_json(),
        }


class ObjMapiType(_MappedObjectType, kind=TypeKind.OBJ_MAPI):
    """``$ObjMapi<O, F>``: the mapper receives ``(key literal, value type)``.

    Example:
        $ObjMapi<{ x: number, y: number }, <K, V>(key: K, value: V) => V>
        is equivalent to { x: number, y: number }.

    """

    label = "$ObjMapi"

    def _invoke(self, mapper: Type, key: str, value: Type) -> Type:
        return mapper.invoke(self.context.literal(key), value)  # type: ignore[attr-defined]


class ObjMapType(_MappedObjectType, kind=TypeKind.OBJ_MAP):
    """``$ObjMap<O, F>``: the mapper receives only the value type."""

    label = "$ObjMap"

    def _invoke(self, mapper: Type, key: str, value: Type) -> Type:
        del key
        return mapper.invoke(value)  # type: ignore[attr-defined]
