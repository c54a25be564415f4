"""Forward-declared types, resolved on first use.

A TypeTDZ stands in for a type whose definition has not run yet when the
referring type is built, e.g. mutually recursive aliases. The ``reveal``
callable is invoked at most once, on first use, and its outcome is kept.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import field
from typing import TYPE_CHECKING, Any

from typeflow.compare import compare_types
from typeflow.types.base import Type, TypeKind
from typeflow.types.generics import TypeParameterApplication

if TYPE_CHECKING:
    from typeflow.types.base import Comparison
    from typeflow.types.objects import ObjectTypeProperty
    from typeflow.validation import IdentifierPath, Validation

_log = logging.getLogger(__name__)

type TypeRevealer = Callable[[], Type | type | None]

UNREVEALED_WARNING = "Failed to reveal type in Temporal Dead Zone."


class TypeTDZ(Type, kind=TypeKind.TDZ):
    """A type revealed lazily by a zero-argument callable.

    ``reveal`` may return a Type or a class (wrapped as a reference type).
    Anything else means the definition was unavailable: the node warns once
    and behaves as ``mixed`` from then on.
    """

    reveal: TypeRevealer
    warned: bool = field(default=False, init=False)
    _attempted: bool = field(default=False, init=False)
    _revealed: Type | type | None = field(default=None, init=False)
    _rendering: bool = field(default=False, init=False)

    def get_revealed(self) -> Type:
        """Resolve the deferred type, revealing it on first access."""
        if not self._attempted:
            self._attempted = True
            revealed = self.reveal()
            if isinstance(revealed, Type | type):
                _log.debug("Revealed deferred type %r", revealed)
                self._revealed = revealed
            elif not self.warned:
                self.warned = True
                self.context.emit_warning_message(UNREVEALED_WARNING)

        match self._revealed:
            case None:
                return self.context.mixed()
            case Type():
                return self._revealed
            case _:
                return self.context.ref(self._revealed)

    @property
    def name(self) -> str | None:
        """Name of the revealed type, if it has one."""
        return getattr(self.get_revealed(), "name", None)

    def accepts(self, value: Any) -> bool:
        return self.get_revealed().accepts(value)

    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        return self.get_revealed().collect_errors(validation, path, value)

    def compare_with(self, other: Type) -> Comparison:
        return compare_types(self.get_revealed(), other)

    def apply(self, *type_instances: Type) -> TypeParameterApplication:
        """Apply type arguments to the revealed generic."""
        return TypeParameterApplication(
            parent=self.get_revealed(),
            type_instances=type_instances,
            context=self.context,
        )

    def specialize(self, *type_instances: Type) -> Type:
        return self.get_revealed().specialize(*type_instances)

    def unwrap(self) -> Type:
        return self.get_revealed().unwrap()

    def has_property(self, key: str) -> bool:
        """Return True if the revealed type declares key."""
        inner = self.unwrap()
        has_property = getattr(inner, "has_property", None)
        if not callable(has_property):
            return False
        return bool(has_property(key))

    def get_property(self, key: str) -> ObjectTypeProperty | None:
        """Get the revealed type's property for key, if any."""
        inner = self.unwrap()
        get_property = getattr(inner, "get_property", None)
        if not callable(get_property):
            return None
        return get_property(key)

    def to_string(self, *, with_declaration: bool = False) -> str:
        # A self-referencing type renders its inner occurrence by name
        if self._rendering:
            return self.name or "..."
        self._rendering = True
        try:
            return self.get_revealed().to_string(with_declaration=with_declaration)
        finally:
            self._rendering = False

    def to_json(self) -> dict[str, Any]:
        if self._rendering:
            return {"typeName": self.type_name, "name": self.name}
        self._rendering = True
        try:
            return self.get_revealed().to_json()
        finally:
            self._rendering = False

    def __repr__(self) -> str:
        if not self._attempted:
            state = "pending"
        else:
            state = "revealed" if self._revealed is not None else "unrevealed"
        return f"<{self.type_name} {state}>"
