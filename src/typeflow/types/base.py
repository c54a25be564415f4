"""Base class for runtime type nodes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Literal, dataclass_transform

from typeflow.kinds import TypeKind

if TYPE_CHECKING:
    from typeflow.context import TypeContext
    from typeflow.validation import IdentifierPath, Validation

type Comparison = Literal[-1, 0, 1]


@dataclass(eq=False, repr=False)
@dataclass_transform(eq_default=False)
class Type(ABC):
    """Base for type nodes.

    Subclasses are dataclasses and declare their discriminant with a class
    keyword: ``class NumberType(Type, kind=TypeKind.NUMBER)``. Nodes compare
    by identity because some carry per-instance inference state.
    """

    kind: ClassVar[TypeKind]
    registry: ClassVar[dict[TypeKind, type[Type]]] = {}

    context: TypeContext = field(default=None, kw_only=True)  # type: ignore[assignment]

    def __init_subclass__(cls, kind: TypeKind | None = None) -> None:
        """Register a concrete subclass under its kind."""
        dataclass(eq=False, repr=False)(cls)
        if kind is None:
            return
        cls.kind = kind

        if (existing := Type.registry.get(kind)) and existing is not cls:
            msg = (
                f"Kind '{kind}' already registered to {existing}. "
                "Choose a different kind."
            )
            raise ValueError(msg)

        Type.registry[kind] = cls

    @property
    def type_name(self) -> str:
        """Discriminant tag for this node."""
        return self.kind.value

    @abstractmethod
    def accepts(self, value: Any) -> bool:
        """Return True if value conforms to this type."""

    @abstractmethod
    def collect_errors(
        self,
        validation: Validation,
        path: IdentifierPath,
        value: Any,
    ) -> bool:
        """Record every reason value does not conform. True if any."""

    @abstractmethod
    def compare_with(self, other: Type) -> Comparison:
        """Rank this type against another.

        1 when this type is strictly more general, 0 when equivalent,
        -1 when this type does not accept the other.
        """

    def accepts_type(self, other: Type) -> bool:
        """Return True if every value of other is a value of this type."""
        from typeflow.compare import compare_types

        return compare_types(self, other) != -1

    def unwrap(self) -> Type:
        """Get the innermost concrete representation."""
        return self

    def specialize(self, *type_instances: Type) -> Type:
        """Bind type arguments. Non-generic types ignore them."""
        del type_instances
        return self

    @abstractmethod
    def to_string(self, *, with_declaration: bool = False) -> str:
        """Render the type for humans."""

    def to_json(self) -> dict[str, Any]:
        """Describe the type as plain data."""
        return {"typeName": self.type_name}

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"<{self.type_name} {self.to_string()}>"
