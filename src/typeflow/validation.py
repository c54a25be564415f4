"""Validation results: errors collected with the path they occurred at."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from typeflow.errors import get_error_message

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from typeflow.types.base import Type

type IdentifierPath = tuple[str | int, ...]


def stringify_path(path: IdentifierPath, input_name: str = "input") -> str:
    """Render a path such as ``input.user.tags[0]``."""
    parts = [input_name]
    for segment in path:
        if isinstance(segment, str) and segment.isidentifier():
            parts.append(f".{segment}")
        else:
            parts.append(f"[{segment!r}]")
    return "".join(parts)


@dataclass(frozen=True)
class ValidationError:
    """A single failure found while validating a value."""

    path: IdentifierPath
    expected: Type
    code: str
    message: str
    input_name: str = "input"

    def __str__(self) -> str:
        return f"{stringify_path(self.path, self.input_name)} {self.message}"


@dataclass
class Validation:
    """Collects the errors found while validating one input."""

    input: Any
    input_name: str = "input"
    messages: Mapping[str, str] | None = None
    errors: list[ValidationError] = field(default_factory=list)

    def add_error(
        self,
        path: IdentifierPath,
        expected: Type,
        code: str,
        *params: object,
    ) -> Validation:
        """Record an error at path.

        Args:
            path: Property segments from the root to the failing value
            expected: The type that rejected the value
            code: One of the ``ERR_*`` codes
            *params: Values substituted into the message template

        Returns:
            This validation, for chaining

        """
        message = get_error_message(code, *params, overrides=self.messages)
        self.errors.append(
            ValidationError(
                path=tuple(path),
                expected=expected,
                code=code,
                message=message,
                input_name=self.input_name,
            ),
        )
        return self

    def has_errors(self, path: IdentifierPath | None = None) -> bool:
        """Return True if any error was recorded, or any at exactly path."""
        if path is None:
            return bool(self.errors)
        target = tuple(path)
        return any(error.path == target for error in self.errors)

    @property
    def is_valid(self) -> bool:
        """Return True if no errors were found."""
        return not self.errors

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return self.is_valid

    def __str__(self) -> str:
        if self.is_valid:
            return "Validation: valid"
        error_lines = "\n  ".join(str(e) for e in self.errors)
        return f"Validation: {len(self.errors)} error(s)\n  {error_lines}"
