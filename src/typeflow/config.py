"""Configuration for a type context."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any

from typeflow.errors import ERROR_MESSAGES

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class ContextOptions:
    """Options shared by every type built through one context.

    Attributes:
        warnings: Emit diagnostics through the context logger
        logger_name: Name of the logger diagnostics go to
        input_name: Label for the root of rendered error paths
        messages: Per-code overrides of the default error messages

    """

    warnings: bool = True
    logger_name: str = "typeflow"
    input_name: str = "input"
    messages: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ContextOptions:
        """Build options from a plain mapping, e.g. a parsed settings section.

        Raises:
            ValueError: If the mapping has keys that are not options
            KeyError: If a message override names an unknown error code

        """
        known = {f.name for f in fields(cls)}
        if unknown := sorted(set(data) - known):
            msg = f"Unknown option(s): {', '.join(unknown)}"
            raise ValueError(msg)

        messages = dict(data.get("messages", {}))
        for code in messages:
            if code not in ERROR_MESSAGES:
                msg = f"Cannot override message for unknown error code {code!r}"
                raise KeyError(msg)

        return cls(**{**data, "messages": messages})
