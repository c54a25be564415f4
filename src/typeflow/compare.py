"""Specificity ordering over types."""

from __future__ import annotations

from functools import cmp_to_key
from typing import TYPE_CHECKING

from typeflow.kinds import TypeKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from typeflow.types.base import Comparison, Type

_TOP_KINDS = frozenset({TypeKind.ANY, TypeKind.MIXED, TypeKind.EXISTENTIAL})

# Kinds that stand for some other type and are dereferenced before comparing
INDIRECT_KINDS = frozenset(
    {
        TypeKind.TYPE_ALIAS,
        TypeKind.PARAMETERIZED_TYPE_ALIAS,
        TypeKind.PARTIAL,
        TypeKind.TYPE_PARAMETER,
        TypeKind.FLOW_INTO,
        TypeKind.TYPE_PARAMETER_APPLICATION,
        TypeKind.TDZ,
        TypeKind.OBJ_MAPI,
        TypeKind.OBJ_MAP,
    },
)


def is_unconstrained(t: Type) -> bool:
    """Return True for types that admit any value.

    A type parameter that survives unwrapping has neither a recording nor a
    bound, so it is as general as ``any``.
    """
    return t.kind in _TOP_KINDS or t.kind in (
        TypeKind.TYPE_PARAMETER,
        TypeKind.FLOW_INTO,
    )


def compare_types(a: Type, b: Type) -> Comparison:
    """Compare two types by specificity.

    Returns:
        1 if a is strictly more general than b, 0 if they are equivalent,
        -1 if a does not accept b

    """
    if a is b:
        return 0
    if b.kind in INDIRECT_KINDS:
        b = b.unwrap()
    if a.kind in INDIRECT_KINDS:
        a = a.unwrap()
    if a is b:
        return 0

    match is_unconstrained(a), is_unconstrained(b):
        case True, True:
            return 0
        case True, False:
            return 1
        case False, True:
            return -1
        case _:
            return a.compare_with(b)


def _specificity_order(a: Type, b: Type) -> int:
    if compare_types(a, b) == 1:
        return 1
    if compare_types(b, a) == 1:
        return -1
    return 0


def sort_by_specificity(types: Iterable[Type]) -> list[Type]:
    """Order candidate types most specific first.

    Incomparable types keep their relative input order.
    """
    return sorted(types, key=cmp_to_key(_specificity_order))
