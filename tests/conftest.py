"""Shared fixtures."""

import pytest

from typeflow import TypeContext


@pytest.fixture
def t() -> TypeContext:
    """A fresh type context."""
    return TypeContext()
