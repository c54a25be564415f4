"""Tests for typeflow.validation and typeflow.errors modules."""

import pytest

from typeflow import TypeContext
from typeflow.errors import (
    ERR_EXPECT_NUMBER,
    ERR_NO_UNION,
    ERR_UNKNOWN_KEY,
    InvariantViolation,
    RuntimeTypeError,
    TypeFlowError,
    get_error_message,
    invariant,
)
from typeflow.validation import Validation, ValidationError, stringify_path


class TestStringifyPath:
    """Test rendering of identifier paths."""

    def test_root(self) -> None:
        """Test an empty path is the root name."""
        assert stringify_path(()) == "input"

    def test_identifiers_and_indices(self) -> None:
        """Test identifier keys use dots and ints use brackets."""
        assert stringify_path(("user", "tags", 0)) == "input.user.tags[0]"

    def test_non_identifier_keys(self) -> None:
        """Test other keys use quoted subscripts."""
        assert stringify_path(("a-b",)) == "input['a-b']"

    def test_custom_root_name(self) -> None:
        """Test a custom root name."""
        assert stringify_path(("x",), "payload") == "payload.x"


class TestErrorMessages:
    """Test the message table."""

    def test_plain_message(self) -> None:
        """Test a message without parameters."""
        assert get_error_message(ERR_EXPECT_NUMBER) == "must be a number"

    def test_parameters_are_substituted(self) -> None:
        """Test message parameters are substituted."""
        message = get_error_message(ERR_NO_UNION, "number | string")
        assert message == "must be one of: number | string"

    def test_overrides_take_precedence(self) -> None:
        """Test overrides replace the default message."""
        overrides = {ERR_EXPECT_NUMBER: "should be numeric"}
        assert get_error_message(ERR_EXPECT_NUMBER, overrides=overrides) == (
            "should be numeric"
        )

    def test_unknown_code_raises(self) -> None:
        """Test an unknown code raises KeyError."""
        with pytest.raises(KeyError, match="ERR_NOPE"):
            get_error_message("ERR_NOPE")


class TestInvariant:
    """Test the malformed-graph guard."""

    def test_holding_condition_is_silent(self) -> None:
        """Test a holding condition does nothing."""
        invariant(True, "never raised")  # noqa: FBT003

    def test_failing_condition_raises(self) -> None:
        """Test a failing condition raises InvariantViolation."""
        with pytest.raises(InvariantViolation, match="broken"):
            invariant(False, "broken")  # noqa: FBT003

    def test_exception_hierarchy(self) -> None:
        """Test the exception classes share a common base."""
        assert issubclass(InvariantViolation, TypeFlowError)
        assert issubclass(RuntimeTypeError, TypeFlowError)
        assert issubclass(RuntimeTypeError, TypeError)


class TestValidation:
    """Test the error collector."""

    def test_new_validation_is_valid(self) -> None:
        """Test a fresh validation has no errors."""
        validation = Validation(input=1)

        assert validation.is_valid
        assert validation
        assert len(validation) == 0
        assert str(validation) == "Validation: valid"

    def test_add_error(self, t: TypeContext) -> None:
        """Test add_error records the path, type and code."""
        validation = Validation(input={"x": "a"})

        result = validation.add_error(("x",), t.number(), ERR_EXPECT_NUMBER)

        assert result is validation
        assert not validation.is_valid
        assert not validation
        [error] = list(validation)
        assert isinstance(error, ValidationError)
        assert error.path == ("x",)
        assert error.expected is t.number()
        assert error.code == ERR_EXPECT_NUMBER
        assert str(error) == "input.x must be a number"

    def test_has_errors_at_path(self, t: TypeContext) -> None:
        """Test has_errors filters by path."""
        validation = Validation(input={})
        validation.add_error(("a", 0), t.number(), ERR_EXPECT_NUMBER)

        assert validation.has_errors()
        assert validation.has_errors(("a", 0))
        assert not validation.has_errors(("a",))
        assert not validation.has_errors(())

    def test_errors_keep_insertion_order(self, t: TypeContext) -> None:
        """Test errors are kept in the order they were added."""
        validation = Validation(input={})
        validation.add_error(("b",), t.number(), ERR_EXPECT_NUMBER)
        validation.add_error(("a",), t.object(), ERR_UNKNOWN_KEY, "a")

        assert [e.path for e in validation] == [("b",), ("a",)]
        assert validation.errors[1].message == "should not contain the key: a"

    def test_message_overrides(self, t: TypeContext) -> None:
        """Test overrides change the rendered message."""
        validation = Validation(
            input="a",
            messages={ERR_EXPECT_NUMBER: "should be numeric"},
        )
        validation.add_error((), t.number(), ERR_EXPECT_NUMBER)

        assert str(validation.errors[0]) == "input should be numeric"

    def test_input_name(self, t: TypeContext) -> None:
        """Test errors are rooted at the input name."""
        validation = Validation(input="a", input_name="payload")
        validation.add_error(("x",), t.number(), ERR_EXPECT_NUMBER)

        assert str(validation.errors[0]) == "payload.x must be a number"

    def test_summary(self, t: TypeContext) -> None:
        """Test the summary lists every error."""
        validation = Validation(input={})
        validation.add_error(("x",), t.number(), ERR_EXPECT_NUMBER)
        validation.add_error(("y",), t.number(), ERR_EXPECT_NUMBER)

        assert str(validation) == (
            "Validation: 2 error(s)\n"
            "  input.x must be a number\n"
            "  input.y must be a number"
        )
