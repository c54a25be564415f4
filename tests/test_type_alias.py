"""Tests for type aliases, parameterized aliases and applications."""

from typeflow import ParameterizedTypeAlias, Type, TypeContext, TypeKind, compare_types
from typeflow.errors import ERR_CONSTRAINT_VIOLATION, ERR_EXPECT_NUMBER
from typeflow.types import PartialType, TypeAlias


def pair_alias(t: TypeContext) -> ParameterizedTypeAlias:
    """``type Pair<T> = { a: T, b: T }``."""

    def create(alias: PartialType) -> Type:
        param = alias.type_parameter("T")
        return t.object({"a": param, "b": param})

    return t.type_alias("Pair", create)  # type: ignore[return-value]


def list_alias(t: TypeContext) -> ParameterizedTypeAlias:
    """``type List<T> = { head: T, tail: ?List<T> }``."""

    def create(alias: PartialType) -> Type:
        param = alias.type_parameter("T")
        return t.object({"head": param, "tail": t.nullable(alias.apply(param))})

    return t.type_alias("List", create)  # type: ignore[return-value]


class TestTypeAlias:
    """Test named, non-generic aliases."""

    def test_factory_builds_plain_alias_for_a_type(self, t: TypeContext) -> None:
        """Test passing a type builds a plain alias."""
        alias = t.type_alias("Num", t.number())

        assert isinstance(alias, TypeAlias)
        assert alias.kind is TypeKind.TYPE_ALIAS
        assert alias.accepts(1)
        assert not alias.accepts("a")

    def test_constraints(self, t: TypeContext) -> None:
        """Test constraints run after the structural check passes."""
        positive = t.type_alias("Positive", t.number(), lambda n: n > 0)

        assert positive.accepts(5)
        assert not positive.accepts(-5)
        assert t.validate(positive, 5).is_valid
        [error] = t.validate(positive, -5)
        assert error.code == ERR_CONSTRAINT_VIOLATION
        assert error.message == "violated a constraint"

    def test_structural_errors_skip_constraints(self, t: TypeContext) -> None:
        """Test constraints are skipped when the structure already fails."""
        positive = t.type_alias("Positive", t.number(), lambda n: n > 0)

        assert not positive.accepts("a")
        assert [e.code for e in t.validate(positive, "a")] == [ERR_EXPECT_NUMBER]

    def test_every_failing_constraint_reports(self, t: TypeContext) -> None:
        """Test every failing constraint reports an error."""
        alias = t.type_alias("Small", t.number())
        result = alias.add_constraint(lambda n: n > 0, lambda n: n < 10)

        assert result is alias
        assert len(t.validate(alias, 5)) == 0
        assert len(t.validate(alias, 50)) == 1
        assert len(t.validate(alias, -50)) == 1

    def test_compares_as_its_body(self, t: TypeContext) -> None:
        """Test an alias compares as its body."""
        alias = t.type_alias("Num", t.number())

        assert compare_types(alias, t.number()) == 0
        assert alias.unwrap() is t.number()
        assert alias.resolve() is t.number()

    def test_rendering(self, t: TypeContext) -> None:
        """Test the name and declaration forms of an alias."""
        alias = t.type_alias("Point", t.object({"x": t.number()}))

        assert alias.to_string() == "Point"
        assert alias.to_string(with_declaration=True) == "type Point = { x: number };"

    def test_property_introspection(self, t: TypeContext) -> None:
        """Test property lookups go through the body."""
        alias = t.type_alias("Point", t.object({"x": t.number()}))

        assert alias.has_property("x")
        assert not alias.has_property("y")
        assert t.type_alias("Num", t.number()).get_property("x") is None


class TestParameterizedTypeAlias:
    """Test generic aliases."""

    def test_factory_builds_parameterized_alias_for_a_creator(
        self,
        t: TypeContext,
    ) -> None:
        """Test passing a creator builds a parameterized alias."""
        alias = pair_alias(t)

        assert isinstance(alias, ParameterizedTypeAlias)
        assert alias.kind is TypeKind.PARAMETERIZED_TYPE_ALIAS
        assert [p.id for p in alias.type_parameters] == ["T"]

    def test_parameters_infer_per_use(self, t: TypeContext) -> None:
        """Test each use of the alias infers its parameters afresh."""
        pair = pair_alias(t)

        assert pair.accepts({"a": 1, "b": 2})
        assert not pair.accepts({"a": 1, "b": "x"})
        assert pair.accepts({"a": "x", "b": "y"})

    def test_collect_errors_per_use(self, t: TypeContext) -> None:
        """Test error collection infers parameters per call."""
        pair = pair_alias(t)

        [error] = t.validate(pair, {"a": 1, "b": "x"})

        assert error.path == ("b",)
        assert error.code == "ERR_EXPECT_NUMBER"
        assert t.validate(pair, {"a": "x", "b": "y"}).is_valid

    def test_bounded_parameter_with_constraint(self, t: TypeContext) -> None:
        """Test constraints combine with bounded parameters."""
        def create(alias: PartialType) -> Type:
            return t.object({"x": alias.type_parameter("T", t.number())})

        box = t.type_alias("Box", create, lambda v: v["x"] > 0)

        assert box.accepts({"x": 5})
        assert not box.accepts({"x": -5})
        [error] = t.validate(box, {"x": -5})
        assert error.code == ERR_CONSTRAINT_VIOLATION
        assert error.path == ()
        [error] = t.validate(box, {"x": "a"})
        assert error.code == ERR_EXPECT_NUMBER
        assert error.path == ("x",)

    def test_apply_bounds_parameters(self, t: TypeContext) -> None:
        """Test apply bounds the declared parameters."""
        strings = pair_alias(t).apply(t.string())

        assert strings.kind is TypeKind.TYPE_PARAMETER_APPLICATION
        assert strings.accepts({"a": "x", "b": "y"})
        assert not strings.accepts({"a": 1, "b": 1})

    def test_specialize_keeps_constraints(self, t: TypeContext) -> None:
        """Test specialize keeps the alias constraints."""
        pair = pair_alias(t).add_constraint(lambda v: v["a"] == v["b"])

        specialized = pair.specialize(t.number())

        assert specialized.accepts({"a": 1, "b": 1})
        assert not specialized.accepts({"a": 1, "b": 2})
        assert not pair.apply(t.number()).accepts({"a": 1, "b": 2})

    def test_recursive_alias(self, t: TypeContext) -> None:
        """Test an alias that refers to itself through apply."""
        linked = list_alias(t)

        assert linked.accepts({"head": 1, "tail": None})
        assert linked.accepts({"head": 1, "tail": {"head": 2, "tail": None}})
        assert not linked.accepts({"head": 1, "tail": {"head": "x", "tail": None}})
        [error] = t.validate(linked, {"head": 1, "tail": {"head": "x", "tail": None}})
        assert str(error) == "input.tail.head must be a number"

    def test_unwrap_and_resolve(self, t: TypeContext) -> None:
        """Test unwrap yields the body with fresh parameters."""
        pair = pair_alias(t)

        assert pair.unwrap().kind is TypeKind.OBJECT
        assert pair.resolve().kind is TypeKind.OBJECT
        assert pair.has_property("a")
        assert not pair.has_property("c")

    def test_compare(self, t: TypeContext) -> None:
        """Test comparisons against the alias and its applications."""
        pair = pair_alias(t)
        numbers = t.object({"a": t.number(), "b": t.number()})

        assert compare_types(pair, numbers) == 1
        assert compare_types(pair.apply(t.number()), numbers) == 0

    def test_rendering(self, t: TypeContext) -> None:
        """Test the name and declaration forms of generic aliases."""
        def create(alias: PartialType) -> Type:
            return t.object({"x": alias.type_parameter("T", t.number())})

        assert pair_alias(t).to_string() == "Pair<T>"
        assert pair_alias(t).to_string(with_declaration=True) == (
            "type Pair<T> = { a: T, b: T };"
        )
        assert t.type_alias("Box", create).to_string() == "Box<T: number>"
        assert list_alias(t).to_string(with_declaration=True) == (
            "type List<T> = { head: T, tail: ?List<T> };"
        )
        assert pair_alias(t).apply(t.string()).to_string() == "Pair<string>"

    def test_rendering_without_parameters(self, t: TypeContext) -> None:
        """Test a creator that declares no parameters still renders brackets."""
        alias = t.type_alias("Unit", lambda _: t.object({"x": t.number()}))

        assert alias.kind is TypeKind.PARAMETERIZED_TYPE_ALIAS
        assert alias.to_string() == "Unit<>"
        assert alias.to_string(with_declaration=True) == (
            "type Unit<> = { x: number };"
        )

    def test_to_json(self, t: TypeContext) -> None:
        """Test the JSON forms of an alias and an application."""
        data = pair_alias(t).to_json()

        assert data["name"] == "Pair"
        assert data["typeParameters"][0]["id"] == "T"
        assert data["type"]["typeName"] == "ObjectType"

        applied = pair_alias(t).apply(t.string()).to_json()
        assert applied == {
            "typeName": "TypeParameterApplication",
            "parent": "Pair",
            "typeInstances": [{"typeName": "StringType"}],
        }
