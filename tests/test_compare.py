"""Tests for typeflow.compare module."""

from typeflow import TypeContext, compare_types, sort_by_specificity


class Base:
    """Reference target."""


class Derived(Base):
    """Subclass of the reference target."""


class TestCompareLeaves:
    """Test specificity between leaf types."""

    def test_identical_nodes_are_equivalent(self, t: TypeContext) -> None:
        """Test a node compared with itself is equivalent."""
        obj = t.object({"x": t.number()})
        assert compare_types(obj, obj) == 0

    def test_scalars_are_wider_than_their_literals(self, t: TypeContext) -> None:
        """Test number and string are wider than their literals."""
        assert compare_types(t.number(), t.number(1)) == 1
        assert compare_types(t.number(1), t.number()) == -1
        assert compare_types(t.string(), t.number(1)) == -1

    def test_equal_literals(self, t: TypeContext) -> None:
        """Test literals with the same value are equivalent."""
        assert compare_types(t.literal("a"), t.literal("a")) == 0
        assert compare_types(t.literal("a"), t.literal("b")) == -1

    def test_top_types(self, t: TypeContext) -> None:
        """Test any, mixed and existential are equivalent top types."""
        assert compare_types(t.any(), t.number()) == 1
        assert compare_types(t.number(), t.any()) == -1
        assert compare_types(t.any(), t.mixed()) == 0
        assert compare_types(t.existential(), t.any()) == 0

    def test_empty(self, t: TypeContext) -> None:
        """Test the bottom type is narrower than a scalar."""
        assert compare_types(t.empty(), t.number()) == -1

    def test_accepts_type(self, t: TypeContext) -> None:
        """Test accepts_type admits equal or more specific types."""
        assert t.number().accepts_type(t.number(3))
        assert t.number().accepts_type(t.number())
        assert not t.number(3).accepts_type(t.number())


class TestCompareStructures:
    """Test specificity between structural types."""

    def test_separately_built_objects_are_equivalent(self, t: TypeContext) -> None:
        """Test objects built twice with the same shape are equivalent."""
        a = t.object({"x": t.number()})
        b = t.object({"x": t.number()})

        assert compare_types(a, b) == 0

    def test_fewer_keys_is_more_general(self, t: TypeContext) -> None:
        """Test an object declaring fewer keys is the more general one."""
        narrow = t.object({"x": t.number()})
        wide = t.object({"x": t.number(), "y": t.string()})

        assert compare_types(narrow, wide) == 1
        assert compare_types(wide, narrow) == -1

    def test_exact_object_rejects_extra_keys(self, t: TypeContext) -> None:
        """Test an exact object does not accept wider shapes."""
        exact = t.exact_object({"x": t.number()})
        wide = t.object({"x": t.number(), "y": t.string()})

        assert compare_types(exact, wide) == -1

    def test_property_values_are_compared(self, t: TypeContext) -> None:
        """Test property value types take part in the comparison."""
        general = t.object({"x": t.number()})
        literal = t.object({"x": t.number(1)})

        assert compare_types(general, literal) == 1
        assert compare_types(literal, general) == -1

    def test_arrays(self, t: TypeContext) -> None:
        """Test arrays compare by their element types."""
        assert compare_types(t.array(t.number()), t.array(t.number(1))) == 1
        assert compare_types(t.array(t.number()), t.number()) == -1

    def test_union_is_wider_than_its_members(self, t: TypeContext) -> None:
        """Test a union is wider than each of its members."""
        either = t.union(t.number(), t.string())

        assert compare_types(either, t.number()) == 1
        assert compare_types(t.number(), either) == -1
        assert compare_types(either, t.boolean()) == -1

    def test_nullable(self, t: TypeContext) -> None:
        """Test a nullable type is wider than its inner type and null."""
        maybe = t.nullable(t.number())

        assert compare_types(maybe, t.null()) == 1
        assert compare_types(maybe, t.void()) == 1
        assert compare_types(maybe, t.number()) == 1
        assert compare_types(maybe, t.string()) == -1

    def test_refs_follow_subclassing(self, t: TypeContext) -> None:
        """Test references follow the class hierarchy."""
        assert compare_types(t.ref(Base), t.ref(Base)) == 0
        assert compare_types(t.ref(Base), t.ref(Derived)) == 1
        assert compare_types(t.ref(Derived), t.ref(Base)) == -1

    def test_functions(self, t: TypeContext) -> None:
        """Test function types compare by parameters and return type."""
        a = t.function(t.param("a", t.number()), returns=t.number())
        b = t.function(t.param("b", t.number()), returns=t.number())
        literal_return = t.function(t.param("a", t.number()), returns=t.number(1))

        assert compare_types(a, b) == 0
        assert compare_types(a, literal_return) == 1
        assert compare_types(literal_return, a) == -1
        assert compare_types(a, t.function()) == -1


class TestCompareIndirections:
    """Test that aliases and parameters are unwrapped before comparing."""

    def test_alias_is_its_body(self, t: TypeContext) -> None:
        """Test an alias compares as its body."""
        alias = t.type_alias("Num", t.number())

        assert compare_types(alias, t.number()) == 0
        assert compare_types(t.number(), alias) == 0

    def test_free_type_parameter_is_unconstrained(self, t: TypeContext) -> None:
        """Test a free type parameter compares as a top type."""
        param = t.type_parameter("T")

        assert compare_types(param, t.number()) == 1
        assert compare_types(t.number(), param) == -1
        assert compare_types(param, t.any()) == 0


class TestSortBySpecificity:
    """Test ordering candidates most specific first."""

    def test_orders_chain(self, t: TypeContext) -> None:
        """Test ordering is consistent along a chain of types."""
        literal = t.number(1)
        number = t.number()
        anything = t.any()

        assert sort_by_specificity([anything, number, literal]) == [
            literal,
            number,
            anything,
        ]

    def test_incomparable_types_keep_order(self, t: TypeContext) -> None:
        """Test incomparable types keep their input order."""
        number = t.number()
        string = t.string()

        assert sort_by_specificity([string, number]) == [string, number]
