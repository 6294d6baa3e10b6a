"""Tests for runtime class discovery and member listing."""

import collections
import fractions
import typing
from collections.abc import Callable

from typegraph.structural_member import MISSING
from typegraph.type_introspector import TypeIntrospector


class Shape:
    """Base of all shapes."""

    name: str = "shape"
    """Display name."""

    def describe(self, verbose: bool = False) -> str:
        """Describe the shape."""
        return self.name

    def _internal(self) -> None:
        pass


class Circle(Shape):
    """A round shape."""

    radius: float = 1.0
    center: "Shape | None" = None
    tags: typing.ClassVar[list[str]] = []
    _secret = 1
    sides = 0
    nothing = None
    depth: int

    @property
    def area(self) -> float:
        """Surface of the circle."""
        return 3.14159 * self.radius**2

    def __repr__(self) -> str:
        return f"Circle({self.radius})"

    @staticmethod
    def unit() -> "Circle":
        return Circle()

    @classmethod
    def of(cls, radius: float) -> "Circle":
        circle = cls()
        circle.radius = radius
        return circle


def test_resolve_registered_class() -> None:
    """Verify that registered names win over any lookup."""
    intro = TypeIntrospector(classes={"Circle": Circle})
    assert intro.resolve_class("Circle") is Circle
    assert intro.type_name(Circle) == "Circle"


def test_resolve_dotted_and_builtin_names() -> None:
    """Verify import path and builtins lookups."""
    intro = TypeIntrospector()
    assert intro.resolve_class("collections.OrderedDict") is collections.OrderedDict
    assert intro.resolve_class("collections\\OrderedDict") is collections.OrderedDict
    assert intro.resolve_class("Exception") is Exception
    assert intro.resolve_class("collections.Nope") is None
    assert intro.resolve_class("no_such_module_for_tests.Thing") is None
    assert intro.resolve_class("len") is None
    assert intro.resolve_class("not_a_real_type_or_class") is None


def test_resolve_namespace_alias() -> None:
    """Verify that configured short names resolve and are reported back."""
    intro = TypeIntrospector(namespace={"Frac": "fractions.Fraction"})
    assert intro.resolve_class("Frac") is fractions.Fraction
    assert intro.type_name(fractions.Fraction) == "Frac"


def test_type_name_defaults() -> None:
    """Verify raw names for builtins and module classes."""
    intro = TypeIntrospector()
    assert intro.type_name(int) == "int"
    assert intro.type_name(collections.OrderedDict) == "collections.OrderedDict"
    assert intro.type_name(Circle).endswith(".Circle")


def test_annotation_names() -> None:
    """Verify flattening of annotations into raw names."""
    intro = TypeIntrospector(classes={"Circle": Circle})
    assert intro.annotation_names(MISSING) == ([], False)
    assert intro.annotation_names(None) == (["None"], False)
    assert intro.annotation_names(int) == (["int"], False)
    assert intro.annotation_names(typing.Optional[int]) == (["int"], True)
    assert intro.annotation_names(int | str) == (["int", "str"], False)
    assert intro.annotation_names(Circle | None) == (["Circle"], True)
    assert intro.annotation_names(list[int]) == (["list"], False)
    assert intro.annotation_names(Callable[[int], str]) == (["callable"], False)
    assert intro.annotation_names(typing.ClassVar[int]) == (["int"], False)
    assert intro.annotation_names(typing.Any) == (["mixed"], False)
    assert intro.annotation_names("Forward") == (["Forward"], False)


def test_public_properties() -> None:
    """Verify listed properties, their annotations and docs."""
    intro = TypeIntrospector(classes={"Circle": Circle, "Shape": Shape})
    props = {p.name: p for p in intro.public_properties(Circle)}

    assert list(props) == [
        "name",
        "radius",
        "center",
        "tags",
        "sides",
        "nothing",
        "area",
        "depth",
    ]
    assert props["name"].doc.comment == "Display name."
    assert props["radius"].annotation is float
    assert props["center"].annotation == Shape | None
    assert props["sides"].annotation is int
    assert props["nothing"].annotation is MISSING
    assert props["depth"].annotation is int
    assert props["area"].annotation is float
    assert props["area"].doc.comment == "Surface of the circle."


def test_public_methods() -> None:
    """Verify listed methods and their parameters."""
    intro = TypeIntrospector()
    methods = {m.name: m for m in intro.public_methods(Circle)}

    assert "describe" in methods
    assert "__repr__" in methods
    assert "unit" in methods
    assert "of" in methods
    assert "_internal" not in methods
    assert "area" not in methods

    describe = methods["describe"]
    assert [p.name for p in describe.parameters] == ["verbose"]
    assert describe.parameters[0].annotation is bool
    assert describe.return_annotation is str
    assert describe.doc.comment == "Describe the shape."

    assert methods["unit"].parameters == ()
    assert methods["unit"].return_annotation is Circle
    assert [p.name for p in methods["of"].parameters] == ["radius"]


def test_annotation_names_unevaluated_union() -> None:
    """Verify that a string union is split and its None marks nullability."""
    intro = TypeIntrospector()
    assert intro.annotation_names("Leaf | None") == (["Leaf"], True)
    assert intro.annotation_names("Leaf|Branch") == (["Leaf", "Branch"], False)


def test_type_arguments() -> None:
    """Verify that nested generic arguments are listed, outermost first."""
    intro = TypeIntrospector(classes={"Circle": Circle})
    assert intro.type_arguments(dict[str, list[Circle]]) == ["str", "list", "Circle"]
    assert intro.type_arguments(Callable[[int], Circle]) == ["int", "Circle"]
    assert intro.type_arguments(tuple[Circle, ...]) == ["Circle"]
    assert intro.type_arguments(typing.Literal["a", "b"]) == []
    assert intro.type_arguments(Circle) == []


def test_registered_local_classes_in_annotations() -> None:
    """Verify that string annotations see classes registered by name."""

    class Leaf:
        value: int = 0

    class Tree:
        leaf: "Leaf | None" = None
        leaves: "list[Leaf]" = []
        size: int = 0

    intro = TypeIntrospector(classes={"Leaf": Leaf, "Tree": Tree})
    props = {p.name: p for p in intro.public_properties(Tree)}
    assert props["leaf"].annotation == Leaf | None
    assert props["leaves"].annotation == list[Leaf]
    assert props["size"].annotation is int


def test_unresolvable_annotation_kept_alone() -> None:
    """Verify that one unknown name does not discard the other annotations."""

    class Orphan:
        ghost: "Nowhere | None" = None
        count: int = 0
        label: "str" = ""

    intro = TypeIntrospector()
    props = {p.name: p for p in intro.public_properties(Orphan)}
    assert props["ghost"].annotation == "Nowhere | None"
    assert props["count"].annotation is int
    assert props["label"].annotation is str
    assert intro.annotation_names(props["ghost"].annotation) == (["Nowhere"], True)
