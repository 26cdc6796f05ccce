"""Tests for hubgen.codegen.resolver."""

from __future__ import annotations

import pytest

from hubgen.codegen import DeclaredTypeRegistry, TypeResolver
from hubgen.codegen.codemodel import ClassDeclaration, EnumDeclaration
from hubgen.errors import TypeConflict, UnsupportedTypeKind
from hubgen.models import ArrayType, ClassType, EnumType, GenericType, PrimitiveType
from tests._fixtures.contracts import DOUBLE, GUID, INT, STRING, color, coordinate, tree_node


def test_primitive_resolves_without_declaration(registry: DeclaredTypeRegistry) -> None:
    reference = TypeResolver().resolve(GUID, registry)

    assert reference.name == "Guid"
    assert registry.declared_types == ()
    assert registry.imports == ("System",)


def test_primitive_without_namespace_adds_no_import(registry: DeclaredTypeRegistry) -> None:
    TypeResolver().resolve(STRING, registry)

    assert registry.imports == ()


def test_array_of_class_declares_element_before_wrapper(registry: DeclaredTypeRegistry) -> None:
    reference = TypeResolver().resolve(ArrayType(coordinate()), registry)

    assert reference.is_array
    assert reference.name == "Coordinate[]"
    assert reference.element is not None and reference.element.name == "Coordinate"
    assert [item.name for item in registry.declared_types] == ["Coordinate", "Coordinate[]"]
    assert [item.name for item in registry.declarations] == ["Coordinate"]


def test_array_of_primitive_is_not_declared(registry: DeclaredTypeRegistry) -> None:
    reference = TypeResolver().resolve(ArrayType(INT), registry)

    assert reference.name == "int[]"
    assert registry.declared_types == ()


def test_array_of_arrays_declares_each_rank_once(registry: DeclaredTypeRegistry) -> None:
    resolver = TypeResolver()
    grid = ArrayType(ArrayType(coordinate()))

    first = resolver.resolve(grid, registry)
    second = resolver.resolve(grid, registry)

    assert first == second
    assert first.name == "Coordinate[][]"
    assert [item.name for item in registry.declared_types] == [
        "Coordinate",
        "Coordinate[]",
        "Coordinate[][]",
    ]


def test_array_wrapper_known_from_prior_output_is_not_redeclared() -> None:
    registry = DeclaredTypeRegistry(["Coordinate", "Coordinate[]"])

    TypeResolver().resolve(ArrayType(coordinate()), registry)

    assert registry.declared_types == ()


def test_enum_is_declared_once_with_ordinal_members(registry: DeclaredTypeRegistry) -> None:
    resolver = TypeResolver()

    resolver.resolve(color(), registry)
    resolver.resolve(color(), registry)

    assert len(registry.declarations) == 1
    declaration = registry.declarations[0]
    assert isinstance(declaration, EnumDeclaration)
    assert declaration.members == ("Red", "Green", "Blue")


def test_enum_with_same_name_but_other_members_conflicts(registry: DeclaredTypeRegistry) -> None:
    resolver = TypeResolver()
    resolver.resolve(color(), registry)

    with pytest.raises(TypeConflict):
        resolver.resolve(EnumType("Color", ("Cyan",)), registry)


def test_class_declares_public_properties(registry: DeclaredTypeRegistry) -> None:
    TypeResolver().resolve(coordinate(), registry)

    (declaration,) = registry.declarations
    assert isinstance(declaration, ClassDeclaration)
    assert [prop.name for prop in declaration.properties] == ["X", "Y"]
    assert {prop.visibility for prop in declaration.properties} == {"public"}
    assert [prop.field.name for prop in declaration.properties] == ["_x", "_y"]


def test_class_dependencies_are_declared_first(registry: DeclaredTypeRegistry) -> None:
    route = ClassType("Route", [("start", coordinate()), ("color", color())])

    TypeResolver().resolve(route, registry)

    assert [item.name for item in registry.declared_types] == ["Coordinate", "Color", "Route"]


def test_self_referencing_class_terminates(registry: DeclaredTypeRegistry) -> None:
    reference = TypeResolver().resolve(tree_node(), registry)

    assert reference.name == "TreeNode"
    assert [item.name for item in registry.declared_types] == ["TreeNode[]", "TreeNode"]
    (declaration,) = registry.declarations
    assert [prop.type.name for prop in declaration.properties] == ["string", "TreeNode[]"]


def test_shadowing_class_with_different_shape_conflicts(registry: DeclaredTypeRegistry) -> None:
    resolver = TypeResolver()
    resolver.resolve(coordinate(), registry)

    with pytest.raises(TypeConflict):
        resolver.resolve(ClassType("Coordinate", [("latitude", DOUBLE)]), registry)


def test_structurally_equal_class_is_reused(registry: DeclaredTypeRegistry) -> None:
    resolver = TypeResolver()
    resolver.resolve(coordinate(), registry)
    resolver.resolve(coordinate(), registry)

    assert len(registry.declarations) == 1


def test_class_known_from_prior_output_is_referenced_only() -> None:
    registry = DeclaredTypeRegistry(["Coordinate"])

    reference = TypeResolver().resolve(coordinate(), registry)

    assert reference.name == "Coordinate"
    assert registry.declared_types == ()


def test_generic_type_is_rejected(registry: DeclaredTypeRegistry) -> None:
    generic = GenericType("Dictionary", (STRING, INT))

    with pytest.raises(UnsupportedTypeKind) as excinfo:
        TypeResolver().resolve(generic, registry)

    assert "Dictionary<string, int>" in str(excinfo.value)
    assert excinfo.value.type_name == "Dictionary<string, int>"


def test_generic_property_aborts_class_resolution(registry: DeclaredTypeRegistry) -> None:
    holder = ClassType("Holder", [("values", GenericType("List", (INT,)))])

    with pytest.raises(UnsupportedTypeKind):
        TypeResolver().resolve(holder, registry)


def test_unknown_descriptor_kind_is_rejected(registry: DeclaredTypeRegistry) -> None:
    with pytest.raises(UnsupportedTypeKind):
        TypeResolver().resolve(object(), registry)  # type: ignore[arg-type]


def test_resolution_order_is_stable_between_runs() -> None:
    def run() -> list[str]:
        registry = DeclaredTypeRegistry()
        resolver = TypeResolver()
        for descriptor in (tree_node(), ArrayType(coordinate()), color(), PrimitiveType("bool")):
            resolver.resolve(descriptor, registry)
        return [item.name for item in registry.declared_types]

    assert run() == run()
